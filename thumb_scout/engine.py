# File: thumb_scout/engine.py
"""thumb_scout.engine: one-shot lookup on top of PipelineCoordinator (used by the CLI)."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from aiohttp import ClientSession

from thumb_scout.config import LookupConfig
from thumb_scout.epoch import RequestEpoch
from thumb_scout.exceptions import ProtocolDisallowed
from thumb_scout.fetch.coordinator import PipelineCoordinator
from thumb_scout.fetch.models import ExtractFn, ExtractionResult, PageContext
from thumb_scout.logger import logger

__all__ = ["lookup_image"]


async def lookup_image(
    config: LookupConfig,
    page_url: str,
    extract_fn: ExtractFn,
    *,
    context: Optional[PageContext] = None,
    flags: Any = None,
    session: Optional[ClientSession] = None,
) -> ExtractionResult:
    """Fetch *page_url* once and return what *extract_fn* found in it.

    Raises :class:`ProtocolDisallowed` when the URL is rejected up front.
    """
    done: asyncio.Future[ExtractionResult] = asyncio.get_running_loop().create_future()

    def on_complete(result: ExtractionResult) -> None:
        if not done.done():
            done.set_result(result)

    async with PipelineCoordinator(config, RequestEpoch(), session=session) as coordinator:
        token = coordinator.epoch.value
        if coordinator.start(context, page_url, flags, token, on_complete, extract_fn) is None:
            raise ProtocolDisallowed(page_url)
        await coordinator.drain()

    if not done.done():
        logger.warning("No result delivered for %s", page_url)
        return None
    return done.result()
