# thumb_scout/fetch/coordinator.py
"""
Coordinator module: public entry point that gates, spawns and tracks pipelines.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from thumb_scout.config import LookupConfig
from thumb_scout.epoch import RequestEpoch
from thumb_scout.fetch.models import (
    DEFERRED,
    CompletionFn,
    ExtractFn,
    FetchRequest,
    PageContext,
)
from thumb_scout.fetch.pipeline import AsyncFetchPipeline
from thumb_scout.logger import logger
from thumb_scout.protocol import ProtocolCheck, allow_protocol_of_url


class PipelineCoordinator:
    """Starts one :class:`AsyncFetchPipeline` per accepted request.

    All pipelines of one coordinator share its :class:`RequestEpoch`; the
    caller advances it to supersede whatever is in flight.
    """

    def __init__(
        self,
        config: Optional[LookupConfig] = None,
        epoch: Optional[RequestEpoch] = None,
        *,
        session: Optional[ClientSession] = None,
        protocol_check: ProtocolCheck = allow_protocol_of_url,
    ) -> None:
        self.config = config or LookupConfig()
        self.epoch = epoch if epoch is not None else RequestEpoch()
        self.session = session
        self.protocol_check = protocol_check
        self._owns_session = session is None
        self._tasks: Set[asyncio.Task[None]] = set()

    async def __aenter__(self) -> PipelineCoordinator:
        if self.session is None:
            # no timeouts: a pipeline lives until its response completes
            self.session = ClientSession(
                timeout=ClientTimeout(),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())

    def start(
        self,
        context: Optional[PageContext],
        target_url: str,
        flags: Any,
        epoch_token: int,
        on_complete: CompletionFn,
        extract_fn: ExtractFn,
    ) -> Optional[str]:
        """
        Look up the image for *target_url* asynchronously.

        Returns ``None`` when the protocol gate rejects the URL (nothing is
        fetched and *on_complete* is never called), otherwise ``"deferred"``:
        *on_complete* then receives the result, at most once.
        """
        logger.debug("start: image from linked page %s", target_url)
        try:
            allowed = self.protocol_check(target_url, self.config.strict_protocol)
        except Exception:
            logger.exception("start: protocol check failed for %r", target_url)
            return None
        if not allowed:
            return None
        try:
            if self.session is None or self.session.closed:
                raise RuntimeError("Session not initialized")
            request = FetchRequest(
                target_url=target_url,
                flags=flags,
                epoch_token=epoch_token,
                extract_fn=extract_fn,
                on_complete=on_complete,
                context=context,
            )
            pipeline = AsyncFetchPipeline(
                self.session,
                request,
                self.epoch,
                accept=self.config.accept,
                allowed_content_types=self.config.allowed_content_types,
            )
            task = asyncio.get_running_loop().create_task(pipeline.run())
        except Exception:
            logger.exception("start: could not start pipeline for %s", target_url)
            return DEFERRED
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return DEFERRED

    async def drain(self) -> None:
        """Wait until every pipeline started so far has finished."""
        while True:
            running = [task for task in self._tasks if not task.done()]
            if not running:
                return
            await asyncio.gather(*running, return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()


__all__ = ["PipelineCoordinator"]
