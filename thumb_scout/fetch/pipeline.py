# thumb_scout/fetch/pipeline.py
"""
Pipeline module: one request's fetch → validate → extract state machine.

The pipeline suspends only while waiting for its own response: once for the
headers and once per body chunk. After every wake it compares its captured
epoch token with the shared :class:`RequestEpoch`; a superseded pipeline stops
without calling back. The transport is never aborted by the pipeline.
"""
from __future__ import annotations

import codecs
from enum import Enum
from typing import List, Sequence

from aiohttp import ClientError, ClientSession

from thumb_scout.epoch import RequestEpoch
from thumb_scout.exceptions import (
    EmptyBody,
    PipelineError,
    StaleRequest,
    TransportError,
    UnsupportedContentType,
)
from thumb_scout.fetch.models import ExtractionResult, FetchRequest
from thumb_scout.logger import logger
from thumb_scout.parser.document import sanitize_html

DEFAULT_CONTENT_TYPES: tuple[str, ...] = ("text/html", "application/json")


class PipelineState(str, Enum):
    INIT = "init"
    HEADERS_WAIT = "headers_wait"
    BODY_WAIT = "body_wait"
    DONE = "done"


class AsyncFetchPipeline:
    """Fetches ``request.target_url`` and reports one extraction result."""

    def __init__(
        self,
        session: ClientSession,
        request: FetchRequest,
        epoch: RequestEpoch,
        *,
        accept: str = "text/html",
        allowed_content_types: Sequence[str] = DEFAULT_CONTENT_TYPES,
    ) -> None:
        self.session = session
        self.request = request
        self.epoch = epoch
        self.accept = accept
        self.allowed_content_types = tuple(t.lower() for t in allowed_content_types)
        self.state = PipelineState.INIT
        self.completed = False

    @property
    def is_current(self) -> bool:
        return self.epoch.is_current(self.request.epoch_token)

    async def run(self) -> None:
        url = self.request.target_url
        logger.debug("pipeline for %s epoch token %s", url, self.request.epoch_token)
        try:
            result = await self._drive()
        except StaleRequest:
            logger.debug("pipeline: aborting obsolete request %s", url)
            return
        except PipelineError as exc:
            logger.debug("pipeline: %s for %s", exc, url)
            result = None
        except Exception:
            logger.exception("pipeline: failed for %s", url)
            result = None
        finally:
            self.state = PipelineState.DONE
        self._complete(result)

    async def _drive(self) -> ExtractionResult:
        req = self.request
        self.state = PipelineState.HEADERS_WAIT
        logger.debug("pipeline: waiting for headers of %s", req.target_url)
        try:
            # leaving this block with the body unread makes aiohttp close the connection
            async with self.session.get(req.target_url, headers={"Accept": self.accept}) as resp:
                self._ensure_current()

                if resp.status != 200:
                    raise TransportError(
                        f"site returned error {resp.status} {resp.reason or ''}".rstrip(),
                        status=resp.status,
                    )

                doc_type = resp.headers.get("Content-Type", "")
                if not self._accepts(doc_type):
                    raise UnsupportedContentType(doc_type)

                self.state = PipelineState.BODY_WAIT
                chunks: List[bytes] = []
                received = 0
                async for chunk in resp.content.iter_any():
                    self._ensure_current()
                    received += len(chunk)
                    logger.debug("pipeline: waiting for body of %s; %d bytes so far", req.target_url, received)
                    chunks.append(chunk)
                self._ensure_current()
                text = self._decode(b"".join(chunks), resp.charset)
        except (ClientError, OSError) as exc:
            self._ensure_current()
            raise TransportError(f"request failed: {exc}") from exc

        if not text:
            raise EmptyBody("site returned empty text")

        text = sanitize_html(text)
        logger.debug("pipeline: got doc type %s (%d chars) from %s", doc_type, len(text), req.target_url)
        return req.extract_fn(req.context, req.target_url, req.flags, text)

    def _ensure_current(self) -> None:
        if not self.is_current:
            raise StaleRequest(self.request.target_url)

    def _accepts(self, doc_type: str) -> bool:
        doc_type = doc_type.lower()
        return any(allowed in doc_type for allowed in self.allowed_content_types)

    @staticmethod
    def _decode(data: bytes, charset: str | None) -> str:
        encoding = "utf-8"
        if charset:
            try:
                encoding = codecs.lookup(charset).name
            except LookupError:
                logger.debug("pipeline: unknown charset %r, falling back to utf-8", charset)
        return data.decode(encoding, errors="replace")

    def _complete(self, result: ExtractionResult) -> None:
        if self.completed:
            logger.warning("pipeline: second completion for %s ignored", self.request.target_url)
            return
        self.completed = True
        try:
            self.request.on_complete(result)
        except Exception:
            logger.exception("pipeline: completion callback failed for %s", self.request.target_url)


__all__ = ["PipelineState", "AsyncFetchPipeline", "DEFAULT_CONTENT_TYPES"]
