# thumb_scout/exceptions.py
"""
Error taxonomy for ThumbScout.

None of these escape :meth:`PipelineCoordinator.start`: pipeline errors end a
request with a ``None`` result, :class:`StaleRequest` ends it silently.
"""
from __future__ import annotations

from typing import Optional


class ThumbScoutError(Exception):
    """Base class for all ThumbScout errors."""


class ProtocolDisallowed(ThumbScoutError):
    """The target URL uses a protocol rejected by the protocol gate."""

    def __init__(self, url: str) -> None:
        super().__init__(f"protocol not allowed: {url}")
        self.url = url


class StaleRequest(ThumbScoutError):
    """A newer request superseded this one; nothing is reported."""


class PipelineError(ThumbScoutError):
    """Terminates a pipeline with a ``None`` result."""


class TransportError(PipelineError):
    """Non-200 status, or the connection itself failed (status is ``None``)."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class UnsupportedContentType(PipelineError):
    def __init__(self, content_type: str) -> None:
        super().__init__(f"unsupported doc type returned: {content_type!r}")
        self.content_type = content_type


class EmptyBody(PipelineError):
    """Site returned empty/null text."""


__all__ = [
    "ThumbScoutError",
    "ProtocolDisallowed",
    "StaleRequest",
    "PipelineError",
    "TransportError",
    "UnsupportedContentType",
    "EmptyBody",
]
