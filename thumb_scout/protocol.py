# thumb_scout/protocol.py
"""
Default protocol gate: decides whether a URL may be fetched at all.
"""
from __future__ import annotations

from typing import Callable, FrozenSet
from urllib.parse import urlparse

from thumb_scout.logger import logger

ProtocolCheck = Callable[[str, bool], bool]

_STRICT_SCHEMES: FrozenSet[str] = frozenset({"http", "https"})
_LENIENT_SCHEMES: FrozenSet[str] = _STRICT_SCHEMES | {"file", "data"}


def protocol_of_url(url: str) -> str:
    """Return the lower-cased scheme of *url* (``""`` when there is none)."""
    return urlparse(url.strip()).scheme.lower()


def allow_protocol_of_url(url: str, strict: bool = True) -> bool:
    """Only http(s) in strict mode; file: and data: are tolerated otherwise."""
    try:
        scheme = protocol_of_url(url)
    except ValueError as exc:
        logger.debug("Unparseable URL %r rejected: %s", url, exc)
        return False
    allowed = scheme in (_STRICT_SCHEMES if strict else _LENIENT_SCHEMES)
    if not allowed:
        logger.debug("Protocol %r rejected for %s (strict=%s)", scheme, url, strict)
    return allowed


__all__ = ["ProtocolCheck", "protocol_of_url", "allow_protocol_of_url"]
