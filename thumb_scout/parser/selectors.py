# thumb_scout/parser/selectors.py
"""
Selector-based URL lookup: ordered CSS selectors, first hit wins.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from thumb_scout.fetch.models import SelectorList
from thumb_scout.logger import logger

__all__ = ("URL_ATTRIBUTES", "SelectorExtractor")

#: <img src=…> before <a href=…>.
URL_ATTRIBUTES: tuple[str, ...] = ("src", "href")

_Root = Union[Tag, BeautifulSoup]

# soupsieve raises NotImplementedError for pseudo-elements and at-rules
_REJECTED_SELECTOR = (SelectorSyntaxError, NotImplementedError)


class SelectorExtractor:
    """Find the URL carried by the first element matching a selector list."""

    def __init__(self, attributes: Sequence[str] = URL_ATTRIBUTES) -> None:
        self.attributes = tuple(attributes)

    def find(
        self,
        body: _Root,
        selectors: SelectorList,
        attributes: Optional[Sequence[str]] = None,
    ) -> Optional[str]:
        """
        Return the URL attribute of the first element matched, trying
        *selectors* in order. A match without any URL attribute counts as a
        miss; an invalid selector is logged and skipped.
        """
        attrs = tuple(attributes) if attributes is not None else self.attributes
        for selector in selectors:
            node = self._select(body, selector)
            if node is None:
                continue
            url = self._url_of(node, attrs)
            if url:
                logger.debug("  Found node %s url %s", node.name, url)
                return url
            logger.debug("  Node %s for %r has no %s", node.name, selector, "/".join(attrs))
        return None

    def find_all(
        self,
        body: _Root,
        selectors: SelectorList,
        attributes: Optional[Sequence[str]] = None,
    ) -> List[str]:
        """Every distinct URL hit, in selector order then document order."""
        attrs = tuple(attributes) if attributes is not None else self.attributes
        found: List[str] = []
        for selector in selectors:
            logger.debug("  Collecting with selector '%s'", selector)
            try:
                nodes = body.select(selector)
            except _REJECTED_SELECTOR as exc:
                logger.warning("Invalid selector %r skipped: %s", selector, exc)
                continue
            for node in nodes:
                url = self._url_of(node, attrs)
                if url and url not in found:
                    found.append(url)
        return found

    @staticmethod
    def _select(body: _Root, selector: str) -> Optional[Tag]:
        logger.debug("  Seeking with selector '%s'", selector)
        try:
            return body.select_one(selector)
        except _REJECTED_SELECTOR as exc:
            logger.warning("Invalid selector %r skipped: %s", selector, exc)
            return None

    @staticmethod
    def _url_of(node: Tag, attributes: Sequence[str]) -> Optional[str]:
        for attr in attributes:
            value = node.get(attr)
            if isinstance(value, list):
                value = " ".join(value)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return None
