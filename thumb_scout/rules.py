# thumb_scout/rules.py
"""
Ready-made extraction delegates.

A delegate is called as ``extract_fn(context, page_url, flags, html_text)``
and returns an image URL, an ordered list of candidates or ``None``. Site
rules usually build one with :func:`selector_rule`; targets that answer with
a JSON API use :func:`json_rule`.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence, Union

from thumb_scout.fetch.models import ExtractFn, ExtractionResult, PageContext, SelectorList
from thumb_scout.logger import logger
from thumb_scout.parser.document import DocumentParser
from thumb_scout.parser.selectors import SelectorExtractor

__all__ = ("PAGE_ATTRIBUTES", "selector_rule", "json_rule")

#: src/href plus <meta content=…> so og:image style tags work.
PAGE_ATTRIBUTES: tuple[str, ...] = ("src", "href", "content")


def selector_rule(
    selectors: SelectorList,
    *,
    attributes: Sequence[str] = PAGE_ATTRIBUTES,
    absolute: bool = False,
    collect_all: bool = False,
    whole_document: bool = True,
    parser: Optional[DocumentParser] = None,
) -> ExtractFn:
    """Build a delegate that parses the page and runs *selectors* over it.

    ``whole_document=False`` restricts the search to ``<body>``, which misses
    ``<head>`` meta tags.
    """
    selectors = tuple(selectors)
    parser = parser or DocumentParser()
    extractor = SelectorExtractor(attributes)

    def extract(context: Optional[PageContext], page_url: str, flags: Any, html_text: str) -> ExtractionResult:
        doc = parser.parse(context, page_url, html_text)
        root = doc.tree if whole_document else doc.body
        if collect_all:
            urls = extractor.find_all(root, selectors)
            if absolute:
                urls = list(dict.fromkeys(doc.resolve(u) for u in urls))
            return urls or None
        url = extractor.find(root, selectors)
        if url and absolute:
            url = doc.resolve(url)
        return url

    return extract


def json_rule(*path: Union[str, int]) -> ExtractFn:
    """Build a delegate that walks *path* through a JSON response.

    The value found must be a string or a list of strings; anything else,
    a missing key or invalid JSON gives ``None``.
    """

    def extract(context: Optional[PageContext], page_url: str, flags: Any, text: str) -> ExtractionResult:
        try:
            data: Any = json.loads(text)
        except ValueError as exc:
            logger.debug("json_rule: %s is not JSON: %s", page_url, exc)
            return None
        for key in path:
            try:
                data = data[key]
            except (KeyError, IndexError, TypeError):
                logger.debug("json_rule: no %r in response from %s", key, page_url)
                return None
        if isinstance(data, str):
            return data or None
        if isinstance(data, list):
            urls: List[str] = [item for item in data if isinstance(item, str) and item]
            return urls or None
        return None

    return extract
