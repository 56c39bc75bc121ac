# thumb_scout/parser/document.py
"""
HTML document parsing for ThumbScout.

BeautifulSoup is the parsing capability; it never executes scripts, which is
why :func:`sanitize_html` unwraps ``<noscript>`` blocks before parsing:
their contents are what a no-script rendering of the page would show.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from thumb_scout.fetch.models import PageContext
from thumb_scout.logger import logger

__all__ = ("ParsedDocument", "DocumentParser", "sanitize_html")

_NOSCRIPT_TAG_RE = re.compile(r"</?noscript[^>]*>", re.IGNORECASE)


def sanitize_html(text: str) -> str:
    """Drop ``<noscript>`` / ``</noscript>`` tags, keeping what is between them."""
    return _NOSCRIPT_TAG_RE.sub("", text)


@dataclass(slots=True)
class ParsedDocument:
    """Parsed tree plus the element selectors are run against."""

    tree: BeautifulSoup
    body: Union[Tag, BeautifulSoup]
    base_url: str = ""
    context_url: str = ""

    def resolve(self, url: str) -> str:
        """Resolve *url* relative to the page it was found on."""
        return urljoin(self.base_url, url) if self.base_url else url


class DocumentParser:
    """Thin wrapper around BeautifulSoup that never raises."""

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def parse(
        self,
        context: Optional[PageContext],
        base_url: str,
        html_text: str,
    ) -> ParsedDocument:
        context_url = context.url if context is not None else ""
        logger.debug("parse: building doc for %s (context %s)", base_url, context_url or "-")
        try:
            tree = BeautifulSoup(html_text or "", self.features)
        except Exception:
            logger.exception("parse: parser failed for %s, using empty document", base_url)
            tree = BeautifulSoup("", self.features)
        # html.parser does not synthesize <body> for fragments.
        body = tree.body if tree.body is not None else tree
        return ParsedDocument(tree=tree, body=body, base_url=base_url, context_url=context_url)
