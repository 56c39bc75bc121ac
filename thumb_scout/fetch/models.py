# thumb_scout/fetch/models.py
"""
Data models for the ThumbScout fetch pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Union

#: A single image URL, an ordered list of candidates, or nothing.
ExtractionResult = Union[str, List[str], None]

#: Ordered CSS selectors; the first one that hits wins.
SelectorList = Sequence[str]

#: Returned by :meth:`PipelineCoordinator.start` when the result will arrive later.
DEFERRED = "deferred"


@dataclass(slots=True, frozen=True)
class PageContext:
    """The page the link was discovered on."""

    url: str


ExtractFn = Callable[[PageContext, str, Any, str], ExtractionResult]
CompletionFn = Callable[[ExtractionResult], None]


@dataclass(slots=True)
class FetchRequest:
    """Everything one pipeline needs; owned by exactly that pipeline."""

    target_url: str
    flags: Any
    epoch_token: int
    extract_fn: ExtractFn
    on_complete: CompletionFn
    context: Optional[PageContext] = None
