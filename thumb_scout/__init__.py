# thumb_scout/__init__.py
"""
ThumbScout package initializer.
Finds the image behind a link by fetching and inspecting the linked page.
"""
__version__ = "0.1.0"

from thumb_scout.epoch import RequestEpoch
from thumb_scout.fetch.coordinator import PipelineCoordinator
from thumb_scout.fetch.models import DEFERRED, PageContext

__all__ = ["__version__", "DEFERRED", "PageContext", "PipelineCoordinator", "RequestEpoch"]
