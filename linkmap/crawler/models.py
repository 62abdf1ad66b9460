# linkmap/crawler/models.py
"""
Data models for the linkmap crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from linkmap.errors import CrawlError
    from linkmap.tree import LinkTree


@dataclass(slots=True)
class PageData:
    """Raw body of a fetched page."""

    url: str
    content: bytes


@dataclass(slots=True)
class CrawlResult:
    """Outcome of one branch, sent from a child crawl to its parent.

    ``subtree`` is None for leaves (not expanded) and for failed branches.
    """

    url: str
    subtree: Optional[LinkTree] = None
    error: Optional[CrawlError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
