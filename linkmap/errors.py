# linkmap/errors.py
"""
Exception hierarchy for linkmap.

Only :class:`MalformedURL` is recovered where it occurs (the link is skipped).
Every :class:`CrawlError` fails its branch and, under the default fail-fast
policy, the whole run.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "LinkmapError",
    "InvalidEntrypoint",
    "MalformedURL",
    "ConfigError",
    "CrawlError",
    "RateLimitCancelled",
    "FetchFailure",
    "ParseFailure",
    "LinkResolutionFailure",
]


class LinkmapError(Exception):
    """Base class for all linkmap errors."""


class InvalidEntrypoint(LinkmapError):
    """The entrypoint is unparseable or not an absolute URL."""


class MalformedURL(LinkmapError, ValueError):
    """An href could not be parsed as a URL."""

    def __init__(self, href: str, reason: str) -> None:
        super().__init__(f"malformed URL {href!r}: {reason}")
        self.href = href
        self.reason = reason


class ConfigError(LinkmapError):
    """Configuration file is unreadable or has the wrong shape."""


class CrawlError(LinkmapError):
    """A failure that fails the branch rooted at ``url``."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class RateLimitCancelled(CrawlError):
    def __init__(self, url: str) -> None:
        super().__init__(url, f"cancelled while waiting to be allowed to crawl {url}")


class FetchFailure(CrawlError):
    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(url, f"error fetching {url}: {reason}")
        self.status = status


class ParseFailure(CrawlError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(url, f"error finding links on {url}: {reason}")


class LinkResolutionFailure(CrawlError):
    def __init__(self, url: str, href: str) -> None:
        super().__init__(url, f"failed to resolve {href!r} against {url}")
        self.href = href
