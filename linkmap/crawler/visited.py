# linkmap/crawler/visited.py
"""Crawl-scoped set of already admitted pages."""
from __future__ import annotations

import threading
from typing import Set

from linkmap.crawler.urls import identity_key

__all__ = ("VisitedSet",)


class VisitedSet:
    """Set of URLs keyed by their scheme-less identity.

    :meth:`ensure_contains` is an atomic insert-if-absent: for any key exactly
    one caller ever sees ``False``.
    """

    def __init__(self) -> None:
        self._keys: Set[str] = set()
        self._lock = threading.Lock()

    def ensure_contains(self, url: str) -> bool:
        """Add *url*; return True if it was already present, False if just inserted."""
        key = identity_key(url)
        with self._lock:
            if key in self._keys:
                return True
            self._keys.add(key)
            return False

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        with self._lock:
            return identity_key(url) in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)
