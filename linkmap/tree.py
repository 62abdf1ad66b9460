# linkmap/tree.py
"""linkmap.tree: the recursive link tree produced by a crawl, and its text rendering."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from linkmap.crawler.urls import identity_key

__all__ = ["LinkTree"]


class LinkTree(dict[str, "LinkTree | None"]):
    """Maps each link found on a page to the tree found on that link's page.

    A value of ``None`` (or an empty tree) marks a leaf: the link was listed
    but not expanded.
    """

    def render(self) -> str:
        """Nested listing, two spaces per level, siblings sorted scheme-insensitively."""
        out: List[str] = []
        _render(self, 0, out)
        return "".join(out)

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dicts in render order; leaves become ``{}``."""
        return _to_dict(self)

    def count(self) -> int:
        """Total number of entries at every level."""
        return sum(1 + (LinkTree.count(sub) if sub else 0) for sub in self.values())

    def __str__(self) -> str:
        return self.render()


def _render(tree: Mapping[str, Mapping | None], indent: int, out: List[str]) -> None:
    for link in sorted(tree, key=identity_key):
        out.append("  " * indent + link + "\n")
        subtree = tree[link]
        if subtree:
            _render(subtree, indent + 1, out)


def _to_dict(tree: Mapping[str, Mapping | None]) -> Dict[str, Any]:
    return {link: _to_dict(tree[link] or {}) for link in sorted(tree, key=identity_key)}
