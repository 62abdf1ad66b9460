# linkmap/parser/html_parser.py
"""HTML parsing and link extraction for linkmap.

:func:`parse_document` turns a fetched body into a BeautifulSoup tree and
:func:`extract_links` walks that tree for anchors:

* only ``<a href="…">`` is considered, and only its first ``href``;
* the HTML5 tree builder never nests anchors, so the walk never descends
  into one;
* every href is resolved against the page URL and kept once per page, in
  document order of first occurrence (identity ignores the scheme);
* hrefs that do not parse are skipped.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import List, Set, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from linkmap.crawler.urls import identity_key, resolve
from linkmap.errors import MalformedURL, ParseFailure

__all__: Sequence[str] = ("parse_document", "extract_links", "iter_anchors")

logger = logging.getLogger("linkmap.parser")


def parse_document(data: Union[bytes, str], url: str = "") -> BeautifulSoup:
    """Parse *data* into an HTML5 tree; the first of repeated attributes wins."""
    try:
        return BeautifulSoup(data, "html5lib")
    except Exception as exc:
        raise ParseFailure(url, str(exc) or type(exc).__name__) from exc


def iter_anchors(document: Tag) -> Iterator[Tag]:
    """Yield ``<a>`` elements in depth-first pre-order, skipping anchor children."""
    stack = list(reversed(document.contents))
    while stack:
        node = stack.pop()
        if not isinstance(node, Tag):
            continue
        if node.name == "a":
            yield node
            continue
        stack.extend(reversed(node.contents))


def extract_links(document: Tag, page_url: str) -> List[str]:
    """Return the unique absolute link targets found on one page."""
    seen_on_page: Set[str] = set()
    links: List[str] = []
    for anchor in iter_anchors(document):
        href = anchor.get("href")
        if href is None:
            continue
        if isinstance(href, list):
            href = " ".join(href)
        try:
            link = resolve(href, page_url)
        except MalformedURL as exc:
            logger.debug("Ignoring link on %s: %s", page_url, exc)
            continue
        key = identity_key(link)
        if key in seen_on_page:
            continue
        seen_on_page.add(key)
        links.append(link)
    return links
