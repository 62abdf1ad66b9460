# linkmap/crawler/urls.py
"""
URL canonicalization for linkmap.

Two URLs are the *same place* when their string forms are equal once the scheme
is erased: ``http://x/mail`` and ``https://x/mail`` share one identity, while
``/bla`` and ``/bla/`` do not. The scheme itself is kept for display.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit, urlunsplit

from linkmap.errors import InvalidEntrypoint, MalformedURL

__all__ = ("resolve", "identity_key", "hostname", "is_fetchable", "parse_entrypoint")

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_FETCHABLE_SCHEMES = ("http", "https")


def _split(href: str) -> SplitResult:
    """Parse *href* strictly, raising :class:`MalformedURL` where urllib is lenient."""
    if _CONTROL_RE.search(href):
        raise MalformedURL(href, "invalid control character in URL")
    if _BAD_ESCAPE_RE.search(href):
        raise MalformedURL(href, "invalid URL escape")
    try:
        parts = urlsplit(href)
        parts.port  # validates the port, raises ValueError when out of range
    except ValueError as exc:
        raise MalformedURL(href, str(exc)) from exc
    return parts


def _with_path(parts: SplitResult) -> str:
    if not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


def resolve(href: str, base: str) -> str:
    """Return *href* as an absolute URL, resolved against *base* when relative.

    An empty resulting path becomes ``/``. Raises :class:`MalformedURL` when
    *href* cannot be parsed.
    """
    href = href.strip()
    _split(href)
    return _with_path(urlsplit(urljoin(base, href)))


def identity_key(url: str) -> str:
    """Scheme-insensitive identity of *url*, used for equality and ordering."""
    return urlunsplit(urlsplit(url)._replace(scheme=""))


def hostname(url: str) -> Optional[str]:
    return urlsplit(url).hostname


def is_fetchable(url: str) -> bool:
    return urlsplit(url).scheme in _FETCHABLE_SCHEMES


def parse_entrypoint(link: str) -> str:
    """Validate the crawl entrypoint and return it with a non-empty path."""
    try:
        parts = _split(link.strip())
    except MalformedURL as exc:
        raise InvalidEntrypoint(f"failed to parse {link}: {exc.reason}") from exc
    if parts.scheme not in _FETCHABLE_SCHEMES or not parts.hostname:
        raise InvalidEntrypoint(f"you must specify an absolute http(s) URL, got {link!r}")
    return _with_path(parts)
