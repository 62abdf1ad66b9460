# linkmap/crawler/crawler.py
from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, AsyncIterator, List, Optional

from linkmap.crawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Fetcher
from linkmap.crawler.funnel import Funnel
from linkmap.crawler.models import CrawlResult
from linkmap.crawler.throttle import RateLimiter
from linkmap.crawler.urls import hostname, is_fetchable, parse_entrypoint, resolve
from linkmap.crawler.visited import VisitedSet
from linkmap.errors import CrawlError, LinkResolutionFailure, MalformedURL
from linkmap.parser.html_parser import extract_links, parse_document
from linkmap.tree import LinkTree

if TYPE_CHECKING:
    from linkmap.config import CrawlerConfig

__all__ = ("Crawler",)


class Crawler:
    """Maps the link tree of a site, bounded by depth and request rate.

    Every link found on a page gets its own concurrent sub-crawl. Only pages on
    the entrypoint's host are expanded, each at most once per run; all fetches
    share one rate limiter. With ``fail_fast`` (the default) the first failing
    branch fails the whole run; otherwise failed branches are kept as leaves.
    """

    def __init__(
        self,
        entrypoint: str,
        max_depth: int = 1,
        rate_limit: float = 10.0,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        fail_fast: bool = True,
        fetcher: Optional[Fetcher] = None,
        limiter: Optional[RateLimiter] = None,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self.root = parse_entrypoint(entrypoint)
        self.max_depth = max_depth
        self.fail_fast = fail_fast
        self.limiter = limiter if limiter is not None else RateLimiter(rate_limit, burst=1)
        self.fetcher = fetcher if fetcher is not None else Fetcher(timeout=timeout, user_agent=user_agent)
        self.visited = VisitedSet()
        self.pages_fetched = 0
        self.logger = logging.getLogger("linkmap.crawler")
        self._root_host = hostname(self.root)
        self._cancelled = asyncio.Event()

    @classmethod
    def from_config(cls, entrypoint: str, config: CrawlerConfig, **kwargs) -> Crawler:
        return cls(
            entrypoint,
            max_depth=config.max_depth,
            rate_limit=config.rate_limit,
            timeout=config.timeout,
            user_agent=config.user_agent,
            fail_fast=config.fail_fast,
            **kwargs,
        )

    async def __aenter__(self) -> Crawler:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.fetcher.close()

    def cancel(self) -> None:
        """Fail every fetch that is waiting for, or has not yet reached, the rate limiter."""
        self._cancelled.set()

    async def run(self) -> LinkTree:
        """Crawl from the entrypoint and return the tree of links found on it."""
        self.logger.info(
            "Crawling %s (max depth %d, %g req/s)", self.root, self.max_depth, self.limiter.rate
        )
        start = time.monotonic()
        self.visited.ensure_contains(self.root)
        tree = await self._expand(self.root, 0)
        duration = time.monotonic() - start
        self.logger.info(
            "Done: %d pages fetched, %d links mapped in %.2f s", self.pages_fetched, tree.count(), duration
        )
        return tree

    async def _branch(self, url: str, depth: int) -> AsyncIterator[CrawlResult]:
        """Result channel of one child crawl; carries exactly one value."""
        yield await self._crawl(url, depth)

    async def _crawl(self, url: str, depth: int) -> CrawlResult:
        if self.visited.ensure_contains(url):
            self.logger.debug("Already visited: %s", url)
            return CrawlResult(url)
        if depth >= self.max_depth or not self._on_root_host(url):
            return CrawlResult(url)
        try:
            subtree = await self._expand(url, depth)
        except CrawlError as exc:
            return CrawlResult(url, error=exc)
        return CrawlResult(url, subtree)

    def _on_root_host(self, url: str) -> bool:
        return is_fetchable(url) and hostname(url) == self._root_host

    async def _expand(self, url: str, depth: int) -> LinkTree:
        await self.limiter.wait(self._cancelled, url=url)
        page = await self.fetcher.fetch(url)
        self.pages_fetched += 1
        links = extract_links(parse_document(page.content, url), url)

        branches: List[AsyncIterator[CrawlResult]] = []
        for link in links:
            try:
                target = resolve(link, url)
            except MalformedURL as exc:
                raise LinkResolutionFailure(url, link) from exc
            branches.append(self._branch(target, depth + 1))

        tree = LinkTree()
        async with Funnel(*branches) as results:
            async for result in results:
                if not result.ok:
                    if self.fail_fast:
                        raise result.error
                    self.logger.warning("Keeping %s as a leaf: %s", result.url, result.error)
                tree[result.url] = result.subtree
        return tree
