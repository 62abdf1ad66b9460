# File: linkmap/engine.py
"""linkmap.engine: entry point used by the CLI and tests to run one crawl."""

from __future__ import annotations

from linkmap.config import CrawlerConfig
from linkmap.crawler.crawler import Crawler
from linkmap.logger import logger
from linkmap.tree import LinkTree

__all__ = ["start_crawl"]


async def start_crawl(entrypoint: str, cfg: CrawlerConfig) -> LinkTree:
    """
    Build a Crawler for *entrypoint* and return the link tree it finds.

    Raises InvalidEntrypoint before any request is made, and CrawlError if the
    crawl fails.
    """
    async with Crawler.from_config(entrypoint, cfg) as crawler:
        try:
            return await crawler.run()
        except Exception as exc:
            logger.debug("Crawl of %s failed: %s", crawler.root, exc)
            raise
