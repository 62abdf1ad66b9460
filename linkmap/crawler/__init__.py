"""linkmap.crawler: URL identity, rate limiting, fetching and the concurrent crawl itself."""
