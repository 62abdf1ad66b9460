# linkmap/crawler/fetcher.py
"""
Fetcher module: plain HTTP GET of one page with a fixed timeout and user agent.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from linkmap.crawler.models import PageData
from linkmap.errors import FetchFailure

DEFAULT_TIMEOUT: float = 10.0
DEFAULT_USER_AGENT: str = "linkmap/0.1 (+https://pypi.org/project/linkmap/; site link mapper)"

logger = logging.getLogger("linkmap.fetcher")


class Fetcher:
    """Fetches pages over one shared :class:`aiohttp.ClientSession`.

    The session is created lazily on first use unless one is injected; an
    injected session is not closed by :meth:`close`.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session
        self._owns_session = session is None

    def _ensure_session(self) -> ClientSession:
        if self.session is None or self.session.closed:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
        return self.session

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its body.

        Raises FetchFailure on network errors, timeouts and non-2xx responses.
        """
        session = self._ensure_session()
        try:
            async with session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchFailure(url, f"HTTP {resp.status} {resp.reason or ''}".rstrip(), status=resp.status)
                body = await resp.read()
        except asyncio.TimeoutError as exc:
            raise FetchFailure(url, f"timed out after {self.timeout:g}s") from exc
        except ClientError as exc:
            raise FetchFailure(url, str(exc) or type(exc).__name__) from exc
        logger.debug("Fetched %s (%d bytes)", url, len(body))
        return PageData(url, body)

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
