# linkmap/crawler/throttle.py
"""
Token-bucket rate limiter shared by every branch of a crawl.

The default burst of 1 keeps requests evenly spaced at ``1 / rate`` seconds
instead of letting them cluster.
"""
from __future__ import annotations

import asyncio
import math
import time
from typing import Optional

from linkmap.errors import RateLimitCancelled

__all__ = ("RateLimiter",)


class RateLimiter:
    """Blocks callers until one outbound request is permitted."""

    def __init__(self, rate: float, burst: int = 1) -> None:
        if rate <= 0:
            raise ValueError("rate must be > 0")
        if burst < 1:
            raise ValueError("burst must be >= 1")
        self.rate = float(rate)
        self.burst = burst
        self._tokens = float(burst)
        self._last = time.monotonic()

    def _advance(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._last = now

    def reserve(self) -> float:
        """Take one token and return how many seconds the caller must wait to use it.

        Runs without awaiting, so concurrent coroutines on one loop never get the
        same token.
        """
        if math.isinf(self.rate):
            return 0.0
        self._advance(time.monotonic())
        self._tokens -= 1
        if self._tokens >= 0:
            return 0.0
        return -self._tokens / self.rate

    def _release(self) -> None:
        if math.isinf(self.rate):
            return
        self._advance(time.monotonic())
        self._tokens = min(float(self.burst), self._tokens + 1)

    async def wait(self, cancel_event: Optional[asyncio.Event] = None, *, url: str = "") -> None:
        """Wait for one token.

        Raises :class:`RateLimitCancelled` if *cancel_event* is set before the
        token becomes available; the reserved token is given back.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise RateLimitCancelled(url)

        delay = self.reserve()
        if delay <= 0:
            return

        try:
            if cancel_event is None:
                await asyncio.sleep(delay)
                return
            try:
                await asyncio.wait_for(cancel_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                return
        except asyncio.CancelledError:
            self._release()
            raise

        self._release()
        raise RateLimitCancelled(url)
