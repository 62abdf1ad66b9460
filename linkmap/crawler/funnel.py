# linkmap/crawler/funnel.py
"""
Fan-in of several async result streams into one.

Usage::

    async with Funnel(*sources) as merged:
        async for item in merged:
            ...

Leaving the ``async with`` block cancels and awaits every pump still running,
so no producer outlives the consumer.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterable, Generic, List, Optional, TypeVar

__all__ = ("Funnel",)

T = TypeVar("T")


class _Closed:
    __slots__ = ("error",)

    def __init__(self, error: Optional[BaseException]) -> None:
        self.error = error


class Funnel(Generic[T]):
    """Merges N async iterables into one async iterator.

    Each source's own order is kept; values from different sources interleave
    in arrival order. Iteration stops once all sources are exhausted. An
    exception raised by a source is re-raised to the consumer.
    """

    def __init__(self, *sources: AsyncIterable[T]) -> None:
        self._sources = sources
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._pumps: List[asyncio.Task[None]] = []
        self._remaining = len(sources)
        self._started = False

    async def __aenter__(self) -> Funnel[T]:
        self._start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _start(self) -> None:
        if self._started:
            return
        self._started = True
        self._pumps = [asyncio.create_task(self._pump(source)) for source in self._sources]

    async def _pump(self, source: AsyncIterable[T]) -> None:
        error: Optional[BaseException] = None
        try:
            async for item in source:
                self._queue.put_nowait(item)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # handed to the consumer
            error = exc
        finally:
            self._queue.put_nowait(_Closed(error))

    def __aiter__(self) -> Funnel[T]:
        return self

    async def __anext__(self) -> T:
        self._start()
        while self._remaining:
            item = await self._queue.get()
            if isinstance(item, _Closed):
                self._remaining -= 1
                if item.error is not None:
                    raise item.error
                continue
            return item  # type: ignore[return-value]
        raise StopAsyncIteration

    async def aclose(self) -> None:
        """Cancel unfinished pumps and wait for all of them."""
        pending = [task for task in self._pumps if not task.done()]
        for task in pending:
            task.cancel()
        if self._pumps:
            await asyncio.gather(*self._pumps, return_exceptions=True)
