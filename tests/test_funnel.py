import asyncio

import pytest
from linkmap.crawler.funnel import Funnel


async def produce(name, count, delay=0.0):
    for i in range(count):
        await asyncio.sleep(delay)
        yield (name, i)


@pytest.mark.asyncio()
async def test_merges_every_value():
    async with Funnel(produce("a", 3, 0.01), produce("b", 2), produce("c", 4, 0.005)) as merged:
        values = [value async for value in merged]
    assert sorted(values) == sorted(
        [("a", 0), ("a", 1), ("a", 2), ("b", 0), ("b", 1)] + [("c", i) for i in range(4)]
    )


@pytest.mark.asyncio()
async def test_keeps_each_source_order():
    async with Funnel(produce("a", 5, 0.002), produce("b", 5, 0.003)) as merged:
        values = [value async for value in merged]
    for name in ("a", "b"):
        assert [i for n, i in values if n == name] == list(range(5))


@pytest.mark.asyncio()
async def test_interleaves_by_arrival():
    async with Funnel(produce("slow", 1, 0.2), produce("fast", 1)) as merged:
        values = [value async for value in merged]
    assert values == [("fast", 0), ("slow", 0)]


@pytest.mark.asyncio()
async def test_no_sources_closes_immediately():
    async with Funnel() as merged:
        assert [value async for value in merged] == []


@pytest.mark.asyncio()
async def test_source_error_reaches_consumer():
    async def broken():
        yield 1
        raise RuntimeError("boom")

    async with Funnel(broken()) as merged:
        with pytest.raises(RuntimeError, match="boom"):
            async for _ in merged:
                pass


@pytest.mark.asyncio()
async def test_leaving_scope_cancels_pending_sources():
    finished = []

    async def forever():
        try:
            yield "first"
            await asyncio.sleep(3600)
            yield "never"
        finally:
            finished.append(True)

    async with Funnel(forever(), produce("x", 1)) as merged:
        async for value in merged:
            if value == "first":
                break
    assert finished == [True]
