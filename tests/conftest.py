# File: tests/conftest.py
import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass, field
from html import escape
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@dataclass
class Page:
    body: str
    status: int = 200
    delay: float = 0.0


@dataclass
class TestSite:
    """
    Local website for crawler tests.

    Pages may be added after the server started. Links and expected output
    can use ``{scheme}``, ``{host}`` and ``{base}`` (= ``{scheme}://{host}``)
    as placeholders.
    """

    __test__ = False

    scheme: str
    host: str
    pages: Dict[str, Page] = field(default_factory=dict)
    hits: Counter = field(default_factory=Counter)
    user_agents: List[Optional[str]] = field(default_factory=list)

    @property
    def base(self) -> str:
        return f"{self.scheme}://{self.host}"

    def fill(self, text: str) -> str:
        return (
            text.replace("{base}", self.base)
            .replace("{scheme}", self.scheme)
            .replace("{host}", self.host)
        )

    def route(
        self,
        path: str,
        links: Iterable[str] = (),
        *,
        body: Optional[str] = None,
        status: int = 200,
        delay: float = 0.0,
    ) -> None:
        if body is None:
            body = '<!doctype html><html lang="en"><head><title>Links</title></head><body>'
            for link in links:
                link = self.fill(link)
                body += f'<a href="{escape(link, quote=True)}">{escape(link)}</a>'
            body += "<p>This is a non-anchor node.</p></body></html>"
        self.pages[path] = Page(self.fill(body), status, delay)

    async def handle(self, request: web.Request) -> web.Response:
        path = request.rel_url.path
        self.hits[path] += 1
        self.user_agents.append(request.headers.get("User-Agent"))
        page = self.pages.get(path)
        if page is None:
            return web.Response(status=404, text="not found")
        if page.delay:
            await asyncio.sleep(page.delay)
        return web.Response(status=page.status, text=page.body, content_type="text/html")


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield host:port, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[TestSite]:
    app = web.Application()
    holder: Dict[str, TestSite] = {}

    async def dispatch(request: web.Request) -> web.Response:
        return await holder["site"].handle(request)

    app.router.add_route("GET", "/{tail:.*}", dispatch)

    async for host in _serve_app(app, unused_tcp_port):
        holder["site"] = TestSite(scheme="http", host=host)
        yield holder["site"]


@pytest.fixture()
def sample_html() -> str:
    return (
        "<html><body>"
        '<a href="/one">1</a>'
        '<div><p><a href="two">2</a></p></div>'
        '<a href="/one">again</a>'
        '<a href="https://other.example/x">x</a>'
        "</body></html>"
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests bind log handlers to CliRunner streams; drop them after each test."""
    yield
    lg = logging.getLogger("linkmap")
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
    lg.addHandler(logging.NullHandler())
    lg.setLevel(logging.NOTSET)
    lg.propagate = True
