# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, List, Optional

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from thumb_scout.config import LookupConfig
from thumb_scout.fetch.models import PageContext

OG_IMAGE_PAGE = (
    "<html><head><title>Post 1</title>"
    '<meta property="og:image" content="http://img/1.jpg">'
    "</head><body><h1>Post</h1>"
    '<img class="main" src="http://img/main.jpg">'
    "</body></html>"
)


@dataclass
class LocalSite:
    """Handle on the local test server and the knobs its handlers wait on."""

    url: str
    hits: List[str] = field(default_factory=list)
    accept: List[Optional[str]] = field(default_factory=list)
    release_headers: asyncio.Event = field(default_factory=asyncio.Event)
    release_body: asyncio.Event = field(default_factory=asyncio.Event)
    first_chunk_sent: asyncio.Event = field(default_factory=asyncio.Event)

    def __call__(self, path: str) -> str:
        return f"{self.url}{path}"


class Recorder:
    """Completion callback that remembers every result it receives."""

    def __init__(self) -> None:
        self.calls: List[Any] = []

    def __call__(self, result: Any) -> None:
        self.calls.append(result)


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def lookup_config() -> LookupConfig:
    return LookupConfig(user_agent="TestAgent/1.0")


@pytest.fixture()
def page_context() -> PageContext:
    return PageContext(url="http://example.com/gallery")


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[ClientSession]:
    async with ClientSession() as client:
        yield client


@pytest_asyncio.fixture
async def test_site(unused_tcp_port: int) -> AsyncIterator[LocalSite]:
    app = web.Application()
    state = LocalSite(url="")

    def _seen(request: web.Request) -> None:
        state.hits.append(request.path)
        state.accept.append(request.headers.get("Accept"))

    async def handle_page(request):
        _seen(request)
        return web.Response(text="<html><body><img src='http://img/x.jpg'></body></html>", content_type="text/html")

    async def handle_og(request):
        _seen(request)
        return web.Response(text=OG_IMAGE_PAGE, content_type="text/html")

    async def handle_noscript(request):
        _seen(request)
        return web.Response(text='<div><noscript><img src="y"/></noscript></div>', content_type="text/html")

    async def handle_missing(request):
        _seen(request)
        return web.Response(status=404, text="<h1>Not found</h1>", content_type="text/html")

    async def handle_image(request):
        _seen(request)
        return web.Response(body=b"\x89PNG\r\n\x1a\n", content_type="image/png")

    async def handle_empty(request):
        _seen(request)
        return web.Response(text="", content_type="text/html")

    async def handle_json(request):
        _seen(request)
        return web.json_response({"gfyItem": {"gifUrl": "http://img/anim.gif"}})

    async def handle_cp1251(request):
        _seen(request)
        body = "<p>Привет</p>".encode("cp1251")
        return web.Response(body=body, headers={"Content-Type": "text/html; charset=windows-1251"})

    async def handle_slow_headers(request):
        _seen(request)
        await state.release_headers.wait()
        return web.Response(text="<img src='http://img/late.jpg'>", content_type="text/html")

    async def handle_slow_body(request):
        _seen(request)
        resp = web.StreamResponse(headers={"Content-Type": "text/html"})
        await resp.prepare(request)
        await resp.write(b"<html><body>")
        state.first_chunk_sent.set()
        await state.release_body.wait()
        await resp.write(b"<img src='http://img/late.jpg'></body></html>")
        await resp.write_eof()
        return resp

    app.router.add_get("/page", handle_page)
    app.router.add_get("/post/1", handle_og)
    app.router.add_get("/noscript", handle_noscript)
    app.router.add_get("/missing", handle_missing)
    app.router.add_get("/image.png", handle_image)
    app.router.add_get("/empty", handle_empty)
    app.router.add_get("/api/gfy", handle_json)
    app.router.add_get("/cp1251", handle_cp1251)
    app.router.add_get("/slow-headers", handle_slow_headers)
    app.router.add_get("/slow-body", handle_slow_body)

    async for url in _serve_app(app, unused_tcp_port):
        state.url = url
        try:
            yield state
        finally:
            # let parked handlers finish so runner cleanup does not hang
            state.release_headers.set()
            state.release_body.set()
