from __future__ import annotations

import aiohttp
import aiohttp.web
import pytest_asyncio


@pytest_asyncio.fixture
async def test_server(aiohttp_server):
    async def handler_ok(request):
        return aiohttp.web.Response(text="hello", status=200)

    async def handler_json(request):
        return aiohttp.web.json_response({"query": dict(request.query)})

    async def handler_missing(request):
        return aiohttp.web.json_response({"error": "not found"}, status=404)

    async def handler_redirect(request):
        raise aiohttp.web.HTTPFound("/ok")

    async def handler_echo_headers(request):
        return aiohttp.web.json_response({"headers": dict(request.headers)})

    app = aiohttp.web.Application()
    app.router.add_get("/ok", handler_ok)
    app.router.add_get("/json", handler_json)
    app.router.add_get("/missing", handler_missing)
    app.router.add_get("/redirect", handler_redirect)
    app.router.add_get("/echo-headers", handler_echo_headers)

    server = await aiohttp_server(app)
    return server
