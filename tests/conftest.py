import asyncio
from typing import AsyncGenerator

import aiohttp
import httpx
import pytest
from _pytest.fixtures import SubRequest
from aiohttp import web
from aiohttp.test_utils import TestServer

from aiofetcher.http.aiohttp import AIOHTTP
from aiofetcher.http.httpx import HTTPX
from aiofetcher.http.types import HttpImplementation


@pytest.fixture(params=["httpx", "aiohttp"])
async def http(request: SubRequest) -> AsyncGenerator[HttpImplementation, None]:
    if request.param == "httpx":
        async with httpx.AsyncClient() as client:
            yield HTTPX(client)
    elif request.param == "aiohttp":
        async with aiohttp.ClientSession() as session:
            yield AIOHTTP(session)


async def json_handler(request: web.Request) -> web.Response:
    return web.json_response({"foo": "bar"})


async def error_handler(request: web.Request) -> web.Response:
    return web.json_response({"foo": "bar"}, status=int(request.match_info["status"]))


async def slow_handler(request: web.Request) -> web.Response:
    await asyncio.sleep(float(request.query.get("delay", "1")))
    return web.json_response({"slow": True})


async def echo_handler(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "method": request.method,
            "headers": {key.lower(): value for key, value in request.headers.items()},
            "query": dict(request.query),
            "body": (await request.read()).decode(),
        }
    )


async def cookies_handler(request: web.Request) -> web.Response:
    response = web.json_response({"foo": "bar"})
    response.headers.add("Set-Cookie", "a=1")
    response.headers.add("Set-Cookie", "b=2")
    return response


@pytest.fixture
async def base_url() -> AsyncGenerator[str, None]:
    app = web.Application()
    app.router.add_get("/json", json_handler)
    app.router.add_get("/status/{status}", error_handler)
    app.router.add_get("/slow", slow_handler)
    app.router.add_get("/cookies", cookies_handler)
    app.router.add_route("*", "/echo", echo_handler)
    server = TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/")).rstrip("/")
    finally:
        await server.close()
