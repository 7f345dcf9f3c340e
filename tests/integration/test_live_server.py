import asyncio

import pytest
from multidict import CIMultiDictProxy

from aiofetcher.abort import AbortController
from aiofetcher.errors import FetcherException, FetcherExceptionReason
from aiofetcher.fetcher import create_fetcher, parse_json_response
from aiofetcher.http.types import HttpImplementation
from aiofetcher.types import HttpMethod
from aiofetcher.url import generate_search_params, generate_url


async def test_success(http: HttpImplementation, base_url: str) -> None:
    fetcher = create_fetcher(http, base_url=base_url, timeout=5)

    response = await fetcher(HttpMethod.get, "/json")

    assert response.status == 200
    assert await parse_json_response(response) == {"foo": "bar"}


@pytest.mark.parametrize("status", [400, 404, 500])
async def test_error_status(
    http: HttpImplementation, base_url: str, status: int
) -> None:
    fetcher = create_fetcher(http, base_url=base_url, timeout=5)

    with pytest.raises(FetcherException) as error:
        await fetcher("GET", generate_url("/status/:status", {"status": status}))

    assert error.value.reason is FetcherExceptionReason.response
    assert error.value.status == status
    assert await parse_json_response(error.value.response) == {"foo": "bar"}


async def test_timeout(http: HttpImplementation, base_url: str) -> None:
    fetcher = create_fetcher(http, base_url=base_url, timeout=0.05)

    with pytest.raises(FetcherException) as error:
        await fetcher("GET", "/slow" + generate_search_params({"delay": 0.5}))

    assert error.value.reason is FetcherExceptionReason.timeout


async def test_abort(http: HttpImplementation, base_url: str) -> None:
    fetcher = create_fetcher(http, base_url=base_url, timeout=5)
    controller = AbortController()
    asyncio.get_running_loop().call_later(0.05, controller.abort)

    with pytest.raises(FetcherException) as error:
        await fetcher("GET", "/slow", signal=controller.signal)

    assert error.value.reason is FetcherExceptionReason.abort


async def test_network_failure(http: HttpImplementation) -> None:
    # nothing listens on port 1
    fetcher = create_fetcher(http, base_url="http://127.0.0.1:1", timeout=5)

    with pytest.raises(FetcherException) as error:
        await fetcher("GET", "/")

    assert error.value.reason is FetcherExceptionReason.network


async def test_request_is_merged(http: HttpImplementation, base_url: str) -> None:
    fetcher = create_fetcher(
        http,
        base_url=base_url,
        timeout=5,
        headers={"X-Default": "a", "X-Override": "a"},
        params={"page": "1"},
    )

    response = await fetcher(
        "POST",
        "/echo",
        headers={"X-Override": "b"},
        body=b"hello",
        params={"page": "2"},
    )

    data = await parse_json_response(response)
    assert data["method"] == "POST"
    assert data["headers"]["x-default"] == "a"
    assert data["headers"]["x-override"] == "b"
    assert data["query"] == {"page": "2"}
    assert data["body"] == "hello"


async def test_response_headers(http: HttpImplementation, base_url: str) -> None:
    fetcher = create_fetcher(http, base_url=base_url, timeout=5)

    response = await fetcher("GET", "/cookies")

    assert isinstance(response.headers, CIMultiDictProxy)
    assert response.headers["Content-Type"].startswith("application/json")
    assert response.headers["content-type"].startswith("application/json")
    assert response.headers.getall("Set-Cookie") == ["a=1", "b=2"]
    assert response.headers.getall("set-cookie") == ["a=1", "b=2"]
