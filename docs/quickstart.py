from aiohttp import ClientSession

from aiofetcher.abort import AbortController
from aiofetcher.errors import FetcherException, FetcherExceptionReason
from aiofetcher.fetcher import create_fetcher, parse_json_response
from aiofetcher.http.aiohttp import AIOHTTP
from aiofetcher.url import generate_search_params, generate_url


async def example():
    async with ClientSession() as session:
        fetch = create_fetcher(
            AIOHTTP(session),
            base_url="https://api.example.com",
            timeout=5,
            headers={"Accept": "application/json"},
        )

        # Fetch a user
        path = generate_url("/users/:id", {"id": 1})
        query = generate_search_params({"fields": ["name", "email"]})
        response = await fetch("GET", path + query)
        print(await parse_json_response(response))

        # Cancel a request from elsewhere
        controller = AbortController()
        try:
            await fetch("GET", "/slow", signal=controller.signal, timeout=30)
        except FetcherException as exc:
            if exc.reason is FetcherExceptionReason.response:
                print(exc.status, await parse_json_response(exc.response))
            elif exc.reason is FetcherExceptionReason.abort:
                print("cancelled")
            else:
                raise
