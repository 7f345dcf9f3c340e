import asyncio
from dataclasses import dataclass

import aiohttp
from multidict import CIMultiDict, CIMultiDictProxy

from .types import Request, RequestFailed, Response


@dataclass(frozen=True)
class AIOHTTP:
    session: aiohttp.ClientSession

    async def __call__(self, request: Request) -> Response:
        request.signal.throw_if_aborted()
        try:
            async with self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                **request.options,
            ) as response:
                return Response(
                    response.status,
                    await response.read(),
                    CIMultiDictProxy(CIMultiDict(response.headers)),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise RequestFailed(exc) from exc
