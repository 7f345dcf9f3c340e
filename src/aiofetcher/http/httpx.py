from dataclasses import dataclass
from typing import Dict, cast

import httpx
from multidict import CIMultiDict, CIMultiDictProxy

from .types import Request, RequestFailed, Response


@dataclass(frozen=True)
class HTTPX:
    client: httpx.AsyncClient

    async def __call__(self, request: Request) -> Response:
        request.signal.throw_if_aborted()
        try:
            response = await self.client.request(
                method=request.method,
                url=request.url,
                # httpx is coded with no_implicit_optional=False, we use strict=True
                headers=cast(Dict[str, str], request.headers),
                content=request.body,
                **request.options,
            )
            return Response(
                response.status_code,
                await response.aread(),
                CIMultiDictProxy(CIMultiDict(response.headers.multi_items())),
            )
        except httpx.HTTPError as exc:
            raise RequestFailed(exc) from exc
