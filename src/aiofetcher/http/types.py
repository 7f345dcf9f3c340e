import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional

from multidict import CIMultiDict, CIMultiDictProxy

from aiofetcher.abort import AbortSignal
from aiofetcher.types import Options


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: Mapping[str, str]
    body: Optional[bytes]
    signal: AbortSignal
    options: Options = field(default_factory=dict)


@dataclass(frozen=True)
class Response:
    status: int
    body: bytes
    # case-insensitive, repeated headers are kept
    headers: Mapping[str, str] = field(
        default_factory=lambda: CIMultiDictProxy(CIMultiDict())
    )

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding)

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class RequestFailed(Exception):
    inner: Exception


HttpImplementation = Callable[[Request], Awaitable[Response]]
