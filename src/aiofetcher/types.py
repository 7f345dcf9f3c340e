from enum import Enum
from typing import Any, Mapping, Union

Timeout = Union[float, int]

Options = Mapping[str, Any]

DEFAULT_TIMEOUT: Timeout = 11


class HttpMethod(str, Enum):
    get = "GET"
    head = "HEAD"
    post = "POST"
    put = "PUT"
    delete = "DELETE"
    connect = "CONNECT"
    options = "OPTIONS"
    trace = "TRACE"
    patch = "PATCH"


Method = Union[HttpMethod, str]
