from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from ._compat import TypeGuard

if TYPE_CHECKING:
    from .http.types import Response


class AioFetcherError(Exception):
    pass


class AbortError(AioFetcherError):
    """
    Raised when an in-flight operation is cancelled through an AbortSignal.
    """

    def __init__(self, reason: Any = None):
        self.reason = reason
        super().__init__("operation was aborted")


class FetcherExceptionReason(str, Enum):
    timeout = "0"
    abort = "1"
    response = "2"
    network = "3"


class FetcherException(AioFetcherError):
    """
    The single error type raised by a Fetcher call.

    Exactly one reason is attached. For `FetcherExceptionReason.response`,
    `status` and `response` are set and the body can still be parsed from
    the response. For the other reasons, `exception` holds whatever the
    transport raised.
    """

    reason: FetcherExceptionReason
    status: Optional[int]
    response: Optional[Response]
    exception: Optional[BaseException]

    def __init__(
        self,
        reason: FetcherExceptionReason,
        *,
        status: Optional[int] = None,
        response: Optional[Response] = None,
        exception: Optional[BaseException] = None,
    ):
        self.reason = reason
        self.status = status
        self.response = response
        self.exception = exception
        super().__init__(reason, status if status is not None else exception)

    @classmethod
    def from_response(cls, response: Response) -> FetcherException:
        return cls(
            FetcherExceptionReason.response,
            status=response.status,
            response=response,
        )

    @classmethod
    def from_exception(
        cls, reason: Optional[FetcherExceptionReason], exception: BaseException
    ) -> FetcherException:
        """
        Wrap an exception raised by the transport. Without a recorded reason
        the failure is a network failure.
        """
        if reason is None:
            reason = FetcherExceptionReason.network
        elif reason is FetcherExceptionReason.response:
            raise TypeError("response failures must be built with from_response")
        return cls(reason, exception=exception)

    def __str__(self) -> str:
        if self.reason is FetcherExceptionReason.response:
            return f"fetch failed ({self.reason.name}): HTTP {self.status}"
        return f"fetch failed ({self.reason.name}): {self.exception!r}"


def is_fetcher_exception(value: Any) -> TypeGuard[FetcherException]:
    return isinstance(value, FetcherException)
