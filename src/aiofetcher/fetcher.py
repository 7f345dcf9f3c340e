from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .abort import AbortController, AbortSignal
from .errors import FetcherException, FetcherExceptionReason
from .http.types import HttpImplementation, Request, Response
from .types import DEFAULT_TIMEOUT, Method, Options, Timeout
from .utils import logger, merge, method_name


@dataclass(frozen=True)
class FetcherConfig:
    base_url: str = ""
    timeout: Timeout = DEFAULT_TIMEOUT
    headers: Mapping[str, str] = field(default_factory=dict)
    options: Options = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", dict(self.headers))
        object.__setattr__(self, "options", dict(self.options))

    @classmethod
    def from_environ(cls) -> FetcherConfig:
        """
        Load the base URL and timeout (in seconds) from AIOFETCHER_BASE_URL
        and AIOFETCHER_TIMEOUT.
        """
        return cls(
            base_url=os.environ.get("AIOFETCHER_BASE_URL", ""),
            timeout=float(os.environ.get("AIOFETCHER_TIMEOUT", DEFAULT_TIMEOUT)),
        )


@dataclass
class _PendingReason:
    reason: Optional[FetcherExceptionReason] = None

    def tag(self, reason: FetcherExceptionReason) -> None:
        # first writer wins
        if self.reason is None:
            self.reason = reason


@dataclass(frozen=True)
class Fetcher:
    http: HttpImplementation
    config: FetcherConfig = field(default_factory=FetcherConfig)

    @classmethod
    def from_environ(cls, http: HttpImplementation) -> Fetcher:
        return cls(http, FetcherConfig.from_environ())

    def build_request(
        self,
        method: Method,
        url: str,
        *,
        signal: AbortSignal,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        options: Optional[Options] = None,
    ) -> Request:
        return Request(
            method=method_name(method),
            url=f"{self.config.base_url}{url}",
            headers=merge(self.config.headers, headers),
            body=body,
            signal=signal,
            options=merge(self.config.options, options),
        )

    async def __call__(
        self,
        method: Method,
        url: str,
        *,
        timeout: Optional[Timeout] = None,
        signal: Optional[AbortSignal] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        **options: Any,
    ) -> Response:
        """
        Send a request and return the response if its status is below 400.

        Every failure raises FetcherException. Its reason is `timeout` if the
        timeout elapsed first, `abort` if `signal` fired first, `network` if
        the transport failed on its own and `response` for error statuses.
        """
        controller = AbortController()
        pending = _PendingReason()
        request = self.build_request(
            method,
            url,
            signal=controller.signal,
            headers=headers,
            body=body,
            options=options,
        )
        if timeout is None:
            timeout = self.config.timeout

        def on_timeout() -> None:
            logger.debug("request timed out after %ss", timeout)
            pending.tag(FetcherExceptionReason.timeout)
            controller.abort()

        def on_abort() -> None:
            logger.debug("request aborted by caller")
            pending.tag(FetcherExceptionReason.abort)
            controller.abort()

        timer: Optional[asyncio.TimerHandle] = None
        if timeout <= 0:
            on_timeout()
        else:
            timer = asyncio.get_running_loop().call_later(timeout, on_timeout)
        if signal is not None:
            if signal.aborted:
                on_abort()
            else:
                signal.add_listener(on_abort)

        try:
            logger.debug("sending request %r", request)
            response = await controller.signal.guard(self.http(request))
        except Exception as exc:
            logger.debug("request failed: %r", exc)
            raise FetcherException.from_exception(pending.reason, exc) from exc
        finally:
            if timer is not None:
                timer.cancel()
            if signal is not None:
                signal.remove_listener(on_abort)

        if response.status >= 400:
            logger.debug("error response %s", response.status)
            raise FetcherException.from_response(response)

        return response


def create_fetcher(
    http: HttpImplementation,
    *,
    base_url: str = "",
    timeout: Timeout = DEFAULT_TIMEOUT,
    headers: Optional[Mapping[str, str]] = None,
    **options: Any,
) -> Fetcher:
    return Fetcher(
        http,
        FetcherConfig(
            base_url=base_url,
            timeout=timeout,
            headers=headers or {},
            options=options,
        ),
    )


async def parse_json_response(response: Response) -> Any:
    return response.json()
