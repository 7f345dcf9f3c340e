from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, List, TypeVar

from .errors import AbortError
from .utils import logger

T = TypeVar("T")

Listener = Callable[[], None]


class AbortSignal:
    """
    A one-shot abort event. Listeners are called once, synchronously, when
    the owning AbortController aborts. Use `guard` to tie an awaitable to
    the signal.
    """

    def __init__(self) -> None:
        self._aborted = False
        self._reason: Any = None
        self._listeners: List[Listener] = []

    def __repr__(self) -> str:
        return f"<AbortSignal aborted={self._aborted}>"

    @property
    def aborted(self) -> bool:
        return self._aborted

    @property
    def reason(self) -> Any:
        return self._reason

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def throw_if_aborted(self) -> None:
        if self._aborted:
            raise AbortError(self._reason)

    def _fire(self, reason: Any) -> None:
        if self._aborted:
            return
        self._aborted = True
        self._reason = reason
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            try:
                listener()
            except Exception:
                # a failing listener must not keep the others from running
                logger.exception("abort listener %r failed", listener)

    async def wait(self) -> None:
        if self._aborted:
            return
        future = asyncio.get_running_loop().create_future()

        def wake() -> None:
            if not future.done():
                future.set_result(None)

        self.add_listener(wake)
        try:
            await future
        finally:
            self.remove_listener(wake)

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Await `awaitable` unless the signal fires first, in which case the
        awaitable is cancelled and AbortError is raised. If both settle in
        the same loop iteration, the awaitable's outcome wins.
        """
        if self._aborted:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise AbortError(self._reason)
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.get_running_loop().create_future()

        def wake() -> None:
            if not waiter.done():
                waiter.set_result(None)

        self.add_listener(wake)
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            self.remove_listener(wake)
        if task.done():
            return task.result()
        task.cancel()
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            raise AbortError(self._reason) from task.exception()
        raise AbortError(self._reason)


class AbortController:
    def __init__(self) -> None:
        self.signal = AbortSignal()

    def __repr__(self) -> str:
        return f"<AbortController signal={self.signal!r}>"

    def abort(self, reason: Any = None) -> None:
        """
        Abort the signal. Calling this more than once has no further effect.
        """
        self.signal._fire(reason)
