"""Cancellation and deadline context carried by every API call."""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Optional, Type, TypeVar

from .errors import ContextError, DeadlineExceededError, RequestCanceledError

T = TypeVar("T")


class Context:
    """
    Caller-owned cancellation scope for one or more requests.

    A context is done once cancel() is called or its deadline passes; from
    then on err() returns the matching ContextError. Deadlines are
    time.monotonic() values.
    """

    def __init__(self, *, deadline: Optional[float] = None):
        self._deadline = deadline
        self._error: Optional[Type[ContextError]] = None
        self._done = asyncio.Event()

    @classmethod
    def background(cls) -> "Context":
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        return cls(deadline=time.monotonic() + seconds)

    @classmethod
    def with_deadline(cls, deadline: float) -> "Context":
        return cls(deadline=deadline)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self) -> None:
        self._finish(RequestCanceledError)

    def _finish(self, error: Type[ContextError]) -> None:
        if self._error is None:
            self._error = error
            self._done.set()

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        if self._error is None and self._deadline is not None:
            if time.monotonic() >= self._deadline:
                self._finish(DeadlineExceededError)
        return self._error is not None

    def err(self) -> Optional[ContextError]:
        if not self.done():
            return None
        if self._error is DeadlineExceededError:
            return DeadlineExceededError("context deadline exceeded")
        return RequestCanceledError("context canceled")

    async def run(self, awaitable: Awaitable[T]) -> T:
        """
        Await awaitable unless the context finishes first.

        If the context wins, the awaitable is cancelled and the context's
        error is raised. Errors raised by the awaitable propagate unchanged.
        """
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._done.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        if not self.done():
            # wait() timed out a hair before the monotonic check agrees
            self._finish(DeadlineExceededError)
        raise self.err()


__all__ = ["Context"]
