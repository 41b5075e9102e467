"""
promiseifyish.core.deferred - Deferred Pattern

A future plus the two functions that settle it, for code that needs to be
notified when some callback-driven work finishes.

Example:
    >>> deferred = Deferred()
    >>> run_with_callback(on_finished=deferred.done)
    >>> await deferred.future
"""

import asyncio
from typing import Any


class Deferred:
    """A future exposed together with its settlement functions.

    Settling is idempotent: once done() or error() has taken effect, later
    calls to either are ignored.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        loop = loop or asyncio.get_running_loop()
        self.future: asyncio.Future[Any] = loop.create_future()

    def done(self, value: Any = None) -> None:
        """Fulfil the future with value."""
        if not self.future.done():
            self.future.set_result(value)

    def error(self, exc: BaseException) -> None:
        """Reject the future with exc."""
        if not self.future.done():
            self.future.set_exception(exc)

    @property
    def settled(self) -> bool:
        return self.future.done()
