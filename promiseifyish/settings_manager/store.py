"""
promiseifyish.settings_manager.store - Settings Stores

Callback-style backing stores for SettingsManager. Completion callbacks
always run on a later event loop turn, never inside the call that
scheduled them.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from promiseifyish.core.inspection import invoke_soon
from promiseifyish.settings_manager.merge import merge

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]


def _log_callback_failure(future: "asyncio.Future[Any]") -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error(
            "Settings callback failed",
            exc_info=error,
            extra={"error_type": type(error).__name__},
        )


def schedule_callback(
    fn: Callback | None,
    args: Sequence[Any] = (),
    context: Any = None,
) -> "asyncio.Future[Any] | None":
    """Run fn(*args) on the next loop turn; failures are logged, not raised."""
    future = invoke_soon(fn, args, context)
    if future is not None:
        future.add_done_callback(_log_callback_failure)
    return future


class SettingsStore(Protocol):
    """
    Protocol for settings backing stores.

    Every operation reports completion through its callbacks only:
    ``on_success`` with the resulting settings, ``on_error`` with a reason.
    """

    def load(self, on_success: Callback | None = None, on_error: Callback | None = None) -> None:
        """Report the stored settings."""

    def save(
        self,
        settings: dict[str, Any],
        on_success: Callback | None = None,
        on_error: Callback | None = None,
    ) -> None:
        """Merge settings into the store and report the result."""

    def clear(self, on_success: Callback | None = None, on_error: Callback | None = None) -> None:
        """Remove all settings and report ``{}``."""


class InMemoryStore:
    """Settings store kept in a dict for the lifetime of the process.

    Callbacks receive copies, so callers cannot modify stored settings.
    """

    def __init__(self) -> None:
        self.settings: dict[str, Any] = {}

    def load(self, on_success: Callback | None = None, on_error: Callback | None = None) -> None:
        schedule_callback(on_success, [merge({}, self.settings)])

    def save(
        self,
        settings: dict[str, Any],
        on_success: Callback | None = None,
        on_error: Callback | None = None,
    ) -> None:
        self.settings = merge(self.settings, settings)
        logger.debug("Saved settings", extra={"keys": sorted(self.settings)})
        schedule_callback(on_success, [merge({}, self.settings)])

    def clear(self, on_success: Callback | None = None, on_error: Callback | None = None) -> None:
        self.settings = {}
        logger.debug("Cleared settings")
        schedule_callback(on_success, [{}])
