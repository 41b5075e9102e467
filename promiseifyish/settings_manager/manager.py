"""
promiseifyish.settings_manager.manager - Settings Manager

Callback-style façade over a settings store. Each operation takes optional
trailing success and error callbacks, which makes it a direct fit for
promiseify().

Example:
    >>> manager = SettingsManager()
    >>> manager.save({"theme": "dark"}, lambda settings: print(settings))
    >>> manager = promiseify(SettingsManager())
    >>> await manager.load()
    [{'theme': 'dark'}]
"""

from collections.abc import Mapping
from typing import Any

from promiseifyish.core.inspection import invoke
from promiseifyish.settings_manager.store import (
    Callback,
    InMemoryStore,
    SettingsStore,
    schedule_callback,
)

NOT_AN_OBJECT_ERROR = '"settings" is not an object'


class SettingsManager:
    """Stores settings through a pluggable backing store.

    Args:
        backing_store: Store implementation to wrap (defaults to InMemoryStore)
    """

    def __init__(self, backing_store: SettingsStore | None = None) -> None:
        self.backing_store = backing_store if backing_store is not None else InMemoryStore()

    def load(self, on_success: Callback | None = None, on_error: Callback | None = None) -> None:
        """Load settings; on_success receives the settings dict."""

        def on_load(settings: dict[str, Any]) -> None:
            invoke(on_success, [settings])

        self.backing_store.load(on_load, on_error)

    def save(
        self,
        settings: Any,
        on_success: Callback | None = None,
        on_error: Callback | None = None,
    ) -> None:
        """Save settings.

        Empty settings are not stored; on_success receives ``{}``. Anything
        other than a mapping is reported to on_error.
        """
        if not settings:
            schedule_callback(on_success, [{}])
        elif isinstance(settings, Mapping):
            self.backing_store.save(dict(settings), on_success, on_error)
        else:
            schedule_callback(on_error, [NOT_AN_OBJECT_ERROR])

    def clear(self, on_success: Callback | None = None, on_error: Callback | None = None) -> None:
        """Clear settings; on_success receives ``{}``."""
        schedule_callback(self.backing_store.clear, [on_success, on_error])
