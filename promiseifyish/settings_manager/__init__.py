"""
promiseifyish.settings_manager - Callback-style Settings Storage

A small key-value settings manager with swappable backing stores, used as
the reference consumer of promiseify().
"""

from promiseifyish.settings_manager.manager import NOT_AN_OBJECT_ERROR, SettingsManager
from promiseifyish.settings_manager.merge import merge
from promiseifyish.settings_manager.store import InMemoryStore, SettingsStore, schedule_callback

__all__ = [
    "NOT_AN_OBJECT_ERROR",
    "InMemoryStore",
    "SettingsManager",
    "SettingsStore",
    "merge",
    "schedule_callback",
]
