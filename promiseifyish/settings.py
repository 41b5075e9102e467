"""
promiseifyish.settings - Centralized Configuration

Loads adapter defaults from .env files and environment variables using
pydantic-settings. Per-call AdaptationOptions take precedence.

Usage:
    >>> from promiseifyish.settings import get_settings
    >>> settings = get_settings()
    >>> settings.strict_selection
    False
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PromiseifySettings(BaseSettings):
    """promiseifyish configuration loaded from .env / environment variables.

    All PROMISEIFYISH_* prefixed env vars are loaded automatically.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMISEIFYISH_",
        extra="ignore",
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Adaptation defaults ---------------------------------------------------
    # Raise AdaptationError instead of skipping names that are not callable.
    strict_selection: bool = False
    # A user-supplied failure handler marks the rejection as retrieved.
    mark_handled_rejections: bool = True

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


# ---------------------------------------------------------------------------
# Singleton accessor
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_settings() -> PromiseifySettings:
    """Return the cached PromiseifySettings singleton."""
    return PromiseifySettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
