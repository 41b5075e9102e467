"""
promiseifyish.core.options - Adaptation Options

Controls which members of a structured target are adapted and how
completion results are classified.

Selection rules:
- ``only``: exactly these names are adapted
- ``include``: these names are adapted unless listed in ``exclude``
- ``exclude``: these names are never adapted; ignored when ``only`` is set
- none of the above: every callable member is adapted

Example:
    >>> options = AdaptationOptions(only=["save"])
    >>> options = AdaptationOptions.coerce({"exclude": ["clear"]})
"""

import asyncio
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from promiseifyish.settings import get_settings

OutcomeRedirector = Callable[..., Any]


class AdaptationOptions(BaseModel):
    """Options for promiseify()."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    only: list[str] | None = Field(
        default=None, description="Adapt exactly these names (overrides include/exclude)"
    )
    include: list[str] | None = Field(
        default=None, description="Adapt these names unless excluded"
    )
    exclude: list[str] | None = Field(default=None, description="Never adapt these names")
    outcome_redirector: OutcomeRedirector | None = Field(
        default=None,
        description="Predicate over completion values; truthy means success",
    )
    strict: bool | None = Field(
        default=None,
        description="Raise on selected names that are not callable (None: use settings)",
    )
    loop: asyncio.AbstractEventLoop | None = Field(
        default=None, description="Event loop futures bind to (default: running loop)"
    )

    @field_validator("only", "include", "exclude", mode="before")
    @classmethod
    def _names_as_list(cls, value: Any) -> Any:
        """Accept a single name or any iterable of names."""
        if isinstance(value, str):
            return [value]
        if value is not None and not isinstance(value, list):
            return list(value)
        return value

    @classmethod
    def coerce(cls, options: "AdaptationOptions | dict[str, Any] | None") -> "AdaptationOptions":
        """Normalize None, a dict or an AdaptationOptions into AdaptationOptions."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)

    def is_strict(self) -> bool:
        """Resolve ``strict`` against the configured default."""
        if self.strict is None:
            return get_settings().strict_selection
        return self.strict

    def with_redirector(self, outcome_redirector: OutcomeRedirector) -> "AdaptationOptions":
        """Return a copy using outcome_redirector; self is left unchanged."""
        return self.model_copy(update={"outcome_redirector": outcome_redirector})
