"""
promiseifyish.core.facade - Non-mutating Adaptation

promiseify() replaces members of its target in place. A facade instead
wraps the target: selected members are served as adapted callables, every
other attribute is read through to the target, and the target itself is
never modified. Wrapping the same target twice gives two independent
single-level facades.

Members are bound to the original target, so an adapted member that calls
``self.other(...)`` internally reaches the original, not the adapted, method.

Example:
    >>> manager = SettingsManager()
    >>> facade = promiseify_facade(manager, {"only": ["load"]})
    >>> await facade.load()
    [{}]
    >>> manager.load  # untouched
    <bound method SettingsManager.load of ...>
"""

import logging
from collections.abc import Callable
from typing import Any

from promiseifyish.core.adapter import Options, promiseify_callable, select_member_names
from promiseifyish.core.inspection import is_callable, is_record, resolve_member
from promiseifyish.core.options import AdaptationOptions
from promiseifyish.exceptions import PromiseifyTypeError

logger = logging.getLogger(__name__)


class PromiseifiedFacade:
    """Read-through wrapper exposing adapted members of a target."""

    def __init__(self, target: Any, options: Options = None) -> None:
        if not is_record(target):
            raise PromiseifyTypeError(target)

        options = AdaptationOptions.coerce(options)
        members: dict[str, Callable[..., Any]] = {}
        for name in select_member_names(target, options, in_place=False):
            member = resolve_member(target, name)
            if member is not None:
                members[name] = promiseify_callable(member, options)

        self.__wrapped__ = target
        self._members = members

        logger.debug(
            f"Built facade over {type(target).__name__}",
            extra={"target_type": type(target).__name__, "members": sorted(members)},
        )

    @property
    def adapted_names(self) -> list[str]:
        """Names served as adapted callables."""
        return sorted(self._members)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not set on the facade itself
        members = self.__dict__.get("_members", {})
        if name in members:
            return members[name]
        target = self.__dict__.get("__wrapped__")
        if target is None:
            raise AttributeError(name)
        if hasattr(target, name):
            return getattr(target, name)
        try:
            return target[name]
        except (KeyError, TypeError):
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> Any:
        if name in self._members:
            return self._members[name]
        return self.__wrapped__[name]

    def __repr__(self) -> str:
        return f"PromiseifiedFacade({self.__wrapped__!r}, adapted={self.adapted_names})"


def promiseify_facade(target: Any, options: Options = None) -> Any:
    """Adapt target without mutating it.

    Returns:
        A wrapper function for a callable target, a PromiseifiedFacade for
        an object or mapping

    Raises:
        PromiseifyTypeError: If target is neither callable nor structured
    """
    if is_callable(target):
        return promiseify_callable(target, options)
    return PromiseifiedFacade(target, options)
