"""
promiseifyish.core.handlers - Call Descriptors

An adapted call can name its completion handlers in two ways:

1. Implicitly, as trailing callables (``store.save(data, on_ok, on_err)``).
   The arguments are inspected to decide which role each trailing callable
   plays.
2. Explicitly, by passing a CallHandlers descriptor as the last positional
   argument (``store.save(data, SuccessAndFailure(on_ok, on_err))``). No
   inspection happens; a callable that is meant as plain data can be
   forwarded with ``NoHandlers()``.

Example:
    >>> split_call_arguments((1, print))
    CallSplit(arguments=[1], on_success=<built-in function print>, on_failure=None)
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from promiseifyish.core.inspection import is_callable

Handler = Callable[..., Any]


class CallHandlers:
    """Base for explicit handler descriptors."""

    on_success: Handler | None = None
    on_failure: Handler | None = None


@dataclass(frozen=True)
class NoHandlers(CallHandlers):
    """No completion handlers; every positional argument is forwarded."""


@dataclass(frozen=True)
class SuccessOnly(CallHandlers):
    """Only a success handler."""

    on_success: Handler | None = None


@dataclass(frozen=True)
class SuccessAndFailure(CallHandlers):
    """Both success and failure handlers."""

    on_success: Handler | None = None
    on_failure: Handler | None = None


@dataclass
class CallSplit:
    """Forwarded arguments separated from the caller's handlers."""

    arguments: list[Any]
    on_success: Handler | None = None
    on_failure: Handler | None = None


def split_call_arguments(args: Sequence[Any]) -> CallSplit:
    """Separate the caller's completion handlers from the plain arguments.

    Protocol:
        - trailing CallHandlers descriptor: use it, strip it
        - no arguments: no handlers
        - one callable argument: success handler, nothing forwarded
        - last two callable: success then failure, both stripped
        - only last callable: success handler, stripped
        - otherwise: everything forwarded, no handlers
    """
    arguments = list(args)

    if arguments and isinstance(arguments[-1], CallHandlers):
        descriptor = arguments.pop()
        return CallSplit(arguments, descriptor.on_success, descriptor.on_failure)

    if not arguments:
        return CallSplit(arguments)

    if len(arguments) == 1:
        if is_callable(arguments[0]):
            return CallSplit([], on_success=arguments[0])
        return CallSplit(arguments)

    if is_callable(arguments[-1]) and is_callable(arguments[-2]):
        return CallSplit(arguments[:-2], on_success=arguments[-2], on_failure=arguments[-1])

    if is_callable(arguments[-1]):
        return CallSplit(arguments[:-1], on_success=arguments[-1])

    return CallSplit(arguments)
