"""
promiseifyish.core.conventions - Completion Conventions

Outcome redirectors for callback conventions that do not have separate
success and failure callbacks.

- Error-first: ``callback(error, *results)``; success iff error is falsy.
- Last-error: ``callback(*results)`` with failure reported through an error
  slot on a runtime context; success iff the slot is empty when the
  callback fires.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


def error_first(*values: Any) -> bool:
    """Error-first redirector: success iff the first value is falsy or absent."""
    return not (values and values[0])


@dataclass
class LastErrorContext:
    """Holder for the last error reported by a runtime.

    Runtimes that report failures out-of-band set ``last_error`` before
    invoking the completion callback and reset it afterwards.
    """

    last_error: Any = None

    def clear(self) -> None:
        self.last_error = None


# Process-wide default context
runtime = LastErrorContext()


def last_error_redirector(context: Any = None) -> Callable[..., bool]:
    """Build a redirector that reads ``context.last_error`` when it fires.

    With no context, or a context without a ``last_error`` slot, every
    completion counts as success.
    """

    def redirect(*_values: Any) -> bool:
        if context is None:
            return True
        return getattr(context, "last_error", None) is None

    return redirect
