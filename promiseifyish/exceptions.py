"""
promiseifyish.exceptions - Custom exceptions for adaptation

Provides a hierarchy of domain-specific exceptions raised (or used as
rejection reasons) by the adapter.

Example:
    >>> from promiseifyish.exceptions import OutcomeRejected
    >>>
    >>> try:
    ...     await store.load()
    ... except OutcomeRejected as e:
    ...     logger.error(f"Load failed with {e.values}")
"""

from typing import Any


class PromiseifyError(Exception):
    """Base exception for all promiseifyish errors."""


class PromiseifyTypeError(PromiseifyError, TypeError):
    """
    Raised when a target is neither callable nor a structured value.

    Raised synchronously by promiseify() before anything is wrapped.
    """

    def __init__(self, target: Any) -> None:
        self.target_type = type(target).__name__
        super().__init__(f"Cannot promiseify type: {self.target_type}")


class AdaptationError(PromiseifyError):
    """
    Raised in strict mode when selected names cannot be adapted.

    This can occur when:
    - A name in ``only`` does not exist on the target
    - A name in ``only`` or ``include`` resolves to a non-callable value
    - A selected member is a property without a setter
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Cannot adapt members: {', '.join(missing)}")


class NoEventLoopError(PromiseifyError, RuntimeError):
    """Raised when an adapted call has no event loop to bind its future to."""


class OutcomeRejected(PromiseifyError):
    """
    Rejection reason for a logical failure.

    Carries the values the wrapped callable passed to its completion
    handler, in order.
    """

    def __init__(self, values: list[Any]) -> None:
        self.values = values
        super().__init__(*values)

    def __repr__(self) -> str:
        return f"OutcomeRejected(values={self.values!r})"


__all__ = [
    "AdaptationError",
    "NoEventLoopError",
    "OutcomeRejected",
    "PromiseifyError",
    "PromiseifyTypeError",
]
