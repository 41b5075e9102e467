"""
promiseifyish - Callback APIs that also return futures

Adapts callback-style functions and objects so that every call returns an
asyncio.Future, while existing callers can keep passing callbacks.

This package provides:
1. promiseify(): adapt a callable, or the callable members of an object
2. Convention presets for error-first and last-error callback styles
3. promiseify_facade(): non-mutating adaptation through a wrapper
4. A callback-style settings manager with an in-memory store
5. A demo CLI contrasting callback and future-based use

Example:
    >>> from promiseifyish import promiseify
    >>> from promiseifyish.settings_manager import SettingsManager

    >>> manager = promiseify(SettingsManager())
    >>> await manager.save({"theme": "dark"})
    [{'theme': 'dark'}]
    >>> await manager.load()
    [{'theme': 'dark'}]

    >>> # Error-first callbacks
    >>> read = promiseify.node_style(read_with_callback)
"""

__version__ = "0.1.0"
__author__ = "promiseifyish contributors"
__license__ = "MIT"

from promiseifyish.core import (
    AdaptationOptions,
    Deferred,
    LastErrorContext,
    NoHandlers,
    PromiseifiedFacade,
    SuccessAndFailure,
    SuccessOnly,
    enumerate_callable_names,
    invoke,
    is_callable,
    is_promiseified,
    is_record,
    node_style,
    promiseify,
    promiseify_facade,
    runtime_last_error_style,
)
from promiseifyish.exceptions import (
    AdaptationError,
    NoEventLoopError,
    OutcomeRejected,
    PromiseifyError,
    PromiseifyTypeError,
)

__all__ = [
    "AdaptationError",
    "AdaptationOptions",
    "Deferred",
    "LastErrorContext",
    "NoEventLoopError",
    "NoHandlers",
    "OutcomeRejected",
    "PromiseifiedFacade",
    "PromiseifyError",
    "PromiseifyTypeError",
    "SuccessAndFailure",
    "SuccessOnly",
    "__version__",
    "enumerate_callable_names",
    "invoke",
    "is_callable",
    "is_promiseified",
    "is_record",
    "node_style",
    "promiseify",
    "promiseify_facade",
    "runtime_last_error_style",
]
