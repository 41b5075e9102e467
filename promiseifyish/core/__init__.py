"""
promiseifyish.core - Adapter Core

Callback-to-future adaptation, its options, call descriptors, completion
conventions and inspection helpers.
"""

from promiseifyish.core.adapter import (
    get_promiseify_meta,
    is_promiseified,
    node_style,
    promiseify,
    promiseify_callable,
    runtime_last_error_style,
    select_member_names,
)
from promiseifyish.core.conventions import (
    LastErrorContext,
    error_first,
    last_error_redirector,
    runtime,
)
from promiseifyish.core.deferred import Deferred
from promiseifyish.core.facade import PromiseifiedFacade, promiseify_facade
from promiseifyish.core.handlers import (
    CallHandlers,
    CallSplit,
    NoHandlers,
    SuccessAndFailure,
    SuccessOnly,
    split_call_arguments,
)
from promiseifyish.core.inspection import (
    enumerate_callable_names,
    invoke,
    invoke_soon,
    is_callable,
    is_record,
)
from promiseifyish.core.options import AdaptationOptions

__all__ = [
    "AdaptationOptions",
    "CallHandlers",
    "CallSplit",
    "Deferred",
    "LastErrorContext",
    "NoHandlers",
    "PromiseifiedFacade",
    "SuccessAndFailure",
    "SuccessOnly",
    "enumerate_callable_names",
    "error_first",
    "get_promiseify_meta",
    "invoke",
    "invoke_soon",
    "is_callable",
    "is_promiseified",
    "is_record",
    "last_error_redirector",
    "node_style",
    "promiseify",
    "promiseify_callable",
    "promiseify_facade",
    "runtime",
    "runtime_last_error_style",
    "select_member_names",
    "split_call_arguments",
]
