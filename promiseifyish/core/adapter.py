"""
promiseifyish.core.adapter - Callback to Future Adaptation

Turn callback-style functions and objects into ones whose calls also return
an asyncio.Future.

An adapted call strips the caller's completion handlers from its
arguments, calls the original once with two injected trailing handlers,
and returns a future. Whichever injected handler the original fires, the
outcome redirector decides whether the call succeeded: the caller's
matching handler runs and the future settles with the completion values.

Example:
    >>> class Store:
    ...     def load(self, on_success, on_error):
    ...         on_success({"theme": "dark"})
    >>> store = promiseify(Store())
    >>> await store.load()
    [{'theme': 'dark'}]
    >>> store.load(lambda settings: print(settings))  # callbacks still work

    >>> fetch = promiseify.node_style(fetch_with_error_first_callback)
    >>> await fetch("url")  # raises OutcomeRejected if callback(error) fired
"""

import asyncio
import functools
import inspect
import logging
import math
import types
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

from promiseifyish.core.conventions import error_first, last_error_redirector, runtime
from promiseifyish.core.handlers import split_call_arguments
from promiseifyish.core.inspection import (
    enumerate_callable_names,
    invoke,
    is_assignable,
    is_callable,
    is_record,
    resolve_member,
)
from promiseifyish.core.options import AdaptationOptions, OutcomeRedirector
from promiseifyish.exceptions import (
    AdaptationError,
    NoEventLoopError,
    OutcomeRejected,
    PromiseifyTypeError,
)
from promiseifyish.settings import get_settings

logger = logging.getLogger(__name__)

# Attribute name stored on adapted functions
_PROMISEIFY_META_ATTR = "_promiseify_meta"

Options = AdaptationOptions | dict[str, Any] | None


def _resolve_loop(options: AdaptationOptions) -> asyncio.AbstractEventLoop:
    if options.loop is not None:
        return options.loop
    try:
        return asyncio.get_running_loop()
    except RuntimeError as e:
        raise NoEventLoopError(
            "Adapted calls need a running event loop or AdaptationOptions.loop"
        ) from e


def _on_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


def _apply_settlement(
    future: "asyncio.Future[Any]",
    result: Any,
    exception: BaseException | None,
) -> None:
    if future.done():
        logger.debug(
            "Ignoring repeat settlement of an adapted call",
            extra={"rejected": exception is not None},
        )
        return
    if exception is not None:
        future.set_exception(exception)
    else:
        future.set_result(result)


def _settle(
    future: "asyncio.Future[Any]",
    result: Any = None,
    exception: BaseException | None = None,
) -> None:
    """Settle future once, marshalling onto its loop from other threads."""
    loop = future.get_loop()
    if _on_loop_thread(loop) or not loop.is_running():
        _apply_settlement(future, result, exception)
    else:
        loop.call_soon_threadsafe(_apply_settlement, future, result, exception)


def _positional_capacity(fn: Callable[..., Any]) -> float:
    """Count the positional arguments fn accepts (inf if unbounded or unknown)."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return math.inf

    capacity = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return math.inf
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            capacity += 1
    return capacity


def _mark_retrieved(future: "asyncio.Future[Any]") -> None:
    # The caller's failure handler already saw this rejection
    if not future.cancelled():
        future.exception()


def promiseify_callable(
    fn: Callable[..., Any],
    options: Options = None,
    context: Any = None,
) -> Callable[..., "asyncio.Future[Any]"]:
    """Adapt a single callback-style callable.

    Args:
        fn: Callable whose last two positional parameters are completion
            handlers (success, failure)
        options: Adaptation options; only ``outcome_redirector`` and
            ``loop`` apply to a single callable
        context: Object a plain function is bound to when called

    Returns:
        Wrapper that returns an asyncio.Future on every call
    """
    options = AdaptationOptions.coerce(options)
    target = fn
    if context is not None and isinstance(fn, types.FunctionType):
        target = types.MethodType(fn, context)
    fn_name = getattr(fn, "__qualname__", None) or repr(fn)
    capacity = _positional_capacity(target)
    # Read configuration once so a bad environment fails at adaptation time
    mark_handled = get_settings().mark_handled_rejections

    @functools.wraps(fn)
    def promiseified(*args: Any, **kwargs: Any) -> "asyncio.Future[Any]":
        loop = _resolve_loop(options)
        future: asyncio.Future[Any] = loop.create_future()
        call = split_call_arguments(args)

        if call.on_failure is not None and mark_handled:
            future.add_done_callback(_mark_retrieved)

        def complete(default_outcome: bool, values: tuple[Any, ...]) -> None:
            results = list(values)
            redirector = options.outcome_redirector
            succeeded = default_outcome if redirector is None else invoke(redirector, results)
            if succeeded:
                invoke(call.on_success, results)
                _settle(future, result=results)
            else:
                invoke(call.on_failure, results)
                _settle(future, exception=OutcomeRejected(results))

        def on_success_injected(*values: Any) -> None:
            complete(True, values)

        def on_error_injected(*values: Any) -> None:
            complete(False, values)

        injected: list[Callable[..., None]] = [on_success_injected, on_error_injected]
        # An original with a single completion slot only gets the success handler
        if capacity == len(call.arguments) + 1:
            injected = [on_success_injected]

        try:
            target(*call.arguments, *injected, **kwargs)
        except Exception as e:
            logger.debug(
                f"Adapted call to {fn_name} raised synchronously",
                exc_info=True,
                extra={"function": fn_name},
            )
            _settle(future, exception=e)

        return future

    setattr(
        promiseified,
        _PROMISEIFY_META_ATTR,
        {
            "original": fn,
            "options": options,
        },
    )

    return promiseified


def get_promiseify_meta(fn: Any) -> dict[str, Any] | None:
    """Get adaptation metadata from an adapted function.

    Returns:
        Dict with 'original' (the wrapped callable) and 'options'
        (AdaptationOptions), or None if fn was not adapted.
    """
    return getattr(fn, _PROMISEIFY_META_ATTR, None)


def is_promiseified(fn: Any) -> bool:
    """Return True if fn is the product of promiseify()."""
    return get_promiseify_meta(fn) is not None


def select_member_names(
    target: Any, options: AdaptationOptions, in_place: bool = True
) -> list[str]:
    """Compute which members of a structured target get adapted.

    With ``in_place``, members that cannot be replaced on the target are
    treated like missing ones.

    Raises:
        AdaptationError: In strict mode, if a requested name does not
            resolve to a callable, or names a member that cannot be replaced
    """
    excluded = set(options.exclude or [])

    if options.only is not None:
        names = list(dict.fromkeys(options.only))
        requested = names
    elif options.include is not None:
        requested = [n for n in dict.fromkeys(options.include) if n not in excluded]
        names = [n for n in requested if resolve_member(target, n) is not None]
    else:
        requested = []
        names = [n for n in enumerate_callable_names(target) if n not in excluded]

    missing = [n for n in requested if resolve_member(target, n) is None]
    if in_place:
        missing += [n for n in names if n not in missing and not is_assignable(target, n)]
    if missing:
        if options.is_strict():
            raise AdaptationError(missing)
        logger.warning(
            f"Skipping members that cannot be adapted: {', '.join(missing)}",
            extra={"target_type": type(target).__name__, "missing": missing},
        )

    return [n for n in names if n not in missing]


def _promiseify_record(target: Any, options: AdaptationOptions) -> Any:
    if isinstance(target, Mapping) and not isinstance(target, MutableMapping):
        raise PromiseifyTypeError(target)

    names = select_member_names(target, options)
    for name in names:
        member = resolve_member(target, name)
        if member is None:
            continue
        adapted = promiseify_callable(member, options)
        if isinstance(target, MutableMapping):
            target[name] = adapted
        else:
            setattr(target, name, adapted)

    logger.debug(
        f"Promiseified {len(names)} members of {type(target).__name__}",
        extra={"target_type": type(target).__name__, "members": names},
    )
    return target


def promiseify(target: Any, options: Options = None) -> Any:
    """Promiseify a function, or the callable members of an object.

    A callable is wrapped and the wrapper returned. A structured value
    (object or mapping) has its selected members replaced in place and is
    returned itself.

    Args:
        target: Callable, object or mutable mapping
        options: AdaptationOptions, a dict of the same fields, or None

    Returns:
        The wrapper, or the same target with adapted members

    Raises:
        PromiseifyTypeError: If target is neither callable nor structured
        AdaptationError: In strict mode, if selected names are not callable
    """
    options = AdaptationOptions.coerce(options)
    if is_callable(target):
        return promiseify_callable(target, options)
    if is_record(target):
        return _promiseify_record(target, options)
    raise PromiseifyTypeError(target)


def _build_with_outcome_redirector(
    target: Any, options: Options, outcome_redirector: OutcomeRedirector
) -> Any:
    options = AdaptationOptions.coerce(options).with_redirector(outcome_redirector)
    return promiseify(target, options)


def node_style(target: Any, options: Options = None) -> Any:
    """Promiseify an error-first, single-callback API.

    ``callback(error, *results)``: success iff error is falsy.
    """
    return _build_with_outcome_redirector(target, options, error_first)


def runtime_last_error_style(
    target: Any,
    options: Options = None,
    context: Any = runtime,
) -> Any:
    """Promiseify a single-callback API that reports failure via a runtime slot.

    Success iff ``context.last_error`` is None when the callback fires.
    Passing ``context=None`` treats every completion as success.
    """
    return _build_with_outcome_redirector(target, options, last_error_redirector(context))


promiseify.node_style = node_style  # type: ignore[attr-defined]
promiseify.runtime_last_error_style = runtime_last_error_style  # type: ignore[attr-defined]
