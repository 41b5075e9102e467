"""
promiseifyish.core.inspection - Capability Inspection

Predicates and reflection helpers used by the adapter to decide what a
target is and which of its members can be adapted.

Example:
    >>> class Store:
    ...     def load(self, on_success): ...
    ...     def save(self, data, on_success): ...
    >>> enumerate_callable_names(Store())
    ['load', 'save']
"""

import asyncio
import inspect
import logging
import types
from collections.abc import Callable, Mapping, MutableMapping, Sequence, Set
from typing import Any

logger = logging.getLogger(__name__)

# Attribute a target may define to declare its adaptable operations explicitly
CAPABILITY_DESCRIPTOR_ATTR = "__promiseify__"

# Names defined by the universal base type; never adapted
_OBJECT_MEMBER_NAMES = frozenset(dir(object))


def is_callable(candidate: Any) -> bool:
    """Return True if candidate can be invoked."""
    return callable(candidate)


def is_record(candidate: Any) -> bool:
    """Return True if candidate is a structured value.

    Mappings and objects carrying an instance ``__dict__`` count; None,
    strings, sequences, sets and callables do not. Instances of classes
    that declare ``__slots__`` have no instance ``__dict__`` and are not
    structured values, since adapted members could not be stored on them.
    """
    if candidate is None or is_callable(candidate):
        return False
    if isinstance(candidate, str | bytes | bytearray | Sequence | Set):
        return False
    return isinstance(candidate, Mapping) or hasattr(candidate, "__dict__")


def invoke(
    fn: Any,
    args: Sequence[Any] = (),
    context: Any = None,
) -> Any:
    """Invoke fn with args, optionally bound to context.

    A plain function is bound to ``context`` before the call when one is
    given; anything else callable is called as is.

    Returns:
        fn's return value, or None (without doing anything) if fn is not
        callable.
    """
    if not is_callable(fn):
        return None
    if context is not None and isinstance(fn, types.FunctionType):
        fn = types.MethodType(fn, context)
    return fn(*args)


def invoke_soon(
    fn: Any,
    args: Sequence[Any] = (),
    context: Any = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> "asyncio.Future[Any] | None":
    """Schedule invoke() on the next loop turn.

    Returns:
        Future settled with fn's return value (or the exception it raised),
        or None if fn is not callable.
    """
    if not is_callable(fn):
        return None

    loop = loop or asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def _run() -> None:
        try:
            result = invoke(fn, args, context)
        except Exception as e:
            if not future.done():
                future.set_exception(e)
            return
        if not future.done():
            future.set_result(result)

    loop.call_soon(_run)
    return future


def _is_hidden(name: str) -> bool:
    return name in _OBJECT_MEMBER_NAMES or (name.startswith("__") and name.endswith("__"))


def get_capability_descriptor(target: Any) -> list[str] | None:
    """Return the names a target declares via ``__promiseify__``, if any."""
    if isinstance(target, Mapping):
        return None
    declared = getattr(target, CAPABILITY_DESCRIPTOR_ATTR, None)
    if declared is None:
        return None
    if isinstance(declared, str):
        declared = [declared]
    return sorted(set(declared))


def enumerate_callable_names(target: Any) -> list[str]:
    """Collect the names of every callable member of target.

    Walks the instance attributes and every class in the MRO (stopping
    before ``object``). Names defined by ``object``, dunder protocol names
    and data descriptors such as properties are excluded; properties are
    never evaluated. A declared capability descriptor short-circuits
    reflection.

    Returns:
        Deduplicated names in lexicographic order. Empty for anything that
        is not a structured value.
    """
    if not is_record(target):
        return []

    if isinstance(target, Mapping):
        # Only string keys name operations
        return sorted(
            name for name, value in target.items() if isinstance(name, str) and is_callable(value)
        )

    declared = get_capability_descriptor(target)
    if declared is not None:
        return declared

    candidates: set[str] = set(vars(target))
    for cls in type(target).__mro__:
        if cls is object:
            break
        candidates.update(vars(cls))

    names: list[str] = []
    for name in candidates:
        if _is_hidden(name):
            continue
        # Properties and other data descriptors are state, not operations
        if inspect.isdatadescriptor(inspect.getattr_static(target, name, None)):
            continue
        try:
            value = getattr(target, name)
        except AttributeError:
            continue
        if is_callable(value):
            names.append(name)

    return sorted(names)


def is_assignable(target: Any, name: str) -> bool:
    """Return True if member ``name`` of target can be replaced.

    Mutable mappings accept any key. On objects, a property without a
    setter blocks assignment.
    """
    if isinstance(target, Mapping):
        return isinstance(target, MutableMapping)
    static = inspect.getattr_static(target, name, None)
    if isinstance(static, property):
        return static.fset is not None
    return True


def resolve_member(target: Any, name: str) -> Callable[..., Any] | None:
    """Return target's member ``name`` if it exists and is callable."""
    if isinstance(target, Mapping):
        value = target.get(name)
    else:
        value = getattr(target, name, None)
    return value if is_callable(value) else None
