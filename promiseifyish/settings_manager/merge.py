"""
promiseifyish.settings_manager.merge - Deep Merge

Merges settings structures; values from the source take precedence.
"""

import copy
from collections.abc import Mapping
from typing import Any


def _is_object(candidate: Any) -> bool:
    return isinstance(candidate, Mapping)


def merge(target: Any, source: Any) -> Any:
    """Deep-merge source into a copy of target.

    Dicts merge key by key, recursing into nested dicts; a non-dict source
    value (including a list) replaces the target value. Lists merge
    element by element: the source fills positions the target lacks,
    nested structures merge, and scalars missing from the target are
    appended.

    Neither argument is modified; containers taken from source are copied.

    Example:
        >>> merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
        >>> merge([1, 2], [1, 3, 4])
        [1, 2, 3, 4]
    """
    if isinstance(source, list):
        base = target if isinstance(target, list) else []
        merged = list(base)
        for i, element in enumerate(source):
            if i >= len(merged):
                merged.append(copy.deepcopy(element))
            elif merged[i] is None:
                merged[i] = copy.deepcopy(element)
            elif isinstance(element, dict | list):
                merged[i] = merge(base[i] if i < len(base) else None, element)
            elif element not in base:
                merged.append(element)
        return merged

    dest: dict[str, Any] = dict(target) if _is_object(target) else {}
    for key, value in (source or {}).items():
        if not _is_object(value) or not value:
            dest[key] = copy.deepcopy(value)
        elif not _is_object(target) or not target.get(key):
            dest[key] = copy.deepcopy(value)
        else:
            dest[key] = merge(target[key], value)
    return dest
