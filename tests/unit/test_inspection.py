"""
Unit tests for promiseifyish.core.inspection - capability inspection.
"""

import asyncio
import types
from collections import OrderedDict

import pytest

from promiseifyish.core.inspection import (
    enumerate_callable_names,
    get_capability_descriptor,
    invoke,
    invoke_soon,
    is_assignable,
    is_callable,
    is_record,
    resolve_member,
)


class Base:
    def ping(self):
        return "ping"

    def shared(self):
        return "base"


class Child(Base):
    limit = 10

    def __init__(self) -> None:
        self.callback = print
        self.value = 3

    def __repr__(self) -> str:
        return "Child()"

    def __enter__(self):
        return self

    def pong(self):
        return "pong"

    def shared(self):
        return "child"

    @staticmethod
    def helper():
        return "help"

    @property
    def broken(self):
        raise AttributeError("not available")


class Declared:
    __promiseify__ = ("save", "load", "save")

    def load(self, on_success, on_error): ...

    def save(self, data, on_success, on_error): ...

    def internal(self): ...


class Slotted:
    __slots__ = ("load",)

    def __init__(self) -> None:
        self.load = print


class WithProperties:
    def __init__(self) -> None:
        self.reads = 0

    @property
    def handler(self):
        self.reads += 1
        return print

    @property
    def writable(self):
        return print

    @writable.setter
    def writable(self, value):
        pass

    def run(self): ...


# ============================================================================
# is_callable / is_record
# ============================================================================


class TestIsCallable:
    @pytest.mark.parametrize("candidate", [len, print, lambda: None, Base, Base().ping])
    def test_callables(self, candidate) -> None:
        assert is_callable(candidate) is True

    @pytest.mark.parametrize("candidate", [None, 1, "text", [], {}, Base()])
    def test_non_callables(self, candidate) -> None:
        assert is_callable(candidate) is False


class TestIsRecord:
    @pytest.mark.parametrize(
        "candidate",
        [{}, OrderedDict(), Base(), types.SimpleNamespace(a=1), types.MappingProxyType({})],
    )
    def test_records(self, candidate) -> None:
        assert is_record(candidate) is True

    @pytest.mark.parametrize(
        "candidate",
        [None, 0, 1.5, "text", b"bytes", [], (), set(), frozenset(), len, lambda: None, Base],
    )
    def test_non_records(self, candidate) -> None:
        assert is_record(candidate) is False

    def test_slotted_instance_is_not_a_record(self) -> None:
        assert is_record(Slotted()) is False



# ============================================================================
# invoke / invoke_soon
# ============================================================================


class TestInvoke:
    def test_calls_with_arguments(self) -> None:
        assert invoke(lambda a, b: a + b, [1, 2]) == 3

    def test_no_arguments(self) -> None:
        assert invoke(lambda: "called") == "called"

    @pytest.mark.parametrize("fn", [None, "name", 42])
    def test_non_callable_returns_none(self, fn) -> None:
        assert invoke(fn, [1]) is None

    def test_binds_plain_function_to_context(self) -> None:
        context = object()

        def whoami(self):
            return self

        assert invoke(whoami, [], context) is context

    def test_bound_method_ignores_context(self) -> None:
        base = Base()
        assert invoke(base.ping, [], object()) == "ping"

    def test_exceptions_propagate(self) -> None:
        def fail():
            raise KeyError("x")

        with pytest.raises(KeyError):
            invoke(fail)


class TestInvokeSoon:
    @pytest.mark.asyncio
    async def test_runs_on_next_turn(self) -> None:
        calls: list[int] = []

        future = invoke_soon(calls.append, [1])

        assert calls == []
        assert await future is None
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_returns_value(self) -> None:
        assert await invoke_soon(lambda a: a * 2, [21]) == 42

    @pytest.mark.asyncio
    async def test_captures_exception(self) -> None:
        def fail():
            raise ValueError("bad")

        with pytest.raises(ValueError):
            await invoke_soon(fail)

    @pytest.mark.asyncio
    async def test_non_callable_returns_none(self) -> None:
        assert invoke_soon(None) is None

    def test_explicit_loop(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            future = invoke_soon(lambda: "done", loop=loop)
            assert loop.run_until_complete(future) == "done"
        finally:
            loop.close()


# ============================================================================
# enumerate_callable_names
# ============================================================================


class TestEnumerateCallableNames:
    def test_walks_instance_and_ancestors(self) -> None:
        assert enumerate_callable_names(Child()) == [
            "callback",
            "helper",
            "ping",
            "pong",
            "shared",
        ]

    def test_excludes_object_and_dunder_names(self) -> None:
        names = enumerate_callable_names(Child())
        assert "__repr__" not in names
        assert "__enter__" not in names
        assert "__init__" not in names

    def test_skips_non_callable_attributes(self) -> None:
        names = enumerate_callable_names(Child())
        assert "value" not in names
        assert "limit" not in names
        assert "broken" not in names

    def test_mapping_keys(self) -> None:
        target = {"b": print, "a": len, "c": 1}
        assert enumerate_callable_names(target) == ["a", "b"]

    def test_skips_properties_without_evaluating(self) -> None:
        target = WithProperties()
        assert enumerate_callable_names(target) == ["run"]
        assert target.reads == 0

    def test_mapping_ignores_non_string_keys(self) -> None:
        target = {1: print, "load": len, ("a", "b"): print}
        assert enumerate_callable_names(target) == ["load"]

    def test_capability_descriptor(self) -> None:
        assert enumerate_callable_names(Declared()) == ["load", "save"]

    @pytest.mark.parametrize("target", [None, 1, "text", [print], print])
    def test_non_records_are_empty(self, target) -> None:
        assert enumerate_callable_names(target) == []

    def test_empty_object(self) -> None:
        assert enumerate_callable_names(types.SimpleNamespace()) == []


class TestIsAssignable:
    def test_method(self) -> None:
        assert is_assignable(WithProperties(), "run") is True

    def test_property_without_setter(self) -> None:
        assert is_assignable(WithProperties(), "handler") is False

    def test_property_with_setter(self) -> None:
        assert is_assignable(WithProperties(), "writable") is True

    def test_mappings(self) -> None:
        assert is_assignable({"load": print}, "load") is True
        assert is_assignable(types.MappingProxyType({"load": print}), "load") is False


class TestCapabilityDescriptor:
    def test_declared(self) -> None:
        assert get_capability_descriptor(Declared()) == ["load", "save"]

    def test_single_name(self) -> None:
        target = types.SimpleNamespace(__promiseify__="load")
        assert get_capability_descriptor(target) == ["load"]

    def test_absent(self) -> None:
        assert get_capability_descriptor(Base()) is None

    def test_mappings_never_declare(self) -> None:
        assert get_capability_descriptor({"__promiseify__": ["x"]}) is None


class TestResolveMember:
    def test_object_member(self) -> None:
        assert resolve_member(Base(), "ping")() == "ping"

    def test_mapping_member(self) -> None:
        assert resolve_member({"f": len}, "f") is len

    def test_missing_or_not_callable(self) -> None:
        assert resolve_member(Child(), "value") is None
        assert resolve_member(Child(), "missing") is None
        assert resolve_member({"n": 1}, "n") is None
