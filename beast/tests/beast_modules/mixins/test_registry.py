"""Tests for MixinRegistry and MixinSpec."""
from __future__ import annotations

import pytest
from returns.io import IOFailure, IOSuccess
from returns.unsafe import unsafe_perform_io

from beast.beast_modules.mixins.registry import MixinRegistry
from beast.beast_modules.mixins.types import MixinSpec
from beast.beast_modules.types import WriteCapability


def _double(caps: WriteCapability) -> None:
    caps.set([x * 2 for x in caps.get()])


def _triple(caps: WriteCapability) -> None:
    caps.set([x * 3 for x in caps.get()])


def _error_type(result: object) -> str:
    assert isinstance(result, IOFailure)
    return unsafe_perform_io(result.failure()).error_type  # type: ignore[no-any-return]


class TestRegister:
    """Tests for MixinRegistry.register."""

    def test_register_and_get(self) -> None:
        """A registered mixin is found by name."""
        registry = MixinRegistry()
        result = registry.register("double", _double)
        assert isinstance(result, IOSuccess)
        spec = registry.get("double")
        assert spec == MixinSpec(name="double", function=_double)
        assert "double" in registry
        assert len(registry) == 1

    def test_unknown_name_returns_none(self) -> None:
        """get() returns None for unknown names."""
        assert MixinRegistry().get("missing") is None

    def test_same_function_is_idempotent(self) -> None:
        """Registering the same function twice keeps one entry."""
        registry = MixinRegistry()
        first = unsafe_perform_io(registry.register("double", _double).unwrap())
        second = unsafe_perform_io(registry.register("double", _double).unwrap())
        assert first is second
        assert registry.names() == ["double"]

    def test_conflicting_function_rejected(self) -> None:
        """A different function under a taken name fails."""
        registry = MixinRegistry()
        registry.register("scale", _double)
        result = registry.register("scale", _triple)
        assert _error_type(result) == "MixinConflict"
        spec = registry.get("scale")
        assert spec is not None
        assert spec.function is _double

    def test_override_allowed(self) -> None:
        """allow_override replaces the existing entry."""
        registry = MixinRegistry(allow_override=True)
        registry.register("scale", _double)
        assert isinstance(registry.register("scale", _triple), IOSuccess)
        spec = registry.get("scale")
        assert spec is not None
        assert spec.function is _triple

    def test_per_call_override(self) -> None:
        """allow_override on the call wins over the registry default."""
        registry = MixinRegistry()
        registry.register("scale", _double)
        result = registry.register("scale", _triple, allow_override=True)
        assert isinstance(result, IOSuccess)

    def test_invalid_names_rejected(self) -> None:
        """Names must be public identifiers."""
        registry = MixinRegistry()
        assert _error_type(registry.register("not valid", _double)) == (
            "InvalidMixinName"
        )
        assert _error_type(registry.register("_hidden", _double)) == (
            "InvalidMixinName"
        )
        assert _error_type(registry.register(3, _double)) == (  # type: ignore[arg-type]
            "InvalidMixinName"
        )
        assert len(registry) == 0

    def test_reserved_names_rejected(self) -> None:
        """Reserved names cannot be taken, even with override."""
        registry = MixinRegistry(reserved={"map"}, allow_override=True)
        assert _error_type(registry.register("map", _double)) == (
            "ReservedMixinName"
        )
        registry.reserve({"value"})
        assert _error_type(registry.register("value", _double)) == (
            "ReservedMixinName"
        )

    def test_non_callable_rejected(self) -> None:
        """Only callables register."""
        registry = MixinRegistry()
        result = registry.register("nothing", None)  # type: ignore[arg-type]
        assert _error_type(result) == "MixinNotCallable"


def test_mixins_view_is_read_only() -> None:
    """The mixins mapping cannot be mutated from outside."""
    registry = MixinRegistry()
    registry.register("double", _double)
    view = registry.mixins
    assert list(view) == ["double"]
    with pytest.raises(TypeError):
        view["x"] = MixinSpec(name="x", function=_double)  # type: ignore[index]
    assert "x" not in registry


def test_spec_invoke_passes_caps_first() -> None:
    """invoke() calls fn(caps, *args, **kwargs)."""
    calls: list[tuple[object, ...]] = []

    def record(caps: WriteCapability, *args: object, **kwargs: object) -> str:
        calls.append((caps, args, kwargs))
        return "ok"

    caps = WriteCapability(get=list, set=lambda _: None)
    spec = MixinSpec(name="record", function=record)
    assert spec.invoke(caps, 1, 2, flag=True) == "ok"
    assert calls == [(caps, (1, 2), {"flag": True})]
