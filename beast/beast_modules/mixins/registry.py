"""Mixin registry -- name to chain verb lookup.

A registry is shared by every Beast constructed with it. Instances
built without one get their own, so registrations never leak across
unrelated instances.
"""
from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from returns.io import IOFailure, IOResult, IOSuccess

from beast.beast_modules.errors import StepExecutionFailure
from beast.beast_modules.mixins.types import MixinFunction, MixinSpec


class MixinRegistry:
    """Grow-only mapping of verb name to MixinSpec."""

    def __init__(
        self,
        *,
        reserved: Iterable[str] = (),
        allow_override: bool = False,
    ) -> None:
        self._mixins: dict[str, MixinSpec] = {}
        self._reserved = frozenset(reserved)
        self._allow_override = allow_override

    def __contains__(self, name: object) -> bool:
        return name in self._mixins

    def __len__(self) -> int:
        return len(self._mixins)

    @property
    def mixins(self) -> MappingProxyType[str, MixinSpec]:
        return MappingProxyType(self._mixins)

    def reserve(self, names: Iterable[str]) -> None:
        """Mark names that mixins may never take."""
        self._reserved = self._reserved | frozenset(names)

    def get(self, name: str) -> MixinSpec | None:
        """Look up a mixin by name. Returns None if not found."""
        return self._mixins.get(name)

    def names(self) -> list[str]:
        return sorted(self._mixins)

    def register(
        self,
        name: str,
        function: MixinFunction,
        *,
        allow_override: bool | None = None,
    ) -> IOResult[MixinSpec, StepExecutionFailure]:
        """Register function under name.

        Re-registering the same function is a no-op success. A different
        function under a taken name fails unless overrides are allowed.
        """
        override = (
            self._allow_override if allow_override is None else allow_override
        )
        error = self._validate(name, function, override=override)
        if error is not None:
            return IOFailure(error)

        existing = self._mixins.get(name)
        if existing is not None and existing.function is function:
            return IOSuccess(existing)

        spec = MixinSpec(name=name, function=function)
        self._mixins[name] = spec
        return IOSuccess(spec)

    def _validate(
        self,
        name: str,
        function: MixinFunction,
        *,
        override: bool,
    ) -> StepExecutionFailure | None:
        if not isinstance(name, str) or not name.isidentifier():
            return _registration_error(
                name,
                "InvalidMixinName",
                f"Mixin name {name!r} is not a valid identifier",
            )
        if name.startswith("_"):
            return _registration_error(
                name,
                "InvalidMixinName",
                f"Mixin name '{name}' must not start with an underscore",
            )
        if name in self._reserved:
            return _registration_error(
                name,
                "ReservedMixinName",
                f"Mixin name '{name}' shadows a built-in chain method",
            )
        if not callable(function):
            return _registration_error(
                name,
                "MixinNotCallable",
                f"Mixin '{name}' is not callable: {function!r}",
            )
        existing = self._mixins.get(name)
        if (
            existing is not None
            and existing.function is not function
            and not override
        ):
            return _registration_error(
                name,
                "MixinConflict",
                f"Mixin '{name}' is already registered"
                " with a different function",
            )
        return None


def _registration_error(
    name: object,
    error_type: str,
    message: str,
) -> StepExecutionFailure:
    return StepExecutionFailure(
        step_name="mixins.register",
        error_type=error_type,
        message=message,
        context={"name": name},
    )
