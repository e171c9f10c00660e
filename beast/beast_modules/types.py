"""Shared type definitions for the Beast sequencing engine.

Capability structs are the only surface a step body sees: each one
exposes a restricted subset of the owning instance's operations.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from beast.beast_modules import io_ops

if TYPE_CHECKING:
    from beast.beast_modules.engine.types import Step

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Inspection:
    """Snapshot of the step queue taken by tap's inspect()."""

    steps: tuple[Step, ...]
    cursor: int

    @property
    def pending(self) -> int:
        """Number of steps not yet started."""
        return len(self.steps) - self.cursor


@dataclass(frozen=True)
class ReadCapability:
    """Read-only view handed to value() callbacks."""

    get: Callable[[], list[object]]


@dataclass(frozen=True)
class WriteCapability:
    """Read/replace view handed to mixin functions."""

    get: Callable[[], list[object]]
    set: Callable[[object], None]


@dataclass(frozen=True)
class WaitCapability:
    """View handed to wait() callbacks; next resumes the drain."""

    get: Callable[[], list[object]]
    set: Callable[[object], None]
    next: Callable[[], None]


@dataclass(frozen=True)
class TapCapability:
    """View handed to tap() callbacks."""

    get: Callable[[], list[object]]
    inspect: Callable[[], Inspection]


class EngineConfig(BaseModel):
    """Engine behaviour switches."""

    model_config = ConfigDict(frozen=True)

    report_failures: bool = True
    allow_mixin_override: bool = False

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build config from BEAST_* environment variables.

        Unset variables keep the field default.
        """
        overrides: dict[str, bool] = {}
        for field_name, env_name in (
            ("report_failures", "BEAST_REPORT_FAILURES"),
            ("allow_mixin_override", "BEAST_ALLOW_MIXIN_OVERRIDE"),
        ):
            raw = io_ops.read_env(env_name)
            if raw is not None:
                overrides[field_name] = raw.strip().lower() in _TRUTHY
        return cls(**overrides)
