"""Step variants consumed by the scheduler.

A step is either auto-advancing or suspending. The scheduler
dispatches on the variant, never on a flag passed alongside it.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

Resume = Callable[[], None]
AutoBody = Callable[[], object]
SuspendingBody = Callable[[Resume], object]


@dataclass(frozen=True)
class AutoStep:
    """Step after which the scheduler continues immediately."""

    name: str
    body: AutoBody


@dataclass(frozen=True)
class SuspendingStep:
    """Step that pauses the drain until its continuation is called.

    The body receives the continuation as its only argument and
    may call it synchronously or at any later point.
    """

    name: str
    body: SuspendingBody


Step = Union[AutoStep, SuspendingStep]
