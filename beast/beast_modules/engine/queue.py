"""Append-only step queue with a forward-only cursor."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from beast.beast_modules.engine.types import Step


class StepQueue:
    """Ordered steps plus the index of the next one to run.

    The cursor never moves backwards and never passes len(queue),
    so each step is handed out at most once, in enqueue order.
    """

    def __init__(self) -> None:
        self._steps: list[Step] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def exhausted(self) -> bool:
        """True when every queued step has been handed out."""
        return self._cursor >= len(self._steps)

    def enqueue(self, step: Step) -> int:
        """Append step and return the new queue length."""
        self._steps.append(step)
        return len(self._steps)

    def pop_next(self) -> Step | None:
        """Return the step at the cursor and advance past it.

        Returns None, leaving the cursor where it is, when exhausted.
        """
        if self.exhausted:
            return None
        step = self._steps[self._cursor]
        self._cursor += 1
        return step

    def snapshot(self) -> tuple[Step, ...]:
        return tuple(self._steps)
