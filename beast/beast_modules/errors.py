"""Step failure type for the Beast scheduler."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StepExecutionFailure:
    """Structured failure raised by a queued step body.

    Built at the scheduler boundary from whatever the step raised.
    Also used for failures at the I/O boundary and the mixin registry.
    """

    step_name: str
    error_type: str
    message: str
    context: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        *,
        step_name: str,
        cursor: int,
    ) -> StepExecutionFailure:
        """Wrap exc, suffixing the message with the cursor position."""
        return cls(
            step_name=step_name,
            error_type=type(exc).__name__,
            message=f"{exc} [cursor: {cursor}]",
            context={
                "cursor": cursor,
                "exception": exc,
            },
        )

    def __str__(self) -> str:
        return (
            f"StepExecutionFailure[{self.step_name}]"
            f" {self.error_type}: {self.message}"
        )
