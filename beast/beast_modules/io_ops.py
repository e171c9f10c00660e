"""I/O boundary module -- ALL external I/O goes through here.

This is the single mock point for the test suite. The scheduler's
logging side channel and the CLI's output both land here.
"""
from __future__ import annotations

import os
import sys

from returns.io import IOFailure, IOResult, IOSuccess

from beast.beast_modules.errors import StepExecutionFailure


def write_stderr(
    message: str,
) -> IOResult[None, StepExecutionFailure]:
    """Write message to stderr (fail-open logging side channel).

    Returns IOSuccess(None) or IOFailure on error.
    """
    try:
        sys.stderr.write(message)
    except OSError as exc:
        return IOFailure(
            StepExecutionFailure(
                step_name="io_ops.write_stderr",
                error_type="StderrWriteError",
                message=(
                    f"Failed to write to stderr: {exc}"
                ),
                context={
                    "original_message": message,
                },
            ),
        )
    return IOSuccess(None)


def write_stdout(
    message: str,
) -> IOResult[None, StepExecutionFailure]:
    """Write message to stdout. Returns IOResult, never raises."""
    try:
        sys.stdout.write(message)
    except OSError as exc:
        return IOFailure(
            StepExecutionFailure(
                step_name="io_ops.write_stdout",
                error_type="StdoutWriteError",
                message=f"Failed to write to stdout: {exc}",
                context={"original_message": message},
            ),
        )
    return IOSuccess(None)


def read_env(name: str) -> str | None:
    """Return an environment variable, or None when unset."""
    return os.environ.get(name)
