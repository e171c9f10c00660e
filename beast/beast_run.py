"""Apply Beast chain operations to a JSON list from the command line.

Only chain methods that take plain values are available here:
reverse, sort, slice, splice, concat, append, prepend. Arguments
follow the method name, separated by colons, each parsed as JSON.

Usage:
    uv run beast/beast_run.py '[3, 1, 2]' --op sort
    uv run beast/beast_run.py '[3, 1, 2]' --op sort --op reverse --op slice:0:2
    uv run beast/beast_run.py '[1, 2]' --op append:3 --op 'concat:[4,5]'
    uv run beast/beast_run.py '[1, 2]' --op prepend:0 --quiet-failures
"""
from __future__ import annotations

import sys
from pathlib import Path

# When run as a script, add the project root to sys.path so that
# absolute imports like "from beast.beast_modules..." resolve correctly.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import json
from types import MappingProxyType

from returns.io import IOFailure, IOResult, IOSuccess
from returns.unsafe import unsafe_perform_io

from beast.beast_modules import io_ops
from beast.beast_modules.chain import Beast
from beast.beast_modules.errors import StepExecutionFailure
from beast.beast_modules.types import EngineConfig

CLI_OPERATIONS: MappingProxyType[str, str] = MappingProxyType(
    {
        "reverse": "Reverse the list",
        "sort": "Sort ascending; sort:true sorts descending",
        "slice": "slice:START[:END]",
        "splice": "splice:START[:COUNT[:ITEM...]] (keeps removed items)",
        "concat": "concat:VALUE... (lists flatten one level)",
        "append": "append:VALUE...",
        "prepend": "prepend:VALUE...",
    },
)


def parse_operation(
    text: str,
) -> IOResult[tuple[str, list[object]], StepExecutionFailure]:
    """Split NAME[:ARG...] and decode each argument as JSON."""
    name, *raw_args = text.split(":")
    if name not in CLI_OPERATIONS:
        available = sorted(CLI_OPERATIONS)
        return IOFailure(
            StepExecutionFailure(
                step_name="beast_run",
                error_type="UnknownOperation",
                message=(
                    f"Unknown operation '{name}'."
                    f" Available: {available}"
                ),
                context={"operation": text, "available": available},
            ),
        )
    args: list[object] = []
    for raw in raw_args:
        try:
            args.append(json.loads(raw))
        except json.JSONDecodeError as exc:
            return IOFailure(
                StepExecutionFailure(
                    step_name="beast_run",
                    error_type="InvalidArgument",
                    message=(
                        f"Argument {raw!r} of '{name}'"
                        f" is not valid JSON: {exc}"
                    ),
                    context={"operation": text},
                ),
            )
    return IOSuccess((name, args))


def apply_operations(
    initial: list[object],
    operations: list[tuple[str, list[object]]],
    config: EngineConfig | None = None,
) -> IOResult[list[object], StepExecutionFailure]:
    """Queue every operation on a fresh Beast and drain it.

    Fails without draining when an operation gets the wrong arguments.
    """
    beast = Beast(initial, config=config)
    for name, args in operations:
        try:
            if name == "sort":
                if len(args) > 1:
                    msg = "sort takes at most one argument"
                    raise TypeError(msg)
                beast.sort(reverse=bool(args[0]) if args else False)
            else:
                getattr(beast, name)(*args)
        except TypeError as exc:
            return IOFailure(
                StepExecutionFailure(
                    step_name="beast_run",
                    error_type="InvalidArguments",
                    message=f"Bad arguments for '{name}': {exc}",
                    context={"operation": name, "args": args},
                ),
            )
    return IOSuccess(beast.value())


# --- CLI Entry Point ---

import click  # noqa: E402


@click.command()
@click.argument("sequence")
@click.option(
    "--op",
    "ops",
    multiple=True,
    help="Operation NAME[:ARG...]; repeat to chain",
)
@click.option(
    "--quiet-failures",
    is_flag=True,
    help="Do not report failing steps on stderr",
)
def main(
    *,
    sequence: str,
    ops: tuple[str, ...],
    quiet_failures: bool,
) -> None:
    """Apply chained list operations to SEQUENCE (a JSON list)."""
    try:
        initial = json.loads(sequence)
    except json.JSONDecodeError as exc:
        io_ops.write_stderr(f"Input is not valid JSON: {exc}\n")
        sys.exit(1)
    if not isinstance(initial, list):
        io_ops.write_stderr("Input must be a JSON list\n")
        sys.exit(1)

    operations: list[tuple[str, list[object]]] = []
    for text in ops:
        parsed = parse_operation(text)
        if isinstance(parsed, IOFailure):
            err = unsafe_perform_io(parsed.failure())
            io_ops.write_stderr(f"{err.message}\n")
            sys.exit(1)
        operations.append(unsafe_perform_io(parsed.unwrap()))

    env_config = EngineConfig.from_env()
    config = env_config.model_copy(
        update={
            "report_failures": (
                env_config.report_failures and not quiet_failures
            ),
        },
    )
    applied = apply_operations(initial, operations, config)
    if isinstance(applied, IOFailure):
        err = unsafe_perform_io(applied.failure())
        io_ops.write_stderr(f"{err.message}\n")
        sys.exit(1)
    result = unsafe_perform_io(applied.unwrap())
    io_ops.write_stdout(json.dumps(result) + "\n")


if __name__ == "__main__":  # pragma: no cover
    main()
