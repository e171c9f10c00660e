"""Tests for StepExecutionFailure."""
import dataclasses

from beast.beast_modules.errors import StepExecutionFailure


def test_failure_construction() -> None:
    """StepExecutionFailure stores all fields correctly."""
    failure = StepExecutionFailure(
        step_name="map",
        error_type="ValueError",
        message="bad value",
        context={"cursor": 1},
    )
    assert failure.step_name == "map"
    assert failure.error_type == "ValueError"
    assert failure.message == "bad value"
    assert failure.context == {"cursor": 1}


def test_failure_default_context() -> None:
    """Context defaults to an empty dict."""
    failure = StepExecutionFailure(
        step_name="step",
        error_type="Error",
        message="msg",
    )
    assert failure.context == {}


def test_failure_is_frozen() -> None:
    """StepExecutionFailure is an immutable frozen dataclass."""
    failure = StepExecutionFailure(
        step_name="step",
        error_type="Error",
        message="msg",
    )
    assert dataclasses.is_dataclass(failure)
    assert type(failure).__dataclass_params__.frozen  # type: ignore[attr-defined]


def test_from_exception_appends_cursor() -> None:
    """from_exception suffixes the message with the cursor position."""
    exc = ZeroDivisionError("division by zero")
    failure = StepExecutionFailure.from_exception(
        exc, step_name="map", cursor=3,
    )
    assert failure.step_name == "map"
    assert failure.error_type == "ZeroDivisionError"
    assert failure.message == "division by zero [cursor: 3]"
    assert failure.context["cursor"] == 3
    assert failure.context["exception"] is exc


def test_str_includes_step_type_and_message() -> None:
    """__str__ is a single readable line for the log."""
    failure = StepExecutionFailure(
        step_name="filter",
        error_type="TypeError",
        message="oops [cursor: 1]",
    )
    assert str(failure) == (
        "StepExecutionFailure[filter] TypeError: oops [cursor: 1]"
    )


def test_str_omits_context() -> None:
    """Context stays structured; the log line carries only the message."""
    failure = StepExecutionFailure.from_exception(
        KeyError("k"), step_name="tap", cursor=2,
    )
    assert str(failure) == (
        "StepExecutionFailure[tap] KeyError: 'k' [cursor: 2]"
    )
