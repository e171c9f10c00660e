"""Engine scheduler -- serial drain of the step queue.

The drain is a loop rather than recursion, so pipeline length never
turns into call-stack depth. Step failures are caught here, reported
through io_ops, and never stop the drain.
"""
from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Literal

from returns.io import IOFailure, IOResult, IOSuccess
from returns.unsafe import unsafe_perform_io

from beast.beast_modules import io_ops
from beast.beast_modules.engine.types import SuspendingStep
from beast.beast_modules.errors import StepExecutionFailure
from beast.beast_modules.types import EngineConfig, Inspection

if TYPE_CHECKING:
    from beast.beast_modules.engine.queue import StepQueue
    from beast.beast_modules.engine.types import Resume, Step

SchedulerState = Literal["idle", "draining", "suspended"]


def run_step(
    step: Step,
    cursor: int,
    resume: Resume,
) -> IOResult[None, StepExecutionFailure]:
    """Execute one step body, converting any exception to a failure.

    Suspending bodies receive resume; auto bodies take no arguments.
    """
    try:
        if isinstance(step, SuspendingStep):
            step.body(resume)
        else:
            step.body()
    except Exception as exc:  # noqa: BLE001
        return IOFailure(
            StepExecutionFailure.from_exception(
                exc,
                step_name=step.name,
                cursor=cursor,
            ),
        )
    return IOSuccess(None)


class Scheduler:
    """Drains a StepQueue one step at a time.

    States:
    - idle: nothing running; resume() starts a drain.
    - draining: a drain loop is on the stack; resume() is a no-op and
      steps enqueued meanwhile are picked up by that loop.
    - suspended: a suspending step is waiting on its continuation;
      only that continuation restarts the drain.

    Continuations may fire from any thread. State transitions happen
    under a lock, and at most one drain loop exists at a time: a
    continuation that arrives before the loop has finished with its
    suspending step hands the drain back to that loop.
    """

    def __init__(
        self,
        queue: StepQueue,
        config: EngineConfig | None = None,
    ) -> None:
        self._queue = queue
        self._config = config or EngineConfig()
        self._lock = threading.Lock()
        self._state: SchedulerState = "idle"
        # Token of the suspension currently awaiting its continuation.
        self._suspension: object | None = None
        # Token of the suspending step the drain loop is still handling.
        self._sync_frame: object | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    def inspect(self) -> Inspection:
        return Inspection(
            steps=self._queue.snapshot(),
            cursor=self._queue.cursor,
        )

    def resume(self) -> None:
        """Start draining from the cursor if the scheduler is idle."""
        with self._lock:
            if self._state != "idle":
                return
            self._state = "draining"
        self._drain()

    def _continuation(self, token: object) -> Resume:
        """Build the one-shot resume handle for a suspension."""

        def resume() -> None:
            with self._lock:
                if self._suspension is not token:
                    return
                self._suspension = None
                self._state = "draining"
                if self._sync_frame is token:
                    # The loop handling this step has not let go yet; it continues.
                    return
            self._drain()

        return resume

    def _report(self, result: IOResult[None, StepExecutionFailure]) -> None:
        if not isinstance(result, IOFailure) or not self._config.report_failures:
            return
        failure = unsafe_perform_io(result.failure())
        io_ops.write_stderr(f"{failure}\n")

    def _next_step(self) -> Step | None:
        with self._lock:
            step = self._queue.pop_next()
            if step is None:
                self._state = "idle"
            return step

    def _drain(self) -> None:
        """Run steps until the queue is exhausted or a step suspends.

        Callers set the state to draining before entering.
        """
        try:
            while True:
                step = self._next_step()
                if step is None:
                    return
                cursor = self._queue.cursor

                if not isinstance(step, SuspendingStep):
                    self._report(run_step(step, cursor, _noop))
                    continue

                token = object()
                with self._lock:
                    self._suspension = token
                    self._state = "suspended"
                    self._sync_frame = token
                result = run_step(step, cursor, self._continuation(token))
                self._report(result)

                with self._lock:
                    self._sync_frame = None
                    if self._suspension is not token:
                        # Resumed already; keep draining here.
                        continue
                    if isinstance(result, IOSuccess):
                        return
                    # Body raised before handing off its continuation.
                    self._suspension = None
                    self._state = "draining"
        except BaseException:
            # Interrupted mid-step; leave the scheduler restartable.
            with self._lock:
                self._sync_frame = None
                self._suspension = None
                self._state = "idle"
            raise


def _noop() -> None:
    return None
