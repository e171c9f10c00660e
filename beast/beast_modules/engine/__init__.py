"""Engine package -- serial step draining with failure containment."""
from beast.beast_modules.engine.queue import StepQueue
from beast.beast_modules.engine.scheduler import Scheduler, run_step
from beast.beast_modules.engine.types import AutoStep, Step, SuspendingStep

__all__ = [
    "AutoStep",
    "Scheduler",
    "Step",
    "StepQueue",
    "SuspendingStep",
    "run_step",
]
