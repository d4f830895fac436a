"""
Step implementations.
"""

from runtests.core.steps.base import StepBase, StepPlan, StepResult, StepStatus
from runtests.core.steps.run import RunStep, build_runner_command

__all__ = [
    "StepBase",
    "StepPlan",
    "StepResult",
    "StepStatus",
    "RunStep",
    "build_runner_command",
]
