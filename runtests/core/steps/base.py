"""
Step result and plan types shared by runtests steps.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
import time

from runtests.core.errors import RunTestsError


class StepStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Outcome of one step; failures carry the error to raise."""
    name: str
    status: StepStatus
    message: str
    duration_sec: Optional[float] = None
    error: Optional[RunTestsError] = None

    @property
    def skipped(self) -> bool:
        return self.status == StepStatus.SKIPPED

    def raise_for_status(self) -> None:
        """Raise the step's error if it failed."""
        if self.status == StepStatus.FAILED:
            raise self.error or RunTestsError(self.message)


@dataclass
class StepPlan:
    """What a step would do, for ``--plan``."""
    name: str
    will_run: bool
    reason: str
    commands: List[List[str]] = field(default_factory=list)
    outputs: Dict[str, str] = field(default_factory=dict)


class StepBase(ABC):
    """
    A unit of work driven by the pipeline.

    ``execute`` checks, in order: skip flag, ``validate``, dry-run mode,
    and only then times the subclass's ``_do_execute``.
    """

    def __init__(self, config):
        self.config = config

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def _do_execute(self) -> StepResult:
        pass

    @abstractmethod
    def dry_run(self) -> StepResult:
        pass

    @abstractmethod
    def _plan_details(self) -> StepPlan:
        pass

    def should_skip(self) -> bool:
        return False

    def validate(self) -> Optional[RunTestsError]:
        """Return the error that prevents this step from running, if any."""
        return None

    def execute(self) -> StepResult:
        if self.should_skip():
            return StepResult(self.name, StepStatus.SKIPPED, f"{self.name} step skipped by config")
        error = self.validate()
        if error:
            return StepResult(self.name, StepStatus.FAILED, str(error), error=error)
        if self.config.dry_run:
            return self.dry_run()
        start = time.perf_counter()
        result = self._do_execute()
        result.duration_sec = time.perf_counter() - start
        return result

    def plan(self) -> StepPlan:
        if self.should_skip():
            return StepPlan(self.name, will_run=False, reason="skipped by config")
        error = self.validate()
        if error:
            return StepPlan(self.name, will_run=False, reason=f"invalid: {error}")
        return self._plan_details()
