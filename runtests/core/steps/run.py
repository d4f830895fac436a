"""
Automation test runner launch step.
"""

from typing import List, Optional

from runtests.core.steps.base import StepBase, StepPlan, StepResult, StepStatus
from runtests.core.errors import ConfigurationError, SubprocessError, SubprocessFailedError
from runtests.core.logging import get_logger
from runtests.utils.command_runner import format_command, run_command

RUNNER_LOG = "runtests.log"


def build_runner_command(config) -> List[str]:
    """Command line that runs the selected tests unattended and headless."""
    return [
        str(config.engine_path),
        str(config.project_path),
        f"-ExecCmds=Automation RunTests {config.run_tests}",
        "-unattended",
        "-nopause",
        f"-testexit={config.test_exit}",
        "-game",
        f"-log={RUNNER_LOG}",
        "-NullRHI",
        f"-ReportOutputPath={config.reports_dir}",
    ]


class RunStep(StepBase):
    """Step for launching the test runner and waiting for it to exit."""
    
    def __init__(self, config):
        super().__init__(config)
        self.logger = get_logger(__name__)
    
    @property
    def name(self) -> str:
        return "run"
    
    def should_skip(self) -> bool:
        """Report-only mode renders an existing report without launching."""
        return self.config.skip_run
    
    def validate(self) -> Optional[ConfigurationError]:
        if not self.config.run_tests.strip():
            return ConfigurationError(
                "no tests selected: set 'run_tests' in the config or pass test names"
            )
        return None

    def _failed(self, error) -> StepResult:
        self.logger.error(str(error))
        return StepResult(self.name, StepStatus.FAILED, str(error), error=error)

    def _do_execute(self) -> StepResult:
        """Launch the runner and translate its exit status."""
        cmd = build_runner_command(self.config)
        self.logger.info(f"running tests: {self.config.run_tests}")
        
        try:
            self.logger.info("process started, waiting for process to finish")
            result = run_command(cmd, verbosity=self.config.verbosity)
        except OSError as e:
            error = SubprocessError(f"failed to start test process: {e}")
            error.__cause__ = e
            return self._failed(error)
        
        if result.returncode < 0:
            signal = -result.returncode
            return self._failed(SubprocessError(f"process terminated by signal {signal}", signal=signal))
        if result.returncode > 0:
            return self._failed(SubprocessFailedError(result.returncode))
        
        self.logger.info("done waiting for process")
        return StepResult(self.name, StepStatus.SUCCESS, "Test process completed")

    def dry_run(self) -> StepResult:
        cmd = build_runner_command(self.config)
        return StepResult(
            self.name, StepStatus.SKIPPED, f"DRY RUN: Would run: {format_command(cmd)}"
        )

    def _plan_details(self) -> StepPlan:
        return StepPlan(
            name=self.name,
            will_run=True,
            reason="ready",
            commands=[build_runner_command(self.config)],
            outputs={
                "reports_dir": str(self.config.reports_dir),
                "report": str(self.config.report_path),
            },
        )
