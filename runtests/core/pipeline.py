"""
Run orchestration for runtests.

Launch the runner, load the report it leaves behind, then render it.
"""

from typing import List

import typer

from runtests.core.config import Config
from runtests.core.logging import get_logger
from runtests.core.steps import RunStep, StepPlan
from runtests.reporting.classifier import IgnoreFilter
from runtests.reporting.junit import write_junit
from runtests.reporting.loader import load_report
from runtests.reporting.models import TestPass
from runtests.reporting.renderer import ReportRenderer


class TestPassPipeline:
    """Single linear pass: run -> load -> classify -> render."""
    __test__ = False

    def __init__(self, config: Config):
        """
        Initialize the pipeline with configuration.

        Args:
            config: Configuration object
        """
        self.config = config
        self.logger = get_logger(__name__)

    def run(self) -> int:
        """
        Run the test pass and print its summary.

        Returns:
            Process exit code: 1 when the report has failed tests and
            ``fail_on_failed_tests`` is set, otherwise 0

        Raises:
            RunTestsError: On any fatal configuration, process or report error
        """
        # Bad patterns must surface before the runner spends minutes working
        ignore_filter = IgnoreFilter(self.config.ignore_regexes)

        if self.config.plan:
            self.print_plan()
            return 0

        result = RunStep(self.config).execute()
        result.raise_for_status()
        if result.skipped:
            self.logger.info(result.message)
        if self.config.dry_run:
            self.logger.warning("DRY RUN MODE - report will not be read")
            return 0

        report = load_report(self.config.report_path)
        ReportRenderer(ignore_filter, color=self.config.color).echo(report)

        if self.config.junit_path:
            path = write_junit(report, self.config.junit_path)
            self.logger.info(f"JUnit report written to {path}")

        return self.exit_code(report)

    def exit_code(self, report: TestPass) -> int:
        if report.failed > 0 and self.config.fail_on_failed_tests:
            return 1
        return 0

    def build_plan(self) -> List[StepPlan]:
        """Build a plan without executing anything."""
        plans = [RunStep(self.config).plan()]
        plans.append(
            StepPlan(
                name="report",
                will_run=True,
                reason="render summary",
                outputs={
                    "report": str(self.config.report_path),
                    "junit": str(self.config.junit_path) if self.config.junit_path else "",
                },
            )
        )
        return plans

    def plan_lines(self) -> List[str]:
        """Human-readable execution plan."""
        lines = ["Plan:"]
        for idx, plan in enumerate(self.build_plan(), start=1):
            will = "will run" if plan.will_run else "skipped"
            lines.append(f"{idx}. {plan.name}: {will} ({plan.reason})")
            for cmd in plan.commands:
                lines.append(f"   cmd: {' '.join(cmd)}")
            if plan.outputs:
                outputs = ", ".join(f"{k}={v}" for k, v in plan.outputs.items() if v)
                if outputs:
                    lines.append(f"   outputs: {outputs}")
        return lines

    def print_plan(self) -> None:
        """Print the execution plan to standard output."""
        for line in self.plan_lines():
            typer.echo(line)
