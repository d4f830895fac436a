"""
Terminal rendering for loaded reports.
"""

from dataclasses import dataclass
from typing import List, Optional

import typer

from runtests.reporting.classifier import (
    Bucket,
    IgnoreFilter,
    bucket_for_state,
    shows_location,
    visible_entries,
)
from runtests.reporting.models import Entry, EntryType, Test, TestPass

LABEL_WIDTH = 12
SPACER = " " * (LABEL_WIDTH + 1)


@dataclass(frozen=True)
class Label:
    """Fixed label text and color for a bucket or entry kind."""
    text: str
    color: str

    def render(self) -> str:
        return typer.style(f"{self.text:>{LABEL_WIDTH}} ", fg=self.color)


BUCKET_LABELS = {
    Bucket.PASS: Label("Success", typer.colors.BRIGHT_GREEN),
    Bucket.FAIL: Label("Fail", typer.colors.RED),
    Bucket.OTHER: Label("Warning", typer.colors.YELLOW),
}

BUCKET_PATH_COLORS = {
    Bucket.PASS: typer.colors.WHITE,
    Bucket.FAIL: typer.colors.WHITE,
    Bucket.OTHER: typer.colors.YELLOW,
}

ENTRY_LABELS = {
    EntryType.INFO: Label("Info", typer.colors.WHITE),
    EntryType.WARNING: Label("Warning", typer.colors.YELLOW),
    EntryType.ERROR: Label("Error", typer.colors.RED),
}


def format_duration(seconds: float) -> str:
    """Shortest decimal form; whole numbers print without a fraction."""
    if float(seconds).is_integer():
        return str(int(seconds))
    return repr(float(seconds))


def summary_text(report: TestPass) -> str:
    """Aggregate line, read straight from the report counts."""
    return f"{report.succeeded} passed, {report.failed} failed, {report.other} other"


def summary_color(report: TestPass) -> str:
    if report.failed > 0:
        return typer.colors.RED
    if report.not_run > 0 or report.succeeded_with_warnings > 0:
        return typer.colors.YELLOW
    return typer.colors.BRIGHT_GREEN


class ReportRenderer:
    """Render a TestPass as colored terminal lines."""

    def __init__(self, ignore_filter: Optional[IgnoreFilter] = None, color: Optional[bool] = None):
        """
        Args:
            ignore_filter: Patterns suppressing entry messages
            color: Force escape codes on/off; None lets click detect the terminal
        """
        self.ignore_filter = ignore_filter or IgnoreFilter()
        self.color = color

    def render_test(self, test: Test) -> List[str]:
        bucket = bucket_for_state(test.state)
        lines = [
            BUCKET_LABELS[bucket].render()
            + typer.style(test.full_test_path, fg=BUCKET_PATH_COLORS[bucket])
        ]
        for entry in visible_entries(test, self.ignore_filter):
            lines.extend(self.render_entry(entry))
        return lines

    def render_entry(self, entry: Entry) -> List[str]:
        kind = entry.event.kind
        lines = [SPACER + ENTRY_LABELS[kind].render() + entry.event.message]
        if shows_location(kind):
            lines.append(SPACER + SPACER + entry.location)
        return lines

    def render(self, report: TestPass) -> List[str]:
        """All output lines for ``report``, styled."""
        lines: List[str] = []
        for test in report.tests:
            lines.extend(self.render_test(test))
        lines.append(typer.style(summary_text(report), fg=summary_color(report)))
        lines.append(f"{format_duration(report.total_duration)}s elapsed")
        return lines

    def echo(self, report: TestPass) -> None:
        """Write the rendered report to standard output."""
        for line in self.render(report):
            typer.echo(line, color=self.color)
