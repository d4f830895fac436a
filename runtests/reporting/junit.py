"""
JUnit XML export for loaded reports.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

from runtests.core.errors import ConfigurationError
from runtests.reporting.models import EntryType, Test, TestPass, TestState


def _first_error(test: Test) -> str:
    for entry in test.entries:
        if entry.event.kind == EntryType.ERROR:
            return entry.event.message
    return TestState.FAIL.value


def _classname(test: Test) -> str:
    head, _, _ = test.full_test_path.rpartition(".")
    return head or "runtests"


def build_junit_tree(report: TestPass) -> ET.ElementTree:
    """Build a single-suite JUnit document from ``report``."""
    testsuite = ET.Element(
        "testsuite",
        {
            "name": "runtests",
            "tests": str(len(report.tests)),
            "failures": str(report.failed),
            "errors": "0",
            "skipped": str(report.not_run),
            "time": f"{report.total_duration:.2f}",
            "timestamp": report.created_on,
        },
    )

    for test in report.tests:
        testcase = ET.SubElement(
            testsuite,
            "testcase",
            {
                "classname": _classname(test),
                "name": test.display_name,
            },
        )
        if test.state == TestState.SUCCESS:
            continue
        if test.state == TestState.FAIL:
            message = _first_error(test)
            failure = ET.SubElement(testcase, "failure", {"message": message})
            failure.text = "\n".join(
                f"{entry.event.kind.value}: {entry.event.message} ({entry.location})"
                for entry in test.entries
                if entry.event.kind != EntryType.INFO
            ) or message
        elif test.state in (
            TestState.NOT_RUN,
            TestState.IN_PROCESS,
            TestState.NOT_ENOUGH_PARTICIPANTS,
        ):
            ET.SubElement(testcase, "skipped", {"message": test.state.value})

    return ET.ElementTree(testsuite)


def write_junit(report: TestPass, file_path: Path) -> Path:
    """Write ``report`` as JUnit XML to ``file_path``."""
    file_path = Path(file_path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        build_junit_tree(report).write(file_path, encoding="utf-8", xml_declaration=True)
    except OSError as e:
        raise ConfigurationError(f"Failed to write JUnit report {file_path}: {e}") from e
    return file_path
