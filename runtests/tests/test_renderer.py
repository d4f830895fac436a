import json

import pytest
import typer

from conftest import make_entry, make_report, make_test
from runtests.reporting.classifier import IgnoreFilter
from runtests.reporting.loader import parse_report
from runtests.reporting.renderer import ReportRenderer, format_duration, summary_color, summary_text


def _render(capsys, data: dict, patterns=()) -> list:
    report = parse_report(json.dumps(data))
    ReportRenderer(IgnoreFilter(patterns), color=False).echo(report)
    return capsys.readouterr().out.splitlines()


def test_scenario_output(scenario_report, capsys):
    assert _render(capsys, scenario_report) == [
        "     Success A.Test",
        "                  Warning slow",
        "                          file.cpp:10",
        "        Fail B.Test",
        "                    Error crashed",
        "                          file.cpp:42",
        "2 passed, 1 failed, 0 other",
        "1.5s elapsed",
    ]


def test_scenario_summary_is_red(scenario_report):
    report = parse_report(json.dumps(scenario_report))
    lines = ReportRenderer().render(report)
    assert lines[-2] == typer.style("2 passed, 1 failed, 0 other", fg=typer.colors.RED)
    assert lines[-1] == "1.5s elapsed"


def test_info_entries_have_no_location_line(capsys):
    lines = _render(capsys, make_report(tests=[
        make_test("A.Test", "Fail", [make_entry("Info", "starting up")]),
    ]))
    assert lines[:2] == ["        Fail A.Test", "                     Info starting up"]
    assert lines[2] == "0 passed, 0 failed, 0 other"


def test_other_bucket_renders_only_path(capsys):
    lines = _render(capsys, make_report(tests=[
        make_test("A.Test", "NotEnoughParticipants", [make_entry("Error", "ignored")]),
    ]))
    assert lines[0] == "     Warning A.Test"
    assert lines[1] == "0 passed, 0 failed, 0 other"


def test_ignored_entries_are_not_rendered(capsys):
    lines = _render(capsys, make_report(tests=[
        make_test("A.Test", "Success", [
            make_entry("Warning", "Retry attempt 1"),
            make_entry("Warning", "Deprecated API", line=7),
        ]),
    ]), patterns=["^Retry"])
    assert "Retry attempt 1" not in "\n".join(lines)
    assert lines[1:3] == ["                  Warning Deprecated API", "                          file.cpp:7"]


def test_other_bucket_path_is_yellow():
    report = parse_report(json.dumps(make_report(tests=[make_test("A.Test", "NotRun")])))
    first = ReportRenderer().render(report)[0]
    assert first.endswith(typer.style("A.Test", fg=typer.colors.YELLOW))


@pytest.mark.parametrize("counts, color", [
    ({"succeeded": 3, "failed": 1, "notRun": 2}, typer.colors.RED),
    ({"succeeded": 3, "notRun": 2}, typer.colors.YELLOW),
    ({"succeeded": 3, "succeededWithWarnings": 1}, typer.colors.YELLOW),
    ({"succeeded": 3}, typer.colors.BRIGHT_GREEN),
])
def test_summary_color_and_text(counts, color):
    report = parse_report(json.dumps(make_report(**counts)))
    assert summary_color(report) == color
    other = counts.get("notRun", 0) + counts.get("succeededWithWarnings", 0)
    assert summary_text(report) == f"3 passed, {counts.get('failed', 0)} failed, {other} other"


def test_summary_ignores_test_list(capsys):
    lines = _render(capsys, make_report(
        tests=[make_test("A.Test", "Fail"), make_test("B.Test", "Fail")],
        succeeded=10, failed=0,
    ))
    assert lines[-2] == "10 passed, 0 failed, 0 other"


def test_format_duration():
    assert format_duration(12.0) == "12"
    assert format_duration(0.25) == "0.25"
    assert format_duration(3) == "3"


def test_echo_without_color(scenario_report, capsys):
    report = parse_report(json.dumps(scenario_report))
    ReportRenderer(color=False).echo(report)
    out = capsys.readouterr().out
    assert "\x1b[" not in out
    assert out.splitlines()[-2:] == ["2 passed, 1 failed, 0 other", "1.5s elapsed"]
