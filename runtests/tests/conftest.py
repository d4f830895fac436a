"""
Pytest fixtures for runtests.
"""

import json
import logging
from pathlib import Path

import pytest


def make_entry(kind: str, message: str, filename: str = "file.cpp", line: int = 1) -> dict:
    return {
        "event": {"type": kind, "message": message, "context": "", "artifact": ""},
        "filename": filename,
        "lineNumber": line,
        "timestamp": "2024.01.01-00.00.00",
    }


def make_test(path: str, state: str, entries=None) -> dict:
    entries = entries or []
    return {
        "testDisplayName": path.rsplit(".", 1)[-1],
        "fullTestPath": path,
        "state": state,
        "entries": entries,
        "warnings": sum(1 for e in entries if e["event"]["type"] == "Warning"),
        "errors": sum(1 for e in entries if e["event"]["type"] == "Error"),
        "artifacts": [],
    }


def make_report(tests=None, **counts) -> dict:
    report = {
        "devices": [
            {
                "deviceName": "BUILDBOX",
                "instance": "BUILDBOX-1234",
                "platform": "Windows",
                "oSVersion": "10.0.19045",
                "model": "Default",
                "gPU": "NullRHI",
                "cPUModel": "Ryzen 9",
                "rAMInGB": 64,
                "renderMode": "Null",
                "rHI": "Null",
            }
        ],
        "reportCreatedOn": "2024.01.01-00.05.00",
        "succeeded": 0,
        "succeededWithWarnings": 0,
        "failed": 0,
        "notRun": 0,
        "inProcess": 0,
        "totalDuration": 1.5,
        "comparisonExported": False,
        "comparisonExportDirectory": "",
        "tests": tests or [],
    }
    report.update(counts)
    return report


@pytest.fixture
def scenario_report() -> dict:
    """Two tests, one passing with a warning and one failing with an error."""
    return make_report(
        tests=[
            make_test("B.Test", "Fail", [make_entry("Error", "crashed", line=42)]),
            make_test("A.Test", "Success", [make_entry("Warning", "slow", line=10)]),
        ],
        succeeded=2,
        failed=1,
    )


@pytest.fixture
def write_report():
    """Write a report dict as index.json under a directory."""
    def _write(reports_dir: Path, report: dict, bom: bool = False) -> Path:
        reports_dir.mkdir(parents=True, exist_ok=True)
        path = reports_dir / "index.json"
        raw = json.dumps(report).encode("utf-8")
        path.write_bytes((b"\xef\xbb\xbf" if bom else b"") + raw)
        return path
    return _write


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a testconfig.toml with the given extra lines."""
    def _write(*lines: str, engine: str = "UnrealEditor-Cmd", project: str = "Game.uproject",
               reports: Path = None) -> Path:
        reports = reports if reports is not None else tmp_path / "reports"
        body = [
            f"path_to_unrealengine = {json.dumps(str(engine))}",
            f"path_to_project = {json.dumps(str(project))}",
            f"path_to_reports = {json.dumps(str(reports))}",
            *lines,
        ]
        path = tmp_path / "testconfig.toml"
        path.write_text("\n".join(body) + "\n")
        return path
    return _write


FAKE_RUNNER = """\
import os, shutil, signal, sys
from pathlib import Path

here = Path(__file__).parent
(here / "argv.txt").write_text("\\n".join(sys.argv[1:]))
mode = os.environ.get("FAKE_RUNNER_MODE", "ok")
if mode == "signal":
    os.kill(os.getpid(), signal.SIGTERM)
if mode == "fail":
    sys.exit(3)
source = os.environ.get("FAKE_RUNNER_REPORT")
if source:
    out = next(a.split("=", 1)[1] for a in sys.argv if a.startswith("-ReportOutputPath="))
    Path(out).mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, Path(out) / "index.json")
"""


@pytest.fixture
def fake_runner(tmp_path: Path) -> Path:
    """A Python script standing in for the engine's project argument.

    Run as ``[sys.executable, script, ...]`` it records its arguments in
    ``argv.txt`` beside itself, then behaves per ``FAKE_RUNNER_MODE``
    (ok/fail/signal) and copies ``FAKE_RUNNER_REPORT`` into the report dir.
    """
    script = tmp_path / "fake_runner.py"
    script.write_text(FAKE_RUNNER)
    return script


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to streams of a finished CLI invocation."""
    yield
    logging.getLogger("runtests").handlers.clear()
