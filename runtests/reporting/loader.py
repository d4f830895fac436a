"""
Report loading: bytes -> text -> TestPass.
"""

import json
from pathlib import Path

from runtests.core.errors import MalformedReportError, ReportReadError
from runtests.core.logging import get_logger
from runtests.reporting.models import TestPass

BOM = "\ufeff"
UTF8_BOM_LENGTH = 3


def decode_report_bytes(raw: bytes) -> str:
    """
    Decode report bytes as UTF-8, dropping a leading byte-order mark.

    Invalid byte sequences are replaced rather than rejected.
    """
    text = raw.decode("utf-8", errors="replace")
    if text.startswith(BOM):
        text = raw[UTF8_BOM_LENGTH:].decode("utf-8", errors="replace")
    return text


def _reject_constant(token: str):
    raise MalformedReportError(f"invalid json: {token} is not a JSON value")


def parse_report(text: str) -> TestPass:
    """
    Parse report text and sort its tests by full path.

    Raises:
        MalformedReportError: If the text is not JSON or does not match the report schema
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedReportError(f"invalid json: {e}") from e
    report = TestPass.from_dict(data)
    report.sort_tests()
    return report


def load_report_bytes(raw: bytes) -> TestPass:
    """Decode and parse raw report bytes."""
    return parse_report(decode_report_bytes(raw))


def load_report(path: Path) -> TestPass:
    """
    Read and parse a report file.

    Args:
        path: Path to the report (usually ``<reports_dir>/index.json``)

    Returns:
        TestPass with tests in ascending ``full_test_path`` order

    Raises:
        ReportReadError: If the file is missing or unreadable
        MalformedReportError: If the content is not a valid report
    """
    logger = get_logger(__name__)
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        raise ReportReadError(path, "file not found") from None
    except OSError as e:
        raise ReportReadError(path, str(e)) from e

    logger.debug(f"Read {len(raw)} bytes from {path}")
    try:
        report = load_report_bytes(raw)
    except MalformedReportError as e:
        raise MalformedReportError(f"{path}: {e}") from e
    logger.debug(f"Loaded {len(report.tests)} tests from {path}")
    return report
