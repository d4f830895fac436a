"""
Report handling for runtests.

This module provides:
- Test-pass report data structures
- Report loading from the runner's index.json
- Display classification and ignore-pattern filtering
- Terminal rendering and JUnit export
"""

from runtests.reporting.models import Device, Entry, EntryType, Event, Test, TestPass, TestState
from runtests.reporting.loader import decode_report_bytes, load_report, load_report_bytes, parse_report
from runtests.reporting.classifier import Bucket, IgnoreFilter, bucket_for_state, visible_entries
from runtests.reporting.renderer import ReportRenderer
from runtests.reporting.junit import write_junit

__all__ = [
    "Device",
    "Entry",
    "EntryType",
    "Event",
    "Test",
    "TestPass",
    "TestState",
    "decode_report_bytes",
    "load_report",
    "load_report_bytes",
    "parse_report",
    "Bucket",
    "IgnoreFilter",
    "bucket_for_state",
    "visible_entries",
    "ReportRenderer",
    "write_junit",
]
