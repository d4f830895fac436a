"""
Custom exceptions for runtests.
"""

from pathlib import Path
from typing import Optional


class RunTestsError(Exception):
    """Base exception for all runtests errors."""
    pass


class ConfigurationError(RunTestsError):
    """Raised when the configuration file is missing, unparsable or incomplete."""
    pass


class SubprocessError(RunTestsError):
    """Raised when the test runner cannot be started or is killed by a signal."""

    def __init__(self, message: str, signal: Optional[int] = None):
        super().__init__(message)
        self.signal = signal


class SubprocessFailedError(RunTestsError):
    """Raised when the test runner exits with a nonzero status code."""

    def __init__(self, returncode: int):
        super().__init__(f"exited with status code: {returncode}")
        self.returncode = returncode


class ReportReadError(RunTestsError):
    """Raised when the report file is missing or unreadable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to read report {path}: {reason}")
        self.path = path


class MalformedReportError(RunTestsError):
    """Raised when the report is not valid JSON or does not match the schema."""
    pass


class InvalidIgnorePatternError(RunTestsError):
    """Raised when a configured ignore pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid ignore pattern {pattern!r}: {reason}")
        self.pattern = pattern
