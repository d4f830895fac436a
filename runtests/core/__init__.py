"""
Core modules for runtests.
"""

from runtests.core.config import Config
from runtests.core.errors import (
    RunTestsError,
    ConfigurationError,
    SubprocessError,
    SubprocessFailedError,
    ReportReadError,
    MalformedReportError,
    InvalidIgnorePatternError,
)

__all__ = [
    "Config",
    "RunTestsError",
    "ConfigurationError",
    "SubprocessError",
    "SubprocessFailedError",
    "ReportReadError",
    "MalformedReportError",
    "InvalidIgnorePatternError",
]
