"""
Data models for automation test-pass reports.

Field names on the wire are lower camel case (``fullTestPath``), except for a
handful of device fields the runner serializes with odd casing (``oSVersion``,
``gPU``) and the event discriminant, which is serialized as ``type``.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple, Type

from runtests.core.errors import MalformedReportError


class EntryType(Enum):
    """Severity of a log entry."""
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"


class TestState(Enum):
    """Execution state of a single automation test."""
    __test__ = False

    NOT_RUN = "NotRun"
    IN_PROCESS = "InProcess"
    FAIL = "Fail"
    SUCCESS = "Success"
    NOT_ENOUGH_PARTICIPANTS = "NotEnoughParticipants"


def _where(context: str, key: str) -> str:
    return f"{context}.{key}" if context else key


def _field(data: Mapping[str, Any], key: str, types: Tuple[Type, ...], context: str) -> Any:
    """Fetch a required field and check its JSON type."""
    if key not in data:
        raise MalformedReportError(f"missing field '{_where(context, key)}'")
    value = data[key]
    # bool is an int subclass; JSON true/false is never a count
    if isinstance(value, bool) and bool not in types:
        raise MalformedReportError(f"field '{_where(context, key)}' has wrong type bool")
    if not isinstance(value, types):
        raise MalformedReportError(
            f"field '{_where(context, key)}' has wrong type {type(value).__name__}"
        )
    return value


def _count(data: Mapping[str, Any], key: str, context: str) -> int:
    value = _field(data, key, (int,), context)
    if value < 0:
        raise MalformedReportError(f"field '{_where(context, key)}' must be non-negative")
    return value


def _duration(data: Mapping[str, Any], key: str, context: str) -> float:
    value = _field(data, key, (int, float), context)
    try:
        seconds = float(value)
    except OverflowError:
        raise MalformedReportError(f"field '{_where(context, key)}' is out of range") from None
    if not math.isfinite(seconds) or seconds < 0:
        raise MalformedReportError(
            f"field '{_where(context, key)}' must be a finite non-negative number"
        )
    return seconds


def _optional_count(data: Mapping[str, Any], key: str, context: str) -> Optional[int]:
    if data.get(key) is None:
        return None
    return _count(data, key, context)


def _object(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise MalformedReportError(f"'{context}' must be an object, got {type(value).__name__}")
    return value


def _list(data: Mapping[str, Any], key: str, context: str) -> List[Any]:
    return _field(data, key, (list,), context)


def _enum(enum_cls, data: Mapping[str, Any], key: str, context: str):
    value = _field(data, key, (str,), context)
    try:
        return enum_cls(value)
    except ValueError:
        raise MalformedReportError(
            f"field '{_where(context, key)}' has unknown value {value!r}"
        ) from None


@dataclass(frozen=True)
class Event:
    """Payload of a log entry."""
    kind: EntryType
    message: str
    context: str
    artifact: str

    @classmethod
    def from_dict(cls, data: Any, context: str = "event") -> "Event":
        data = _object(data, context)
        return cls(
            kind=_enum(EntryType, data, "type", context),
            message=_field(data, "message", (str,), context),
            context=_field(data, "context", (str,), context),
            artifact=_field(data, "artifact", (str,), context),
        )


@dataclass(frozen=True)
class Entry:
    """One timestamped log line attached to a test."""
    event: Event
    filename: str
    line_number: int  # 0 or negative when unknown
    timestamp: str

    @property
    def location(self) -> str:
        return f"{self.filename}:{self.line_number}"

    @classmethod
    def from_dict(cls, data: Any, context: str = "entry") -> "Entry":
        data = _object(data, context)
        return cls(
            event=Event.from_dict(_field(data, "event", (dict,), context), _where(context, "event")),
            filename=_field(data, "filename", (str,), context),
            line_number=_field(data, "lineNumber", (int,), context),
            timestamp=_field(data, "timestamp", (str,), context),
        )


@dataclass(frozen=True)
class Test:
    """Result of a single automation test."""
    __test__ = False

    display_name: str
    full_test_path: str
    state: TestState
    entries: List[Entry] = field(default_factory=list)
    warnings: int = 0
    errors: int = 0
    artifacts: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, context: str = "test") -> "Test":
        data = _object(data, context)
        entries = [
            Entry.from_dict(item, f"{context}.entries[{i}]")
            for i, item in enumerate(_list(data, "entries", context))
        ]
        artifacts = _list(data, "artifacts", context)
        for i, artifact in enumerate(artifacts):
            if not isinstance(artifact, str):
                raise MalformedReportError(f"'{context}.artifacts[{i}]' must be a string")
        return cls(
            display_name=_field(data, "testDisplayName", (str,), context),
            full_test_path=_field(data, "fullTestPath", (str,), context),
            state=_enum(TestState, data, "state", context),
            entries=entries,
            warnings=_count(data, "warnings", context),
            errors=_count(data, "errors", context),
            artifacts=list(artifacts),
        )


@dataclass(frozen=True)
class Device:
    """Machine the test pass ran on."""
    device_name: str
    instance: str
    platform: str
    os_version: str
    model: str
    gpu: str
    cpu_model: str
    ram_in_gb: int
    render_mode: str
    rhi: str

    @classmethod
    def from_dict(cls, data: Any, context: str = "device") -> "Device":
        data = _object(data, context)
        return cls(
            device_name=_field(data, "deviceName", (str,), context),
            instance=_field(data, "instance", (str,), context),
            platform=_field(data, "platform", (str,), context),
            os_version=_field(data, "oSVersion", (str,), context),
            model=_field(data, "model", (str,), context),
            gpu=_field(data, "gPU", (str,), context),
            cpu_model=_field(data, "cPUModel", (str,), context),
            ram_in_gb=_field(data, "rAMInGB", (int,), context),
            render_mode=_field(data, "renderMode", (str,), context),
            rhi=_field(data, "rHI", (str,), context),
        )


@dataclass
class TestPass:
    """Complete report for one run of the automation test runner.

    Aggregate counts are taken from the report as written; they are never
    recomputed from ``tests``.
    """
    __test__ = False

    created_on: str
    succeeded: int
    succeeded_with_warnings: int
    failed: int
    not_run: int
    total_duration: float  # seconds
    comparison_exported: bool
    comparison_export_directory: str
    tests: List[Test] = field(default_factory=list)
    devices: Optional[List[Device]] = None
    in_process: Optional[int] = None

    @property
    def other(self) -> int:
        """Tests neither cleanly passed nor failed."""
        return self.not_run + self.succeeded_with_warnings

    def sort_tests(self) -> None:
        """Order tests by full path (ordinal, stable)."""
        self.tests.sort(key=lambda test: test.full_test_path)

    @classmethod
    def from_dict(cls, data: Any) -> "TestPass":
        """
        Build a TestPass from decoded JSON.

        Raises:
            MalformedReportError: If a required field is absent or has the wrong type
        """
        data = _object(data, "report")
        devices = None
        if data.get("devices") is not None:
            devices = [
                Device.from_dict(item, f"devices[{i}]")
                for i, item in enumerate(_list(data, "devices", ""))
            ]
        tests = [
            Test.from_dict(item, f"tests[{i}]")
            for i, item in enumerate(_list(data, "tests", ""))
        ]
        return cls(
            created_on=_field(data, "reportCreatedOn", (str,), ""),
            succeeded=_count(data, "succeeded", ""),
            succeeded_with_warnings=_count(data, "succeededWithWarnings", ""),
            failed=_count(data, "failed", ""),
            not_run=_count(data, "notRun", ""),
            in_process=_optional_count(data, "inProcess", ""),
            total_duration=_duration(data, "totalDuration", ""),
            comparison_exported=_field(data, "comparisonExported", (bool,), ""),
            comparison_export_directory=_field(data, "comparisonExportDirectory", (str,), ""),
            tests=tests,
            devices=devices,
        )
