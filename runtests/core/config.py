"""
Configuration management for runtests.
"""

from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field

from runtests.core.errors import ConfigurationError

DEFAULT_CONFIG_FILE = Path("testconfig.toml")
DEFAULT_TEST_EXIT = "Automation Test Queue Empty"
REPORT_FILENAME = "index.json"

# TOML key -> Config attribute
FILE_KEYS = {
    "path_to_unrealengine": "engine_path",
    "path_to_project": "project_path",
    "path_to_reports": "reports_dir",
    "run_tests": "run_tests",
    "test_exit": "test_exit",
    "ignore_regexes": "ignore_regexes",
    "log_file": "log_file",
    "fail_on_failed_tests": "fail_on_failed_tests",
    "junit_path": "junit_path",
    "verbosity": "verbosity",
}

REQUIRED_KEYS = ("path_to_unrealengine", "path_to_project", "path_to_reports")

PATH_KEYS = frozenset({"engine_path", "project_path", "reports_dir", "log_file", "junit_path"})


def _load_toml(config_file: Path) -> Dict[str, Any]:
    try:
        import tomllib  # Python 3.11+
    except ModuleNotFoundError:  # Python 3.8-3.10
        import tomli as tomllib

    try:
        text = config_file.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {config_file}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file: {config_file}: {e}") from e

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse config file: {config_file}: {e}") from e

    table = data.get("runtests")
    tool = data.get("tool")
    if table is None and isinstance(tool, dict):
        table = tool.get("runtests")
    if isinstance(table, dict):
        return table
    return data


def _check_type(key: str, value: Any) -> None:
    attr = FILE_KEYS[key]
    if attr == "ignore_regexes":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"'{key}' must be a list of strings")
    elif attr == "fail_on_failed_tests":
        if not isinstance(value, bool):
            raise ConfigurationError(f"'{key}' must be a boolean")
    elif attr == "verbosity":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"'{key}' must be an integer")
    elif not isinstance(value, str):
        raise ConfigurationError(f"'{key}' must be a string")


@dataclass
class Config:
    """Configuration for one runtests invocation."""

    # Runner paths
    engine_path: Path
    project_path: Path
    reports_dir: Path
    config_file: Optional[Path] = None

    # Test selection
    run_tests: str = ""
    test_exit: str = DEFAULT_TEST_EXIT
    ignore_regexes: List[str] = field(default_factory=list)

    # Run options
    verbosity: int = 1  # 0=warnings, 1=progress, 2=commands, 3=debug
    dry_run: bool = False
    plan: bool = False
    skip_run: bool = False
    fail_on_failed_tests: bool = True
    color: Optional[bool] = None  # None = detect from terminal

    # Outputs
    log_file: Optional[Path] = None
    junit_path: Optional[Path] = None

    def __post_init__(self):
        """Normalize paths and validate values."""
        for key in PATH_KEYS:
            value = getattr(self, key)
            if isinstance(value, str):
                setattr(self, key, Path(value))
        if not 0 <= self.verbosity <= 3:
            raise ConfigurationError(f"verbosity must be between 0 and 3, got {self.verbosity}")

    @property
    def report_path(self) -> Path:
        """Location of the report file the runner leaves behind."""
        return self.reports_dir / REPORT_FILENAME

    def with_tests(self, tests: Optional[List[str]]) -> "Config":
        """Override the configured selector with command-line test tokens."""
        if tests:
            self.run_tests = " ".join(tests)
        return self

    @classmethod
    def load(cls, config_file: Path = DEFAULT_CONFIG_FILE, **overrides) -> "Config":
        """
        Load configuration from a TOML file.

        Args:
            config_file: Path to the TOML file
            **overrides: Attribute values that replace file values (None is ignored)

        Returns:
            Config instance

        Raises:
            ConfigurationError: If the file is missing, unparsable or incomplete
        """
        config_file = Path(config_file)
        table = _load_toml(config_file)

        missing = [key for key in REQUIRED_KEYS if key not in table]
        if missing:
            raise ConfigurationError(
                f"Missing required key(s) in {config_file}: {', '.join(missing)}"
            )

        init_kwargs: Dict[str, Any] = {"config_file": config_file}
        for key, attr in FILE_KEYS.items():
            if key not in table:
                continue
            _check_type(key, table[key])
            init_kwargs[attr] = table[key]

        for key, value in overrides.items():
            if key in cls.__dataclass_fields__ and value is not None:
                init_kwargs[key] = value

        return cls(**init_kwargs)
