"""
Command-line interface for runtests.

This module provides a single-command CLI using Typer.
"""

import sys
from pathlib import Path
from typing import List, Optional

import typer

from runtests.core.config import DEFAULT_CONFIG_FILE, Config
from runtests.core.errors import RunTestsError
from runtests.core.logging import setup_logger
from runtests.core.pipeline import TestPassPipeline

app = typer.Typer(
    name="runtests",
    help="Run automation tests headless and print a color-coded summary of the report",
    add_completion=False,
)


@app.command()
def run(
    tests: Optional[List[str]] = typer.Argument(
        None, help="Tests to run (overrides 'run_tests' from the config)"
    ),
    config_file: Path = typer.Option(
        DEFAULT_CONFIG_FILE, "--config", "-c", metavar="FILE", help="Sets a custom config file"
    ),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    junit: Optional[Path] = typer.Option(None, "--junit", help="Also write the report as JUnit XML"),
    fail_on_failures: Optional[bool] = typer.Option(
        None,
        "--fail-on-failures/--no-fail-on-failures",
        help="Exit with status 1 when the report contains failed tests",
    ),
    color: Optional[bool] = typer.Option(
        None, "--color/--no-color", help="Force colored output on or off (default: detect)"
    ),
    skip_run: bool = typer.Option(
        False, "--skip-run", help="Don't launch the runner; summarize the existing report"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
    plan: bool = typer.Option(False, "--plan", help="Print execution plan and exit"),
):
    """Launch the automation test runner, wait for it, then summarize its report."""
    try:
        config = Config.load(
            config_file,
            verbosity=verbosity,
            junit_path=junit,
            fail_on_failed_tests=fail_on_failures,
            color=color,
            skip_run=skip_run,
            dry_run=dry_run,
            plan=plan,
        ).with_tests(tests)
        setup_logger(
            verbosity=config.verbosity,
            log_file=config.log_file,
            color=sys.stderr.isatty() if color is None else color,
        )
        exit_code = TestPassPipeline(config).run()
    except RunTestsError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True, color=color)
        sys.exit(1)
    sys.exit(exit_code)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
