"""
Command execution utilities.
"""

import subprocess
from typing import List

from runtests.core.logging import get_logger


def format_command(cmd: List[str]) -> str:
    """Render a command for logs and plans."""
    return subprocess.list2cmdline(cmd)


def run_command(cmd: List[str], verbosity: int = 0) -> subprocess.CompletedProcess:
    """
    Run a command with inherited stdout/stderr and wait for it to exit.
    
    The runner's own log streams straight to the console. The exit status is
    not checked; callers inspect ``returncode`` (negative = killed by signal).
    
    Raises:
        OSError: If the command cannot be started
    """
    logger = get_logger(__name__)
    if verbosity >= 2:
        logger.info(f"Running: {format_command(cmd)}")
    
    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        logger.error(f"Command could not be started: {e}")
        raise
    
    logger.debug(f"Command exited with {result.returncode}")
    return result
