"""
Logging configuration for runtests.
"""

import logging
import sys
from typing import Optional
from pathlib import Path

from runtests.core.errors import ConfigurationError


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output."""
    
    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[94m',      # Blue
        'WARNING': '\033[93m',   # Yellow
        'ERROR': '\033[91m',     # Red
        'CRITICAL': '\033[95m',  # Magenta
        'RESET': '\033[0m',
    }
    
    def format(self, record):
        """Format log record with a colored level name."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity <= 2:
        return logging.INFO
    return logging.DEBUG


def setup_logger(
    name: str = "runtests",
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    verbosity: int = 1,
    color: bool = True,
) -> logging.Logger:
    """
    Set up the runtests logger.
    
    Args:
        name: Logger name
        level: Logging level (overrides verbosity if provided)
        log_file: Optional log file path
        verbosity: Verbosity level (0=warnings, 1=progress, 2=commands, 3=debug)
        color: Whether console level names are colored
        
    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    
    # Clear existing handlers
    logger.handlers.clear()
    logger.propagate = False
    
    if level is None:
        level = _level_for_verbosity(verbosity)
    logger.setLevel(logging.DEBUG if log_file else level)
    
    # Console goes to stderr so rendered report output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_format = "%(levelname)s: %(message)s"
    if color:
        console_handler.setFormatter(ColoredFormatter(console_format))
    else:
        console_handler.setFormatter(logging.Formatter(console_format))
    logger.addHandler(console_handler)
    
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to open log file {log_file}: {e}") from e
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)
    
    return logger


def get_logger(name: str = "runtests") -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
