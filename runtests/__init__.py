"""
runtests

Launch an automation test pass, then print a color-coded summary of its report.
"""

__version__ = "0.1.0"

from runtests.core.config import Config
from runtests.core.pipeline import TestPassPipeline

__all__ = [
    "Config",
    "TestPassPipeline",
]
