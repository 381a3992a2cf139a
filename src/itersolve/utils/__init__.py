"""Utility functions for the iterative solvers."""

from .logging_utils import setup_logging, ColoredFormatter
from .performance import Timer, ResourceMonitor

__all__ = [
    "setup_logging",
    "ColoredFormatter",
    "Timer",
    "ResourceMonitor"
]
