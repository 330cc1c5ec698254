"""Utility functions for git-broom.

This package provides utility modules:
- logging: Logging configuration and logger creation
- threading: Worker pool sizing for branch analysis
"""

from .logging import setup_logging, get_logger, get_log_file, ColoredFormatter
from .threading import (
    is_free_threading_enabled,
    get_python_threading_mode,
    get_optimal_worker_count,
    get_threading_info,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "get_log_file",
    "ColoredFormatter",
    # Threading
    "is_free_threading_enabled",
    "get_python_threading_mode",
    "get_optimal_worker_count",
    "get_threading_info",
]
