"""Command-line interface for git-broom.

This package provides the CLI entry point, argument parsing and the sweep flow.
"""

from .main import main
from .args import parse_args

__all__ = ["main", "parse_args"]
