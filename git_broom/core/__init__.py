"""Core engine for git-broom."""

from .broom import Broom

__all__ = ["Broom"]
