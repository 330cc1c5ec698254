"""Version information for git-broom."""

__version__ = "0.1.0"
