"""Configuration handling for git-broom"""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class Config:
    """Configuration for git-broom with validation."""

    # Repository layout
    main_branch: str = "main"
    remote_name: str = "origin"

    # Sweep steps
    fetch: bool = True
    fast_forward: bool = True

    # Execution modes
    interactive: bool = True
    dry_run: bool = False
    force: bool = False  # Skip confirmation and force worktree removal
    verbose: bool = False
    debug: bool = False
    sequential: bool = False  # Classify branches one at a time
    workers: Optional[int] = None  # Number of parallel workers (None = auto-detect)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_main_branch()
        self._validate_remote_name()
        self._validate_workers()

    def _validate_main_branch(self):
        """Validate main_branch is not empty."""
        if not self.main_branch or not self.main_branch.strip():
            raise ValueError("main_branch cannot be empty")
        self.main_branch = self.main_branch.strip()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key, dict-style."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
