"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a linked git worktree."""

    path: str
    branch: Optional[str]  # None when the worktree has a detached HEAD
    commit_sha: str = ""
    is_orphaned: bool = False  # Directory missing?

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        return f"{self.branch or '(detached)'} @ {self.path} [{status}]"
