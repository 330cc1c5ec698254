"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional

class BranchStatus(Enum):
    """Relationship of a local branch to trunk and to its remote counterpart."""
    MERGED = "merged"
    UNPUSHED = "unpushed"
    NEEDS_REBASE = "needs-rebase"
    ACTIVE = "active"

@dataclass(frozen=True)
class BranchInfo:
    """Classification verdict for one local branch."""
    name: str
    status: BranchStatus

@dataclass(frozen=True)
class AnalyzeProgress:
    """Emitted once per branch as its classification completes."""
    branch: str
    current: int  # 1-based completion counter, shared across workers
    total: int

@dataclass(frozen=True)
class UpstreamInfo:
    """Tracking information for a local branch."""
    branch: str
    upstream: Optional[str]  # Full upstream ref, e.g. refs/remotes/origin/feature
    remote_name: Optional[str] = None
    remote_ref: Optional[str] = None  # Ref name on the remote, e.g. refs/heads/feature
    gone: bool = False  # Upstream configured but pruned from the remote

    @property
    def has_live_upstream(self) -> bool:
        return bool(self.upstream) and not self.gone

@dataclass(frozen=True)
class FastForwardResult:
    """Outcome of advancing one branch to its upstream tip."""
    branch: str
    updated: bool
    error: Optional[str] = None

@dataclass(frozen=True)
class DeleteResult:
    """Outcome of deleting one branch (and the worktree occupying it, if any)."""
    branch: str
    deleted: bool
    error: Optional[str] = None
    worktree_path: Optional[str] = None  # Worktree released before deletion
