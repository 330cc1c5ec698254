"""Data models for git-broom."""

from .branch import (
    AnalyzeProgress,
    BranchInfo,
    BranchStatus,
    DeleteResult,
    FastForwardResult,
    UpstreamInfo,
)
from .worktree import WorktreeInfo

__all__ = [
    "AnalyzeProgress",
    "BranchInfo",
    "BranchStatus",
    "DeleteResult",
    "FastForwardResult",
    "UpstreamInfo",
    "WorktreeInfo",
]
