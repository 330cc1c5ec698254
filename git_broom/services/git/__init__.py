"""Git-related services for git-broom."""

from .gateway import CommandGateway, CommandResult, GitCommandGateway
from .branch_queries import BranchQueries
from .worktrees import WorktreeService
from .merge_detector import MergeDetector
from .divergence import DivergenceClassifier
from .operations import GitOperations

__all__ = [
    "CommandGateway",
    "CommandResult",
    "GitCommandGateway",
    "BranchQueries",
    "WorktreeService",
    "MergeDetector",
    "DivergenceClassifier",
    "GitOperations",
]
