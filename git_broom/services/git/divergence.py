"""Divergence classification for branches that are not merged."""

from git_broom.models.branch import BranchStatus
from git_broom.services.git.branch_queries import BranchQueries
from git_broom.utils.logging import get_logger

logger = get_logger(__name__)


class DivergenceClassifier:
    """Decides unpushed, needs-rebase or active for a branch not yet merged."""

    def __init__(self, branch_queries: BranchQueries):
        self.branch_queries = branch_queries

    def classify(self, branch_name: str, main_branch: str) -> BranchStatus:
        """Classify a non-merged branch.

        Raises:
            GitOperationError: If a commit count cannot be computed
        """
        if self.has_unpushed_commits(branch_name):
            logger.debug(f"Branch {branch_name} has unpushed commits")
            return BranchStatus.UNPUSHED

        if self.needs_rebase(branch_name, main_branch):
            logger.debug(f"Branch {branch_name} is behind {main_branch}")
            return BranchStatus.NEEDS_REBASE

        return BranchStatus.ACTIVE

    def has_unpushed_commits(self, branch_name: str) -> bool:
        """True when the branch has no remote counterpart or commits the counterpart lacks."""
        if not self.branch_queries.has_remote_branch(branch_name):
            return True
        queries = self.branch_queries
        return queries.count_commits(f"{queries.remote_ref(branch_name)}..{queries.local_ref(branch_name)}") > 0

    def needs_rebase(self, branch_name: str, main_branch: str) -> bool:
        """True when the main branch has commits the branch does not."""
        queries = self.branch_queries
        return queries.count_commits(f"{queries.local_ref(branch_name)}..{queries.local_ref(main_branch)}") > 0
