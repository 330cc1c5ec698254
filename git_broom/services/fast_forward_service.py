"""Service for advancing branches that are strictly behind their upstream"""

from typing import List, Optional, Union, TYPE_CHECKING

from git_broom.exceptions import GitOperationError
from git_broom.models.branch import FastForwardResult, UpstreamInfo
from git_broom.services.git.branch_queries import BranchQueries
from git_broom.services.git.operations import GitOperations
from git_broom.services.git.worktrees import WorktreeService
from git_broom.utils.logging import get_logger

if TYPE_CHECKING:
    from git_broom.config import Config

logger = get_logger(__name__)


class FastForwardService:
    """Plans and performs fast-forwards of local branches without checkout.

    A branch is eligible when it is not checked out anywhere, its upstream
    still exists, and it is behind that upstream with nothing of its own.
    Branches run strictly one after another since each advance rewrites a ref.
    """

    def __init__(
        self,
        config: Union["Config", dict],
        branch_queries: BranchQueries,
        worktree_service: WorktreeService,
        git_operations: GitOperations,
    ):
        self.config = config
        self.branch_queries = branch_queries
        self.worktree_service = worktree_service
        self.git_operations = git_operations

    def find_candidates(self) -> List[UpstreamInfo]:
        """Return upstream info for every branch eligible for a fast-forward.

        Raises:
            GitOperationError: If branches or worktrees cannot be listed
        """
        current_branch = self.branch_queries.get_current_branch()
        worktree_branches = self.worktree_service.get_worktree_branches()

        candidates = []
        for info in self.branch_queries.get_upstream_info():
            branch_name = info.branch
            if branch_name == current_branch:
                logger.debug(f"Skipping fast-forward of {branch_name}: currently checked out")
                continue
            if branch_name in worktree_branches:
                logger.debug(f"Skipping fast-forward of {branch_name}: checked out in a worktree")
                continue
            if not info.has_live_upstream:
                reason = "upstream is gone" if info.gone else "no upstream"
                logger.debug(f"Skipping fast-forward of {branch_name}: {reason}")
                continue

            try:
                ahead, behind = self.branch_queries.get_ahead_behind(branch_name, info.upstream)
            except GitOperationError as e:
                logger.warning(f"Skipping fast-forward of {branch_name}: {e}")
                continue

            if ahead > 0:
                state = "diverged from" if behind else "ahead of"
                logger.debug(f"Skipping fast-forward of {branch_name}: {state} {info.upstream}")
                continue
            if behind == 0:
                logger.debug(f"Skipping fast-forward of {branch_name}: up to date")
                continue

            logger.debug(f"Branch {branch_name} is {behind} commit(s) behind {info.upstream}")
            candidates.append(info)

        return candidates

    def plan_fast_forwards(self) -> List[FastForwardResult]:
        """Advance every eligible branch, one result per attempted branch.

        Skipped branches produce no result. A failed advance becomes an error
        result and does not stop the remaining branches.
        """
        return [self.advance_branch(info.branch, info) for info in self.find_candidates()]

    def advance_branch(
        self, branch_name: str, upstream: Optional[UpstreamInfo] = None
    ) -> FastForwardResult:
        """Fast-forward a single branch to its upstream tip."""
        if upstream is None:
            try:
                upstream = self.branch_queries.get_upstream(branch_name)
            except GitOperationError as e:
                return FastForwardResult(branch=branch_name, updated=False, error=str(e))

        if upstream is None or not upstream.has_live_upstream:
            return FastForwardResult(branch=branch_name, updated=False, error="No live upstream branch")
        if not upstream.remote_name or not upstream.remote_ref:
            return FastForwardResult(
                branch=branch_name, updated=False, error=f"Cannot resolve remote for {upstream.upstream}"
            )

        try:
            self.git_operations.fast_forward(branch_name, upstream.remote_name, upstream.remote_ref)
        except GitOperationError as e:
            return FastForwardResult(branch=branch_name, updated=False, error=e.message or str(e))

        return FastForwardResult(branch=branch_name, updated=True)
