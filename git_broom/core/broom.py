"""Core functionality for git-broom"""

from typing import Dict, Iterable, List, Optional, Union

import git

from git_broom.config import Config
from git_broom.exceptions import (
    BranchProtectedError,
    GitOperationError,
    NoOriginRemoteError,
    NotInGitRepoError,
)
from git_broom.models.branch import BranchInfo, DeleteResult, FastForwardResult, UpstreamInfo
from git_broom.models.worktree import WorktreeInfo
from git_broom.services.branch_status_service import BranchStatusService, ProgressCallback
from git_broom.services.fast_forward_service import FastForwardService
from git_broom.services.git import (
    BranchQueries,
    CommandGateway,
    DivergenceClassifier,
    GitCommandGateway,
    GitOperations,
    MergeDetector,
    WorktreeService,
)
from git_broom.utils.logging import get_logger

logger = get_logger(__name__)


class Broom:
    """Branch housekeeping engine for one repository."""

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict, None] = None,
        gateway: Optional[CommandGateway] = None,
    ):
        """Initialize Broom.

        Args:
            repo_path: Path inside a git work tree
            config: Configuration dict or Config object
            gateway: Command gateway override; defaults to running git in the work tree

        Raises:
            NotInGitRepoError: If repo_path is not inside a git work tree
        """
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        try:
            self.repo = git.Repo(repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise NotInGitRepoError(repo_path)
        if self.repo.working_tree_dir is None:
            raise NotInGitRepoError(repo_path)

        self.repo_path = str(self.repo.working_tree_dir)
        self.main_branch = self.config.main_branch
        self.remote_name = self.config.remote_name

        # Initialize services
        self.gateway = gateway or GitCommandGateway(self.repo_path)
        self.branch_queries = BranchQueries(self.gateway, self.config)
        self.worktree_service = WorktreeService(self.gateway, self.config)
        self.merge_detector = MergeDetector(self.gateway, self.config)
        self.git_operations = GitOperations(self.gateway, self.config)
        self.branch_status_service = BranchStatusService(
            self.config, self.merge_detector, DivergenceClassifier(self.branch_queries)
        )
        self.fast_forward_service = FastForwardService(
            self.config, self.branch_queries, self.worktree_service, self.git_operations
        )

        logger.debug(f"Broom initialized for {self.repo_path}")

    def preflight(self) -> None:
        """Verify the environment before any branch work begins.

        Raises:
            NotInGitRepoError: If git does not see a work tree here
            NoOriginRemoteError: If the configured remote does not exist
        """
        if not self.branch_queries.get_repo_root():
            raise NotInGitRepoError(self.repo_path)
        if not self.branch_queries.has_remote(self.remote_name):
            raise NoOriginRemoteError(self.remote_name)

    def fetch(self) -> None:
        """Fetch and prune the configured remote.

        Raises:
            FetchFailedError: If the fetch fails
        """
        self.git_operations.fetch(prune=True)

    def enumerate_branches(self) -> List[str]:
        """Local branches in git's order, excluding the main branch."""
        return self.branch_queries.get_local_branches()

    def get_current_branch(self) -> Optional[str]:
        return self.branch_queries.get_current_branch()

    def list_worktrees(self) -> Dict[str, WorktreeInfo]:
        """Linked worktrees keyed by the branch checked out in each."""
        return self.worktree_service.get_worktrees()

    def classify_all(self, on_progress: Optional[ProgressCallback] = None) -> List[BranchInfo]:
        """Classify every local branch; results follow enumeration order."""
        return self.branch_status_service.classify_all(self.enumerate_branches(), on_progress)

    def find_fast_forward_candidates(self) -> List[UpstreamInfo]:
        """Branches that a fast-forward pass would advance, without touching them."""
        return self.fast_forward_service.find_candidates()

    def plan_fast_forwards(self) -> List[FastForwardResult]:
        """Advance every eligible branch; skipped branches produce no result."""
        return self.fast_forward_service.plan_fast_forwards()

    def advance_branch(self, branch_name: str) -> FastForwardResult:
        return self.fast_forward_service.advance_branch(branch_name)

    def delete_branch(self, branch_name: str, worktree: Optional[WorktreeInfo] = None) -> None:
        """Delete a branch, releasing the worktree that holds it first.

        Raises:
            BranchProtectedError: If asked to delete the main branch
            WorktreeRemovalError: If the worktree cannot be removed
            DeleteBranchError: If git refuses to delete the branch
        """
        if branch_name == self.main_branch:
            raise BranchProtectedError(branch_name)

        if worktree is not None:
            if worktree.is_orphaned:
                # Directory is already gone; only git's metadata remains
                self.git_operations.prune_worktrees()
            else:
                self.git_operations.remove_worktree(
                    worktree.path, force=self.config.force, branch_name=branch_name
                )

        self.git_operations.delete_branch(branch_name)

    def delete_branches(
        self, branches: Iterable[str], worktrees: Optional[Dict[str, WorktreeInfo]] = None
    ) -> List[DeleteResult]:
        """Delete branches one at a time in the given order.

        Failures are captured per branch and never stop the batch.
        """
        if worktrees is None:
            worktrees = self.list_worktrees()

        results = []
        removed_worktree = False
        for branch_name in branches:
            worktree = worktrees.get(branch_name)
            worktree_path = worktree.path if worktree else None
            try:
                self.delete_branch(branch_name, worktree)
            except GitOperationError as e:
                results.append(
                    DeleteResult(
                        branch=branch_name,
                        deleted=False,
                        error=e.message or str(e),
                        worktree_path=worktree_path,
                    )
                )
                continue

            removed_worktree = removed_worktree or worktree is not None
            results.append(DeleteResult(branch=branch_name, deleted=True, worktree_path=worktree_path))

        # Prune worktree metadata to update Git's internal state
        if removed_worktree:
            try:
                self.git_operations.prune_worktrees()
            except GitOperationError as e:
                logger.warning(f"Could not prune worktree metadata: {e}")

        return results

    def trunk_behind_count(self) -> int:
        """Commits the remote main branch has that the local one lacks."""
        if not self.branch_queries.has_remote_branch(self.main_branch):
            return 0
        remote_ref = self.branch_queries.remote_ref(self.main_branch)
        local_ref = self.branch_queries.local_ref(self.main_branch)
        try:
            return self.branch_queries.count_commits(f"{local_ref}..{remote_ref}")
        except GitOperationError as e:
            logger.warning(f"Could not compare {self.main_branch} with {remote_ref}: {e}")
            return 0

    def get_merge_stats(self) -> str:
        return self.merge_detector.get_merge_stats()

    def close(self) -> None:
        """Release the repository handle."""
        logger.debug("Closing Broom resources")
        self.repo.close()
