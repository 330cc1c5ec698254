"""Git operations service: every command that mutates the repository."""

from typing import Optional, Union, TYPE_CHECKING

from git_broom.exceptions import (
    DeleteBranchError,
    FastForwardError,
    FetchFailedError,
    GitOperationError,
    WorktreeRemovalError,
)
from git_broom.services.git.gateway import CommandGateway
from git_broom.utils.logging import get_logger

if TYPE_CHECKING:
    from git_broom.config import Config

logger = get_logger(__name__)


class GitOperations:
    """Service for mutating Git operations.

    Callers run these one at a time; nothing here is safe to parallelize since
    each call rewrites refs or worktree metadata.
    """

    def __init__(self, gateway: CommandGateway, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            gateway: Command gateway used for every git invocation
            config: Configuration dictionary or Config object
        """
        self.gateway = gateway
        self.config = config
        self.remote_name = config.get("remote_name", "origin")

        logger.debug("Git operations initialized")

    def fetch(self, prune: bool = True) -> None:
        """Update remote-tracking refs from the configured remote.

        Raises:
            FetchFailedError: If the fetch fails
        """
        args = ["fetch", self.remote_name]
        if prune:
            args.append("--prune")

        result = self.gateway.run(args)
        if not result.success:
            logger.error(f"Fetch from {self.remote_name} failed: {result.stderr}")
            raise FetchFailedError(self.remote_name, result.stderr)
        logger.info(f"Fetched {self.remote_name}")

    def fast_forward(self, branch_name: str, remote_name: str, remote_ref: str) -> None:
        """Move a local branch to the tip of its upstream without checking it out.

        The refspec has no leading ``+``, so git itself refuses any update that
        is not a fast-forward.

        Raises:
            FastForwardError: If git rejects or fails the update
        """
        refspec = f"{remote_ref}:refs/heads/{branch_name}"
        result = self.gateway.run(["fetch", remote_name, refspec])
        if not result.success:
            logger.error(f"Failed to fast-forward {branch_name}: {result.stderr}")
            raise FastForwardError(branch_name, result.stderr)
        logger.info(f"Fast-forwarded {branch_name} to {remote_name}/{remote_ref}")

    def delete_branch(self, branch_name: str) -> None:
        """Delete a local branch regardless of its merge state.

        Raises:
            DeleteBranchError: If git refuses the deletion
        """
        result = self.gateway.run(["branch", "-D", branch_name])
        if not result.success:
            logger.error(f"Failed to delete branch {branch_name}: {result.stderr}")
            raise DeleteBranchError(branch_name, result.stderr)
        logger.info(f"Deleted branch {branch_name}")

    def remove_worktree(
        self, path: str, force: bool = False, branch_name: Optional[str] = None
    ) -> None:
        """Remove a linked worktree.

        Args:
            path: Path to the worktree directory
            force: Remove even when the worktree is dirty or locked
            branch_name: Branch checked out there, for error reporting

        Raises:
            WorktreeRemovalError: If git refuses the removal
        """
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(path)

        result = self.gateway.run(args)
        if not result.success:
            logger.error(f"Failed to remove worktree at {path}: {result.stderr}")
            raise WorktreeRemovalError(path, result.stderr, branch_name)
        logger.info(f"Removed worktree at {path}")

    def prune_worktrees(self) -> None:
        """Prune stale worktree metadata.

        Raises:
            GitOperationError: If the prune fails
        """
        result = self.gateway.run(["worktree", "prune"])
        if not result.success:
            raise GitOperationError("prune_worktrees", message=result.stderr)
        logger.info("Pruned orphaned worktree metadata")
