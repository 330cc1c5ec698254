"""Worktree registry service for git-broom."""

import os
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from git_broom.exceptions import GitOperationError
from git_broom.models.worktree import WorktreeInfo
from git_broom.services.git.gateway import CommandGateway
from git_broom.utils.logging import get_logger

if TYPE_CHECKING:
    from git_broom.config import Config

logger = get_logger(__name__)


class WorktreeService:
    """Service for listing linked git worktrees."""

    def __init__(self, gateway: CommandGateway, config: Union["Config", dict]):
        """Initialize the worktree service.

        Args:
            gateway: Command gateway used for every git invocation
            config: Configuration dictionary or Config object
        """
        self.gateway = gateway
        self.main_branch = config.get("main_branch", "main")

    def get_worktrees(self) -> Dict[str, WorktreeInfo]:
        """Map each branch checked out in a linked worktree to that worktree.

        The primary worktree, bare entries, detached entries and the main
        branch never appear. The map is rebuilt on every call.

        Raises:
            GitOperationError: If git cannot list worktrees
        """
        result = self.gateway.run(["worktree", "list", "--porcelain", "-z"])
        if not result.success:
            raise GitOperationError("list_worktrees", message=result.stderr)

        primary = self._get_primary_path()
        worktrees: Dict[str, WorktreeInfo] = {}
        for entry in self._parse_porcelain(result.stdout):
            path = entry.get("path")
            branch = entry.get("branch")
            if not path or entry.get("bare"):
                continue
            if primary and os.path.realpath(path) == primary:
                continue
            if not branch or branch == self.main_branch:
                continue

            worktrees[branch] = WorktreeInfo(
                path=path,
                branch=branch,
                commit_sha=entry.get("HEAD", ""),
                is_orphaned=not os.path.exists(path),
            )

        logger.debug(f"Found {len(worktrees)} linked worktrees")
        for wt in worktrees.values():
            logger.debug(f"  {wt}")
        return worktrees

    def get_worktree_branches(self) -> set[str]:
        """Get set of branch names that are checked out in linked worktrees."""
        return set(self.get_worktrees())

    def _get_primary_path(self) -> Optional[str]:
        """Real path of the work tree git-broom is running in."""
        result = self.gateway.run(["rev-parse", "--show-toplevel"])
        if not result.success or not result.stdout:
            return None
        return os.path.realpath(result.stdout)

    @staticmethod
    def _parse_porcelain(output: str) -> List[Dict[str, Any]]:
        """Split ``worktree list --porcelain -z`` output into one dict per worktree.

        Every attribute ends with NUL and an empty attribute ends a worktree, so
        paths keep their exact bytes, whitespace and newlines included.

        Format:
            worktree /path/to/worktree NUL
            HEAD commit_sha NUL
            branch refs/heads/branch-name NUL   (or "detached", or "bare")
            NUL
        """
        entries: List[Dict[str, Any]] = []
        current: Dict[str, Any] = {}
        for line in output.split("\0"):
            if not line:
                # Empty attribute marks end of worktree entry
                if current:
                    entries.append(current)
                    current = {}
                continue

            if line.startswith("worktree "):
                current["path"] = line.split(" ", 1)[1]
            elif line.startswith("HEAD "):
                current["HEAD"] = line.split(" ", 1)[1]
            elif line.startswith("branch "):
                branch_ref = line.split(" ", 1)[1]
                if branch_ref.startswith("refs/heads/"):
                    current["branch"] = branch_ref[len("refs/heads/"):]
            elif line == "bare":
                current["bare"] = True

        # Handle last entry if no trailing empty attribute
        if current:
            entries.append(current)
        return entries
