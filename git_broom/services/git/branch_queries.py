"""Branch query service for git-broom."""

from typing import List, Optional, Union, TYPE_CHECKING

from git_broom.exceptions import GitOperationError
from git_broom.models.branch import UpstreamInfo
from git_broom.services.git.gateway import CommandGateway
from git_broom.utils.logging import get_logger

if TYPE_CHECKING:
    from git_broom.config import Config

logger = get_logger(__name__)

HEADS_PREFIX = "refs/heads/"


def local_ref(branch_name: str) -> str:
    """Full ref of a local branch, so a tag of the same name is never picked instead."""
    return f"{HEADS_PREFIX}{branch_name}"


# Fields are NUL separated; refnames cannot contain control characters
UPSTREAM_FORMAT = "%00".join(
    [
        "%(refname)",
        "%(upstream)",
        "%(upstream:remotename)",
        "%(upstream:remoteref)",
        "%(upstream:track)",
    ]
)


class BranchQueries:
    """Read-only queries about local branches and their remote counterparts."""

    def __init__(self, gateway: CommandGateway, config: Union["Config", dict]):
        """Initialize the branch queries service.

        Args:
            gateway: Command gateway used for every git invocation
            config: Configuration dictionary or Config object
        """
        self.gateway = gateway
        self.config = config
        self.main_branch = config.get("main_branch", "main")
        self.remote_name = config.get("remote_name", "origin")

        logger.debug("Branch queries service initialized")

    def get_local_branches(self) -> List[str]:
        """Return local branch names in git's ref order, excluding the main branch."""
        result = self.gateway.run(["for-each-ref", "--format=%(refname)", HEADS_PREFIX])
        if not result.success:
            raise GitOperationError("list_branches", message=result.stderr)

        branches = []
        for ref in result.lines:
            name = ref.strip()[len(HEADS_PREFIX):]
            if name and name != self.main_branch:
                branches.append(name)

        logger.debug(f"Found {len(branches)} local branches besides {self.main_branch}")
        return branches

    def get_current_branch(self) -> Optional[str]:
        """Return the branch checked out in this work tree, or None when HEAD is detached."""
        result = self.gateway.run(["symbolic-ref", "--quiet", "--short", "HEAD"])
        if not result.success or not result.stdout:
            return None
        return result.stdout

    def get_repo_root(self) -> Optional[str]:
        """Return the top level of the current work tree, or None outside a repository."""
        result = self.gateway.run(["rev-parse", "--show-toplevel"])
        if not result.success or not result.stdout:
            return None
        return result.stdout

    def has_remote(self, remote_name: Optional[str] = None) -> bool:
        """Check if a remote is configured."""
        remote_name = remote_name or self.remote_name
        result = self.gateway.run(["remote"])
        return result.success and remote_name in [line.strip() for line in result.lines]

    def has_remote_branch(self, branch_name: str) -> bool:
        """Check if the branch has a remote-tracking counterpart of the same name."""
        result = self.gateway.run(
            ["rev-parse", "--verify", "--quiet", f"{self.remote_ref(branch_name)}^{{commit}}"]
        )
        return result.success

    def local_ref(self, branch_name: str) -> str:
        """Full ref for a local branch."""
        return local_ref(branch_name)

    def remote_ref(self, branch_name: str) -> str:
        """Full remote-tracking ref for a branch of the same name."""
        return f"refs/remotes/{self.remote_name}/{branch_name}"

    def count_commits(self, revision_range: str) -> int:
        """Count commits in a revision range such as ``a..b``.

        Raises:
            GitOperationError: If git cannot resolve the range
        """
        result = self.gateway.run(["rev-list", "--count", revision_range, "--"])
        if not result.success:
            raise GitOperationError("count_commits", message=f"{revision_range}: {result.stderr}")
        try:
            return int(result.stdout)
        except ValueError:
            raise GitOperationError(
                "count_commits", message=f"unexpected output for {revision_range}: {result.stdout!r}"
            )

    def get_ahead_behind(self, branch_name: str, other_ref: str) -> tuple[int, int]:
        """Return (ahead, behind) commit counts of a branch relative to another ref.

        Raises:
            GitOperationError: If either ref cannot be resolved
        """
        result = self.gateway.run(
            ["rev-list", "--left-right", "--count", f"{local_ref(branch_name)}...{other_ref}", "--"]
        )
        parts = result.stdout.split()
        if not result.success or len(parts) != 2:
            raise GitOperationError("ahead_behind", branch_name, result.stderr or result.stdout)
        return int(parts[0]), int(parts[1])

    def get_upstream_info(self) -> List[UpstreamInfo]:
        """Return tracking information for every local branch except the main branch."""
        result = self.gateway.run(
            ["for-each-ref", f"--format={UPSTREAM_FORMAT}", HEADS_PREFIX]
        )
        if not result.success:
            raise GitOperationError("list_upstreams", message=result.stderr)

        infos = []
        for line in result.lines:
            fields = line.split("\0")
            # Pad for git versions that print nothing for unknown atoms
            fields += [""] * (5 - len(fields))
            refname, upstream, remote_name, remote_ref, track = fields[:5]
            name = refname.strip()[len(HEADS_PREFIX):]
            if not name or name == self.main_branch:
                continue
            infos.append(
                UpstreamInfo(
                    branch=name,
                    upstream=upstream or None,
                    remote_name=remote_name or None,
                    remote_ref=remote_ref or None,
                    gone=track.strip() == "[gone]",
                )
            )
        return infos

    def get_upstream(self, branch_name: str) -> Optional[UpstreamInfo]:
        """Return tracking information for a single branch."""
        return next(
            (info for info in self.get_upstream_info() if info.branch == branch_name), None
        )
