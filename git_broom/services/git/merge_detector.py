"""Merge detection service for git-broom."""

from threading import Lock
from typing import Callable, Dict, List, Tuple, Union, TYPE_CHECKING

from git_broom.exceptions import GitOperationError
from git_broom.services.git.branch_queries import local_ref
from git_broom.services.git.gateway import CommandGateway, CommandResult
from git_broom.utils.logging import get_logger

if TYPE_CHECKING:
    from git_broom.config import Config

logger = get_logger(__name__)

STRATEGY_NAMES = {
    "ancestry": "Ancestry",
    "patch": "Equivalent patches",
    "content": "Identical content",
}


class MergeDetector:
    """Service for detecting if branches have been merged into the main branch.

    Three independent strategies run cheapest first and the first one that
    succeeds wins. A strategy that hits a git failure reports "not merged" and
    the cascade moves on, so detection never raises.
    """

    def __init__(self, gateway: CommandGateway, config: Union["Config", dict]):
        """Initialize the merge detector.

        Args:
            gateway: Command gateway used for every git invocation
            config: Configuration dictionary or Config object
        """
        self.gateway = gateway
        self.config = config
        # Counters for merge detection strategies
        self.merge_detection_stats = {name: 0 for name in STRATEGY_NAMES}
        self._stats_lock = Lock()  # Branches are analyzed from worker threads

        self.strategies: List[Tuple[str, Callable[[str, str], bool]]] = [
            ("ancestry", self._check_ancestry),  # Single graph walk
            ("patch", self._check_equivalent_patches),  # Commits since divergence
            ("content", self._check_content_equivalence),  # Touched files, squash merges
        ]

        logger.debug("Merge detector initialized")

    def _git(self, operation: str, args: List[str]) -> CommandResult:
        """Run git, raising GitOperationError on failure."""
        result = self.gateway.run(args)
        if not result.success:
            raise GitOperationError(operation, message=result.stderr or "git exited non-zero")
        return result

    def _increment_stat(self, strategy: str):
        """Thread-safe stats increment."""
        with self._stats_lock:
            self.merge_detection_stats[strategy] += 1

    def get_merge_stats(self) -> str:
        """Get a summary of which strategies detected merges."""
        with self._stats_lock:
            counts = dict(self.merge_detection_stats)

        if sum(counts.values()) == 0:
            return "No merges detected"

        stats = [
            f"{STRATEGY_NAMES[name]}: {count}" for name, count in counts.items() if count > 0
        ]
        return f"Merges detected by: {', '.join(stats)}"

    def is_branch_merged(self, branch_name: str, main_branch: str) -> bool:
        """Check if a branch's history is fully represented in the main branch."""
        # A branch cannot be merged into itself
        if branch_name == main_branch:
            logger.debug(f"Skipping merge check: {branch_name} is the main branch")
            return False

        for name, strategy in self.strategies:
            if self._run_strategy(name, strategy, branch_name, main_branch):
                self._increment_stat(name)
                return True

        logger.debug(f"Branch {branch_name} is not merged into {main_branch}")
        return False

    def _run_strategy(
        self, name: str, strategy: Callable[[str, str], bool], branch_name: str, main_branch: str
    ) -> bool:
        """Run one strategy, converting any failure into "not merged"."""
        try:
            return strategy(branch_name, main_branch)
        except Exception as e:
            logger.debug(f"[{STRATEGY_NAMES[name]}] Inconclusive for {branch_name}: {e}")
            return False

    def _check_ancestry(self, branch_name: str, main_branch: str) -> bool:
        """Strategy 1: the branch tip is an ancestor of main.

        Covers fast-forward and ordinary merge commits.
        """
        result = self.gateway.run(
            ["merge-base", "--is-ancestor", local_ref(branch_name), local_ref(main_branch)]
        )
        if result.success:
            logger.debug(f"[Ancestry] Branch {branch_name} is merged (tip is ancestor)")
        return result.success

    def _check_equivalent_patches(self, branch_name: str, main_branch: str) -> bool:
        """Strategy 2: every branch-only commit has a patch-equivalent commit in main.

        Walks the symmetric difference with cherry marks, so the cost is bound by
        the commits since the branches diverged. Detects rebased branches.
        """
        result = self._git(
            "cherry_mark",
            [
                "rev-list",
                "--cherry-mark",
                "--right-only",
                "--no-merges",
                f"{local_ref(main_branch)}...{local_ref(branch_name)}",
                "--",
            ],
        )

        unique = [line for line in result.lines if line.startswith("+")]
        if unique:
            logger.debug(
                f"[Equivalent patches] {branch_name} has {len(unique)} commit(s) with no match in {main_branch}"
            )
            return False

        equivalent = len(result.lines)
        logger.debug(
            f"[Equivalent patches] Branch {branch_name} is merged ({equivalent} equivalent commit(s))"
        )
        return True

    def _check_content_equivalence(self, branch_name: str, main_branch: str) -> bool:
        """Strategy 3: every file the branch touched has identical content in main.

        Compares stored blob ids rather than generated diffs, so it is immune to
        diff algorithm settings. This is the only strategy that detects squash
        merges of several commits.
        """
        branch_ref = local_ref(branch_name)
        main_ref = local_ref(main_branch)
        merge_base = self.gateway.run(["merge-base", main_ref, branch_ref])
        if not merge_base.success or not merge_base.stdout:
            logger.debug(f"[Identical content] No merge base for {branch_name} (unrelated histories)")
            return False

        diff = self._git(
            "diff_names",
            ["diff", "--name-only", "--no-renames", "-z", merge_base.stdout, branch_ref, "--"],
        )
        touched = [path for path in diff.stdout.split("\0") if path]
        if not touched:
            logger.debug(f"[Identical content] {branch_name} touches no files since the merge base")
            return False

        branch_blobs = self._get_blob_ids(branch_ref, touched)
        if not branch_blobs:
            # Every touched file was deleted on the branch; nothing to compare
            return False

        main_blobs = self._get_blob_ids(main_ref, list(branch_blobs))
        for path, blob_id in branch_blobs.items():
            if main_blobs.get(path) != blob_id:
                logger.debug(f"[Identical content] {path} differs between {branch_name} and {main_branch}")
                return False

        logger.debug(
            f"[Identical content] Branch {branch_name} is merged ({len(branch_blobs)} file(s) identical)"
        )
        return True

    def _get_blob_ids(self, ref: str, paths: List[str]) -> Dict[str, str]:
        """Map each path that exists at ref to its object id."""
        result = self._git(
            "ls_tree",
            ["--literal-pathspecs", "ls-tree", "-r", "-z", ref, "--", *paths],
        )

        blobs = {}
        for entry in result.stdout.split("\0"):
            if not entry:
                continue
            # Format: <mode> SP <type> SP <object> TAB <path>
            meta, _, path = entry.partition("\t")
            parts = meta.split()
            if len(parts) == 3 and path:
                blobs[path] = parts[2]
        return blobs
