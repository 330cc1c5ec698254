"""Service for determining branch status"""

from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Callable, List, Optional, Union, TYPE_CHECKING

from git_broom.models.branch import AnalyzeProgress, BranchInfo, BranchStatus
from git_broom.services.git.divergence import DivergenceClassifier
from git_broom.services.git.merge_detector import MergeDetector
from git_broom.utils.logging import get_logger
from git_broom.utils.threading import get_optimal_worker_count

if TYPE_CHECKING:
    from git_broom.config import Config

logger = get_logger(__name__)

ProgressCallback = Callable[[AnalyzeProgress], None]


def _discard_progress(event: AnalyzeProgress) -> None:
    """Progress sink used when the caller supplies none."""


class _CompletionCounter:
    """Completion counter shared by every worker of one analysis pass."""

    def __init__(self):
        self._value = 0
        self._lock = Lock()

    def increment(self) -> int:
        """Increment and return the new value."""
        with self._lock:
            self._value += 1
            return self._value


class BranchStatusService:
    """Service for determining branch status."""

    def __init__(
        self,
        config: Union["Config", dict],
        merge_detector: MergeDetector,
        divergence_classifier: DivergenceClassifier,
    ):
        """Initialize the service."""
        self.config = config
        self.merge_detector = merge_detector
        self.divergence_classifier = divergence_classifier
        self.main_branch = config.get("main_branch", "main")
        self.sequential = config.get("sequential", False)

    def get_branch_status(self, branch_name: str, main_branch: Optional[str] = None) -> BranchStatus:
        """Get the status of a branch.

        Merged wins over every other status; the remaining three are decided
        by divergence from the remote counterpart and the main branch. Never
        raises: an unexpected failure degrades to UNPUSHED.
        """
        main_branch = main_branch or self.main_branch
        logger.debug(f"Checking status for branch: {branch_name}")

        try:
            if self.merge_detector.is_branch_merged(branch_name, main_branch):
                logger.debug(f"Branch {branch_name} is merged into {main_branch}")
                return BranchStatus.MERGED

            status = self.divergence_classifier.classify(branch_name, main_branch)
        except Exception as e:
            logger.error(f"Error classifying branch {branch_name}: {e}")
            return BranchStatus.UNPUSHED

        logger.debug(f"Branch {branch_name} status: {status.value}")
        return status

    def classify_all(
        self, branches: List[str], on_progress: Optional[ProgressCallback] = None
    ) -> List[BranchInfo]:
        """Classify every branch, returning results in input order.

        Progress events arrive in completion order, each carrying the value of
        a counter shared across workers. ``on_progress`` may be omitted.
        """
        report = on_progress or _discard_progress
        total = len(branches)
        if not total:
            return []

        counter = _CompletionCounter()
        # Slot per input position; completion order never affects result order
        results: List[Optional[BranchInfo]] = [None] * total

        def classify_one(index: int) -> None:
            branch_name = branches[index]
            status = self.get_branch_status(branch_name)
            results[index] = BranchInfo(name=branch_name, status=status)
            report(AnalyzeProgress(branch=branch_name, current=counter.increment(), total=total))

        if self.sequential:
            logger.debug(f"Classifying {total} branches sequentially")
            for index in range(total):
                classify_one(index)
        else:
            max_workers = min(get_optimal_worker_count(self.config.get("workers")), total)
            logger.debug(f"Using {max_workers} workers to classify {total} branches")
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(classify_one, index) for index in range(total)]
                for future in futures:
                    # Re-raises exceptions from the progress sink
                    future.result()

        return [info for info in results if info is not None]
