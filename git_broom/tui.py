"""Interactive branch picker for git-broom using Textual."""

from typing import Dict, List, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, SelectionList, Static
from textual.widgets.selection_list import Selection

from .__version__ import __version__
from .constants import SYMBOL_CURRENT_BRANCH
from .formatters import format_status_markup, format_worktree
from .models.branch import BranchInfo, BranchStatus
from .models.worktree import WorktreeInfo
from .utils.logging import get_logger

logger = get_logger(__name__)


class SweepApp(App[List[str]]):
    """Pick the branches to delete.

    Merged branches start selected. The app exits with the chosen branch
    names in their listed order, or an empty list when cancelled.
    """

    TITLE = "git-broom"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    SelectionList {
        height: 1fr;
    }

    #status-bar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("d", "confirm", "Delete Selected", priority=True),
        Binding("a", "select_merged", "Select Merged", priority=True),
        Binding("c", "clear_selection", "Clear", priority=True),
        Binding("q", "cancel", "Quit", priority=True),
        Binding("escape", "cancel", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        branches: List[BranchInfo],
        worktrees: Optional[Dict[str, WorktreeInfo]] = None,
        current_branch: Optional[str] = None,
    ):
        super().__init__()
        self.branches = branches
        self.worktrees = worktrees or {}
        self.current_branch = current_branch

    def compose(self) -> ComposeResult:
        yield Header()
        yield SelectionList[str](*self._build_selections(), id="branches")
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(SelectionList).focus()
        self._update_status_bar()

    def _build_selections(self) -> List[Selection]:
        """One row per branch: name, colored status and worktree path."""
        selections = []
        for branch in self.branches:
            is_current = branch.name == self.current_branch
            name = branch.name + (SYMBOL_CURRENT_BRANCH if is_current else "")
            prompt = Text.from_markup(f"{name:<40} {format_status_markup(branch.status)}")
            worktree = format_worktree(self.worktrees.get(branch.name))
            if worktree:
                prompt.append(f"  W {worktree}", style="italic")
            selections.append(Selection(prompt, branch.name, self._preselect(branch)))
        return selections

    def _preselect(self, branch: BranchInfo) -> bool:
        # The checked-out branch cannot be deleted, so it is never suggested
        return branch.status == BranchStatus.MERGED and branch.name != self.current_branch

    def _update_status_bar(self) -> None:
        selected = len(self.query_one(SelectionList).selected)
        self.query_one("#status-bar", Static).update(
            f"{selected} of {len(self.branches)} branches selected for deletion"
        )

    def on_selection_list_selected_changed(self, event: SelectionList.SelectedChanged) -> None:
        self._update_status_bar()

    def action_select_merged(self) -> None:
        """Reset the selection to the merged branches."""
        selection_list = self.query_one(SelectionList)
        selection_list.deselect_all()
        for branch in self.branches:
            if self._preselect(branch):
                selection_list.select(branch.name)

    def action_clear_selection(self) -> None:
        self.query_one(SelectionList).deselect_all()

    def action_confirm(self) -> None:
        selected = set(self.query_one(SelectionList).selected)
        chosen = [branch.name for branch in self.branches if branch.name in selected]
        logger.debug(f"Picker confirmed {len(chosen)} branches")
        self.exit(chosen)

    def action_cancel(self) -> None:
        logger.debug("Picker cancelled")
        self.exit([])
