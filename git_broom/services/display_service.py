"""Display and formatting service for branch information"""
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

from git_broom.constants import COLUMNS, LEGEND_TEXT
from git_broom.formatters import format_branch_name, format_status, format_worktree, get_status_style
from git_broom.models.branch import BranchInfo, BranchStatus
from git_broom.models.worktree import WorktreeInfo
from git_broom.utils.logging import get_logger

logger = get_logger(__name__)


class DisplayService:
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def display_branch_table(
            self,
            branches: List[BranchInfo],
            worktrees: Optional[Dict[str, WorktreeInfo]] = None,
            current_branch: Optional[str] = None,
            show_summary: bool = False
        ) -> None:
        """Display a table of branch information."""
        worktrees = worktrees or {}
        table = Table()

        # Add columns using shared constants
        for col in COLUMNS:
            table.add_column(col.label, min_width=col.width or None)

        for branch in branches:
            # Match COLUMNS order: Branch, Status, Worktree
            table.add_row(
                format_branch_name(branch.name, branch.name == current_branch),
                format_status(branch.status),
                format_worktree(worktrees.get(branch.name)),
                style=get_status_style(branch.status) or None,
            )

        self.console.print(table)

        if show_summary:
            self.display_summary(branches)

    def display_summary(self, branches: List[BranchInfo]) -> None:
        """Print per-status counts and the legend."""
        counts = {status: 0 for status in BranchStatus}
        for branch in branches:
            counts[branch.status] += 1

        summary = ", ".join(
            f"{count} {format_status(status)}" for status, count in counts.items() if count
        )
        self.console.print(f"\n[bold]Summary:[/bold] {summary}")
        self.console.print(LEGEND_TEXT)
