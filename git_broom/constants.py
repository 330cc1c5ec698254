"""Shared constants for git-broom."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


# Column definitions shared by the CLI table and the picker
COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("branch", "Branch", 40),
    ColumnDefinition("status", "Status", 16),
    ColumnDefinition("worktree", "Worktree", 0),
]


# Symbol constants
SYMBOL_CURRENT_BRANCH = " *"
SYMBOL_SUCCESS = "✓"
SYMBOL_FAILURE = "✗"


# Status display names
STATUS_DISPLAY = {
    "merged": "merged",
    "unpushed": "unpushed commits",
    "needs-rebase": "needs rebase",
    "active": "active",
}


# Status styles (Rich style names, also understood by Textual markup)
STATUS_STYLES = {
    "merged": "dim",
    "unpushed": "yellow",
    "needs-rebase": "red",
    "active": "cyan",
}


# Legend text for CLI summary
LEGEND_TEXT = """
Legend:
* = Current branch        W = Checked out in a worktree

Statuses:
merged           = Fully contained in the main branch, safe to delete
unpushed commits = Has commits its remote counterpart lacks
needs rebase     = The main branch has moved on since it diverged
active           = In sync with its remote, nothing new on the main branch
"""
