"""Shared formatting utilities for git-broom."""

from typing import Iterable, Optional

from git_broom.constants import (
    STATUS_DISPLAY,
    STATUS_STYLES,
    SYMBOL_CURRENT_BRANCH,
    SYMBOL_FAILURE,
    SYMBOL_SUCCESS,
)
from git_broom.models.branch import BranchInfo, BranchStatus, DeleteResult, FastForwardResult
from git_broom.models.worktree import WorktreeInfo


def format_status(status: BranchStatus) -> str:
    """
    Format branch status as display text.

    Args:
        status: Branch status enum value

    Returns:
        Display text for status
    """
    return STATUS_DISPLAY.get(status.value, status.value)


def get_status_style(status: BranchStatus) -> str:
    """Rich style for a branch status."""
    return STATUS_STYLES.get(status.value, "")


def format_status_markup(status: BranchStatus) -> str:
    """
    Format branch status as colored console markup.

    Args:
        status: Branch status enum value

    Returns:
        Status text wrapped in its style tag
    """
    style = get_status_style(status)
    text = format_status(status)
    return f"[{style}]{text}[/{style}]" if style else text


def format_branch_name(name: str, is_current: bool = False) -> str:
    """
    Format branch name with optional current branch indicator.

    Args:
        name: Branch name
        is_current: Whether this is the current branch

    Returns:
        Formatted branch name
    """
    return name + (SYMBOL_CURRENT_BRANCH if is_current else "")


def format_worktree(worktree: Optional[WorktreeInfo]) -> str:
    """Worktree column text: its path, flagged when the directory is missing."""
    if worktree is None:
        return ""
    if worktree.is_orphaned:
        return f"{worktree.path} (missing)"
    return worktree.path


def format_deletion_confirmation_items(
    branches: Iterable[BranchInfo], worktrees: Optional[dict] = None
) -> str:
    """
    Format a list of branches for deletion confirmation message.

    Args:
        branches: Branches selected for deletion
        worktrees: Worktrees keyed by branch name

    Returns:
        Bullet list, one branch per line, e.g.
        "  • feature/old (merged)\\n  • spike (unpushed commits, worktree ../spike)"
    """
    worktrees = worktrees or {}
    lines = []
    for branch in branches:
        details = [format_status(branch.status)]
        worktree = worktrees.get(branch.name)
        if worktree is not None:
            details.append(f"worktree {worktree.path}")
        lines.append(f"  • {branch.name} ({', '.join(details)})")
    return "\n".join(lines)


def format_fast_forward_result(result: FastForwardResult) -> str:
    """One console line describing a fast-forward attempt."""
    if result.updated:
        return f"[green]{SYMBOL_SUCCESS} Fast-forwarded {result.branch}[/green]"
    return f"[red]{SYMBOL_FAILURE} Could not fast-forward {result.branch}: {result.error}[/red]"


def format_delete_result(result: DeleteResult) -> str:
    """One console line describing a deletion attempt."""
    if result.deleted:
        suffix = f" (removed worktree {result.worktree_path})" if result.worktree_path else ""
        return f"[green]{SYMBOL_SUCCESS} Deleted {result.branch}{suffix}[/green]"
    return f"[red]{SYMBOL_FAILURE} Failed to delete {result.branch}: {result.error}[/red]"
