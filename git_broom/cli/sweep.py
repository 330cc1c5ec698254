"""The sweep flow: fetch, fast-forward, classify, pick, confirm, delete."""

from typing import Dict, List, Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm

from git_broom.config import Config
from git_broom.core import Broom
from git_broom.formatters import (
    format_delete_result,
    format_deletion_confirmation_items,
    format_fast_forward_result,
)
from git_broom.models.branch import AnalyzeProgress, BranchInfo, BranchStatus
from git_broom.models.worktree import WorktreeInfo
from git_broom.services.display_service import DisplayService
from git_broom.utils.logging import get_logger
from git_broom.utils.threading import get_optimal_worker_count

logger = get_logger(__name__)


def run_sweep(broom: Broom, config: Config, console: Optional[Console] = None) -> int:
    """Run one sweep and return the process exit code.

    Raises:
        BroomError: For environment failures (not a repository, no remote, failed fetch)
    """
    console = console or Console()

    broom.preflight()

    if config.fetch:
        with console.status(f"[bold blue]Fetching {config.remote_name}...", spinner="dots"):
            broom.fetch()

    behind = broom.trunk_behind_count()
    if behind:
        console.print(
            f"[yellow]Warning: local {config.main_branch} is {behind} commit(s) behind "
            f"{config.remote_name}/{config.main_branch}; merge detection uses the local branch[/yellow]"
        )

    if config.fast_forward:
        _fast_forward(broom, config, console)

    branches = _classify(broom, config, console)
    if not branches:
        console.print(f"[green]No branches besides {config.main_branch}. Nothing to sweep![/green]")
        return 0

    worktrees = broom.list_worktrees()
    current_branch = broom.get_current_branch()
    DisplayService(console, verbose=config.verbose).display_branch_table(
        branches, worktrees, current_branch, show_summary=config.verbose
    )
    if config.verbose:
        console.print(f"[dim]{broom.get_merge_stats()}[/dim]")

    selected = _select(branches, worktrees, current_branch, config)
    if not selected:
        console.print("[green]No branches selected for deletion[/green]")
        return 0

    by_name = {branch.name: branch for branch in branches}
    chosen = [by_name[name] for name in selected]

    if config.dry_run:
        console.print("\n[yellow]Dry run - the following branches would be deleted:[/yellow]")
        console.print(format_deletion_confirmation_items(chosen, worktrees))
        return 0

    if not config.force:
        console.print("\nThe following branches will be deleted:")
        console.print(format_deletion_confirmation_items(chosen, worktrees))
        if not Confirm.ask("\nProceed with deletion?", default=False, console=console):
            console.print("[yellow]Cleanup cancelled[/yellow]")
            return 0

    console.print("")
    results = broom.delete_branches(selected, worktrees)
    for result in results:
        console.print(format_delete_result(result))

    deleted = sum(1 for result in results if result.deleted)
    failed = len(results) - deleted
    console.print(f"\n[green]Deleted {deleted} branch(es)[/green]")
    if failed:
        console.print(f"[red]Failed to delete {failed} branch(es)[/red]")
        return 1
    return 0


def _fast_forward(broom: Broom, config: Config, console: Console) -> None:
    """Advance branches that are strictly behind their upstream."""
    if config.dry_run:
        for candidate in broom.find_fast_forward_candidates():
            console.print(f"[dim]Would fast-forward {candidate.branch} to {candidate.upstream}[/dim]")
        return

    for result in broom.plan_fast_forwards():
        console.print(format_fast_forward_result(result))


def _classify(broom: Broom, config: Config, console: Console) -> List[BranchInfo]:
    """Classify every branch behind a progress bar."""
    if config.sequential:
        task_desc = "Analyzing branches..."
    else:
        task_desc = f"Analyzing branches ({get_optimal_worker_count(config.workers)} workers)..."

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(task_desc, total=None)

        def on_progress(event: AnalyzeProgress) -> None:
            progress.update(task, total=event.total, completed=event.current)
            logger.debug(f"Analyzed {event.branch} ({event.current}/{event.total})")

        return broom.classify_all(on_progress)


def _select(
    branches: List[BranchInfo],
    worktrees: Dict[str, WorktreeInfo],
    current_branch: Optional[str],
    config: Config,
) -> List[str]:
    """Branches chosen for deletion, in listed order."""
    if config.interactive:
        from git_broom.tui import SweepApp

        app = SweepApp(branches, worktrees, current_branch)
        return app.run() or []

    return [
        branch.name
        for branch in branches
        if branch.status == BranchStatus.MERGED and branch.name != current_branch
    ]
