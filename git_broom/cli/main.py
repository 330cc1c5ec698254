"""Command-line entry point for git-broom"""

import os
import sys
from typing import List, Optional

from rich.console import Console

from git_broom.cli.args import parse_args
from git_broom.cli.sweep import run_sweep
from git_broom.config import Config
from git_broom.core import Broom
from git_broom.exceptions import BroomError
from git_broom.utils.logging import get_log_file, setup_logging
from git_broom.utils.threading import get_threading_info

console = Console()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    # Default to interactive if running in a TTY, unless explicitly disabled
    use_interactive = parsed_args.interactive or (
        not parsed_args.no_interactive and sys.stdin.isatty()
    )

    # Setup logging before creating Broom
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_interactive)

    try:
        config = Config(
            main_branch=parsed_args.main_branch,
            remote_name=parsed_args.remote,
            fetch=not parsed_args.no_fetch,
            fast_forward=not parsed_args.no_fast_forward,
            interactive=use_interactive,
            dry_run=parsed_args.dry_run,
            force=parsed_args.force,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            sequential=parsed_args.sequential,
            workers=parsed_args.workers,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if parsed_args.debug:
        console.print("[yellow]Debug mode enabled[/yellow]")

        threading_info = get_threading_info()
        console.print("[yellow]Threading Information:[/yellow]")
        console.print(f"  Python version: {threading_info['python_version']}")
        console.print(f"  Threading mode: {threading_info['mode']}")
        console.print(f"  CPU count: {threading_info['cpu_count']}")
        console.print(f"  Optimal workers: {threading_info['optimal_workers']}")
        console.print(f"  Free-threading enabled: {threading_info['free_threading']}")

        console.print("[yellow]Configuration:[/yellow]")
        for key, value in config.to_dict().items():
            console.print(f"  {key}: {value}")
        console.print(f"[dim]Debug log: {get_log_file()}[/dim]")

    broom = None
    try:
        broom = Broom(os.getcwd(), config)
        return run_sweep(broom, config, console=console)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except BroomError as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1
    finally:
        if broom is not None:
            broom.close()


if __name__ == "__main__":
    sys.exit(main())
