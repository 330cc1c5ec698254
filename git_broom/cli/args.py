"""Command-line argument parsing for git-broom."""

import argparse
from git_broom.__version__ import __version__


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-broom",
        description="Sweep away local git branches that are already merged",
        epilog="Run inside a git work tree. The remote is fetched and pruned before analysis "
        "unless --no-fetch is given.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-broom {__version__}")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview mode - show what would be fast-forwarded and deleted without changing anything",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Skip confirmation and force removal of dirty worktrees",
    )
    parser.add_argument(
        "--interactive", action="store_true", help="Pick branches in the interactive picker (default for TTY)"
    )
    parser.add_argument(
        "--no-interactive",
        action="store_true",
        help="Select every merged branch without the picker (for scripts/automation)",
    )
    parser.add_argument("--main-branch", default="main", help="Main branch name")
    parser.add_argument("--remote", default="origin", help="Remote to fetch and compare against")
    parser.add_argument(
        "--no-fetch", action="store_true", help="Use remote-tracking refs as they are"
    )
    parser.add_argument(
        "--no-fast-forward",
        action="store_true",
        help="Do not advance branches that are behind their upstream",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers for branch analysis (default: auto-detect based on CPU and threading mode)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Force sequential processing (disable parallelism)",
    )

    return parser.parse_args(argv)
