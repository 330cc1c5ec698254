"""Command gateway: the single seam between git-broom and the git executable."""

from dataclasses import dataclass
from typing import Protocol, Sequence

import git

from git_broom.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one git invocation."""

    success: bool
    stdout: str
    stderr: str = ""

    @property
    def lines(self) -> list[str]:
        """Non-empty stdout lines."""
        return [line for line in self.stdout.split("\n") if line.strip()]


class CommandGateway(Protocol):
    """Runs git with an argument vector and reports the structured outcome."""

    def run(self, args: Sequence[str]) -> CommandResult:
        ...


class GitCommandGateway:
    """CommandGateway backed by GitPython's command runner."""

    def __init__(self, repo_path: str):
        """Initialize the gateway.

        Args:
            repo_path: Working directory git is run in (the work tree top level)
        """
        self.repo_path = repo_path

    def _get_git(self) -> git.Git:
        """Get a thread-safe git.Git instance.

        Creates a new command wrapper for each call so concurrent branch
        analysis never shares process state.
        """
        return git.Git(self.repo_path)

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run ``git <args>`` once, never raising on a non-zero exit status.

        Args:
            args: Arguments following the ``git`` executable name

        Returns:
            CommandResult with exit success, trimmed stdout and stderr
        """
        command = ["git", *args]
        try:
            status, stdout, stderr = self._get_git().execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            logger.error(f"git executable not found: {e}")
            return CommandResult(success=False, stdout="", stderr=str(e))

        result = CommandResult(success=status == 0, stdout=stdout.strip(), stderr=stderr.strip())
        if not result.success:
            logger.debug(f"'{' '.join(command)}' exited {status}: {result.stderr}")
        return result
