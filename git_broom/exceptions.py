"""Custom exceptions for git-broom"""

from typing import Optional


class BroomError(Exception):
    """Base exception for all git-broom errors."""
    pass


class NotInGitRepoError(BroomError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        message = "Not in a git repository"
        if path:
            message += f": {path}"
        super().__init__(message)


class NoOriginRemoteError(BroomError):
    """Exception raised when the configured remote does not exist."""

    def __init__(self, remote_name: str = "origin"):
        self.remote_name = remote_name
        super().__init__(f"No '{remote_name}' remote configured for this repository")


class FetchFailedError(BroomError):
    """Exception raised when fetching from the remote fails."""

    def __init__(self, remote_name: str, output: str):
        self.remote_name = remote_name
        self.output = output
        super().__init__(f"Failed to fetch from {remote_name}: {output}")


class GitOperationError(BroomError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class DeleteBranchError(GitOperationError):
    """Exception raised when a local branch cannot be deleted."""

    def __init__(self, branch: str, output: str):
        super().__init__("delete_branch", branch, output)


class FastForwardError(GitOperationError):
    """Exception raised when a branch cannot be fast-forwarded to its upstream."""

    def __init__(self, branch: str, output: str):
        super().__init__("fast_forward", branch, output)


class WorktreeRemovalError(GitOperationError):
    """Exception raised when a linked worktree cannot be removed."""

    def __init__(self, path: str, output: str, branch: Optional[str] = None):
        self.path = path
        super().__init__("remove_worktree", branch, f"{path}: {output}")


class BranchProtectedError(GitOperationError):
    """Exception raised when attempting to modify a protected branch."""

    def __init__(self, branch: str):
        super().__init__("modify_branch", branch, "Branch is protected")
