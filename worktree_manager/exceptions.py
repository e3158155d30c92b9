"""Custom exceptions for worktree-manager"""

from typing import Optional


class WorktreeManagerError(Exception):
    """Base exception for all worktree-manager errors."""
    pass


class GitOperationError(WorktreeManagerError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotAGitRepositoryError(WorktreeManagerError):
    """Exception raised when a path is not a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repository: {path}")


class InvalidInputError(WorktreeManagerError):
    """Exception raised for user input that cannot be passed to git safely."""
    pass


class NotMainRepositoryError(WorktreeManagerError):
    """Exception raised when a command must run from the main checkout."""

    def __init__(self, main_repository_path: Optional[str] = None):
        self.main_repository_path = main_repository_path

        error_msg = "This command can only be run from the main Git repository (not from a worktree)."
        if main_repository_path:
            error_msg += f"\nTo enter the main repository, run:\n  cd {main_repository_path}"

        super().__init__(error_msg)


class WorktreeNotFoundError(WorktreeManagerError):
    """Exception raised when no worktree matches a name or path."""
    pass


class WorktreeConflictError(WorktreeManagerError):
    """Exception raised when a new worktree would clash with existing state."""
    pass


class HookFailedError(WorktreeManagerError):
    """Exception raised when a pre-operation hook fails."""

    def __init__(self, hook_type: str, action: str):
        self.hook_type = hook_type
        self.action = action
        super().__init__(f"{hook_type} hook failed. Aborting {action}.")
