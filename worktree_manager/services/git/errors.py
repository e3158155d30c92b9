"""Helpers for turning GitPython errors into readable messages."""

import git


def git_error_message(error: git.exc.GitCommandError) -> str:
    """Extract git's stderr from a GitCommandError, or the exit status."""
    stderr = (error.stderr or "").strip()
    # GitPython wraps stderr as "\n  stderr: '...'"
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'").strip()
    if stderr:
        return stderr
    return f"exit code {error.status}"
