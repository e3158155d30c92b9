"""Path formatting utilities."""

import os


def to_relative_path(absolute_path: str, base_path: str) -> str:
    """
    Express a path relative to base_path.

    Args:
        absolute_path: Path to format
        base_path: Directory the result is relative to

    Returns:
        Relative path, or "." when both are the same directory
    """
    return os.path.relpath(os.path.abspath(absolute_path), os.path.abspath(base_path))


def format_path_for_display(absolute_path: str, base_path: str) -> str:
    """Format a worktree path for user-facing messages."""
    return to_relative_path(absolute_path, base_path)
