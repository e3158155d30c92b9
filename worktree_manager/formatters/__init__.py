"""Formatting utilities for worktree-manager.

- paths: Path display relative to the working directory
- worktree: Worktree labels for selection menus and messages
"""

from .paths import to_relative_path, format_path_for_display
from .worktree import format_branch_label, format_worktree_label, is_current_worktree

__all__ = [
    "to_relative_path",
    "format_path_for_display",
    "format_branch_label",
    "format_worktree_label",
    "is_current_worktree",
]
