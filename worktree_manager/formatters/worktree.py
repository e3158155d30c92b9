"""Worktree label formatting utilities."""

import os

from worktree_manager.constants import CURRENT_MARKER, DETACHED_LABEL
from worktree_manager.models.worktree import Worktree


def format_branch_label(worktree: Worktree) -> str:
    """Branch name, or "detached" when the worktree has none."""
    return worktree.branch or DETACHED_LABEL


def is_current_worktree(worktree: Worktree, current_path: str) -> bool:
    """Check if current_path lies inside the worktree."""
    return os.path.abspath(current_path).startswith(os.path.abspath(worktree.path))


def format_worktree_label(worktree: Worktree, current_path: str) -> str:
    """
    Format a worktree for a selection menu.

    Args:
        worktree: Worktree to describe
        current_path: Working directory, used to mark the current worktree

    Returns:
        Label such as "feature - feature-branch (current)"
    """
    label = f"{os.path.basename(worktree.path)} - {format_branch_label(worktree)}"
    if is_current_worktree(worktree, current_path):
        label += CURRENT_MARKER
    return label
