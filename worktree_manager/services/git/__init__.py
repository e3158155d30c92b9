"""Git-related services for worktree-manager."""

from .worktrees import WorktreeService, parse_worktree_list
from . import repository

__all__ = [
    "WorktreeService",
    "parse_worktree_list",
    "repository",
]
