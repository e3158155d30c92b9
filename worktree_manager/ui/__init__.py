"""Interactive terminal prompts for worktree-manager."""

from .prompts import confirm, is_interactive, select_worktree

__all__ = ["confirm", "is_interactive", "select_worktree"]
