"""Data models for worktree-manager."""

from .worktree import Worktree
from .hook import HookEntry, SingleHook, SequenceHook, StructuredHook, parse_hook_entry

__all__ = [
    "Worktree",
    "HookEntry",
    "SingleHook",
    "SequenceHook",
    "StructuredHook",
    "parse_hook_entry",
]
