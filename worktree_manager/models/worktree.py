"""Worktree data models."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from worktree_manager.constants import DETACHED_HEAD_LABEL


@dataclass(frozen=True)
class Worktree:
    """One entry of a git worktree listing."""

    path: str
    branch: Optional[str] = None  # None when detached or for the main checkout
    head: str = ""
    bare: bool = False
    detached: bool = False

    def is_main(self) -> bool:
        """Check if this is the main worktree.

        The main worktree has no branch and is neither detached nor bare.
        """
        return self.branch is None and not self.detached and not self.bare

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return asdict(self)

    def __str__(self) -> str:
        """String representation of worktree."""
        if self.bare:
            return f"{self.path} (bare)"
        branch = self.branch or DETACHED_HEAD_LABEL
        return f"{self.path} {self.head} [{branch}]"
