"""Display service for worktree listings and summaries"""
from typing import List, Optional

from rich.console import Console

from worktree_manager.formatters import format_branch_label, format_path_for_display
from worktree_manager.logging_config import get_logger
from worktree_manager.models.worktree import Worktree

console = Console(highlight=False)
logger = get_logger(__name__)


class DisplayService:
    """Prints worktree information for the CLI commands."""

    def __init__(self, cwd: str):
        self.cwd = cwd

    def path(self, path: str) -> str:
        """Path relative to the directory the command was run from."""
        return format_path_for_display(path, self.cwd)

    def show_worktree_list(self, worktrees: List[Worktree], main_repository_path: Optional[str] = None) -> None:
        """
        Print one line per worktree.

        Args:
            worktrees: Worktrees to show
            main_repository_path: Set when running from a linked worktree, to
                tell the user where the main checkout is
        """
        if main_repository_path:
            console.print(f"Running from worktree. Main repository: {main_repository_path}", markup=False)
            console.print("To enter the main repository, run:")
            console.print(f"  cd {main_repository_path}", markup=False)
            console.print("")

        if not worktrees:
            console.print("No worktrees found.")
            return

        for worktree in worktrees:
            console.print(str(worktree), markup=False, soft_wrap=True)

    def show_created(self, worktree: Worktree) -> None:
        """Print the result of a successful add."""
        console.print(f"Created: {worktree.path} [{format_branch_label(worktree)}]", markup=False, soft_wrap=True)
        console.print(f"Run: cd {worktree.path}", markup=False, soft_wrap=True)

    def show_dirty_worktrees(self, worktrees: List[Worktree]) -> None:
        """List worktrees whose removal was blocked by local changes."""
        console.print("\nThe following worktrees contain uncommitted changes:")
        for worktree in worktrees:
            console.print(f"  - {self.path(worktree.path)} ({format_branch_label(worktree)})", markup=False)

    def show_removal_summary(self, removed: int, failed: int, title: str = "Summary") -> None:
        """Print the counts after removing several worktrees."""
        console.print(f"\n{title}:")
        console.print(f"  Removed: {removed} worktrees")
        if failed > 0:
            console.print(f"  Failed: {failed} worktrees")
