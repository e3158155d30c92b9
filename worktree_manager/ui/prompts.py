"""Interactive selection and confirmation prompts.

Prompts are rendered on stderr so that stdout stays usable for
``cd "$(wm jump)"``.
"""

import sys
from typing import List, Optional

from rich.console import Console
from rich.prompt import Confirm, IntPrompt

from worktree_manager.formatters import format_worktree_label
from worktree_manager.models.worktree import Worktree

err_console = Console(stderr=True, highlight=False)


def is_interactive() -> bool:
    """Check if both stdin and stderr are attached to a terminal."""
    return sys.stdin.isatty() and sys.stderr.isatty()


def select_worktree(worktrees: List[Worktree], current_path: str) -> Optional[Worktree]:
    """
    Let the user pick a worktree from a numbered menu.

    Args:
        worktrees: Candidates, shown in order
        current_path: Working directory, used to mark the current worktree

    Returns:
        The chosen worktree, or None if the user cancelled
    """
    err_console.print("\nSelect a worktree:")
    for index, worktree in enumerate(worktrees, start=1):
        err_console.print(f"{index}) {format_worktree_label(worktree, current_path)}", markup=False)

    choices = [str(i) for i in range(1, len(worktrees) + 1)]
    try:
        answer = IntPrompt.ask(
            "\nEnter number", console=err_console, choices=choices, show_choices=False
        )
    except (KeyboardInterrupt, EOFError):
        return None
    return worktrees[answer - 1]


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question; an interrupted prompt counts as "no"."""
    try:
        return Confirm.ask(message, console=err_console, default=default)
    except (KeyboardInterrupt, EOFError):
        return False
