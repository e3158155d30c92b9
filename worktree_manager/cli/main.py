"""Command-line entry point for worktree-manager"""

import os
import sys
from typing import List, Optional

from rich.console import Console

from worktree_manager.__version__ import __version__
from worktree_manager.cli.args import parse_args
from worktree_manager.core import WorktreeManager
from worktree_manager.exceptions import WorktreeManagerError
from worktree_manager.logging_config import setup_logging

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

COMMAND_ALIASES = {"rm": "remove", "ls": "list"}


def run_command(manager: WorktreeManager, args) -> int:
    """Dispatch parsed arguments to the matching WorktreeManager command."""
    command = COMMAND_ALIASES.get(args.command, args.command)

    if command == "add":
        return manager.add(
            args.name_or_path,
            branch=args.branch,
            new_branch=args.new_branch,
            track=args.track,
            force=args.force,
        )
    if command == "remove":
        return manager.remove(args.name_or_path, force=args.force, remove_all=args.remove_all)
    if command == "list":
        return manager.list_worktrees()
    if command == "jump":
        return manager.jump(args.worktree)
    if command == "reset":
        return manager.reset(force=args.force)
    if command == "init":
        return manager.init(force=args.force)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    if parsed_args.command == "version":
        console.print(__version__)
        return 0

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        manager = WorktreeManager(
            os.getcwd(),
            verbose=parsed_args.verbose or parsed_args.debug,
            no_hooks=getattr(parsed_args, "no_hooks", False),
        )
        return run_command(manager, parsed_args)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (WorktreeManagerError, ValueError) as e:
        err_console.print(f"Error: {e}", style="red", markup=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
