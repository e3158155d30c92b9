"""Command-line argument parsing for worktree-manager."""

import argparse
from typing import List, Optional

from worktree_manager.__version__ import __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per action."""
    parser = argparse.ArgumentParser(
        prog="wm",
        description="Manage git worktrees, with hooks around creation and removal",
        epilog="Hooks and settings are read from .worktree.yml or .git/.worktree.yml "
        "in the repository root. Run 'wm init' to create one.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output, including hook diagnostics")
    parser.add_argument("--debug", action="store_true", help="Show debug information for troubleshooting")
    parser.add_argument("--version", action="version", version=f"worktree-manager {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    add = subparsers.add_parser(
        "add",
        help="Create a new worktree",
        description="Create a new git worktree. NAME_OR_PATH can be a simple name "
        "(created in worktrees_dir), a relative path or an absolute path.",
    )
    add.add_argument("name_or_path", metavar="NAME_OR_PATH", help="Name or path for the worktree")
    add.add_argument("branch", metavar="BRANCH", nargs="?", help="Branch to use for the worktree")
    add.add_argument("-b", "--branch", dest="new_branch", metavar="NEW_BRANCH", help="Create a new branch for the worktree")
    add.add_argument("-t", "--track", metavar="REMOTE_BRANCH", help="Track a remote branch, e.g. origin/develop")
    add.add_argument("-f", "--force", action="store_true", help="Force creation even if directory exists")
    add.add_argument("--no-hooks", action="store_true", help="Skip hook execution")

    remove = subparsers.add_parser(
        "remove",
        aliases=["rm"],
        help="Remove an existing worktree",
        description="Remove a git worktree. Without NAME_OR_PATH, shows an interactive selection menu.",
    )
    remove.add_argument("name_or_path", metavar="NAME_OR_PATH", nargs="?", help="Name or path of the worktree to remove")
    remove.add_argument("--all", dest="remove_all", action="store_true", help="Remove all worktrees at once")
    remove.add_argument("-f", "--force", action="store_true", help="Force removal even if worktree has changes")
    remove.add_argument("--no-hooks", action="store_true", help="Skip hook execution")

    subparsers.add_parser(
        "list",
        aliases=["ls"],
        help="List all worktrees",
        description="Display all worktrees. Works from the main repository or any worktree.",
    )

    jump = subparsers.add_parser(
        "jump",
        help="Print the path of a worktree",
        description="Print only the path of a worktree, for use with cd \"$(wm jump NAME)\". "
        "Without WORKTREE, shows an interactive selection menu.",
    )
    jump.add_argument("worktree", metavar="WORKTREE", nargs="?", help="Worktree name, path or branch fragment")

    reset = subparsers.add_parser(
        "reset",
        help="Reset current worktree branch to origin/main",
        description="Fetch origin and hard-reset the current worktree branch to origin/<main_branch_name>. "
        "Must be run from a worktree, not the main repository.",
    )
    reset.add_argument("-f", "--force", action="store_true", help="Force reset even if there are uncommitted changes")

    init = subparsers.add_parser(
        "init",
        help="Initialize worktree configuration file",
        description="Create a .worktree.yml configuration file from the bundled example.",
    )
    init.add_argument("-f", "--force", action="store_true", help="Force overwrite existing .worktree.yml")

    subparsers.add_parser("version", help="Show version")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
