"""Command-line interface for worktree-manager.

This package provides the CLI entry point and argument parsing.
"""

from .main import main
from .args import parse_args, build_parser

__all__ = ["main", "parse_args", "build_parser"]
