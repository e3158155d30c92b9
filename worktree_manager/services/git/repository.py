"""Repository inspection helpers for worktree-manager.

These work from an arbitrary directory (the main checkout or any linked
worktree) and use the git binary through GitPython's command wrapper.
"""

import os
from typing import Optional

import git

from worktree_manager.constants import PORCELAIN_WORKTREE
from worktree_manager.exceptions import GitOperationError
from worktree_manager.logging_config import get_logger
from worktree_manager.services.git.errors import git_error_message

logger = get_logger(__name__)


def is_main_repository(path: str) -> bool:
    """Check if path is the root of the main checkout.

    Linked worktrees have a ``.git`` file pointing at the common directory
    (``gitdir: ...``); the main checkout has a ``.git`` directory.
    """
    git_path = os.path.join(path, ".git")
    if os.path.isdir(git_path):
        return True
    if os.path.isfile(git_path):
        try:
            with open(git_path, encoding="utf-8") as f:
                return not f.read().strip().startswith("gitdir:")
        except OSError as e:
            logger.debug(f"Could not read {git_path}: {e}")
            return False
    return False


def is_main_repository_path(path: str) -> bool:
    """Check if path holds a ``.git`` directory, i.e. it must never be removed."""
    return os.path.isdir(os.path.join(path, ".git"))


def find_main_repository_path(cwd: str) -> Optional[str]:
    """
    Find the main checkout of the repository containing cwd.

    Args:
        cwd: Any directory inside the main checkout or a linked worktree

    Returns:
        Absolute path of the main checkout, or None outside a repository
    """
    try:
        git_common_dir = git.Git(cwd).rev_parse("--path-format=absolute", "--git-common-dir").strip()
    except (git.exc.GitError, OSError) as e:
        logger.debug(f"rev-parse failed in {cwd}: {e}")
        return _main_path_from_worktree_list(cwd)

    if not git_common_dir:
        return None

    if git_common_dir.endswith("/.git"):
        return os.path.dirname(git_common_dir)

    test_dir = os.path.dirname(git_common_dir) if git_common_dir.endswith(".git") else git_common_dir
    if os.path.isdir(os.path.join(test_dir, ".git")):
        return test_dir

    return None


def _main_path_from_worktree_list(cwd: str) -> Optional[str]:
    """Take the first entry of the porcelain listing as the main checkout."""
    try:
        output = git.Git(cwd).worktree("list", "--porcelain")
    except (git.exc.GitError, OSError) as e:
        logger.debug(f"worktree list failed in {cwd}: {e}")
        return None

    first_line = output.split("\n")[0]
    if first_line.startswith(PORCELAIN_WORKTREE):
        return first_line[len(PORCELAIN_WORKTREE):].strip()
    return None


def get_current_branch(cwd: str) -> Optional[str]:
    """Return the checked-out branch, or None when HEAD is detached."""
    try:
        return git.Git(cwd).symbolic_ref("--short", "HEAD").strip()
    except git.exc.GitCommandError as e:
        logger.debug(f"Could not determine current branch in {cwd}: {e}")
        return None


def has_uncommitted_changes(cwd: str) -> bool:
    """Check for staged, modified or untracked files."""
    try:
        status = git.Git(cwd).status("--porcelain")
    except git.exc.GitCommandError as e:
        raise GitOperationError("status", git_error_message(e)) from e
    return status.strip() != ""


def fetch(cwd: str, remote: str, branch: str) -> str:
    """Fetch a single branch from a remote."""
    try:
        return git.Git(cwd).fetch(remote, branch)
    except git.exc.GitCommandError as e:
        raise GitOperationError("fetch", f"Failed to fetch {remote}/{branch}: {git_error_message(e)}") from e


def reset_hard(cwd: str, ref: str) -> str:
    """Hard-reset the current branch to ref."""
    try:
        return git.Git(cwd).reset("--hard", ref)
    except git.exc.GitCommandError as e:
        raise GitOperationError("reset", f"Failed to reset: {git_error_message(e)}") from e
