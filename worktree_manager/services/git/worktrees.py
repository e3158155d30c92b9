"""Worktree operations service for worktree-manager."""

import os
from typing import Any, Dict, List, Optional

import git

from worktree_manager.constants import (
    BRANCH_REF_PREFIX,
    PORCELAIN_BARE,
    PORCELAIN_BRANCH,
    PORCELAIN_DETACHED,
    PORCELAIN_HEAD,
    PORCELAIN_WORKTREE,
)
from worktree_manager.exceptions import GitOperationError, NotAGitRepositoryError
from worktree_manager.logging_config import get_logger
from worktree_manager.models.worktree import Worktree
from worktree_manager.services.git.errors import git_error_message
from worktree_manager.services.validation_service import InputValidator

logger = get_logger(__name__)


def _build_worktree(fields: Dict[str, Any]) -> Worktree:
    return Worktree(
        path=fields.get("path", ""),
        branch=fields.get("branch") or None,
        head=fields.get("head", ""),
        bare=fields.get("bare", False),
        detached=fields.get("detached", False),
    )


def parse_worktree_list(output: str) -> List[Worktree]:
    """Parse ``git worktree list --porcelain`` output.

    Format::

        worktree /path/to/main
        HEAD 1234abcd...
        branch refs/heads/main

        worktree /path/to/feature
        HEAD 5678ef01...
        detached

    Each ``worktree`` line starts a new record. Unknown attribute lines are
    ignored so newer git versions keep parsing.

    Args:
        output: Raw porcelain output

    Returns:
        Worktrees in the order git listed them
    """
    worktrees: List[Worktree] = []
    current: Dict[str, Any] = {}

    def finish():
        if current and current.get("path"):
            worktrees.append(_build_worktree(current))

    for line in output.split("\n"):
        line = line.strip()
        if not line:
            continue

        if line.startswith(PORCELAIN_WORKTREE):
            finish()
            current = {"path": line[len(PORCELAIN_WORKTREE):]}
        elif line.startswith(PORCELAIN_HEAD):
            current["head"] = line[len(PORCELAIN_HEAD):]
        elif line.startswith(PORCELAIN_BRANCH):
            branch = line[len(PORCELAIN_BRANCH):]
            if branch.startswith(BRANCH_REF_PREFIX):
                branch = branch[len(BRANCH_REF_PREFIX):]
            current["branch"] = branch
        elif line == PORCELAIN_DETACHED:
            current["detached"] = True
        elif line == PORCELAIN_BARE:
            current["bare"] = True

    finish()
    return worktrees


class WorktreeService:
    """Service for managing git worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository

        Raises:
            NotAGitRepositoryError: If repo_path has no .git entry
        """
        self.repo_path = os.path.abspath(repo_path)
        if not os.path.exists(os.path.join(self.repo_path, ".git")):
            raise NotAGitRepositoryError(self.repo_path)

    def _get_repo(self) -> git.Repo:
        """Open the repository.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def _run_worktree_command(self, operation: str, *args: str) -> str:
        """Run ``git worktree <args>`` and convert failures to GitOperationError."""
        try:
            return self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = git_error_message(e)
            logger.error(f"git worktree {operation} failed: {error_msg}")
            raise GitOperationError(operation, error_msg) from e

    def list_worktrees(self) -> List[Worktree]:
        """Get all worktrees of the repository.

        Returns:
            List of Worktree records; empty if git could not list them
        """
        try:
            output = self._get_repo().git.worktree("list", "--porcelain")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Could not list worktrees: {e}")
            return []

        worktrees = parse_worktree_list(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def add(self, path: str, branch: Optional[str] = None, force: bool = False) -> Worktree:
        """Create a worktree checking out an existing branch (or detached HEAD)."""
        InputValidator.validate_input(path, "path")
        if branch:
            InputValidator.validate_input(branch, "branch")

        args = ["add"]
        if force:
            args.append("--force")
        args.append(path)
        if branch:
            args.append(branch)

        self._run_worktree_command("add", *args)
        logger.info(f"Created worktree at {path}")
        return Worktree(path=path, branch=branch or None)

    def add_with_new_branch(self, path: str, branch: str, force: bool = False) -> Worktree:
        """Create a worktree on a new branch started from HEAD."""
        InputValidator.validate_input(path, "path")
        InputValidator.validate_input(branch, "branch")

        args = ["add"]
        if force:
            args.append("--force")
        args.extend(["-b", branch, path])

        self._run_worktree_command("add", *args)
        logger.info(f"Created worktree at {path} on new branch {branch}")
        return Worktree(path=path, branch=branch)

    def add_tracking_branch(
        self, path: str, local_branch: str, remote_branch: str, force: bool = False
    ) -> Worktree:
        """Fetch a remote branch and create a worktree on a local branch tracking it.

        Args:
            path: Worktree location
            local_branch: Name of the branch to create
            remote_branch: Remote ref such as ``origin/feature``
            force: Pass --force to git worktree add
        """
        InputValidator.validate_input(path, "path")
        InputValidator.validate_input(local_branch, "branch")

        remote, _, branch_name = remote_branch.partition("/")
        try:
            self._get_repo().git.fetch(remote, branch_name)
        except git.exc.GitCommandError as e:
            raise GitOperationError(
                "fetch", f"Failed to fetch remote branch: {git_error_message(e)}"
            ) from e

        args = ["add"]
        if force:
            args.append("--force")
        args.extend(["-b", local_branch, path, remote_branch])

        self._run_worktree_command("add", *args)
        logger.info(f"Created worktree at {path} tracking {remote_branch}")
        return Worktree(path=path, branch=local_branch)

    def remove(self, path: str, force: bool = False) -> None:
        """Remove the worktree at path.

        Raises:
            GitOperationError: If git refuses, e.g. the worktree has local changes
        """
        InputValidator.validate_input(path, "path")

        args = ["remove"]
        if force:
            args.append("--force")
        args.append(path)

        self._run_worktree_command("remove", *args)
        logger.info(f"Removed worktree at {path}")

    def prune(self) -> None:
        """Prune metadata of worktrees whose directories are gone."""
        self._run_worktree_command("prune", "prune")
        logger.info("Pruned orphaned worktree metadata")

    def branch_exists(self, branch: str) -> bool:
        """Check if a local branch exists."""
        try:
            return self._get_repo().git.branch("--list", branch).strip() != ""
        except git.exc.GitCommandError as e:
            logger.debug(f"Could not check branch {branch}: {e}")
            return False
