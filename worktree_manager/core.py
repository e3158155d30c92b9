"""Core functionality for worktree-manager"""

import os
import sys
from importlib import resources
from typing import Any, Dict, List, Optional

from rich.console import Console

from worktree_manager.config import Config, load_config
from worktree_manager.constants import (
    CONFIG_FILE_NAME,
    CONTEXT_WORKTREE_PATH,
    DEFAULT_REMOTE,
    DIRTY_WORKTREE_MESSAGE,
    EXAMPLE_CONFIG_RESOURCE,
    HOOK_POST_ADD,
    HOOK_POST_REMOVE,
    HOOK_PRE_ADD,
    HOOK_PRE_REMOVE,
)
from worktree_manager.exceptions import (
    GitOperationError,
    HookFailedError,
    InvalidInputError,
    NotAGitRepositoryError,
    NotMainRepositoryError,
    WorktreeConflictError,
    WorktreeManagerError,
    WorktreeNotFoundError,
)
from worktree_manager.logging_config import get_logger
from worktree_manager.models.worktree import Worktree
from worktree_manager.services.display_service import DisplayService
from worktree_manager.services.git import WorktreeService, repository
from worktree_manager.services.hook_service import HookManager
from worktree_manager.services.validation_service import InputValidator
from worktree_manager.ui import confirm, is_interactive, select_worktree

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)

FORCE_REMOVE_QUESTION = "Would you like to force remove the worktree? This will delete all uncommitted changes."
FORCE_REMOVE_ALL_QUESTION = "Would you like to force remove these worktrees? This will delete all uncommitted changes."


def _print(message: str) -> None:
    console.print(message, markup=False, soft_wrap=True)


def _print_error(message: str) -> None:
    err_console.print(f"Error: {message}", style="red", markup=False, soft_wrap=True)


class WorktreeManager:
    """Runs the worktree commands for the repository at repo_path."""

    def __init__(
        self,
        repo_path: str,
        config: Optional[Config] = None,
        verbose: bool = False,
        no_hooks: bool = False,
    ):
        """Initialize WorktreeManager.

        Args:
            repo_path: Directory the command runs from (main checkout or a worktree)
            config: Repository config; loaded from repo_path when omitted
            verbose: Show hook diagnostics
            no_hooks: Skip all hook execution
        """
        self.repo_path = os.path.abspath(repo_path)
        self.config = config if config is not None else load_config(self.repo_path)
        self.verbose = verbose
        self.no_hooks = no_hooks
        self.display = DisplayService(self.repo_path)
        self._hook_manager: Optional[HookManager] = None

    @property
    def hook_manager(self) -> HookManager:
        if self._hook_manager is None:
            self._hook_manager = HookManager(self.repo_path, verbose=self.verbose)
        return self._hook_manager

    def _run_hook(self, hook_type: str, context: Dict[str, Any]) -> bool:
        if self.no_hooks:
            return True
        return self.hook_manager.execute_hook(hook_type, context)

    def _require_main_repository(self) -> None:
        if not repository.is_main_repository(self.repo_path):
            raise NotMainRepositoryError(repository.find_main_repository_path(self.repo_path))

    def _find_main_repository(self) -> str:
        main_repository_path = repository.find_main_repository_path(self.repo_path)
        if not main_repository_path:
            raise NotAGitRepositoryError(self.repo_path)
        return main_repository_path

    def add(
        self,
        name_or_path: str,
        branch: Optional[str] = None,
        new_branch: Optional[str] = None,
        track: Optional[str] = None,
        force: bool = False,
    ) -> int:
        """
        Create a worktree, running pre_add/post_add hooks around it.

        Args:
            name_or_path: Bare name (placed under worktrees_dir) or path
            branch: Existing branch to check out; "remote/branch" tracks a remote
            new_branch: Name of a new branch to create (-b)
            track: Remote branch to track (-t), e.g. "origin/develop"
            force: Create even if the target directory exists

        Returns:
            Exit code
        """
        self._require_main_repository()

        if not name_or_path or not name_or_path.strip():
            raise InvalidInputError("Name or path cannot be empty")

        path = self.config.resolve_worktree_path(name_or_path, self.repo_path)
        target_branch = new_branch or branch

        remote_branch = None
        if track:
            remote_branch = track
            if not target_branch:
                target_branch = track.split("/", 1)[-1]
        elif branch and "/" in branch:
            # "origin/feature" checks out a local "feature" tracking the remote
            remote_branch = branch
            target_branch = new_branch or branch.split("/", 1)[1]

        if target_branch and not InputValidator.is_valid_branch_name(target_branch):
            raise InvalidInputError(
                f"Invalid branch name '{target_branch}'. "
                "Branch names cannot contain spaces or special characters."
            )

        service = WorktreeService(self.repo_path)
        self._validate_no_conflicts(service, path, target_branch, creating_branch=bool(new_branch), force=force)

        context: Dict[str, Any] = {"branch": target_branch, "force": force, "path": path}
        if not self._run_hook(HOOK_PRE_ADD, context):
            raise HookFailedError(HOOK_PRE_ADD, "worktree creation")

        try:
            if remote_branch:
                result = service.add_tracking_branch(path, target_branch, remote_branch, force=force)
            elif target_branch and new_branch:
                result = service.add_with_new_branch(path, target_branch, force=force)
            else:
                result = service.add(path, target_branch, force=force)
        except WorktreeManagerError as e:
            _print_error(str(e))
            self._run_hook(HOOK_POST_ADD, {**context, "error": str(e), "success": False})
            return 1

        self.display.show_created(result)
        self._run_hook(HOOK_POST_ADD, {**context, "success": True, CONTEXT_WORKTREE_PATH: result.path})
        return 0

    def _validate_no_conflicts(
        self,
        service: WorktreeService,
        path: str,
        branch: Optional[str],
        creating_branch: bool,
        force: bool,
    ) -> None:
        """Refuse an add that would clash with an existing worktree, branch or directory."""
        normalized_path = os.path.abspath(path)
        existing = service.list_worktrees()

        for worktree in existing:
            if os.path.abspath(worktree.path) == normalized_path:
                raise WorktreeConflictError(
                    f"A worktree already exists at path '{path}'\n"
                    f"  Existing worktree: {worktree.path} ({worktree.branch})\n"
                    "  Choose a different path or remove the existing worktree first"
                )

        if branch and not creating_branch:
            for worktree in existing:
                if worktree.branch == branch:
                    raise WorktreeConflictError(
                        f"Branch '{branch}' is already checked out in another worktree\n"
                        f"  Existing worktree: {worktree.path} ({worktree.branch})\n"
                        "  Use a different branch name or -b option to create a new branch"
                    )

        if branch and creating_branch and service.branch_exists(branch):
            raise WorktreeConflictError(
                f"Branch '{branch}' already exists\n"
                "  Use a different branch name or checkout the existing branch"
            )

        if not force and os.path.isdir(normalized_path):
            try:
                has_files = bool(os.listdir(normalized_path))
            except OSError as e:
                logger.debug(f"Could not read {normalized_path}: {e}")
                has_files = False
            if has_files:
                raise WorktreeConflictError(
                    f"Directory '{path}' already exists and is not empty\n"
                    "  Use --force to override or choose a different path"
                )

    def remove(self, name_or_path: Optional[str] = None, force: bool = False, remove_all: bool = False) -> int:
        """
        Remove one worktree (or all of them), running pre_remove/post_remove hooks.

        Args:
            name_or_path: Worktree to remove; prompts interactively when omitted
            force: Remove even if the worktree has local changes
            remove_all: Remove every linked worktree

        Returns:
            Exit code
        """
        self._require_main_repository()
        service = WorktreeService(self.repo_path)

        if remove_all:
            if name_or_path:
                raise InvalidInputError("Cannot specify both --all and a specific worktree")
            worktrees = service.list_worktrees()
            if not worktrees:
                raise WorktreeNotFoundError("No worktrees found.")
            return self._remove_all(service, worktrees, force)

        target: Optional[Worktree] = None
        if name_or_path:
            path = self.config.resolve_worktree_path(name_or_path, self.repo_path)
        else:
            removable = [wt for wt in service.list_worktrees() if not repository.is_main_repository_path(wt.path)]
            if not removable:
                raise WorktreeNotFoundError("No removable worktrees found (only main repository exists).")
            if not is_interactive():
                raise InvalidInputError("Interactive mode requires a TTY. Please specify a worktree name.")
            target = select_worktree(removable, self.repo_path)
            if target is None:
                _print("\nCancelled.")
                return 0
            path = target.path

        if repository.is_main_repository_path(path):
            raise InvalidInputError("Cannot remove the main repository")

        if target is None:
            normalized_path = os.path.abspath(path)
            target = next(
                (wt for wt in service.list_worktrees() if os.path.abspath(wt.path) == normalized_path),
                None,
            )
            if target is None:
                raise WorktreeNotFoundError(f"Worktree not found at path: {self.display.path(path)}")

        context: Dict[str, Any] = {"branch": target.branch, "force": force, "path": target.path}
        if not self._run_hook(HOOK_PRE_REMOVE, context):
            raise HookFailedError(HOOK_PRE_REMOVE, "worktree removal")

        try:
            service.remove(path, force=force)
        except WorktreeManagerError as e:
            error_message = str(e)
            _print_error(error_message)

            if DIRTY_WORKTREE_MESSAGE in error_message and not force and is_interactive():
                if confirm(FORCE_REMOVE_QUESTION):
                    try:
                        service.remove(path, force=True)
                    except WorktreeManagerError as force_error:
                        _print_error(str(force_error))
                    else:
                        _print(f"Removed: {self.display.path(target.path)}")
                        self._run_hook(HOOK_POST_REMOVE, {**context, "success": True})
                        return 0
                else:
                    _print("Removal cancelled.")

            self._run_hook(HOOK_POST_REMOVE, {**context, "error": error_message, "success": False})
            return 1

        _print(f"Removed: {self.display.path(target.path)}")
        self._run_hook(HOOK_POST_REMOVE, {**context, "success": True})
        return 0

    def _remove_all(self, service: WorktreeService, worktrees: List[Worktree], force: bool) -> int:
        """Remove every linked worktree, one at a time."""
        removable = [wt for wt in worktrees if not repository.is_main_repository_path(wt.path)]
        if not removable:
            _print("No worktrees to remove (only main repository found).")
            return 0

        if is_interactive():
            _print(f"Removing {len(removable)} worktrees...")
            if not confirm(f"Are you sure you want to remove all {len(removable)} worktrees?"):
                _print("Cancelled.")
                return 0
        elif not force:
            raise InvalidInputError(
                "Removing all worktrees requires confirmation.\n"
                "Use --force to remove all worktrees without confirmation."
            )

        removed_count = 0
        failed_count = 0
        dirty_worktrees: List[Worktree] = []

        for worktree in removable:
            display_path = self.display.path(worktree.path)
            _print(f"\nRemoving worktree: {display_path}")

            context: Dict[str, Any] = {"branch": worktree.branch, "force": force, "path": worktree.path}
            if not self._run_hook(HOOK_PRE_REMOVE, context):
                _print("  Error: pre_remove hook failed. Skipping this worktree.")
                failed_count += 1
                continue

            try:
                service.remove(worktree.path, force=force)
            except WorktreeManagerError as e:
                error_message = str(e)
                _print(f"  Error: {error_message}")
                failed_count += 1
                if DIRTY_WORKTREE_MESSAGE in error_message:
                    dirty_worktrees.append(worktree)
                self._run_hook(HOOK_POST_REMOVE, {**context, "error": error_message, "success": False})
                continue

            _print(f"  Worktree removed: {display_path}")
            removed_count += 1
            self._run_hook(HOOK_POST_REMOVE, {**context, "success": True})

        self.display.show_removal_summary(removed_count, failed_count)

        if dirty_worktrees and not force and is_interactive():
            self.display.show_dirty_worktrees(dirty_worktrees)
            if confirm(FORCE_REMOVE_ALL_QUESTION):
                _print("\nForce removing worktrees with uncommitted changes...")
                for worktree in dirty_worktrees:
                    display_path = self.display.path(worktree.path)
                    _print(f"\nRemoving worktree: {display_path}")
                    try:
                        service.remove(worktree.path, force=True)
                    except WorktreeManagerError as e:
                        _print(f"  Error: {e}")
                        continue

                    _print(f"  Worktree removed: {display_path}")
                    removed_count += 1
                    failed_count -= 1
                    self._run_hook(
                        HOOK_POST_REMOVE,
                        {"branch": worktree.branch, "force": True, "path": worktree.path, "success": True},
                    )

                self.display.show_removal_summary(removed_count, failed_count, title="Updated Summary")

        return 1 if failed_count > 0 else 0

    def list_worktrees(self) -> int:
        """Print all worktrees; works from the main checkout or any worktree."""
        main_repository_path = self._find_main_repository()
        running_from_worktree = not repository.is_main_repository(self.repo_path)

        worktrees = WorktreeService(main_repository_path).list_worktrees()
        self.display.show_worktree_list(
            worktrees, main_repository_path if running_from_worktree else None
        )
        return 0

    def jump(self, name: Optional[str] = None) -> int:
        """
        Print the path of a worktree, for use with ``cd "$(wm jump NAME)"``.

        Only the path goes to stdout; menus and errors go to stderr.
        """
        main_repository_path = self._find_main_repository()
        worktrees = WorktreeService(main_repository_path).list_worktrees()
        if not worktrees:
            raise WorktreeNotFoundError("No worktrees found")

        if name:
            target = next(
                (
                    wt for wt in worktrees
                    if name in wt.path
                    or (wt.branch and name in wt.branch)
                    or os.path.basename(wt.path) == name
                ),
                None,
            )
            if target is None:
                raise WorktreeNotFoundError(f"Worktree '{name}' not found")
        else:
            # stdout may be captured by $(...); only stdin has to be a terminal
            if not sys.stdin.isatty():
                raise InvalidInputError("Interactive mode requires TTY. Specify a worktree name.")
            target = select_worktree(worktrees, self.repo_path)
            if target is None:
                err_console.print("\nCancelled.")
                return 0

        sys.stdout.write(f"{target.path}\n")
        return 0

    def reset(self, force: bool = False) -> int:
        """Reset the current worktree branch to origin/<main branch>."""
        if repository.is_main_repository(self.repo_path):
            raise WorktreeManagerError(
                "Cannot run reset from the main repository. This command must be run from a worktree."
            )

        current_branch = repository.get_current_branch(self.repo_path)
        if not current_branch:
            raise WorktreeManagerError("Could not determine current branch.")

        main_branch = self.config.main_branch_name
        if current_branch == main_branch:
            raise WorktreeManagerError(f"Cannot reset the main branch '{main_branch}'.")

        if not force:
            try:
                dirty = repository.has_uncommitted_changes(self.repo_path)
            except GitOperationError as e:
                logger.warning(f"Warning: Could not check git status: {e}")
                dirty = False
            if dirty:
                raise WorktreeManagerError("You have uncommitted changes. Use --force to discard them.")

        upstream = f"{DEFAULT_REMOTE}/{main_branch}"
        _print(f"Resetting branch '{current_branch}' to {upstream}...")

        for output in (
            repository.fetch(self.repo_path, DEFAULT_REMOTE, main_branch),
            repository.reset_hard(self.repo_path, upstream),
        ):
            if output:
                _print(output)

        _print(f"Successfully reset '{current_branch}' to {upstream}")
        return 0

    def init(self, force: bool = False) -> int:
        """Write a starter .worktree.yml into the main checkout."""
        self._require_main_repository()

        config_file = os.path.join(self.repo_path, CONFIG_FILE_NAME)
        if os.path.exists(config_file) and not force:
            raise WorktreeConflictError(f"{CONFIG_FILE_NAME} already exists. Use --force to overwrite.")

        example = resources.files("worktree_manager") / "data" / EXAMPLE_CONFIG_RESOURCE
        try:
            with open(config_file, "w", encoding="utf-8") as f:
                f.write(example.read_text(encoding="utf-8"))
        except OSError as e:
            raise WorktreeManagerError(f"Failed to create configuration file: {e}") from e

        _print(f"Created {CONFIG_FILE_NAME} from example.")
        _print("Edit this file to customize your worktree configuration.")
        return 0
