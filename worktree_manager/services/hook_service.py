"""Hook execution service for worktree-manager.

Hooks are shell commands configured in ``.worktree.yml`` (or
``.git/.worktree.yml``) that run around worktree creation and removal.
"""

import json
import os
import re
import subprocess
import sys
import time
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from rich.console import Console

from worktree_manager.config import load_config_document
from worktree_manager.constants import (
    ENV_ABSOLUTE_PATH,
    ENV_MAIN,
    ENV_MANAGER_ROOT,
    ENV_PREFIX,
    HOOK_TYPES,
    INHERITED_ENV_VARS,
    WORKTREE_SCOPED_HOOKS,
)
from worktree_manager.logging_config import get_logger
from worktree_manager.models.hook import (
    HookEntry,
    SequenceHook,
    SingleHook,
    StructuredHook,
    parse_hook_entry,
)

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
logger = get_logger(__name__)

_VARIABLE_PATTERN = re.compile(r"\$([A-Z_]+)")


def _env_value(value: Any) -> str:
    """Render a context value the way shell scripts expect to read it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HookManager:
    """Loads hook definitions for a repository and runs them."""

    def __init__(self, repository_path: str, verbose: bool = False):
        """Initialize the hook manager.

        Args:
            repository_path: Path to the repository root
            verbose: Print timestamped diagnostics while hooks run
        """
        self.repository_path = os.path.abspath(repository_path)
        self.verbose = verbose
        self.hooks: Dict[str, Any] = self._load_hooks()
        self._entries: Dict[str, Optional[HookEntry]] = {
            hook_type: parse_hook_entry(self.hooks.get(hook_type))
            for hook_type in HOOK_TYPES
        }

    def _load_hooks(self) -> Dict[str, Any]:
        """Read the hook mapping, preferring the nested ``hooks:`` layout."""
        _, document = load_config_document(self.repository_path, kind="hook")

        hooks = document.get("hooks")
        if isinstance(hooks, dict):
            return hooks

        # Legacy layout: events declared at the top level
        return document

    def has_hook(self, hook_type: str) -> bool:
        """Check if a recognized hook is configured with a non-null value."""
        return hook_type in HOOK_TYPES and self.hooks.get(hook_type) is not None

    def list_hooks(self) -> Dict[str, Any]:
        """Return the configured hooks, limited to recognized, non-null events."""
        return {
            hook_type: self.hooks[hook_type]
            for hook_type in HOOK_TYPES
            if self.has_hook(hook_type)
        }

    def execute_hook(self, hook_type: str, context: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Run the commands configured for a lifecycle event.

        Unknown events and events without configuration succeed without
        running anything, so callers can invoke hooks unconditionally.

        Args:
            hook_type: One of pre_add, post_add, pre_remove, post_remove
            context: Values describing the operation (branch, path, force, ...)

        Returns:
            True if the hook succeeded or was a no-op
        """
        context = dict(context or {})
        self._log_debug(f"Starting hook execution: {hook_type}")

        if not self.has_hook(hook_type):
            return True

        entry = self._entries[hook_type]
        self._log_debug(f"Hook configuration: {json.dumps(self.hooks[hook_type], default=str)}")
        self._log_debug(f"Context: {json.dumps(context, default=str)}")

        if isinstance(entry, SingleHook):
            result = self.execute_command(entry.command, context, hook_type)
        elif isinstance(entry, SequenceHook):
            result = True
            for command in entry.commands:
                if not self.execute_command(command, context, hook_type):
                    result = False
                    break
        elif isinstance(entry, StructuredHook):
            result = self._execute_structured_hook(entry, context, hook_type)
        else:
            logger.warning(f"Ignoring {hook_type} hook with unsupported value: {self.hooks[hook_type]!r}")
            result = True

        self._log_debug(f"Hook execution completed: {hook_type} (result: {result})")
        return result

    def _execute_structured_hook(self, entry: StructuredHook, context: Dict[str, Any], hook_type: str) -> bool:
        """Run a mapping-form hook, honoring pwd and stop_on_error."""
        pwd = self.substitute_variables(entry.pwd, context) if entry.pwd else None

        if entry.commands is not None:
            all_succeeded = True
            for command in entry.commands:
                if not self.execute_command(command, context, hook_type, pwd):
                    all_succeeded = False
                    if entry.stop_on_error:
                        return False
            # With stop_on_error disabled, failures do not fail the hook
            return all_succeeded if entry.stop_on_error else True

        if entry.command:
            return self.execute_command(entry.command, context, hook_type, pwd)

        return True

    def _absolute_path(self, path: Any) -> str:
        """Resolve a context path against the repository root."""
        path = str(path)
        if os.path.isabs(path):
            return path
        return os.path.abspath(os.path.join(self.repository_path, path))

    def build_env_vars(self, context: Mapping[str, Any]) -> Dict[str, str]:
        """
        Build the variables exported to hook commands.

        Args:
            context: Hook context

        Returns:
            Mapping to overlay on the inherited process environment
        """
        env: Dict[str, str] = {}

        for key in INHERITED_ENV_VARS:
            value = os.environ.get(key)
            if value:
                env[key] = value

        env[ENV_MANAGER_ROOT] = self.repository_path
        env[ENV_MAIN] = self.repository_path

        for key, value in context.items():
            env[f"{ENV_PREFIX}{key.upper()}"] = _env_value(value)

        if context.get("path"):
            env[ENV_ABSOLUTE_PATH] = self._absolute_path(context["path"])

        return env

    def default_working_directory(self, hook_type: Optional[str], context: Mapping[str, Any]) -> str:
        """
        Pick the directory a hook command runs in when no pwd is configured.

        post_add and pre_remove run inside the worktree; everything else runs
        in the repository root.
        """
        if hook_type in WORKTREE_SCOPED_HOOKS and context.get("path"):
            return self._absolute_path(context["path"])
        return self.repository_path

    def substitute_variables(self, value: str, context: Mapping[str, Any]) -> str:
        """
        Replace ``$NAME`` tokens in a configured working directory.

        Lookup order: the absolute worktree path, the repository root, other
        WORKTREE_* names from the context, then the process environment.
        Tokens that resolve to nothing are left as written.
        """
        def replace(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name == ENV_ABSOLUTE_PATH and context.get("path"):
                return self._absolute_path(context["path"])
            if name in (ENV_MAIN, ENV_MANAGER_ROOT):
                return self.repository_path
            if name.startswith(ENV_PREFIX):
                key = name[len(ENV_PREFIX):].lower()
                if context.get(key) is None:
                    return match.group(0)
                return _env_value(context[key])
            return os.environ.get(name) or match.group(0)

        return _VARIABLE_PATTERN.sub(replace, value)

    def execute_command(
        self,
        command: str,
        context: Mapping[str, Any],
        hook_type: Optional[str] = None,
        working_dir: Optional[str] = None,
    ) -> bool:
        """
        Run one hook command through the shell.

        Args:
            command: Shell command line
            context: Hook context, exported as WORKTREE_* variables
            hook_type: Event the command belongs to
            working_dir: Explicit working directory overriding the default

        Returns:
            True if the command exited with status 0
        """
        self._log_debug(f"Executing command: {command}")

        env_vars = self.build_env_vars(context)
        worktree_vars = {k: v for k, v in env_vars.items() if k.startswith(ENV_PREFIX)}
        self._log_debug(f"Environment variables: {json.dumps(worktree_vars)}")

        cwd = working_dir or self.default_working_directory(hook_type, context)
        self._log_debug(f"Working directory: {cwd}")

        start_time = time.monotonic()
        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                env={**os.environ, **env_vars},
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            self._log_debug(f"Command could not be started: {e}")
            err_console.print(f"Hook failed: {command}", markup=False, soft_wrap=True)
            return False

        duration_ms = int((time.monotonic() - start_time) * 1000)
        self._log_debug(f"Execution time: {duration_ms}ms")

        if result.stdout:
            sys.stdout.write(result.stdout)
            sys.stdout.flush()
        if result.stderr:
            sys.stderr.write(result.stderr)
            sys.stderr.flush()

        self._log_debug(f"Exit code: {result.returncode}")

        if result.returncode != 0:
            err_console.print(f"Hook failed: {command}", markup=False, soft_wrap=True)
            self._log_debug(f"Command execution failed: exit code {result.returncode}")
            return False

        self._log_debug("Command executed successfully")
        return True

    def _log_debug(self, message: str) -> None:
        """Log a diagnostic line, echoing it with a timestamp in verbose mode."""
        logger.debug(message)
        if not self.verbose:
            return
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        console.print(f"[{timestamp}] [DEBUG] {message}", markup=False, soft_wrap=True)
