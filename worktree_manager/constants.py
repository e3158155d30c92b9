"""Shared constants for worktree-manager."""

from typing import List, Tuple


# Hook/config file locations, relative to the repository root, in priority order
CONFIG_FILES: Tuple[str, ...] = (
    ".worktree.yml",
    ".git/.worktree.yml",
)
CONFIG_FILE_NAME = ".worktree.yml"
EXAMPLE_CONFIG_RESOURCE = "worktree.yml.example"

# Lifecycle events, in execution order around add/remove
HOOK_PRE_ADD = "pre_add"
HOOK_POST_ADD = "post_add"
HOOK_PRE_REMOVE = "pre_remove"
HOOK_POST_REMOVE = "post_remove"

HOOK_TYPES: Tuple[str, ...] = (
    HOOK_PRE_ADD,
    HOOK_POST_ADD,
    HOOK_PRE_REMOVE,
    HOOK_POST_REMOVE,
)

# Hooks that run inside the worktree unless an explicit pwd is configured
WORKTREE_SCOPED_HOOKS: Tuple[str, ...] = (HOOK_POST_ADD, HOOK_PRE_REMOVE)

# Environment exposed to hook commands
ENV_PREFIX = "WORKTREE_"
ENV_MANAGER_ROOT = "WORKTREE_MANAGER_ROOT"
ENV_MAIN = "WORKTREE_MAIN"
ENV_ABSOLUTE_PATH = "WORKTREE_ABSOLUTE_PATH"
INHERITED_ENV_VARS: List[str] = ["PATH", "HOME", "USER", "SHELL"]
# post_add context key for the created worktree, exported as WORKTREE_WORKTREEPATH
CONTEXT_WORKTREE_PATH = "worktreepath"

# Config defaults
DEFAULT_MAIN_BRANCH_NAME = "main"
DEFAULT_WORKTREES_DIR = "../"
DEFAULT_REMOTE = "origin"

# Debug log written by --debug, under the home directory
LOG_DIR_NAME = ".worktree-manager"
LOG_FILE_NAME = "worktree-manager.log"

# Porcelain listing markers
PORCELAIN_WORKTREE = "worktree "
PORCELAIN_HEAD = "HEAD "
PORCELAIN_BRANCH = "branch "
PORCELAIN_DETACHED = "detached"
PORCELAIN_BARE = "bare"
BRANCH_REF_PREFIX = "refs/heads/"

# git stderr fragment for removals blocked by local changes
DIRTY_WORKTREE_MESSAGE = "contains modified or untracked files"

# Display
DETACHED_LABEL = "detached"
DETACHED_HEAD_LABEL = "HEAD (detached)"
CURRENT_MARKER = " (current)"
