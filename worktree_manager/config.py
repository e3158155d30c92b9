"""Configuration handling for worktree-manager"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import yaml

from worktree_manager.constants import (
    CONFIG_FILES,
    DEFAULT_MAIN_BRANCH_NAME,
    DEFAULT_WORKTREES_DIR,
)
from worktree_manager.logging_config import get_logger

logger = get_logger(__name__)


def find_config_file(repository_path: str) -> Optional[str]:
    """
    Locate the first existing config file for a repository.

    Args:
        repository_path: Absolute path of the repository root

    Returns:
        Path of the config file, or None if there is none
    """
    for name in CONFIG_FILES:
        path = os.path.join(repository_path, name)
        if os.path.exists(path):
            return path
    return None


def load_config_document(repository_path: str, kind: str = "config") -> Tuple[Optional[str], Dict[str, Any]]:
    """
    Read and parse the repository's config document.

    A missing file, an unreadable or malformed file, and a document that is
    not a mapping all yield an empty mapping. Failures are reported as a
    warning and never raised.

    Args:
        repository_path: Absolute path of the repository root
        kind: Word used in the warning ("config" or "hook")

    Returns:
        Tuple of (config file path or None, parsed mapping)
    """
    config_file = find_config_file(repository_path)
    if not config_file:
        return None, {}

    try:
        with open(config_file, encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
        if not isinstance(document, dict):
            raise ValueError(f"expected a mapping, got {type(document).__name__}")
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.warning(f"Warning: Failed to load {kind} file {config_file}: {e}")
        return config_file, {}

    logger.debug(f"Loaded {kind} file {config_file}")
    return config_file, document


@dataclass
class Config:
    """Repository settings read from .worktree.yml, with validation."""

    main_branch_name: str = DEFAULT_MAIN_BRANCH_NAME
    worktrees_dir: str = DEFAULT_WORKTREES_DIR

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_main_branch_name()
        self._validate_worktrees_dir()

    def _validate_main_branch_name(self):
        """Validate main_branch_name is not empty."""
        if not isinstance(self.main_branch_name, str) or not self.main_branch_name.strip():
            raise ValueError("main_branch_name cannot be empty")
        self.main_branch_name = self.main_branch_name.strip()

    def _validate_worktrees_dir(self):
        """Validate worktrees_dir is not empty."""
        if not isinstance(self.worktrees_dir, str) or not self.worktrees_dir.strip():
            raise ValueError("worktrees_dir cannot be empty")

    def resolve_worktree_path(self, name_or_path: str, repository_path: str) -> str:
        """
        Turn a worktree name or path into the path git should use.

        Args:
            name_or_path: Bare name (placed under worktrees_dir), relative path
                or absolute path
            repository_path: Absolute path of the repository root

        Returns:
            Resolved path
        """
        if os.path.isabs(name_or_path):
            return name_or_path

        if os.sep in name_or_path or "/" in name_or_path:
            return os.path.abspath(os.path.join(repository_path, name_or_path))

        base_dir = os.path.abspath(os.path.join(repository_path, self.worktrees_dir))
        return os.path.join(base_dir, name_or_path)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "main_branch_name": self.main_branch_name,
            "worktrees_dir": self.worktrees_dir,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary.

        Unusable values fall back to the defaults with a warning, so a bad
        setting never stops a command. Hooks are read by HookManager.
        """
        settings = {}
        for key in ("main_branch_name", "worktrees_dir"):
            value = config_dict.get(key)
            # YAML keys left empty come through as None
            if value is None:
                continue
            if not isinstance(value, str) or not value.strip():
                logger.warning(f"Warning: Ignoring invalid {key} {value!r} in config; using the default")
                continue
            settings[key] = value
        return cls(**settings)


def load_config(repository_path: str) -> Config:
    """Load the Config for a repository, falling back to defaults."""
    _, document = load_config_document(repository_path)
    return Config.from_dict(document)
