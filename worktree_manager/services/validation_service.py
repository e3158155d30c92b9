"""Input validation service for worktree-manager."""

import re

from worktree_manager.exceptions import InvalidInputError

# Characters a shell would interpret; never pass them on to git
_DANGEROUS_CHARS = re.compile(r"[;&|`$<>\\]")
_FORBIDDEN_BRANCH_CHARS = re.compile(r"[\s~^:?*\[\]\\]")

_INVALID_BRANCH_PATTERNS = [
    re.compile(r"\s"),           # whitespace
    re.compile(r"\.\."),         # consecutive dots
    re.compile(r"^[.-]"),        # leading dot or dash
    re.compile(r"[.-]$"),        # trailing dot or dash
    re.compile(r"[~^:?*\[\]\\]"),
]


class InputValidator:
    """Validation for paths and branch names handed to git."""

    @staticmethod
    def validate_input(value: str, kind: str) -> None:
        """
        Reject a path or branch name that is unsafe to pass to git.

        Args:
            value: The user-supplied value
            kind: Either "path" or "branch"

        Raises:
            InvalidInputError: If the value is rejected
        """
        if _DANGEROUS_CHARS.search(value):
            raise InvalidInputError(f"Invalid {kind}: contains potentially dangerous characters")

        if kind == "branch":
            if _FORBIDDEN_BRANCH_CHARS.search(value):
                raise InvalidInputError("Invalid branch name: contains forbidden characters")
            if value.startswith("-"):
                raise InvalidInputError("Invalid branch name: cannot start with hyphen")

    @staticmethod
    def is_valid_branch_name(name: str) -> bool:
        """
        Check a branch name against the basic git naming rules.

        Args:
            name: Branch name

        Returns:
            True if the name is acceptable
        """
        if not name or not name.strip():
            return False
        return not any(pattern.search(name) for pattern in _INVALID_BRANCH_PATTERNS)
