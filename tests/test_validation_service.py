"""Tests for InputValidator"""
import pytest

from worktree_manager.exceptions import InvalidInputError
from worktree_manager.services.validation_service import InputValidator


class TestValidateInput:
    """Test rejection of unsafe paths and branch names."""

    @pytest.mark.parametrize("value", ["a;rm -rf /", "a&b", "a|b", "a`b`", "$HOME", "a<b", "a>b", "a\\b"])
    def test_dangerous_characters(self, value):
        """Test that shell metacharacters are rejected for paths."""
        with pytest.raises(InvalidInputError, match="dangerous characters"):
            InputValidator.validate_input(value, "path")

    def test_safe_path(self):
        """Test that ordinary paths pass."""
        InputValidator.validate_input("../worktrees/feature-1", "path")

    @pytest.mark.parametrize("value", ["has space", "a~b", "a^b", "a:b", "a?b", "a*b", "a[b"])
    def test_forbidden_branch_characters(self, value):
        """Test characters git does not allow in branch names."""
        with pytest.raises(InvalidInputError, match="forbidden characters"):
            InputValidator.validate_input(value, "branch")

    def test_leading_hyphen(self):
        """Test that branch names cannot look like options."""
        with pytest.raises(InvalidInputError, match="hyphen"):
            InputValidator.validate_input("-delete", "branch")

    def test_path_may_contain_branch_only_characters(self):
        """Test that branch-only rules do not apply to paths."""
        InputValidator.validate_input("my worktree", "path")

    def test_valid_branch(self):
        """Test that a nested branch name passes."""
        InputValidator.validate_input("feature/login", "branch")


class TestIsValidBranchName:
    """Test the branch naming rules."""

    @pytest.mark.parametrize("name", ["main", "feature/login", "fix-123", "release_1.2"])
    def test_valid(self, name):
        assert InputValidator.is_valid_branch_name(name) is True

    @pytest.mark.parametrize(
        "name",
        ["", "   ", "has space", "a..b", ".hidden", "-opt", "trailing.", "trailing-", "a~1", "a^", "a:b", "a?", "a*", "a[0]"],
    )
    def test_invalid(self, name):
        assert InputValidator.is_valid_branch_name(name) is False
