"""Tests for WorktreeService"""
import shutil
from unittest.mock import patch

import git
import pytest

from worktree_manager.exceptions import GitOperationError, InvalidInputError, NotAGitRepositoryError
from worktree_manager.services.git import WorktreeService


class TestWorktreeServiceInit:
    """Test WorktreeService initialization."""

    def test_init_with_repo_path(self, git_repo):
        """Test initialization with a repository path."""
        service = WorktreeService(git_repo.working_dir)
        assert service.repo_path == git_repo.working_dir
        assert service._get_repo().working_dir == git_repo.working_dir

    def test_init_with_invalid_path(self, temp_dir):
        """Test initialization with a directory that is not a repository."""
        with pytest.raises(NotAGitRepositoryError):
            WorktreeService(str(temp_dir))


class TestListWorktrees:
    """Test worktree listing."""

    def test_main_only(self, git_repo):
        """Test a repository without linked worktrees."""
        worktrees = WorktreeService(git_repo.working_dir).list_worktrees()

        assert len(worktrees) == 1
        assert worktrees[0].path == git_repo.working_dir
        assert worktrees[0].branch == "main"
        assert len(worktrees[0].head) == 40

    def test_with_linked_worktree(self, git_repo_with_worktree):
        """Test that linked worktrees follow the main checkout."""
        repo, worktree_path = git_repo_with_worktree

        worktrees = WorktreeService(repo.working_dir).list_worktrees()

        assert [wt.path for wt in worktrees] == [repo.working_dir, str(worktree_path)]
        assert worktrees[1].branch == "feature"

    def test_detached_worktree(self, git_repo, temp_dir):
        """Test that a detached worktree has no branch."""
        git_repo.git.worktree("add", "--detach", str(temp_dir / "detached"))

        worktrees = WorktreeService(git_repo.working_dir).list_worktrees()

        assert worktrees[1].detached is True
        assert worktrees[1].branch is None

    def test_git_failure_returns_empty(self, git_repo):
        """Test that listing failures are not raised."""
        service = WorktreeService(git_repo.working_dir)

        with patch.object(service, "_get_repo", side_effect=git.exc.GitCommandError("worktree", 128)):
            assert service.list_worktrees() == []


class TestAddWorktree:
    """Test worktree creation."""

    def test_add_existing_branch(self, git_repo, temp_dir):
        """Test checking out an existing branch."""
        git_repo.git.branch("topic")
        path = str(temp_dir / "topic")

        result = WorktreeService(git_repo.working_dir).add(path, "topic")

        assert result.path == path
        assert result.branch == "topic"
        assert (temp_dir / "topic" / "README.md").exists()

    def test_add_with_new_branch(self, git_repo, temp_dir):
        """Test creating a new branch with the worktree."""
        path = str(temp_dir / "new")
        service = WorktreeService(git_repo.working_dir)

        result = service.add_with_new_branch(path, "new-branch")

        assert result.branch == "new-branch"
        assert service.branch_exists("new-branch") is True

    def test_add_unknown_branch(self, git_repo, temp_dir):
        """Test that git errors become GitOperationError."""
        with pytest.raises(GitOperationError) as exc_info:
            WorktreeService(git_repo.working_dir).add(str(temp_dir / "x"), "no-such-branch")
        assert exc_info.value.operation == "add"

    def test_add_rejects_unsafe_path(self, git_repo):
        """Test that shell metacharacters never reach git."""
        with pytest.raises(InvalidInputError):
            WorktreeService(git_repo.working_dir).add("../x;rm -rf /")

    def test_add_tracking_branch_without_remote(self, git_repo, temp_dir):
        """Test that a failed fetch is reported as a fetch error."""
        with pytest.raises(GitOperationError) as exc_info:
            WorktreeService(git_repo.working_dir).add_tracking_branch(
                str(temp_dir / "tracked"), "develop", "origin/develop"
            )
        assert exc_info.value.operation == "fetch"

    def test_add_tracking_branch(self, git_repo, temp_dir):
        """Test tracking a branch of a real remote."""
        remote_repo = git.Repo.clone_from(git_repo.working_dir, str(temp_dir / "upstream"))
        remote_repo.git.branch("develop")
        git_repo.create_remote("origin", remote_repo.working_dir)

        result = WorktreeService(git_repo.working_dir).add_tracking_branch(
            str(temp_dir / "tracked"), "develop", "origin/develop"
        )

        assert result.branch == "develop"
        assert (temp_dir / "tracked" / "README.md").exists()
        remote_repo.close()


class TestRemoveWorktree:
    """Test worktree removal."""

    def test_remove(self, git_repo_with_worktree):
        """Test removing a clean worktree."""
        repo, worktree_path = git_repo_with_worktree
        service = WorktreeService(repo.working_dir)

        service.remove(str(worktree_path))

        assert not worktree_path.exists()
        assert len(service.list_worktrees()) == 1

    def test_remove_dirty_requires_force(self, git_repo_with_worktree):
        """Test that local changes block removal unless forced."""
        repo, worktree_path = git_repo_with_worktree
        (worktree_path / "untracked.txt").write_text("work in progress")
        service = WorktreeService(repo.working_dir)

        with pytest.raises(GitOperationError, match="contains modified or untracked files"):
            service.remove(str(worktree_path))

        service.remove(str(worktree_path), force=True)
        assert not worktree_path.exists()

    def test_prune(self, git_repo_with_worktree):
        """Test that metadata of deleted directories is pruned."""
        repo, worktree_path = git_repo_with_worktree
        service = WorktreeService(repo.working_dir)
        shutil.rmtree(worktree_path)

        service.prune()

        assert len(service.list_worktrees()) == 1

    def test_branch_exists(self, git_repo):
        """Test local branch lookup."""
        service = WorktreeService(git_repo.working_dir)
        assert service.branch_exists("main") is True
        assert service.branch_exists("missing") is False
