"""Pytest fixtures for worktree-manager tests"""
import tempfile
from pathlib import Path

import git
import pytest
import yaml


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve symlinks so paths compare equal to what git reports
        yield Path(tmpdir).resolve()


@pytest.fixture
def write_config(temp_dir):
    """Write a .worktree.yml (or another config location) under a root directory."""
    def _write(content, root=None, name=".worktree.yml"):
        path = Path(root or temp_dir) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_text(yaml.safe_dump(content))
        return path

    return _write


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_worktree(git_repo, temp_dir):
    """Create a Git repository with one linked worktree on branch 'feature'."""
    worktree_path = temp_dir / "feature"
    git_repo.git.worktree("add", "-b", "feature", str(worktree_path))

    yield git_repo, worktree_path


@pytest.fixture
def main_branch_porcelain():
    """Porcelain listing with a main checkout, a branch worktree and a detached one."""
    return (
        "worktree /repo\n"
        "HEAD 1111111111111111111111111111111111111111\n"
        "branch refs/heads/main\n"
        "\n"
        "worktree /worktrees/feature\n"
        "HEAD 2222222222222222222222222222222222222222\n"
        "branch refs/heads/feature/login\n"
        "\n"
        "worktree /worktrees/detached\n"
        "HEAD 3333333333333333333333333333333333333333\n"
        "detached\n"
        "\n"
    )
