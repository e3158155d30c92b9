"""Tests for the command-line interface"""
import importlib
from unittest.mock import patch

import pytest

from worktree_manager.__version__ import __version__
from worktree_manager.cli import main, parse_args

# The package re-exports main(), which shadows the submodule attribute
cli_main = importlib.import_module("worktree_manager.cli.main")


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep main() from replacing the root logging handlers during tests."""
    with patch.object(cli_main, "setup_logging") as mock_setup:
        yield mock_setup


class TestParseArgs:
    """Test argument parsing."""

    def test_add_positional(self):
        args = parse_args(["add", "feature", "origin/feature"])
        assert args.command == "add"
        assert args.name_or_path == "feature"
        assert args.branch == "origin/feature"
        assert args.new_branch is None
        assert args.force is False
        assert args.no_hooks is False

    def test_add_options(self):
        args = parse_args(["add", "wt", "-b", "new", "-t", "origin/dev", "-f", "--no-hooks"])
        assert args.new_branch == "new"
        assert args.track == "origin/dev"
        assert args.force is True
        assert args.no_hooks is True

    def test_remove_alias(self):
        args = parse_args(["rm", "--all", "-f"])
        assert args.command == "rm"
        assert args.name_or_path is None
        assert args.remove_all is True
        assert args.force is True

    def test_list_alias(self):
        assert parse_args(["ls"]).command == "ls"

    def test_jump_optional_name(self):
        assert parse_args(["jump"]).worktree is None
        assert parse_args(["jump", "feature"]).worktree == "feature"

    def test_global_flags(self):
        args = parse_args(["-v", "--debug", "list"])
        assert args.verbose is True
        assert args.debug is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """Test the main entry point."""

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_list(self, git_repo, monkeypatch, capsys, no_logging_setup):
        monkeypatch.chdir(git_repo.working_dir)

        assert main(["ls"]) == 0

        assert "[main]" in capsys.readouterr().out
        no_logging_setup.assert_called_once_with(verbose=False, debug=False)

    def test_add_and_remove(self, git_repo, temp_dir, monkeypatch):
        monkeypatch.chdir(git_repo.working_dir)

        assert main(["add", "cli-wt", "-b", "cli-wt"]) == 0
        assert (temp_dir / "cli-wt").is_dir()

        assert main(["rm", "cli-wt"]) == 0
        assert not (temp_dir / "cli-wt").exists()

    def test_jump(self, git_repo_with_worktree, monkeypatch, capsys):
        repo, worktree_path = git_repo_with_worktree
        monkeypatch.chdir(repo.working_dir)

        assert main(["jump", "feature"]) == 0
        assert capsys.readouterr().out == f"{worktree_path}\n"

    def test_error_reported(self, git_repo, monkeypatch, capsys):
        monkeypatch.chdir(git_repo.working_dir)

        assert main(["jump", "nope"]) == 1
        assert "Error: Worktree 'nope' not found" in capsys.readouterr().err

    def test_invalid_config_value_not_fatal(self, git_repo, write_config, monkeypatch, capsys, caplog):
        """Test that a bad setting is reported and the command still runs."""
        write_config({"main_branch_name": ""}, root=git_repo.working_dir)
        monkeypatch.chdir(git_repo.working_dir)

        assert main(["list"]) == 0
        assert "[main]" in capsys.readouterr().out
        assert "Ignoring invalid main_branch_name" in caplog.text

    def test_keyboard_interrupt(self, git_repo, monkeypatch, capsys):
        monkeypatch.chdir(git_repo.working_dir)

        with patch.object(cli_main, "run_command", side_effect=KeyboardInterrupt):
            assert main(["list"]) == 1

        assert "Operation cancelled by user" in capsys.readouterr().err
