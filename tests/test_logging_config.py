"""Tests for logging configuration"""
import logging

import pytest

from worktree_manager.logging_config import ColoredFormatter, get_logger, log_file_path, setup_logging


@pytest.fixture
def restore_logging():
    """Put the root and git loggers back the way pytest configured them."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    git_level = logging.getLogger("git").level

    yield root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger("git").setLevel(git_level)


class TestGetLogger:
    """Test logger naming."""

    def test_strips_package_prefix(self):
        assert get_logger("worktree_manager.core").name == "core"

    def test_strips_services_prefix(self):
        assert get_logger("worktree_manager.services.hook_service").name == "hook_service"
        assert get_logger("worktree_manager.services.git.worktrees").name == "git.worktrees"

    def test_other_names_unchanged(self):
        assert get_logger("tests").name == "tests"


class TestSetupLogging:
    """Test level and handler selection."""

    def test_default_level(self, restore_logging):
        setup_logging()

        assert restore_logging.level == logging.WARNING
        assert len(restore_logging.handlers) == 1
        assert logging.getLogger("git").level == logging.WARNING

    def test_verbose_level(self, restore_logging):
        setup_logging(verbose=True)
        assert restore_logging.level == logging.INFO

    def test_debug_writes_log_file(self, restore_logging, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))

        setup_logging(debug=True)
        get_logger("worktree_manager.core").debug("hello from the test")
        for handler in restore_logging.handlers:
            handler.flush()

        assert restore_logging.level == logging.DEBUG
        assert log_file_path() == temp_dir / ".worktree-manager" / "worktree-manager.log"
        assert "core - DEBUG - hello from the test" in log_file_path().read_text()

    def test_repeated_setup_replaces_handlers(self, restore_logging):
        setup_logging()
        setup_logging(verbose=True)
        assert len(restore_logging.handlers) == 1


class TestColoredFormatter:
    """Test level coloring."""

    def test_record_not_modified(self, monkeypatch):
        """Test that coloring for the terminal leaves the record itself alone."""
        monkeypatch.setattr("sys.stderr.isatty", lambda: True)
        record = logging.LogRecord("core", logging.WARNING, __file__, 1, "careful", None, None)

        output = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert "\033[33mWARNING\033[0m careful" == output
        assert record.levelname == "WARNING"

    def test_plain_without_terminal(self, monkeypatch):
        monkeypatch.setattr("sys.stderr.isatty", lambda: False)
        record = logging.LogRecord("core", logging.INFO, __file__, 1, "note", None, None)

        assert ColoredFormatter(fmt="%(levelname)s %(message)s").format(record) == "INFO note"
