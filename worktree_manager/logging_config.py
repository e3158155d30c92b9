"""Logging configuration for worktree-manager

Normal runs only surface warnings, printed as the bare message since they
already read "Warning: ...". -v adds INFO records about git operations;
--debug adds hook and git diagnostics on stderr and in a log file that is
overwritten on each run.
"""
import copy
import logging
import sys
from pathlib import Path
from typing import Optional

from worktree_manager.constants import LOG_DIR_NAME, LOG_FILE_NAME

PACKAGE_PREFIX = 'worktree_manager.'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if color and sys.stderr.isatty():
            # Other handlers (the debug file) must see the plain level name
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def log_file_path() -> Path:
    """Location of the --debug log file."""
    return Path.home() / LOG_DIR_NAME / LOG_FILE_NAME


def _file_handler() -> Optional[logging.Handler]:
    log_file = log_file_path()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode='w')
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {log_file}: {e}\n")
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_formatter(verbose: bool, debug: bool) -> logging.Formatter:
    if debug:
        return ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT)
    if verbose:
        return ColoredFormatter(fmt='[%(name)s] %(message)s')
    return logging.Formatter(fmt='%(message)s')


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and also write the log file
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(_console_formatter(verbose, debug))
    root_logger.addHandler(console_handler)

    if debug:
        logging.getLogger('git').setLevel(logging.NOTSET)
        file_handler = _file_handler()
        if file_handler is not None:
            root_logger.addHandler(file_handler)
    else:
        # GitPython logs every git invocation at DEBUG; keep it to --debug
        logging.getLogger('git').setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module, named without the package prefix.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance, e.g. "services.hook_service" -> "hook_service"
    """
    if name.startswith(PACKAGE_PREFIX):
        name = name[len(PACKAGE_PREFIX):]
    if name.startswith('services.'):
        name = name[len('services.'):]
    return logging.getLogger(name)
