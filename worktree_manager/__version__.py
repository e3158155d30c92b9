"""Version information for worktree-manager.

setuptools-scm writes ``_version.py`` at build time. A source checkout
without it falls back to the installed distribution's metadata.
"""

try:
    from worktree_manager._version import __version__
except ImportError:
    from importlib.metadata import PackageNotFoundError, version

    try:
        __version__ = version("worktree-manager")
    except PackageNotFoundError:
        __version__ = "0.0.0+unknown"
