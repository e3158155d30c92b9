"""Hook configuration models.

A hook entry in ``.worktree.yml`` takes one of three shapes::

    pre_add: npm install                 # SingleHook
    post_add: [npm install, npm test]    # SequenceHook
    pre_remove:                          # StructuredHook
      commands: [make clean]
      pwd: $WORKTREE_ABSOLUTE_PATH
      stop_on_error: false

Entries are resolved into these variants once, when the config is loaded.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class SingleHook:
    """A single shell command."""

    command: str


@dataclass(frozen=True)
class SequenceHook:
    """Commands run in order, stopping at the first failure."""

    commands: Tuple[str, ...]


@dataclass(frozen=True)
class StructuredHook:
    """Mapping form with an optional working directory and error policy."""

    command: Optional[str] = None
    commands: Optional[Tuple[str, ...]] = None
    pwd: Optional[str] = None
    stop_on_error: bool = True


HookEntry = Union[SingleHook, SequenceHook, StructuredHook]


def parse_hook_entry(raw: Any) -> Optional[HookEntry]:
    """
    Resolve a raw config value into a hook variant.

    Args:
        raw: Value loaded from the config document

    Returns:
        The hook variant, or None if the value has no recognized shape
    """
    if isinstance(raw, str):
        return SingleHook(raw)
    if isinstance(raw, list):
        return SequenceHook(tuple(str(command) for command in raw))
    if isinstance(raw, dict):
        command = raw.get("command")
        commands = raw.get("commands")
        pwd = raw.get("pwd")
        return StructuredHook(
            command=str(command) if command else None,
            commands=tuple(str(c) for c in commands) if isinstance(commands, list) else None,
            pwd=str(pwd) if pwd else None,
            # Only an explicit false turns the policy off
            stop_on_error=raw.get("stop_on_error") is not False,
        )
    return None
