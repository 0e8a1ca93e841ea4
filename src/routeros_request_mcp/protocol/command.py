"""Command normalization from API or CLI syntax to a canonical API path.

RouterOS accepts commands in two spellings:

- API syntax: ``/ip/arp/print``
- CLI syntax: ``/ip arp print``, optionally navigating up with ``..`` as in
  ``/ip arp .. address print``

Both normalize to the slash-separated API path.
"""

from __future__ import annotations

import re

from ..errors import InvalidCommandError, UnresolvableCommandError

PARENT_SEGMENT = ".."

_CLI_SEPARATORS = re.compile(r"[\s/]+")
_VALID_COMMAND = re.compile(r"/\S+")


def is_cli_syntax(command: str) -> bool:
    """Tell whether an absolute command is written in CLI syntax.

    A command with a single ``/`` is treated as CLI syntax. One-level API
    commands such as ``/quit`` therefore go through path resolution too,
    which leaves them unchanged.
    """
    return command.count("/") <= 1


def resolve_cli_path(command: str) -> str:
    """Resolve a CLI-syntax command into an API path.

    Raises:
        UnresolvableCommandError: If ``..`` would climb above the root.
    """
    root, *tokens = _CLI_SEPARATORS.split(command)
    resolved = [root]
    for token in tokens:
        if not token:
            continue
        if token == PARENT_SEGMENT:
            if len(resolved) < 2:
                raise UnresolvableCommandError(
                    f"Unable to resolve command {command!r}", fragment=command
                )
            resolved.pop()
        else:
            resolved.append(token)
    return "/".join(resolved)


def normalize_command(command: str) -> str:
    """Normalize an absolute command to its canonical API path.

    Args:
        command: The command without any arguments, in API or CLI syntax.

    Returns:
        The API path, e.g. ``/ip/arp/print``.

    Raises:
        InvalidCommandError: If the command is not absolute or not a valid
            path once resolved.
        UnresolvableCommandError: If ``..`` would climb above the root.
    """
    command = str(command)
    if not command.startswith("/"):
        raise InvalidCommandError(
            "Commands must be absolute", fragment=command
        )
    if is_cli_syntax(command):
        command = resolve_cli_path(command)
    if not _VALID_COMMAND.fullmatch(command) or "" in command[1:].split("/"):
        raise InvalidCommandError(
            f"Invalid command supplied: {command!r}", fragment=command
        )
    return command
