"""Error types raised while building and sending RouterOS requests.

Every error carries an :class:`ErrorKind` plus the context needed to point
at the problem: the offending fragment of input and, for tokenizer errors,
the offset at which scanning stopped.

Hierarchy::

    RouterOSRequestError
    ├── InvalidCommandError
    ├── UnresolvableCommandError
    ├── ArgumentNameParseError
    ├── ArgumentValueParseError
    ├── InvalidArgumentNameError
    └── TransmissionUnavailableError   (also a ConnectionError)
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """What went wrong, independent of the message text."""

    INVALID_COMMAND = "invalid_command"
    UNRESOLVABLE_COMMAND = "unresolvable_command"
    ARGUMENT_NAME_PARSE = "argument_name_parse"
    ARGUMENT_VALUE_PARSE = "argument_value_parse"
    INVALID_ARGUMENT_NAME = "invalid_argument_name"
    TRANSMISSION_UNAVAILABLE = "transmission_unavailable"


class RouterOSRequestError(Exception):
    """Base class for all request errors."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        fragment: str | None = None,
        offset: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.fragment = fragment
        self.offset = offset

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "kind": self.kind.value,
            "fragment": self.fragment,
            "offset": self.offset,
        }


class InvalidCommandError(RouterOSRequestError):
    """The command is not absolute or is not a valid path."""

    kind = ErrorKind.INVALID_COMMAND


class UnresolvableCommandError(RouterOSRequestError):
    """A ``..`` step tried to leave the root of the command path."""

    kind = ErrorKind.UNRESOLVABLE_COMMAND


class ArgumentNameParseError(RouterOSRequestError):
    """No argument name could be read at the current position."""

    kind = ErrorKind.ARGUMENT_NAME_PARSE


class ArgumentValueParseError(RouterOSRequestError):
    """No argument value could be read at the current position."""

    kind = ErrorKind.ARGUMENT_VALUE_PARSE


class InvalidArgumentNameError(RouterOSRequestError):
    """An argument or query name is empty or holds ``=`` or whitespace."""

    kind = ErrorKind.INVALID_ARGUMENT_NAME


class TransmissionUnavailableError(RouterOSRequestError, ConnectionError):
    """The communicator is not accepting data, so nothing was sent."""

    kind = ErrorKind.TRANSMISSION_UNAVAILABLE
