"""RouterOS request: command, tag, arguments and query, plus its encoder.

A request is built from one line of input in API or CLI syntax, with
arguments optionally embedded after the command::

    Request("/ip/arp/print detail=")
    Request('/ip arp print .proplist="mac-address"')
    Request("/interface ethernet .. print")

Sending writes the words below, in this order, then an empty word::

    +-----------+-------------+------------------------+--------------+
    | Command   | Tag         | Arguments              | Query words  |
    | /ip/arp/..| .tag=<tag>  | =<name>=<value> each   | ?... / ?#... |
    +-----------+-------------+------------------------+--------------+
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Protocol

from ..errors import TransmissionUnavailableError
from .arguments import ArgumentStore, ArgumentValue, InlineValue, StreamedValue
from .command import normalize_command
from .tokenizer import tokenize_arguments

logger = logging.getLogger(__name__)

TAG_PREFIX = ".tag="


class WordSink(Protocol):
    """Anything that can frame and write words, such as a Communicator."""

    def is_accepting_data(self) -> bool: ...

    def send_word(self, word: str) -> int: ...

    def send_word_from_stream(self, prefix: str, stream: BinaryIO) -> int: ...


class Filter(Protocol):
    """A sub-filter that appends its own words to a request."""

    def send(self, communicator: WordSink) -> int: ...


def split_command_line(line: str) -> tuple[str, str]:
    """Split raw input into the command and the argument fragment.

    The split happens at the last whitespace before the first ``=``. The
    fragment keeps that whitespace; the command is right-stripped. Input
    without ``=`` or without whitespace before it is all command.
    """
    equals = line.find("=")
    if equals == -1:
        return line, ""
    split = -1
    for pos in range(equals - 1, -1, -1):
        if line[pos].isspace():
            split = pos
            break
    if split == -1:
        return line, ""
    return line[:split].rstrip(), line[split:]


class Request:
    """A single RouterOS API request.

    Setters validate their input and return the request so calls can be
    chained. A request is not safe to mutate from several threads at once;
    use one request per caller.
    """

    def __init__(self, command: str) -> None:
        command, fragment = split_command_line(str(command))
        pairs = tokenize_arguments(fragment) if fragment else []
        self._command = normalize_command(command)
        self._tag: str | None = None
        self._query: Filter | None = None
        self._arguments = ArgumentStore()
        for name, value in pairs:
            self._arguments.set(name, value)

    def set_command(self, command: str) -> Request:
        """Set the command in API or CLI syntax, without arguments.

        Raises:
            InvalidCommandError: If the command is not absolute or invalid.
            UnresolvableCommandError: If ``..`` climbs above the root.
        """
        self._command = normalize_command(command)
        return self

    def get_command(self) -> str:
        """Return the command in API syntax."""
        return self._command

    def set_query(self, query: Filter | None) -> Request:
        """Attach a query, or detach the current one with ``None``."""
        self._query = query
        return self

    def get_query(self) -> Filter | None:
        return self._query

    def set_tag(self, tag: str | None) -> Request:
        """Set the tag echoed back in replies, or clear it with ``None``."""
        self._tag = None if tag is None else str(tag)
        return self

    def get_tag(self) -> str | None:
        return self._tag

    def set_argument(self, name: str, value: object | None = None) -> Request:
        """Set an argument; a ``None`` value removes it.

        Strings are sent inline. Binary streams and ``bytes`` are copied to
        the wire at send time, and other values are converted with ``str()``.

        Raises:
            InvalidArgumentNameError: If the name is empty or contains ``=``
                or whitespace.
            TypeError: If the value is a text stream.
        """
        self._arguments.set(name, value)
        return self

    def get_argument(self, name: str) -> ArgumentValue | None:
        return self._arguments.get(name)

    def get_all_arguments(self) -> dict[str, ArgumentValue]:
        return self._arguments.to_dict()

    def remove_all_arguments(self) -> Request:
        self._arguments.clear()
        return self

    def send(self, communicator: WordSink) -> int:
        """Send the request over a communicator.

        Args:
            communicator: Open word sink to write to.

        Returns:
            Number of bytes written, length prefixes included.

        Raises:
            TransmissionUnavailableError: If the communicator is not
                accepting data. Nothing is written in that case.
        """
        if not communicator.is_accepting_data():
            raise TransmissionUnavailableError(
                "Transmitter is not accepting data; sending aborted",
                fragment=self._command,
            )

        sent = communicator.send_word(self._command)
        if self._tag is not None:
            sent += communicator.send_word(TAG_PREFIX + self._tag)
        for name, value in self._arguments.items():
            prefix = f"={name}="
            if isinstance(value, StreamedValue):
                sent += communicator.send_word_from_stream(prefix, value.stream)
            elif isinstance(value, InlineValue):
                sent += communicator.send_word(prefix + value.text)
        if self._query is not None:
            sent += self._query.send(communicator)
        sent += communicator.send_word("")

        logger.debug("Sent %s (%d bytes)", self._command, sent)
        return sent

    def to_dict(self) -> dict:
        """Describe the request in a JSON-serializable form."""
        return {
            "command": self._command,
            "tag": self._tag,
            "arguments": {
                name: str(value) if isinstance(value, InlineValue) else repr(value)
                for name, value in self._arguments.items()
            },
            "query": getattr(self._query, "words", None),
        }

    def __repr__(self) -> str:
        return (
            f"Request(command={self._command!r}, tag={self._tag!r}, "
            f"arguments={len(self._arguments)})"
        )
