"""Argument values and the ordered store that holds them.

An argument value is one of two variants:

- :class:`InlineValue` wraps a string held in memory.
- :class:`StreamedValue` wraps a readable binary stream whose bytes are
  copied to the wire when the request is sent, for payloads too large to
  hold as a string.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Union

from ..errors import InvalidArgumentNameError


@dataclass(frozen=True)
class InlineValue:
    """An argument value held as a string."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class StreamedValue:
    """An argument value read from a binary stream at send time."""

    stream: BinaryIO

    def __repr__(self) -> str:
        name = getattr(self.stream, "name", None)
        return f"StreamedValue(stream={name or type(self.stream).__name__})"


ArgumentValue = Union[InlineValue, StreamedValue]


def validate_name(name: str) -> str:
    """Return ``name`` if it is usable as an argument name.

    Raises:
        InvalidArgumentNameError: If the name is empty or contains ``=`` or
            whitespace.
    """
    name = str(name)
    if not name or "=" in name or any(ch.isspace() for ch in name):
        raise InvalidArgumentNameError(
            f"Invalid argument name {name!r}", fragment=name
        )
    return name


def to_value(value: object) -> ArgumentValue:
    """Wrap a raw value in the matching variant.

    Binary streams become :class:`StreamedValue`, as do ``bytes`` and
    ``bytearray`` (wrapped in a ``BytesIO`` so the payload is sent
    unchanged). Variants pass through unchanged, and anything else is
    converted with ``str()``.

    Raises:
        TypeError: If the value is a text stream.
    """
    if isinstance(value, (InlineValue, StreamedValue)):
        return value
    if isinstance(value, str):
        return InlineValue(value)
    if isinstance(value, (bytes, bytearray)):
        return StreamedValue(io.BytesIO(bytes(value)))
    if isinstance(value, io.TextIOBase):
        raise TypeError(
            f"Stream values must be binary, got {type(value).__name__}"
        )
    if hasattr(value, "read") and callable(value.read):
        return StreamedValue(value)  # type: ignore[arg-type]
    return InlineValue(str(value))


class ArgumentStore:
    """Ordered name -> value mapping for request arguments.

    Overwriting a name keeps its original position. Assigning ``None``
    removes the name.
    """

    def __init__(self) -> None:
        self._values: dict[str, ArgumentValue] = {}

    def set(self, name: str, value: object | None) -> None:
        name = validate_name(name)
        if value is None:
            self._values.pop(name, None)
            return
        self._values[name] = to_value(value)

    def get(self, name: str) -> ArgumentValue | None:
        return self._values.get(name)

    def clear(self) -> None:
        self._values.clear()

    def items(self) -> list[tuple[str, ArgumentValue]]:
        return list(self._values.items())

    def to_dict(self) -> dict[str, ArgumentValue]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ArgumentStore({self._values!r})"
