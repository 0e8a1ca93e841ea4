"""Tokenizer for inline argument fragments such as ``' name="a b" flag'``.

Grammar::

    arguments       := (whitespace name (value)?)*
    name            := [^=\\s]+
    value           := "=" (quoted-string | unquoted-string)
    quoted-string   := '"' ([^"] | '\\"')* '"'
    unquoted-string := \\S*

A name without a value is a flag and gets the empty string.

The scanner is a two-state machine over the input with an explicit cursor,
so errors report the exact offset where matching stopped.
"""

from __future__ import annotations

from enum import Enum, auto

from ..errors import ArgumentNameParseError, ArgumentValueParseError

QUOTE = '"'
ESCAPE = "\\"


class _State(Enum):
    AWAITING_NAME = auto()
    AWAITING_VALUE_OR_BOUNDARY = auto()


def _scan_quoted(text: str, start: int) -> tuple[str, int] | None:
    """Match a quoted string at ``start`` (which holds the opening quote).

    Returns the unescaped value and the offset after the closing quote, or
    ``None`` if the string is never closed.
    """
    chars: list[str] = []
    pos = start + 1
    while pos < len(text):
        ch = text[pos]
        if ch == ESCAPE and text.startswith(QUOTE, pos + 1):
            chars.append(QUOTE)
            pos += 2
        elif ch == QUOTE:
            return "".join(chars), pos + 1
        else:
            chars.append(ch)
            pos += 1
    return None


def _scan_unquoted(text: str, start: int) -> tuple[str, int]:
    end = start
    while end < len(text) and not text[end].isspace():
        end += 1
    return text[start:end], end


def tokenize_arguments(fragment: str) -> list[tuple[str, str]]:
    """Split an argument fragment into ``(name, value)`` pairs.

    Args:
        fragment: Text starting with the whitespace before the first name.

    Returns:
        The pairs in input order. Repeated names are kept; the store they
        are applied to keeps the last value.

    Raises:
        ArgumentNameParseError: If no name can be read where one is expected.
        ArgumentValueParseError: If a name is followed by neither whitespace
            nor ``=``. The name scan only stops at those characters, so this
            guards the state machine rather than any reachable input.
    """
    pairs: list[tuple[str, str]] = []
    state = _State.AWAITING_NAME
    name = ""
    pos = 0
    length = len(fragment)

    while pos < length:
        if state is _State.AWAITING_NAME:
            start = pos
            while pos < length and fragment[pos].isspace():
                pos += 1
            if pos == length and pos > start:
                break
            name_start = pos
            while (
                pos < length
                and fragment[pos] != "="
                and not fragment[pos].isspace()
            ):
                pos += 1
            if name_start == start or pos == name_start:
                raise ArgumentNameParseError(
                    f"Parsing of argument name failed near {fragment[start:]!r}",
                    fragment=fragment[start:],
                    offset=start,
                )
            name = fragment[name_start:pos]
            state = _State.AWAITING_VALUE_OR_BOUNDARY
            continue

        ch = fragment[pos]
        if ch.isspace():
            pairs.append((name, ""))
        elif ch == "=":
            quoted = None
            if fragment.startswith(QUOTE, pos + 1):
                quoted = _scan_quoted(fragment, pos + 1)
            if quoted is not None:
                value, pos = quoted
            else:
                value, pos = _scan_unquoted(fragment, pos + 1)
            pairs.append((name, value))
        else:
            raise ArgumentValueParseError(
                f"Parsing of argument value failed near {fragment[pos:]!r}",
                fragment=fragment[pos:],
                offset=pos,
            )
        name = ""
        state = _State.AWAITING_NAME

    if state is _State.AWAITING_VALUE_OR_BOUNDARY and name.strip():
        pairs.append((name.strip(), ""))
    return pairs
