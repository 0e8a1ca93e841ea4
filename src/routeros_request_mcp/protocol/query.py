"""Query filters that narrow the items a ``print`` command returns.

Each condition becomes one ``?`` word; logical operators become ``?#``
words that combine the conditions already on the stack::

    Query.where("type", "ether").or_where("type", "vlan")

sends ``?type=ether``, ``?type=vlan``, ``?#|``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .arguments import validate_name

if TYPE_CHECKING:
    from .request import WordSink


class Action(str, Enum):
    """Condition prefixes placed after the ``?``."""

    EXISTS = ""
    NOT_EXISTS = "-"
    EQUALS = "="
    LESS_THAN = "<"
    GREATER_THAN = ">"


OP_NOT = "?#!"
OP_AND = "?#&"
OP_OR = "?#|"


def _condition_word(name: str, value: str | None, action: Action) -> str:
    word = "?" + Action(action).value + validate_name(name)
    if value is not None:
        word += "=" + str(value)
    return word


class Query:
    """An ordered list of query words."""

    def __init__(self, words: list[str] | None = None) -> None:
        self._words: list[str] = list(words or [])

    @classmethod
    def where(
        cls,
        name: str,
        value: str | None = None,
        action: Action = Action.EXISTS,
    ) -> Query:
        """Start a query with a single condition."""
        return cls().add_where(name, value, action)

    def add_where(
        self,
        name: str,
        value: str | None = None,
        action: Action = Action.EXISTS,
    ) -> Query:
        self._words.append(_condition_word(name, value, action))
        return self

    def not_(self) -> Query:
        """Negate the last condition."""
        self._words.append(OP_NOT)
        return self

    def and_where(
        self,
        name: str,
        value: str | None = None,
        action: Action = Action.EXISTS,
    ) -> Query:
        self.add_where(name, value, action)
        self._words.append(OP_AND)
        return self

    def or_where(
        self,
        name: str,
        value: str | None = None,
        action: Action = Action.EXISTS,
    ) -> Query:
        self.add_where(name, value, action)
        self._words.append(OP_OR)
        return self

    @property
    def words(self) -> list[str]:
        return list(self._words)

    def send(self, communicator: WordSink) -> int:
        """Send every query word and return the number of bytes written."""
        return sum(communicator.send_word(word) for word in self._words)

    def __repr__(self) -> str:
        return f"Query({self._words!r})"
