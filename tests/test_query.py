"""Tests for query filter words."""

from unittest.mock import MagicMock

import pytest

from routeros_request_mcp.errors import InvalidArgumentNameError
from routeros_request_mcp.protocol.query import Action, Query


def test_where_exists():
    assert Query.where("disabled").words == ["?disabled"]


def test_where_with_value():
    assert Query.where("type", "ether").words == ["?type=ether"]


@pytest.mark.parametrize(
    "action, expected",
    [
        (Action.NOT_EXISTS, "?-name"),
        (Action.EQUALS, "?=name=x"),
        (Action.LESS_THAN, "?<name=x"),
        (Action.GREATER_THAN, "?>name=x"),
    ],
)
def test_actions(action, expected):
    value = None if action is Action.NOT_EXISTS else "x"
    assert Query.where("name", value, action).words == [expected]


def test_operators():
    query = (
        Query.where("type", "ether")
        .or_where("type", "vlan")
        .not_()
        .and_where("running", "true")
    )
    assert query.words == [
        "?type=ether",
        "?type=vlan",
        "?#|",
        "?#!",
        "?running=true",
        "?#&",
    ]


def test_invalid_name():
    with pytest.raises(InvalidArgumentNameError):
        Query.where("bad name")


def test_send():
    """Every word is sent in order and the byte counts are summed."""
    com = MagicMock()
    com.send_word.side_effect = lambda word: len(word) + 1
    query = Query.where("type", "ether").add_where("disabled")

    sent = query.send(com)

    assert [c.args[0] for c in com.send_word.call_args_list] == [
        "?type=ether",
        "?disabled",
    ]
    assert sent == 12 + 10


def test_words_copy():
    query = Query.where("a")
    query.words.append("?b")
    assert query.words == ["?a"]
