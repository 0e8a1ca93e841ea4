"""Tests for the inline argument tokenizer."""

import pytest

from routeros_request_mcp.errors import (
    ArgumentNameParseError,
    ErrorKind,
)
from routeros_request_mcp.protocol.tokenizer import tokenize_arguments


def test_quoted_value_and_flag():
    assert tokenize_arguments(' name="a b" flag') == [("name", "a b"), ("flag", "")]


def test_unquoted_values():
    assert tokenize_arguments(" address=10.0.0.1 count=3") == [
        ("address", "10.0.0.1"),
        ("count", "3"),
    ]


def test_empty_unquoted_value():
    """A name followed by '=' and nothing else has an empty value."""
    assert tokenize_arguments(" detail=") == [("detail", "")]
    assert tokenize_arguments(" detail= .proplist=name") == [
        ("detail", ""),
        (".proplist", "name"),
    ]


def test_empty_quoted_value():
    assert tokenize_arguments(' comment=""') == [("comment", "")]


def test_escaped_quote_inside_quoted_value():
    assert tokenize_arguments(r' comment="say \"hi\""') == [("comment", 'say "hi"')]


def test_value_containing_equals():
    assert tokenize_arguments(' comment="a=b" x=y=z') == [
        ("comment", "a=b"),
        ("x", "y=z"),
    ]


def test_unterminated_quote_falls_back_to_unquoted():
    """Without a closing quote the value is read as an unquoted run."""
    assert tokenize_arguments(' comment="abc def') == [
        ("comment", '"abc'),
        ("def", ""),
    ]


def test_flag_between_values():
    assert tokenize_arguments(" a=1 b c=3") == [("a", "1"), ("b", ""), ("c", "3")]


def test_trailing_whitespace_ignored():
    assert tokenize_arguments(" a=1 b  ") == [("a", "1"), ("b", "")]


def test_repeated_names_kept_in_order():
    assert tokenize_arguments(" a=1 a=2") == [("a", "1"), ("a", "2")]


def test_empty_input():
    assert tokenize_arguments("") == []


def test_empty_name_fails():
    with pytest.raises(ArgumentNameParseError) as exc_info:
        tokenize_arguments(" =bad")
    err = exc_info.value
    assert err.kind is ErrorKind.ARGUMENT_NAME_PARSE
    assert err.fragment == " =bad"
    assert err.offset == 0
    assert "=bad" in str(err)


def test_missing_whitespace_before_name():
    """A quoted value must be followed by whitespace before the next name."""
    with pytest.raises(ArgumentNameParseError) as exc_info:
        tokenize_arguments(' a="x"b=1')
    assert exc_info.value.fragment == "b=1"
    assert exc_info.value.offset == 6


def test_fragment_without_leading_whitespace():
    with pytest.raises(ArgumentNameParseError):
        tokenize_arguments("a=1")

