# tests/test_core/test_parameters.py
"""Parameter Codec Tests
=====================

Unit tests for `sheetsync.core.Parameters`.

Verifies that:
1. Parameter strings are split on whitespace, honoring single and double quotes.
2. Values are quoted only when they contain whitespace or a quote character.
3. Formatting followed by parsing returns the original values.
"""

import pytest

from sheetsync.core.Parameters import (
    conditionally_quote,
    format_parameter_list,
    parse_parameter_list,
    remove_comments,
    strip_quotes,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("16 16", ["16", "16"]),
        ('"a b" c', ["a b", "c"]),
        ("'x y'  \"z\"", ["x y", "z"]),
        ("  a\tb  ", ["a", "b"]),
        ('"it\'s" \'say "hi"\'', ["it's", 'say "hi"']),
        ("", []),
        ("   ", []),
    ],
)
def test_parse_parameter_list(text, expected) -> None:
    """Whitespace separates parameters except inside a quoted token."""
    assert parse_parameter_list(text) == expected


def test_parse_flushes_unterminated_token() -> None:
    """A quoted token left open at the end of the string is kept as it is."""
    assert parse_parameter_list('a "unterminated part') == ["a", '"unterminated part']


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abc", "abc"),
        ("a b", '"a b"'),
        ("tab\there", '"tab\there"'),
        ('say "hi"', "'say \"hi\"'"),
        ("it's", '"it\'s"'),
        ("", '""'),
    ],
)
def test_conditionally_quote(value, expected) -> None:
    """Double quotes are preferred; single quotes when the value holds a double quote."""
    assert conditionally_quote(value) == expected


def test_format_parameter_list_joins_with_single_spaces() -> None:
    assert format_parameter_list(["grid", "16", "my sprite"]) == 'grid 16 "my sprite"'
    assert format_parameter_list([]) == ""


def test_format_then_parse_returns_original_values() -> None:
    """Formatting a parameter list and parsing it back yields the same list."""
    parameters = ["a", "b c", 'q"uote', "it's", "", "tab\there", "#hash"]
    assert parse_parameter_list(format_parameter_list(parameters)) == parameters


def test_strip_quotes() -> None:
    assert strip_quotes("'a'") == "a"
    assert strip_quotes('"a b"') == "a b"
    assert strip_quotes('"a') == '"a'
    assert strip_quotes('"') == '"'
    assert strip_quotes("'a\"") == "'a\""


def test_remove_comments() -> None:
    assert remove_comments('"images/"  # where the pngs live') == '"images/"'
    assert remove_comments("plain") == "plain"
