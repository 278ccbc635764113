# sheetsync/core/Parameters.py
"""Parameters Module
=================
Tokenizes and formats the trailing parameter list of a configuration line.

A parameter is a whitespace-delimited word, optionally enclosed in a pair of
single or double quotes. Quotes are stripped on parse and added back on format
only when a value needs them (it contains whitespace or a quote character).

Functions:
----------
- parse_parameter_list: Splits a parameter string into a list of values.
- format_parameter_list: Joins values into a parameter string, quoting as needed.
- conditionally_quote: Quotes a single value when it would not survive splitting.
- strip_quotes: Removes one pair of matching surrounding quotes.
- remove_comments: Cuts a trailing comment from a line fragment.
"""

from typing import Optional


ParameterList = list[str]

QUOTE_CHARS = ('"', "'")


def strip_quotes(text: str) -> str:
    """Removes one pair of matching quotes surrounding `text`, if present."""
    if len(text) > 1 and text[0] in QUOTE_CHARS and text[0] == text[-1]:
        return text[1:-1]
    return text


def remove_comments(text: str) -> str:
    """Cuts a trailing ``#`` comment and trailing whitespace."""
    return text.split("#", 1)[0].rstrip()


def conditionally_quote(text: str) -> str:
    """Quotes `text` if it contains whitespace or a quote character.

    Double quotes are preferred; single quotes are used when the value itself
    contains a double quote. The empty string is quoted so it is not lost.
    """
    if text == "":
        return '""'
    if any(c.isspace() or c in QUOTE_CHARS for c in text):
        if '"' in text:
            return f"'{text}'"
        return f'"{text}"'
    return text


def format_parameter_list(parameters: ParameterList) -> str:
    return " ".join(conditionally_quote(parameter) for parameter in parameters)


def parse_parameter_list(text: str) -> ParameterList:
    """Splits `text` into parameters.

    Runs of whitespace separate parameters, except inside a pair of the same
    quote character opened at the start of a token. A token still open at the
    end of the string is flushed as it is.

    Args:
        text: The parameter part of a line (everything after the definition).

    Returns:
        The list of parameters with their surrounding quotes removed.
    """
    parameters: ParameterList = []
    token: list[str] = []
    in_string: Optional[str] = None

    for c in text:
        if in_string:
            token.append(c)
            if c == in_string:
                in_string = None
            continue
        if c.isspace():
            if token:
                parameters.append(strip_quotes("".join(token)))
                token = []
            continue
        if not token and c in QUOTE_CHARS:
            in_string = c
        token.append(c)

    if token:
        parameters.append(strip_quotes("".join(token)))
    return parameters
