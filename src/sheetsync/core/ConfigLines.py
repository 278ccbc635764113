# sheetsync/core/ConfigLines.py
"""ConfigLines Module
==================
The line model every other component of sheetsync traverses.

A configuration is kept as a flat list of `ConfigLine` entries, one per
``\\n``-delimited line of the source. Hierarchy is never stored explicitly;
it is implied by each line's indentation `level` and recovered on demand by
scanning forward (a subject's subtree) or backward (its enclosing scopes).

Comment lines (first non-blank character ``#``) and blank lines carry no
definition and inherit the level of the previous defining line, so they never
open or close a scope by themselves.

Key Features:
-------------
- `split_lines` / `join_lines`: text to line list and back; splitting never fails.
- Parameter access helpers that read and rewrite the parameter part of a line
  while keeping its indentation and definition token intact.
"""

from dataclasses import dataclass

from sheetsync.core.Parameters import (
    ParameterList,
    format_parameter_list,
    parse_parameter_list,
)


INDENT_CHARS = (" ", "\t")
COMMENT_CHAR = "#"


@dataclass
class ConfigLine:
    """One line of configuration text.

    Attributes:
        text: The raw line text, without line separator.
        level: Indentation level (count of leading spaces/tabs). Comment and
            blank lines carry the level of the previous defining line.
        definition: First whitespace-delimited word, empty for comment and
            blank lines.
    """

    text: str
    level: int
    definition: str


def _index_of_non_space(text: str) -> int:
    for i, c in enumerate(text):
        if c not in INDENT_CHARS:
            return i
    return -1


def _index_of_space(text: str, pos: int) -> int:
    for i in range(pos, len(text)):
        if text[i] in INDENT_CHARS:
            return i
    return len(text)


def split_lines(source: str) -> list[ConfigLine]:
    """Splits `source` into configuration lines.

    Any string, including the empty string, yields a line list (the empty
    string yields a single empty line, mirroring ``str.split``).
    """
    lines: list[ConfigLine] = []
    prev_level = 0
    for text in source.split("\n"):
        level = prev_level
        definition = ""
        begin = _index_of_non_space(text)
        if begin >= 0 and text[begin] != COMMENT_CHAR:
            definition = text[begin:_index_of_space(text, begin)]
            level = begin
            prev_level = level
        lines.append(ConfigLine(text, level, definition))
    return lines


def join_lines(lines: list[ConfigLine]) -> str:
    return "\n".join(line.text for line in lines)


def line_indent(line: ConfigLine) -> str:
    """Returns the leading whitespace of a defining line."""
    return line.text[: line.level]


def line_parameters(line: ConfigLine) -> ParameterList:
    return parse_parameter_list(line.text[line.level + len(line.definition):].strip())


def make_line_text(indent: str, definition: str, parameters: ParameterList) -> str:
    formatted = format_parameter_list(parameters)
    if formatted:
        return f"{indent}{definition} {formatted}"
    return f"{indent}{definition}"


def set_line_parameters(line: ConfigLine, parameters: ParameterList) -> None:
    """Replaces the parameters of `line`, keeping its indentation and definition."""
    line.text = make_line_text(line_indent(line), line.definition, parameters)


def make_line(indent: str, definition: str, parameters: ParameterList) -> ConfigLine:
    return ConfigLine(make_line_text(indent, definition, parameters), len(indent), definition)


def is_blank(line: ConfigLine) -> bool:
    return line.text.strip() == ""
