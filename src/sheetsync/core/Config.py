# sheetsync/core/Config.py
"""Config Module
=============
This module provides the `Config` class, the in-memory model behind the property
panel. It wraps the flat line list of a configuration together with the handles
of its subjects, and offers the operations the UI binding layer uses to read and
write properties without re-parsing the text after every edit.

Key Features:
-------------
- Direct property lookup: a property is any line in a subject's subtree (the
  run of following lines indented deeper than the subject) whose definition
  matches the property name.
- Common property lookup: a property inherited from an enclosing scope, found
  by walking backward from the subject through ever shallower lines.
- Effective lookup: direct first, then common. Panels display inherited values
  as placeholders.
- Targeted mutation: properties are rewritten in place, inserted as the first
  child of a subject, or deleted; every structural edit immediately renumbers
  all outstanding subject handles.
- Input types: resolves and switches the kind of an input (single sprite,
  atlas, grid variants).

Intended Usage:
---------------
Build a `Config` from the current buffer text, hand out its `sheets` and
`inputs` handles to the UI, mutate through the handles, then serialize with
`update_source()` and push the result back with a range patch
(see `sheetsync.core.TextDocument`).

Classes:
--------
- Config: The line model plus subject registry with property accessors/mutators.
"""

import logging
from typing import Optional, Sequence

from sheetsync.core.ConfigLines import (
    ConfigLine,
    is_blank,
    join_lines,
    line_indent,
    line_parameters,
    make_line,
    set_line_parameters,
    split_lines,
)
from sheetsync.core.errors import ConfigParseError
from sheetsync.core.Parameters import ParameterList, remove_comments, strip_quotes
from sheetsync.core.Subjects import (
    SPRITE,
    Input,
    Sheet,
    Sprite,
    Subject,
    SubjectRegistry,
)


DEFAULT_INDENT = "  "
DEFAULT_GRID_SIZE = ("16", "16")

ATLAS = "atlas"
INPUT_TYPES = ("atlas", "grid", "grid-vertical", "grid-cells", "grid-cells-vertical")
PATH = "path"


## ==================== Config Class ====================
class Config:
    """Line model and subject registry of one configuration document.

    Attributes:
        lines (list[ConfigLine]): The document, one entry per line. The index is
            the line number every subject handle refers to.
        source (str): The text this model was last built from or serialized to.
        registry (SubjectRegistry): Owner of all subject handles.
        default_indent (str): Indentation unit used for a subject's first child
            when no existing child shows the indentation to use.
        default_grid_size (tuple[str, str]): Parameters of a newly created grid.
    """

    def __init__(
        self,
        source: str,
        default_indent: str = DEFAULT_INDENT,
        default_grid_size: Sequence[str] = DEFAULT_GRID_SIZE,
    ) -> None:
        if not isinstance(source, str):
            raise ConfigParseError(
                f"Configuration source must be text, got {type(source).__name__}."
            )
        self.default_indent = default_indent
        self.default_grid_size = tuple(str(value) for value in default_grid_size)
        self.lines: list[ConfigLine] = split_lines(source)
        self.source = source
        self.registry = SubjectRegistry.build(self.lines)
        logging.debug(
            f"Config: parsed {len(self.lines)} lines, {len(self.inputs)} inputs, "
            f"{sum(1 for _ in self.registry.sprites())} sprites."
        )

    @property
    def sheets(self) -> list[Sheet]:
        return self.registry.sheets

    @property
    def inputs(self) -> list[Input]:
        return self.registry.inputs

    def __str__(self) -> str:
        return join_lines(self.lines)

    def update_source(self) -> str:
        """Serializes the lines back into `source` and returns it."""
        self.source = join_lines(self.lines)
        return self.source

    # --- Subject lines ---

    def _subject_line(self, subject: Subject) -> Optional[ConfigLine]:
        if 0 <= subject.line_no < len(self.lines):
            return self.lines[subject.line_no]
        return None

    def _subject_level(self, subject: Subject) -> int:
        line = self._subject_line(subject)
        return line.level if line is not None else -1

    def get_subject_parameters(self, subject: Subject) -> ParameterList:
        line = self._subject_line(subject)
        if line is None:
            return []
        return line_parameters(line)

    def get_subject_parameter(self, subject: Subject, index: int) -> str:
        parameters = self.get_subject_parameters(subject)
        if -len(parameters) <= index < len(parameters):
            return parameters[index]
        return ""

    def set_subject_parameters(self, subject: Subject, parameters: ParameterList) -> None:
        line = self._subject_line(subject)
        if line is None:
            logging.warning(f"Config: cannot set parameters of subject without a line: {subject}")
            return
        set_line_parameters(line, parameters)

    def get_parameter_column(self, subject: Subject) -> int:
        """Column just after the subject's definition token, where its parameters start."""
        line = self._subject_line(subject)
        if line is None:
            return 0
        return line.level + len(line.definition) + 1

    # --- Lookup ---

    def _find_property_line_no(self, subject: Subject, definition: str) -> Optional[int]:
        level = self._subject_level(subject)
        for i in range(subject.line_no + 1, len(self.lines)):
            child = self.lines[i]
            if child.level <= level:
                break
            # The default sheet owns only the top-level lines.
            if level < 0 and child.level > 0:
                continue
            if child.definition == definition:
                return i
        return None

    def _find_common_property_line_no(self, subject: Subject, definition: str) -> Optional[int]:
        below_level = self._subject_level(subject)
        for i in range(subject.line_no - 1, -1, -1):
            parent = self.lines[i]
            if parent.level < below_level:
                if parent.definition == definition:
                    return i
                below_level = parent.level + 1
        return None

    def has_property(self, subject: Subject, definition: str) -> bool:
        return self._find_property_line_no(subject, definition) is not None

    def get_property_parameters(self, subject: Subject, definition: str) -> Optional[ParameterList]:
        line_no = self._find_property_line_no(subject, definition)
        if line_no is None:
            return None
        return line_parameters(self.lines[line_no])

    def has_common_property(self, subject: Subject, definition: str) -> bool:
        return self._find_common_property_line_no(subject, definition) is not None

    def get_common_property_parameters(self, subject: Subject, definition: str) -> Optional[ParameterList]:
        line_no = self._find_common_property_line_no(subject, definition)
        if line_no is None:
            return None
        return line_parameters(self.lines[line_no])

    def has_effective_property(self, subject: Subject, definition: str) -> bool:
        return self.has_property(subject, definition) or self.has_common_property(subject, definition)

    def get_effective_property_parameters(self, subject: Subject, definition: str) -> Optional[ParameterList]:
        parameters = self.get_property_parameters(subject, definition)
        if parameters is None:
            parameters = self.get_common_property_parameters(subject, definition)
        return parameters

    # --- Structural edits ---

    def _insert_line(self, after: int, line: ConfigLine) -> int:
        index = after + 1
        self.lines.insert(index, line)
        self.registry.renumber(after, +1)
        return index

    def _remove_lines(self, start: int, count: int) -> None:
        if count <= 0:
            return
        self.registry.discard_range(start, start + count)
        del self.lines[start:start + count]
        self.registry.renumber(start, -count)

    def _get_child_indent(self, subject: Subject) -> str:
        line = self._subject_line(subject)
        if line is None:
            return ""
        if subject.line_no + 1 < len(self.lines):
            child = self.lines[subject.line_no + 1]
            if child.level > line.level:
                return line_indent(child)
        indent = line_indent(line)
        if "\t" in indent:
            return indent + "\t"
        return indent + self.default_indent

    def _subtree_end(self, subject: Subject) -> int:
        level = self._subject_level(subject)
        end = subject.line_no + 1
        while end < len(self.lines) and self.lines[end].level > level:
            end += 1
        return end

    def set_property(self, subject: Subject, definition: str, parameters: ParameterList) -> None:
        """Sets a direct property, rewriting it in place or inserting it as first child."""
        line_no = self._find_property_line_no(subject, definition)
        if line_no is not None:
            set_line_parameters(self.lines[line_no], parameters)
            logging.debug(f"Config: updated '{definition}' in line {line_no}.")
            return

        indent = self._get_child_indent(subject)
        index = self._insert_line(subject.line_no, make_line(indent, definition, parameters))
        if definition == SPRITE and isinstance(subject, Input):
            subject.sprites.insert(0, Sprite(index))
        logging.debug(f"Config: inserted '{definition}' as line {index}.")

    def remove_property(self, subject: Subject, definition: str) -> None:
        line_no = self._find_property_line_no(subject, definition)
        if line_no is not None:
            self._remove_lines(line_no, 1)
            logging.debug(f"Config: removed '{definition}' from line {line_no}.")

    def clear_subject(self, subject: Subject) -> None:
        """Deletes the subject's whole property subtree.

        A blank line directly after the cleared range is deleted along with it.
        """
        if subject.line_no < 0:
            logging.warning("Config: refusing to clear the default sheet.")
            return
        begin = subject.line_no + 1
        end = self._subtree_end(subject)
        if end < len(self.lines) and is_blank(self.lines[end]):
            end += 1
        self._remove_lines(begin, end - begin)
        logging.debug(f"Config: cleared lines {begin}..{end} of subject in line {subject.line_no}.")

    def remove_subject(self, subject: Subject) -> None:
        if subject.line_no < 0:
            logging.warning("Config: refusing to remove the default sheet.")
            return
        self.clear_subject(subject)
        self._remove_lines(subject.line_no, 1)

    # --- Inputs and sprites ---

    def input_type(self, input_: Input) -> str:
        """Returns the effective kind of an input, `"sprite"` when nothing else is set."""
        for input_type in INPUT_TYPES:
            if self.has_property(input_, input_type):
                return input_type
        for input_type in INPUT_TYPES:
            if self.has_common_property(input_, input_type):
                return input_type
        return SPRITE

    def replace_input_type(self, input_: Input, new_type: str) -> bool:
        """Switches an input to another kind.

        Returns:
            bool: True if the model was changed.
        """
        current_type = self.input_type(input_)
        if current_type == new_type:
            return False

        if new_type == SPRITE:
            if not input_.sprites:
                self.set_property(input_, SPRITE, [])
        elif new_type == ATLAS:
            if input_.sprites:
                self.set_property(input_, ATLAS, [])
        else:
            self.set_property(input_, new_type, list(self.default_grid_size))

        if current_type != SPRITE:
            self.remove_property(input_, current_type)
        elif len(input_.sprites) == 1:
            self.remove_property(input_, SPRITE)

        logging.debug(f"Config: input in line {input_.line_no} changed from '{current_type}' to '{new_type}'.")
        return True

    def replace_sprite_id(self, sprite: Sprite, sprite_id: str) -> None:
        self.set_subject_parameters(sprite, [sprite_id])

    def get_sprite_id(self, sprite: Sprite) -> str:
        parameters = self.get_subject_parameters(sprite)
        if parameters:
            return parameters[0]
        parameters = self.get_effective_property_parameters(sprite, "id")
        if parameters:
            return parameters[0]
        return SPRITE

    def get_path(self, line_no: int) -> str:
        """Returns the value of the nearest `path` line at or above `line_no`."""
        for i in range(min(line_no, len(self.lines) - 1), -1, -1):
            line = self.lines[i]
            if line.definition == PATH:
                value = remove_comments(line.text[line.level + len(PATH):]).strip()
                return strip_quotes(value)
        return ""
