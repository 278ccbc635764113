# sheetsync/core/Subjects.py
"""Subjects Module
===============
Handles to the structural elements of a configuration (sheets, inputs and
sprites) and the registry that owns them.

A handle is nothing more than the line number of the line that defines the
subject. Handles are weak references into the line list: they stay valid only
because every structural edit of the line list goes through
`SubjectRegistry.renumber` (insertions) or `SubjectRegistry.discard_range`
followed by `renumber` (deletions).

Classes:
--------
- Sheet, Input, Sprite: Subject handles. An `Input` owns its ordered sprites.
- SubjectRegistry: Ordered lists of sheets and inputs, built in one forward pass.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Union

from sheetsync.core.ConfigLines import ConfigLine


SHEET = "sheet"
INPUT = "input"
SPRITE = "sprite"

# Line number of the implicit sheet that scopes a document without `sheet` lines.
DEFAULT_SHEET_LINE_NO = -1


@dataclass
class Sheet:
    line_no: int

    @property
    def is_default(self) -> bool:
        return self.line_no == DEFAULT_SHEET_LINE_NO


@dataclass
class Sprite:
    line_no: int


@dataclass
class Input:
    line_no: int
    sprites: list[Sprite] = field(default_factory=list)


Subject = Union[Sheet, Input, Sprite]


## ==================== SubjectRegistry Class ====================
class SubjectRegistry:
    """Ordered lists of the subjects found in a line list.

    Attributes:
        sheets (list[Sheet]): Sheets in document order. Contains the single
            default sheet (line -1) when the document has no `sheet` line.
        inputs (list[Input]): Inputs in document order, each with its sprites.
    """

    def __init__(self) -> None:
        self.sheets: list[Sheet] = []
        self.inputs: list[Input] = []

    @classmethod
    def build(cls, lines: list[ConfigLine]) -> "SubjectRegistry":
        """Scans `lines` once and collects all subjects.

        A `sheet` line opens a sheet only at level 0. An `input` line opens an
        input at any level. A `sprite` line is appended to the most recently
        opened input; sprites before the first input are ignored.
        """
        registry = cls()
        for i, line in enumerate(lines):
            if line.definition == SHEET and line.level == 0:
                registry.sheets.append(Sheet(i))
            elif line.definition == INPUT:
                registry.inputs.append(Input(i))
            elif line.definition == SPRITE and registry.inputs:
                registry.inputs[-1].sprites.append(Sprite(i))
        registry._ensure_default_sheet()
        return registry

    def _ensure_default_sheet(self) -> None:
        if not self.sheets:
            self.sheets.append(Sheet(DEFAULT_SHEET_LINE_NO))

    def subjects(self) -> Iterator[Subject]:
        """Yields every registered handle: sheets first, then each input followed by its sprites."""
        yield from self.sheets
        for input_ in self.inputs:
            yield input_
            yield from input_.sprites

    def sprites(self) -> Iterator[Sprite]:
        for input_ in self.inputs:
            yield from input_.sprites

    def renumber(self, start: int, delta: int) -> None:
        """Shifts every handle below line `start` by `delta` lines."""
        for subject in self.subjects():
            if subject.line_no > start:
                subject.line_no += delta
        logging.debug(f"SubjectRegistry: renumbered handles after line {start} by {delta:+d}.")

    def discard_range(self, start: int, end: int) -> None:
        """Drops handles whose lines in ``[start, end)`` are about to be deleted."""

        def alive(subject: Subject) -> bool:
            return not (start <= subject.line_no < end)

        self.sheets = [sheet for sheet in self.sheets if alive(sheet)]
        self.inputs = [input_ for input_ in self.inputs if alive(input_)]
        for input_ in self.inputs:
            input_.sprites = [sprite for sprite in input_.sprites if alive(sprite)]
        self._ensure_default_sheet()
