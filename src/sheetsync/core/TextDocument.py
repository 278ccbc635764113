# sheetsync/core/TextDocument.py
"""TextDocument Module
===================
The live text buffer and the patch applier that pushes model changes into it.

A patch is computed against the buffer's *current* text, never against a snapshot,
so a proposed text that the buffer already matches simply produces no edit. The
line range found by `sheetsync.core.RangeDiff` is turned into one character-range
replacement joined with the buffer's own line separator, and applied as one atomic
edit: one undo step, with a cursor outside the replaced range kept in place.

Key Features:
-------------
- Line separator detection (``\\n``, ``\\r\\n``, ``\\r``, ``\\n\\r``) per document.
- `make_patch`: minimal single replacement turning the current text into the
  proposed text.
- `TextDocument`: in-memory buffer with cursor tracking and an undo `History`.

Classes:
--------
- TextPatch: One character-range replacement plus the line range it covers.
- TextDocument: The live buffer.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from sheetsync.core.History import REPLACE, History
from sheetsync.core.RangeDiff import get_differing_range
from sheetsync.utils.logging_config import EDIT_LOGGER


# --- Line separators ---

def get_line_separator(text: str) -> str:
    """Detects the line separator of `text` from its first ``\\n`` and ``\\r``."""
    first_newline = text.find("\n")
    first_return = text.find("\r")
    if first_newline >= 0 and first_return >= 0:
        return "\n\r" if first_newline < first_return else "\r\n"
    return "\r" if first_return >= 0 else "\n"


def split_text_lines(text: str) -> list[str]:
    return text.split(get_line_separator(text))


def to_newline_separators(text: str) -> str:
    line_separator = get_line_separator(text)
    if line_separator == "\n":
        return text
    return "\n".join(text.split(line_separator))


# --- Patches ---

@dataclass(frozen=True)
class TextPatch:
    """Replace ``text[start:end]`` with `new_text`.

    `first_line` and `last_line` give the replaced line range ``[first, last)`` of the
    buffer, for hosts that address edits by line.
    """

    start: int
    end: int
    new_text: str
    first_line: int
    last_line: int


def make_patch(current_text: str, proposed_text: str) -> Optional[TextPatch]:
    """Computes the single edit turning `current_text` into `proposed_text`.

    The proposed text may use any line separator; the patch always uses the one
    detected in `current_text`.

    Returns:
        The patch, or None when both texts have the same lines.
    """
    line_separator = get_line_separator(current_text)
    current_lines = current_text.split(line_separator)
    differing = get_differing_range(current_lines, split_text_lines(proposed_text))
    if differing is None:
        return None

    def line_start(line_no: int) -> int:
        return sum(len(line) + len(line_separator) for line in current_lines[:line_no])

    if differing.last < len(current_lines):
        start = line_start(differing.first)
        end = line_start(differing.last)
        new_text = "".join(line + line_separator for line in differing.diff)
    elif differing.first > 0:
        # Range runs to the end of the buffer: anchor it at the end of the previous line.
        # The separator in front of the range goes with it, so deleting trailing lines
        # leaves no separator behind; the result is always the proposed lines joined.
        start = line_start(differing.first) - len(line_separator)
        end = len(current_text)
        new_text = "".join(line_separator + line for line in differing.diff)
    else:
        start = 0
        end = len(current_text)
        new_text = line_separator.join(differing.diff)

    return TextPatch(start, end, new_text, differing.first, differing.last)


## ==================== TextDocument Class ====================
class TextDocument:
    """In-memory live text buffer.

    Attributes:
        filename (Optional[str]): Path the buffer was loaded from, if any.
        encoding (str): Encoding used when the buffer is written back.
        cursor (int): Cursor offset into the text.
        version (int): Incremented on every change of the text.
        modified (bool): True when there are changes since loading.
        history (History): Undo/redo stacks.
        _state_lock (threading.RLock): Lock for thread-safe state changes.
    """

    def __init__(self, text: str = "", filename: Optional[str] = None, encoding: str = "utf-8") -> None:
        self._text = text
        self.filename = filename
        self.encoding = encoding
        self.cursor = 0
        self.version = 0
        self.modified = False
        self.history = History(self)
        self._state_lock: threading.RLock = threading.RLock()

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_separator(self) -> str:
        return get_line_separator(self._text)

    def lines(self) -> list[str]:
        return split_text_lines(self._text)

    def set_cursor(self, line_no: int, column: int = 0) -> None:
        """Places the cursor at a line/column position, clamped to the text."""
        with self._state_lock:
            line_separator = self.line_separator
            lines = self._text.split(line_separator)
            line_no = max(0, min(line_no, len(lines) - 1))
            column = max(0, min(column, len(lines[line_no])))
            self.cursor = sum(len(line) + len(line_separator) for line in lines[:line_no]) + column

    def _replace_range(self, start: int, end: int, new_text: str) -> None:
        """Raw replacement without history; shifts a cursor behind the range."""
        if not (0 <= start <= end <= len(self._text)):
            raise IndexError(f"Replace range {start}..{end} out of bounds (text len {len(self._text)}).")
        self._text = self._text[:start] + new_text + self._text[end:]
        delta = len(new_text) - (end - start)
        if self.cursor >= end:
            self.cursor += delta
        elif self.cursor > start:
            self.cursor = start + min(self.cursor - start, len(new_text))
        self.version += 1

    def _record_replace(self, start: int, end: int, new_text: str) -> None:
        cursor_before = self.cursor
        removed = self._text[start:end]
        self._replace_range(start, end, new_text)
        self.history.add_action(
            {
                "type": REPLACE,
                "start": start,
                "removed": removed,
                "inserted": new_text,
                "cursor_before": cursor_before,
                "cursor_after": self.cursor,
            }
        )
        self.modified = True

    def apply_patch(self, patch: Optional[TextPatch]) -> bool:
        """Applies `patch` as one atomic edit.

        Returns:
            bool: True if the text changed.
        """
        if patch is None:
            return False
        with self._state_lock:
            self._record_replace(patch.start, patch.end, patch.new_text)
            logging.debug(
                f"TextDocument: replaced lines {patch.first_line}..{patch.last_line} "
                f"(chars {patch.start}..{patch.end}) with {len(patch.new_text)} chars."
            )
            EDIT_LOGGER.debug(
                f"{self.filename or '<buffer>'} v{self.version}: "
                f"lines {patch.first_line}..{patch.last_line} -> {patch.new_text!r}"
            )
            return True

    def apply_text(self, proposed_text: str) -> bool:
        """Patches the buffer so that it holds `proposed_text`, diffing against the live text."""
        with self._state_lock:
            return self.apply_patch(make_patch(self._text, proposed_text))

    def replace_text(self, new_text: str) -> bool:
        """Replaces the whole text, as an external edit would. Recorded as one undo step."""
        with self._state_lock:
            if new_text == self._text:
                return False
            self._record_replace(0, len(self._text), new_text)
            return True

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()
