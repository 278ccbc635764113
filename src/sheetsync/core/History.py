# sheetsync/core/History.py
"""History Module
==============
This module provides the `History` class, which manages the undo and redo stacks of a
`TextDocument`. Every edit applied to the document (a range patch pushed from the
configuration model, or an external replacement of the whole text) is recorded as a
single ``replace`` action, so undoing a property-panel edit always takes exactly one step.

Key Features:
-------------
- Tracks a stack of replace actions with the removed and inserted text and the cursor
  offsets before and after the edit.
- Clears the redo stack whenever a new action is recorded.
- A malformed action is put back on its stack and leaves the text untouched.

Classes:
--------
- History: Manages the undo and redo stacks, and provides methods to add actions, clear
  history, and perform undo/redo operations.
"""
import logging
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from sheetsync.core.TextDocument import TextDocument

REPLACE = "replace"


## ==================== History Class (Undo/Redo) ====================
class History:
    """Class History
    ===================
    Manages the undo and redo action history of a text document.

    Attributes:
        document (TextDocument): The document this history manager is associated with.
        _action_history (list[dict[str, Any]]): Stack of performed actions for undo.
        _undone_actions (list[dict[str, Any]]): Stack of undone actions for redo.

    Methods:
        add_action(action: dict[str, Any]):
            Adds a new action to the history.
        clear():
            Clears both the undo and redo stacks.
        undo() -> bool:
            Undoes the last action. True if the document changed.
        redo() -> bool:
            Redoes the last undone action. True if the document changed.
    """

    def __init__(self, document: "TextDocument"):
        self.document = document
        self._action_history: list[dict[str, Any]] = []
        self._undone_actions: list[dict[str, Any]] = []

    @property
    def can_undo(self) -> bool:
        return bool(self._action_history)

    @property
    def can_redo(self) -> bool:
        return bool(self._undone_actions)

    def add_action(self, action: dict[str, Any]) -> None:
        """Adds a new replace action to the history and clears the redo stack."""
        if not isinstance(action, dict) or action.get("type") != REPLACE:
            logging.warning(f"History: Attempted to add invalid action: {action}")
            return

        self._action_history.append(action)
        self._undone_actions.clear()
        logging.debug(f"History: Action '{action['type']}' added. History size: {len(self._action_history)}")

    def clear(self) -> None:
        """Clears both undo and redo stacks."""
        self._action_history.clear()
        self._undone_actions.clear()
        logging.debug("History: Undo/Redo stacks cleared.")

    def _swap(self, action: dict[str, Any], old_key: str, new_key: str, cursor_key: str) -> None:
        # All keys are read before the text is touched.
        start = action["start"]
        old_text = action[old_key]
        new_text = action[new_key]
        cursor = action[cursor_key]
        self.document._replace_range(start, start + len(old_text), new_text)
        self.document.cursor = cursor

    def undo(self) -> bool:
        """Undoes the last action from the _action_history stack.

        Restores the text and cursor offset to what they were before the action.

        Returns:
            bool: True if the document's text changed, False if there was nothing to undo.
        """
        with self.document._state_lock:
            if not self._action_history:
                logging.debug("History: Nothing to undo.")
                return False

            last_action = self._action_history.pop()
            pre_undo_text = self.document.text
            try:
                self._swap(last_action, "inserted", "removed", "cursor_before")
            except (KeyError, IndexError) as e_undo:
                logging.error(f"Undo: malformed action '{last_action.get('type')}': {e_undo}", exc_info=True)
                self._action_history.append(last_action)
                return False

            self._undone_actions.append(last_action)
            self.document.modified = bool(self._action_history)
            logging.debug(f"History: Undid '{last_action['type']}'. History size: {len(self._action_history)}")
            return self.document.text != pre_undo_text

    def redo(self) -> bool:
        """Redoes the last undone action.

        Returns:
            bool: True if the document's text changed, False if there was nothing to redo.
        """
        with self.document._state_lock:
            if not self._undone_actions:
                logging.debug("History: Nothing to redo.")
                return False

            action = self._undone_actions.pop()
            pre_redo_text = self.document.text
            try:
                self._swap(action, "removed", "inserted", "cursor_after")
            except (KeyError, IndexError) as e_redo:
                logging.error(f"Redo: malformed action '{action.get('type')}': {e_redo}", exc_info=True)
                self._undone_actions.append(action)
                return False

            self._action_history.append(action)
            self.document.modified = True
            logging.debug(f"History: Redid '{action['type']}'. History size: {len(self._action_history)}")
            return self.document.text != pre_redo_text
