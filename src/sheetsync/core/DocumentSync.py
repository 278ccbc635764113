# sheetsync/core/DocumentSync.py
"""DocumentSync Module
===================
This module provides the `DocumentSync` class, the synchronization session between one
live `TextDocument` and the `Config` model a property panel works on.

The session runs one logical sequence at a time: mutate the model through its
handles, serialize it, diff it against the buffer's *current* text and apply a single
patch. External changes of the buffer are picked up by `refresh()`, which rebuilds the
model wholesale whenever the buffer no longer matches what the model last saw.

Model edits go through `edit()`, which holds the session lock for the whole edit.
Rapid edits (every keystroke in a panel) are coalesced by `commit_debounced()`, which
delays the commit on a timer and re-arms once if more requests arrive meanwhile. The
timer commits on its own thread and waits for a running `edit()` block, so a
multi-step edit such as switching an input type is never committed half-done.

Classes:
--------
- DocumentSync: Owns the model of one document and keeps it and the buffer in sync.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sheetsync.core.Config import DEFAULT_GRID_SIZE, DEFAULT_INDENT, Config
from sheetsync.core.errors import SheetSyncError
from sheetsync.core.TextDocument import TextDocument, to_newline_separators


DEFAULT_DEBOUNCE_INTERVAL = 0.45
PARSE_FAILED_MESSAGE = "Parsing configuration failed"


## ==================== DocumentSync Class ====================
class DocumentSync:
    """Keeps a `Config` model and a live `TextDocument` synchronized.

    Attributes:
        document (TextDocument): The live buffer.
        model (Optional[Config]): The current model, None until a refresh succeeded.
        error_message (Optional[str]): Message of the last failed refresh, if any.
        debounce_interval (float): Delay in seconds of `commit_debounced`.
    """

    def __init__(self, document: TextDocument, config: Optional[dict[str, Any]] = None) -> None:
        config = config or {}
        document_config = config.get("document", {})
        self.default_indent: str = document_config.get("default_indent", DEFAULT_INDENT)
        self.debounce_interval = float(document_config.get("debounce_interval", DEFAULT_DEBOUNCE_INTERVAL))
        self.default_grid_size = config.get("input_types", {}).get("default_grid_size", DEFAULT_GRID_SIZE)

        self.document = document
        self.model: Optional[Config] = None
        self.error_message: Optional[str] = None

        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._timer_generation = 0
        self._commit_once_more = False

        self.refresh()

    def refresh(self, text: Any = None) -> bool:
        """Rebuilds the model if the buffer (or `text`) differs from what the model last saw.

        Args:
            text: Source to build from instead of the buffer's text.

        Returns:
            bool: True if a new model was built. A failed build is logged and skipped;
            the previous model stays in place.
        """
        source = self.document.text if text is None else text
        if isinstance(source, str):
            source = to_newline_separators(source)

        with self._lock:
            if self.model is not None and source == self.model.source:
                return False
            try:
                model = Config(source, self.default_indent, self.default_grid_size)
            except SheetSyncError as e:
                self.error_message = PARSE_FAILED_MESSAGE
                logging.warning(f"DocumentSync: {PARSE_FAILED_MESSAGE}: {e}. Refresh skipped.")
                return False
            self.model = model
            self.error_message = None
            logging.debug(f"DocumentSync: model rebuilt for '{self.document.filename or '<buffer>'}'.")
            return True

    @contextmanager
    def edit(self) -> Iterator[Config]:
        """Holds the session lock while the caller mutates the model.

        Debounced commits wait until the block is left, so they only ever see the
        model between complete edits.

        Raises:
            SheetSyncError: If there is no model to edit.
        """
        with self._lock:
            if self.model is None:
                raise SheetSyncError(self.error_message or "No configuration model to edit.")
            yield self.model

    def commit(self, force_refresh: bool = False) -> bool:
        """Pushes the model into the buffer as one patch.

        Args:
            force_refresh: Mark the model stale so the next `refresh()` rebuilds it.

        Returns:
            bool: True if the buffer was edited.
        """
        with self._lock:
            if self.model is None:
                logging.warning("DocumentSync: nothing to commit, no model.")
                return False
            proposed = self.model.update_source()
            changed = self.document.apply_text(proposed)
            if force_refresh:
                self.model.source = ""
            logging.debug(f"DocumentSync: commit {'applied an edit' if changed else 'was a no-op'}.")
            return changed

    def commit_debounced(self) -> None:
        """Schedules a commit after `debounce_interval`, coalescing repeated requests."""
        with self._lock:
            if self._timer is not None:
                self._commit_once_more = True
                return
            self._timer_generation += 1
            self._timer = threading.Timer(
                self.debounce_interval, self._on_debounce_timer, args=(self._timer_generation,)
            )
            self._timer.daemon = True
            self._timer.start()

    def _on_debounce_timer(self, generation: int) -> None:
        with self._lock:
            # A timer that was flushed or cancelled while waiting for the lock is stale.
            if self._timer is None or generation != self._timer_generation:
                return
            self._timer = None
            self.commit()
            if self._commit_once_more:
                self._commit_once_more = False
                self.commit_debounced()

    @property
    def commit_pending(self) -> bool:
        return self._timer is not None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._commit_once_more = False

    def flush(self) -> bool:
        """Runs a pending debounced commit right away. Returns True if the buffer was edited."""
        with self._lock:
            if self._timer is None:
                return False
            self._cancel_timer()
            return self.commit()

    def close(self) -> None:
        with self._lock:
            self._cancel_timer()
