# sheetsync/core/errors.py
"""Exception types raised by the sheetsync core.

Lookups that find nothing never raise; they return ``None`` or do nothing.
Only programmer errors (e.g. building a model from something that is not text)
surface as exceptions.
"""


class SheetSyncError(Exception):
    """Base class for all sheetsync errors."""


class ConfigParseError(SheetSyncError):
    """Raised when a configuration model cannot be built from the given source."""
