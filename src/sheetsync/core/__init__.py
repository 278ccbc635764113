# src/sheetsync/core/__init__.py
"""Public facade for sheetsync.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (Config.py, TextDocument.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Config import Config  # noqa: F401
from .DocumentSync import DocumentSync  # noqa: F401
from .errors import ConfigParseError, SheetSyncError  # noqa: F401
from .History import History  # noqa: F401
from .RangeDiff import DifferingRange, get_differing_range  # noqa: F401
from .Subjects import Input, Sheet, Sprite, SubjectRegistry  # noqa: F401
from .TextDocument import TextDocument, TextPatch, make_patch  # noqa: F401


__all__ = [
    "Config",
    "ConfigParseError",
    "DifferingRange",
    "DocumentSync",
    "History",
    "Input",
    "Sheet",
    "SheetSyncError",
    "Sprite",
    "SubjectRegistry",
    "TextDocument",
    "TextPatch",
    "get_differing_range",
    "make_patch",
]
