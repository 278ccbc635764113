# src/sheetsync/__init__.py
"""sheetsync: keeps a sprite-sheet configuration buffer and its property model in sync."""

__version__ = "0.1.0"
