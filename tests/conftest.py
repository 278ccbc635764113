# tests/conftest.py
"""Pytest configuration with shared fixtures for the sheetsync tests.

Provides sample configuration documents and ready-made models/documents so
individual test modules stay focused on the behavior they check.
"""

from __future__ import annotations

from typing import Any

import pytest

from sheetsync.core.Config import Config
from sheetsync.core.TextDocument import TextDocument


# Line numbers are noted on the right.
SAMPLE_SOURCE = "\n".join(
    [
        'sheet "a"',          # 0
        "  padding 2",        # 1
        '  input "x.png"',    # 2
        "    grid 16 16",     # 3
        "    sprite one",     # 4
        "    sprite two",     # 5
        '  input "y.png"',    # 6
        "    sprite",         # 7
        'sheet "b"',          # 8
        '  input "z.png"',    # 9
    ]
)


@pytest.fixture
def sample_source() -> str:
    """Return a two-sheet document with three inputs and three sprites."""
    return SAMPLE_SOURCE


@pytest.fixture
def sample_config(sample_source: str) -> Config:
    """Return a `Config` model built from the sample document."""
    return Config(sample_source)


@pytest.fixture
def sample_document(sample_source: str) -> TextDocument:
    """Return a live buffer holding the sample document."""
    return TextDocument(sample_source, filename="sample.conf")


@pytest.fixture
def sync_config() -> dict[str, Any]:
    """Provide a baseline application configuration for synchronization tests.

    The long debounce interval keeps timers from firing on their own; tests
    trigger pending commits explicitly with `flush()`.
    """
    return {
        "document": {"default_indent": "  ", "debounce_interval": 60.0},
        "input_types": {"default_grid_size": ["16", "16"]},
    }
