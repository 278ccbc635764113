#!/usr/bin/env python3
# /sheetsync/main.py
"""
sheetsync Main Entry Point
==========================

This script is the primary entry point of the sheetsync command line. It performs:
1) Environment Loading: reads ~/.config/sheetsync/.env early (e.g. SHEETSYNC_EDITTRACE).
2) Path Setup: ensures the sheetsync package is importable from a source checkout.
3) Configuration & Logging: loads config and initializes logging ASAP.
4) Core Import: imports the command runner after logging is ready.
5) Application Run: applies the requested edit and exits with its status code.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# --- Step 1: Load Environment Variables from the User's Config Directory ---
user_config_dir = Path.home() / ".config" / "sheetsync"
load_dotenv(dotenv_path=user_config_dir / ".env")

# --- Step 2: Set up the Python Path ---
# Ensure the 'sheetsync' package is importable when run from a source checkout.
source_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if source_root not in sys.path:
    sys.path.insert(0, source_root)

# --- Step 3: Immediate Logging and Configuration Setup ---
try:
    from sheetsync.utils.logging_config import setup_logging
    from sheetsync.utils.utils import load_config

    config: dict[str, Any] = load_config()
    setup_logging(config)
    logger = logging.getLogger("sheetsync")
except Exception as e:
    # Logging is not ready; print to stderr and exit.
    print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc()
    sys.exit(1)

# --- Step 4: Import the Command Runner ---
try:
    from sheetsync.cli import run
except ImportError as e:
    logger.critical("Failed to import a critical application component: %s", e, exc_info=True)
    sys.exit(1)


def start() -> None:
    """Runs the command given on the command line and exits with its status."""
    logger.info("sheetsync starting: %s", " ".join(sys.argv[1:]))
    try:
        status = run(sys.argv, config)
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)
    logger.info("sheetsync finished with status %d.", status)
    sys.exit(status)


if __name__ == "__main__":
    start()
