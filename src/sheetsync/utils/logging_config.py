# sheetsync/utils/logging_config.py
"""sheetsync.utils.logging_config
================================

This module provides the logging configuration utility for sheetsync.
It defines global logger objects and a single setup function, `setup_logging`, which configures
application-wide logging handlers and log levels based on a supplied configuration dictionary.

Features:
    - Rotating file logging for general application events (sheetsync.log).
    - Optional console logging to stderr with configurable log level.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional edit tracing (edittrace.log) of every patch applied to a document, enabled via
      the SHEETSYNC_EDITTRACE environment variable.
    - Automatic creation of log directories, with fallback to the system temp directory on failure.
    - Safe reconfiguration: clears existing handlers to avoid duplicate logs when called multiple times.
    - Never raises exceptions; all errors are reported to stderr and logging continues with best-effort.

Usage:
    Import the module and call `setup_logging()` early in your application's startup sequence,
    optionally passing a configuration dictionary to customize log levels and handlers.

    >>> from sheetsync.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"console_level": "INFO"}})

Globals:
    logger: Main application logger ("sheetsync").
    EDIT_LOGGER: Logger for applied document patches ("sheetsync.edits").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# These logger objects are created at import-time but remain unconfigured
# until ``setup_logging()`` attaches appropriate handlers.
logger = logging.getLogger("sheetsync")  # main application logger
EDIT_LOGGER = logging.getLogger("sheetsync.edits")  # applied patch trace

EDIT_TRACE_ENV = "SHEETSYNC_EDITTRACE"


def _rotating_handler(filename: str, max_bytes: int, backup_count: int) -> logging.Handler:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)
    return logging.handlers.RotatingFileHandler(
        filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler – rotating sheetsync.log capturing everything from
       the configured `file_level` (default DEBUG) upward.
    2. Console handler – optional `stderr` output whose threshold is
       `console_level` (default WARNING).
    3. Error-file handler – optional rotating error.log that stores
       only ERROR and CRITICAL events.
    4. Edit-trace handler – optional rotating edittrace.log enabled
       when the environment variable ``SHEETSYNC_EDITTRACE`` is set to
       ``1/true/yes``; attached to the ``sheetsync.edits`` logger.

    Existing handlers on the root logger are cleared to avoid duplicate
    records when the function is invoked multiple times (e.g. in unit
    tests).

    Args:
        config (dict | None): Optional application configuration blob.
            Only the ``["logging"]`` sub-section is consulted; recognised
            keys are ``file_level``, ``console_level``, ``log_to_console``
            and ``separate_error_log``.

    Notes:
        The function never raises; all I/O or permission errors are
        reported to stderr and the logging subsystem continues with a
        best-effort configuration.
    """
    if config is None:
        config = {}
    log_filename = "sheetsync.log"
    logging_config = config.get("logging", {})
    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
    except OSError as e_fh:
        print(f"Error setting up file logger for '{log_filename}': {e_fh}.", file=sys.stderr)
        log_filename = os.path.join(tempfile.gettempdir(), "sheetsync.log")
        print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
        try:
            file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5)
        except OSError as e_tmp:
            print(f"Error setting up temporary file logger: {e_tmp}. File logging disabled.", file=sys.stderr)
    if file_handler:
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_log_level = getattr(logging, console_level_str, logging.WARNING)
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(console_log_level)

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        try:
            error_file_handler = _rotating_handler("error.log", 1 * 1024 * 1024, 3)
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except OSError as e_efh:
            print(f"Error setting up separate error log 'error.log': {e_efh}.", file=sys.stderr)

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates
    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Edit Trace Logger
    EDIT_LOGGER.propagate = False
    EDIT_LOGGER.setLevel(logging.DEBUG)
    EDIT_LOGGER.handlers = []
    EDIT_LOGGER.disabled = False

    if os.environ.get(EDIT_TRACE_ENV, "").lower() in {"1", "true", "yes"}:
        try:
            edit_trace_handler = _rotating_handler("edittrace.log", 1 * 1024 * 1024, 3)
            edit_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            EDIT_LOGGER.addHandler(edit_trace_handler)
            logging.info("Edit tracing enabled, logging to 'edittrace.log'.")
        except OSError as e_trace:
            logging.error(f"Failed to set up edit trace logging: {e_trace}", exc_info=True)
            EDIT_LOGGER.disabled = True
    else:
        EDIT_LOGGER.addHandler(logging.NullHandler())
        EDIT_LOGGER.disabled = True
        logging.debug("Edit tracing is disabled.")

    logging.info("Logging setup complete. Root logger level: %s.", logging.getLevelName(root_logger.level))
    if file_handler:
        logging.info(f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}.")
    if console_handler:
        logging.info(f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}.")
    if error_file_handler:
        logging.info("Error logging to 'error.log' at level: ERROR.")
