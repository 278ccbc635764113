# sheetsync/utils/utils.py
"""
sheetsync.utils.utils
=====================

This module provides the configuration and file helpers of sheetsync.

Key functionalities include:
- Automatic User Configuration: Manages the creation and loading of user-specific
  configuration files (`config.toml`, `.env`) in `~/.config/sheetsync`.
- Robust Configuration Loading: Loads a hardcoded, built-in default configuration,
  then recursively merges it with user-defined settings from
  `~/.config/sheetsync/config.toml`.
- Text File Access: Reads configuration documents with encoding detection and
  writes them back in the encoding they were read with.
- Helper Utilities: Deep-merging of dictionaries.

The application is always runnable, even if the user configuration file is missing or
corrupted, by falling back to the embedded defaults.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import chardet
import toml

from sheetsync.core.TextDocument import to_newline_separators

logger = logging.getLogger("sheetsync")

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75

ENV_TEMPLATE = """# Environment settings for sheetsync
# Set to 1 to record every patch applied to a document in edittrace.log.
SHEETSYNC_EDITTRACE=
"""

# This dictionary is a direct, hardcoded representation of `config.toml`.
# It serves as the ultimate fallback, ensuring the application can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "document": {"default_indent": "  ", "debounce_interval": 0.45},
    "input_types": {"default_grid_size": ["16", "16"]},
    "logging": {
        "file_level": "DEBUG", "console_level": "WARNING",
        "log_to_console": True, "separate_error_log": False,
    },
}


# --- Helper Functions ---

def get_user_config_path() -> Path:
    return Path.home() / ".config" / "sheetsync" / "config.toml"


def get_project_root() -> Path:
    """Determines the project's root directory for finding template files."""
    return Path(__file__).resolve().parents[3]


def ensure_user_config_exists() -> None:
    """Checks for user config files in `~/.config/sheetsync` and creates them if missing."""
    try:
        user_config_path = get_user_config_path()
        user_env_path = user_config_path.parent / ".env"
        user_config_path.parent.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            source_config_path = get_project_root() / "config.toml"
            if source_config_path.exists():
                shutil.copy(source_config_path, user_config_path)
                logger.info(f"Created user config template at: {user_config_path}")

        if not user_env_path.exists():
            user_env_path.write_text(ENV_TEMPLATE, encoding="utf-8")
            logger.info(f"Created user .env template at: {user_env_path}")

    except OSError as e:
        logger.critical(f"Could not create user configuration files: {e}", exc_info=True)


def load_config() -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    ensure_user_config_exists()

    user_config_path = get_user_config_path()
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _encodings_to_try(raw_data_sample: bytes) -> list[Tuple[str, str]]:
    chardet_result = chardet.detect(raw_data_sample)
    encoding_guess: Optional[str] = chardet_result.get("encoding")
    confidence = chardet_result.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f}.")

    candidates: list[Tuple[str, str]] = []
    if encoding_guess and confidence >= CHARDET_MIN_CONFIDENCE:
        candidates.append((encoding_guess, "strict"))
    candidates += [("utf-8", "strict"), ("latin-1", "strict")]
    if encoding_guess and confidence < CHARDET_MIN_CONFIDENCE:
        candidates.append((encoding_guess, "replace"))
    candidates.append(("utf-8", "replace"))

    unique: list[Tuple[str, str]] = []
    for candidate in candidates:
        if candidate not in unique:
            unique.append(candidate)
    return unique


def read_text_file(path: str) -> Tuple[str, str]:
    """Reads a configuration document, detecting its encoding.

    Line endings are kept as they are in the file; use
    `to_newline_separators` before building a model.

    Returns:
        (text, encoding) - the decoded text and the encoding that decoded it.

    Raises:
        OSError: If the file cannot be read.
    """
    raw_data = Path(path).read_bytes()
    if not raw_data:
        logger.info(f"File '{path}' is empty.")
        return "", "utf-8"

    for encoding, error_policy in _encodings_to_try(raw_data[:CHARDET_SAMPLE_SIZE]):
        try:
            text = raw_data.decode(encoding, errors=error_policy)
        except (UnicodeDecodeError, LookupError) as e_read:
            logger.warning(f"Failed to read '{path}' with encoding '{encoding}' (errors='{error_policy}'): {e_read}")
            continue
        logger.info(f"Successfully read '{path}' using encoding '{encoding}' with errors='{error_policy}'.")
        if encoding.lower() == "ascii":
            # Edits may introduce non-ASCII ids; UTF-8 decodes ASCII files identically.
            encoding = "utf-8"
        return text, encoding

    # ("utf-8", "replace") never fails, this is unreachable in practice.
    return raw_data.decode("utf-8", errors="replace"), "utf-8"


def read_config_source(path: str) -> str:
    """Reads a configuration document as ``\\n``-separated text."""
    text, _ = read_text_file(path)
    return to_newline_separators(text)


def write_text_file(path: str, text: str, encoding: str = "utf-8") -> None:
    # newline="" keeps the document's own line separators untouched.
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)
    logger.info(f"Wrote {len(text)} chars to '{path}' ({encoding}).")
