"""
Shared utility functions for the content engine.

JSON helpers used by the settings loader and by the image cropper when it
reads crop presets stored as JSON text.
"""

import json
import logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------

def safe_read_json(path, default=None):
    """Read a JSON file, returning *default* if the file is missing or corrupt.

    Parameters
    ----------
    path : str or pathlib.Path
        Absolute path to the JSON file.
    default
        Value returned when the file cannot be read (default ``None``).

    Returns
    -------
    object
        Parsed JSON content, or *default* on failure.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        return default
    except (json.JSONDecodeError, OSError):
        logger.warning("Could not read JSON from %s", path, exc_info=True)
        return default


# ---------------------------------------------------------------------------
# JSON text values
# ---------------------------------------------------------------------------

def parse_json_object(text):
    """Parse *text* as a JSON object, returning ``None`` if it is not one."""
    if not isinstance(text, str):
        return None
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        value = json.loads(stripped)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def parse_json_list(text):
    """Parse *text* as a JSON array, returning ``None`` if it is not one."""
    if isinstance(text, list):
        return text
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, list) else None
