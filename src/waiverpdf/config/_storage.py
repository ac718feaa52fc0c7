"""
Low-level config file I/O for waiverpdf.

Handles locating, reading, and validating the on-disk config.json.
Missing or unreadable files yield an empty config; callers fall back
to built-in defaults.
"""

from __future__ import annotations

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "ConfigDict",
    "config_path",
    "load_config",
    "load_raw_config",
]

import json
import logging
import os
from pathlib import Path
from typing import Any, TypedDict, cast

from ..constants import ENV_CONFIG

_logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".waiverpdf"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ConfigDict(TypedDict, total=False):
    """Type definition for the config file structure."""

    margin: float
    legal_font_size: float
    legal_line_height: float
    legal_text_file: str
    waiver_version: str


_NUMBER_KEYS = ("margin", "legal_font_size", "legal_line_height")
_STRING_KEYS = ("legal_text_file", "waiver_version")


def config_path() -> Path:
    """Config file location: ``$WAIVERPDF_CONFIG`` if set, else ~/.waiverpdf/config.json."""
    override = os.environ.get(ENV_CONFIG, "").strip()
    return Path(override).expanduser() if override else CONFIG_FILE


def load_raw_config() -> dict[str, object]:
    """Load the raw config dict from disk, preserving all keys."""
    path = config_path()
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(data, dict):
            return cast("dict[str, object]", data)
        _logger.warning("Config file %s is not a JSON object, ignoring", path)
    except FileNotFoundError:
        pass
    except json.JSONDecodeError as e:
        _logger.warning("Config file corrupted, ignoring: %s", e)
    except OSError as e:
        _logger.warning("Cannot read config file: %s", e)
    return {}


def _validate_config_dict(data: dict[str, object]) -> ConfigDict:
    """Pick only known keys with correct types; warn about the rest."""
    result: ConfigDict = {}
    for key in _NUMBER_KEYS:
        val = data.get(key)
        if val is None:
            continue
        if isinstance(val, (int, float)) and not isinstance(val, bool) and val > 0:
            result[key] = float(val)  # type: ignore[literal-required]  # dynamic key from known set
        else:
            _logger.warning("Ignoring config %s=%r: expected a positive number", key, val)
    for key in _STRING_KEYS:
        val = data.get(key)
        if val is None:
            continue
        if isinstance(val, str) and val.strip():
            result[key] = val.strip()  # type: ignore[literal-required]  # dynamic key from known set
        else:
            _logger.warning("Ignoring config %s=%r: expected a non-empty string", key, val)
    return result


def load_config() -> ConfigDict:
    """Load and validate the config file."""
    return _validate_config_dict(load_raw_config())
