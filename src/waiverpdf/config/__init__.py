"""
Configuration for waiverpdf.

Re-exports the public API from the config submodules. For internals,
import from the individual submodules (config, _storage).
"""

from __future__ import annotations

from ._storage import CONFIG_DIR, CONFIG_FILE, ConfigDict, config_path, load_config
from .config import debug_logs_enabled, get_layout_config, get_legal_text

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "ConfigDict",
    "config_path",
    "debug_logs_enabled",
    "get_layout_config",
    "get_legal_text",
    "load_config",
]
