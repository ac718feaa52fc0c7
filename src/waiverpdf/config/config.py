"""
Configuration resolution for waiverpdf.

Resolves page geometry and the legal text to use for generation.

Priority: explicit arguments > config file > built-in defaults.
"""

from __future__ import annotations

__all__ = [
    "debug_logs_enabled",
    "get_layout_config",
    "get_legal_text",
]

import logging
import os
from dataclasses import replace
from pathlib import Path

from ..constants import ENV_DEBUG_LOGS
from ..core.layout import DEFAULT_LAYOUT, LayoutConfig
from ..errors import ConfigError, GenerationError
from ..waiver import DEFAULT_LEGAL_TEXT, LegalText
from ._storage import load_config

_logger = logging.getLogger(__name__)


def debug_logs_enabled() -> bool:
    """True when ``WAIVERPDF_DEBUG_LOGS=1``."""
    return os.environ.get(ENV_DEBUG_LOGS, "").strip() == "1"


def get_layout_config(
    margin: float | None = None,
    legal_font_size: float | None = None,
    legal_line_height: float | None = None,
) -> LayoutConfig:
    """
    Resolve the page geometry.

    Arguments that are None fall back to the config file, then to the
    built-in A4 defaults.

    Raises:
        ConfigError: if the resulting geometry leaves no room for text.
    """
    config = load_config()
    overrides: dict[str, float] = {}

    for key, explicit in (
        ("margin", margin),
        ("legal_font_size", legal_font_size),
        ("legal_line_height", legal_line_height),
    ):
        value = explicit if explicit is not None else config.get(key)
        if value is not None:
            overrides[key] = float(value)  # type: ignore[arg-type]  # narrowed above

    if not overrides:
        return DEFAULT_LAYOUT
    try:
        return replace(DEFAULT_LAYOUT, **overrides)
    except GenerationError as e:
        raise ConfigError(f"Invalid layout configuration {overrides}: {e}") from e


def get_legal_text(path: str | Path | None = None, version: str | None = None) -> LegalText:
    """
    Resolve the legal text and its version tag.

    Args:
        path: UTF-8 text file to use instead of the configured one.
        version: Version tag of the custom text; defaults to the configured
            ``waiver_version``. The built-in text always keeps its own tag.

    Raises:
        ConfigError: if a custom text is used without any version tag, a
            version is given without a custom text, or the file cannot be
            read.
    """
    config = load_config()
    source = path if path is not None else config.get("legal_text_file")
    tag = version or config.get("waiver_version")

    if source is None:
        if version:
            raise ConfigError(
                f"Version tag {version} given without a custom legal text (--legal-text)."
            )
        if tag:
            _logger.warning(
                "Ignoring waiver_version=%s: no legal_text_file configured, using %s",
                tag,
                DEFAULT_LEGAL_TEXT.version,
            )
        return DEFAULT_LEGAL_TEXT

    if not tag:
        raise ConfigError(
            f"Legal text {source} needs a version tag (--legal-version or waiver_version)."
        )
    try:
        text = Path(source).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read legal text {source}: {e}") from e

    # Editors add a trailing newline; the hash covers the text as accepted.
    text = text.rstrip("\n")
    if not text.strip():
        raise ConfigError(f"Legal text {source} is empty.")
    _logger.debug("Loaded legal text %s (%s, %d chars)", source, tag, len(text))
    return LegalText(version=tag, text=text)
