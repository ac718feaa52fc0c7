"""
Application-wide constants for waiverpdf.

Page geometry defaults, format magic bytes, and environment variable
names are centralized here.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("waiverpdf")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "APPROX_CHAR_WIDTH_FACTOR",
    "ENV_CONFIG",
    "ENV_DEBUG_LOGS",
    "LEGAL_FONT_SIZE",
    "LEGAL_LINE_HEIGHT",
    "MAX_SIGNATURE_BYTES",
    "PAGE_HEIGHT",
    "PAGE_MARGIN",
    "PAGE_WIDTH",
    "PDF_HEADER",
    "PDF_MAGIC",
    "PNG_SIGNATURE",
    "SIGNATURE_DATA_URL_PREFIX",
    "__version__",
]

# ── Page geometry (PDF points) ────────────────────────────────────────

# A4 portrait
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
PAGE_MARGIN = 48


# ── Legal text typography ─────────────────────────────────────────────

LEGAL_FONT_SIZE = 10.5
LEGAL_LINE_HEIGHT = 14

# Approximate glyph advance as a fraction of the font size.
# Helvetica averages a little over half an em for mixed-case text.
APPROX_CHAR_WIDTH_FACTOR = 0.52


# ── Format magic ──────────────────────────────────────────────────────

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

PDF_MAGIC = b"%PDF-"

# Version line plus a comment with high-bit bytes so transfer tools
# treat the file as binary.
PDF_HEADER = b"%PDF-1.4\n%\xff\xff\xff\xff\n"


# ── Input limits ──────────────────────────────────────────────────────

# Signature canvas exports are a few KB; anything past 1 MB is rejected.
MAX_SIGNATURE_BYTES = 1_000_000

SIGNATURE_DATA_URL_PREFIX = "data:image/png;base64,"


# ── Environment variable names ────────────────────────────────────────

ENV_CONFIG = "WAIVERPDF_CONFIG"
ENV_DEBUG_LOGS = "WAIVERPDF_DEBUG_LOGS"
