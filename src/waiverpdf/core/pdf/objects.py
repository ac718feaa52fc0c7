"""Low-level PDF object construction.

Types and helpers for building the indirect objects of a generated
document: plain dictionaries, content streams, built-in fonts and
raster image XObjects, plus literal-string escaping and number
formatting for content-stream operators.

File serialization (header, xref table, trailer) is in writer.py.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ...errors import GenerationError

if TYPE_CHECKING:
    from ..png import RasterImage

__all__ = [
    "PdfObject",
    "build_font_object",
    "build_image_object",
    "build_object",
    "build_stream_object",
    "format_number",
    "pdf_escape",
]


@dataclass(frozen=True)
class PdfObject:
    """One indirect object: its number and the raw bytes between ``obj`` and ``endobj``."""

    id: int
    body: bytes


# ── String/number helpers ────────────────────────────────────────────


def format_number(value: float) -> str:
    """Format a coordinate for a content stream: two decimals, ``.00`` dropped.

    >>> format_number(48)
    '48'
    >>> format_number(10.5)
    '10.50'
    """
    fixed = f"{value:.2f}"
    if fixed.endswith(".00"):
        fixed = fixed[:-3]
    if fixed == "-0":
        fixed = "0"
    return fixed


def pdf_escape(text: str) -> str:
    """Escape text for a PDF literal string (without the enclosing parentheses).

    Backslash and parentheses are backslash-escaped. Characters outside
    printable ASCII become three-digit octal escapes when they fit in one
    byte (WinAnsiEncoding renders Latin-1 accents correctly) and ``?``
    otherwise.
    """
    result: list[str] = []
    for char in text:
        code = ord(char)
        if char in "\\()":
            result.append("\\" + char)
        elif code < 32 or code > 126:
            result.append(f"\\{code:03o}" if code <= 0xFF else "?")
        else:
            result.append(char)
    return "".join(result)


# ── Object builders ──────────────────────────────────────────────────


def build_object(obj_id: int, body: bytes | str) -> PdfObject:
    """Wrap a body (dictionary source or raw bytes) as a PdfObject."""
    if obj_id < 1:
        raise GenerationError(f"PDF object ids start at 1, got {obj_id}")
    data = body if isinstance(body, bytes) else body.encode("latin-1")
    return PdfObject(id=obj_id, body=data)


def build_stream_object(obj_id: int, content: bytes, extra: str = "") -> PdfObject:
    """Build a stream object whose /Length is the exact byte count of ``content``.

    Args:
        obj_id: Object number.
        content: Stream payload (already encoded/compressed).
        extra: Additional dictionary entries, e.g. ``"/Filter /FlateDecode"``.
    """
    entries = f"{extra} /Length {len(content)}" if extra else f"/Length {len(content)}"
    header = f"<< {entries} >>\nstream\n".encode("latin-1")
    # The EOL before endstream is not counted in /Length.
    trailer = b"endstream" if content.endswith(b"\n") else b"\nendstream"
    return build_object(obj_id, header + content + trailer)


def build_font_object(obj_id: int, base_font: str) -> PdfObject:
    """Build a standard-14 Type1 font dictionary (no embedding)."""
    return build_object(
        obj_id,
        f"<< /Type /Font /Subtype /Type1 /BaseFont /{base_font} /Encoding /WinAnsiEncoding >>",
    )


def build_image_object(obj_id: int, image: RasterImage) -> PdfObject:
    """Build a Flate-compressed /DeviceRGB image XObject from a raster."""
    samples = zlib.compress(image.pixels)
    extra = (
        f"/Type /XObject /Subtype /Image /Width {image.width} /Height {image.height}"
        f" /ColorSpace /DeviceRGB /BitsPerComponent 8 /Filter /FlateDecode"
    )
    return build_stream_object(obj_id, samples, extra)
