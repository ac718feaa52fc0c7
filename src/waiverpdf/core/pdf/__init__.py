"""PDF object model, serialization, and structural verification."""

from .objects import (
    PdfObject,
    build_font_object,
    build_image_object,
    build_object,
    build_stream_object,
    format_number,
    pdf_escape,
)
from .verify import DocumentCheck, check_xref, verify_document
from .writer import build_xref_and_trailer, serialize

__all__ = [
    "DocumentCheck",
    "PdfObject",
    "build_font_object",
    "build_image_object",
    "build_object",
    "build_stream_object",
    "build_xref_and_trailer",
    "check_xref",
    "format_number",
    "pdf_escape",
    "serialize",
    "verify_document",
]
