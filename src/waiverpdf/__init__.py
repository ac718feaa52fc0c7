"""
waiverpdf — Liability waiver acceptance certificates as PDF.

Turns a stored waiver submission and its hand-drawn signature PNG into a
self-contained PDF-1.4 document: a summary page with the participant's
data, consents and evidence hashes, followed by the full legal text.
No PDF or imaging library is needed to generate documents.
"""

from __future__ import annotations

from .constants import __version__
from .core.document import generate_waiver_pdf
from .core.layout import DEFAULT_LAYOUT, LayoutConfig
from .core.pdf import PdfObject, serialize, verify_document
from .core.png import DecodeOutcome, RasterImage, decode_png, try_decode_png
from .errors import (
    ConfigError,
    FormatError,
    GenerationError,
    RecordError,
    WaiverPdfError,
)
from .records import (
    SubmissionRecord,
    build_record,
    compute_tamper_hash,
    decode_signature_data_url,
    record_from_dict,
    record_to_dict,
    validate_payload,
)
from .waiver import DEFAULT_LEGAL_TEXT, LegalText

__all__ = [
    "DEFAULT_LAYOUT",
    "DEFAULT_LEGAL_TEXT",
    "ConfigError",
    "DecodeOutcome",
    "FormatError",
    "GenerationError",
    "LayoutConfig",
    "LegalText",
    "PdfObject",
    "RasterImage",
    "RecordError",
    "SubmissionRecord",
    "WaiverPdfError",
    "__version__",
    "build_record",
    "compute_tamper_hash",
    "decode_png",
    "decode_signature_data_url",
    "generate_waiver_pdf",
    "record_from_dict",
    "record_to_dict",
    "serialize",
    "try_decode_png",
    "validate_payload",
    "verify_document",
]
