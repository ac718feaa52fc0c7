"""
Structural verification of generated PDFs.

Re-reads a finished document and checks the things a strict reader
relies on: header, ``startxref`` pointing at the ``xref`` keyword, and
every in-use xref entry landing on its ``N 0 obj`` line. pikepdf then
parses the file independently to count pages and look for the embedded
signature image.
"""

from __future__ import annotations

import io
import logging
import re
from typing import TypedDict

from ...constants import PDF_MAGIC
from .. import require_pikepdf as _require_pikepdf

__all__ = ["DocumentCheck", "check_xref", "verify_document"]

_logger = logging.getLogger(__name__)

_STARTXREF_PATTERN = re.compile(rb"startxref\s+(\d+)\s+%%EOF\s*$")
_SUBSECTION_PATTERN = re.compile(rb"xref\s+(\d+)\s+(\d+)\s+")
_ENTRY_LENGTH = 20


class DocumentCheck(TypedDict):
    """Result of :func:`verify_document`."""

    valid: bool  # Overall result
    xref_ok: bool  # Offsets and startxref are byte-exact
    page_count: int  # Pages as seen by pikepdf (0 if it could not open the file)
    has_signature_image: bool  # First page exposes /XObject /Sig
    details: list[str]  # Human-readable messages


def check_xref(pdf_bytes: bytes) -> list[str]:
    """Check the xref table of a single-section PDF.

    Returns:
        List of problems; empty when the table is byte-exact.
    """
    problems: list[str] = []
    if not pdf_bytes.startswith(PDF_MAGIC):
        problems.append("Missing %PDF- header")

    m = _STARTXREF_PATTERN.search(pdf_bytes)
    if not m:
        return [*problems, "Cannot find startxref/%%EOF at end of file"]
    xref_offset = int(m.group(1))
    if pdf_bytes[xref_offset : xref_offset + 4] != b"xref":
        return [*problems, f"startxref {xref_offset} does not point at the xref keyword"]

    sub = _SUBSECTION_PATTERN.match(pdf_bytes, xref_offset)
    if not sub:
        return [*problems, "Malformed xref subsection header"]
    first, count = int(sub.group(1)), int(sub.group(2))
    entries_start = sub.end()

    for index in range(count):
        pos = entries_start + index * _ENTRY_LENGTH
        entry = pdf_bytes[pos : pos + _ENTRY_LENGTH]
        if len(entry) != _ENTRY_LENGTH:
            problems.append(f"xref entry {first + index} truncated")
            break
        offset, _gen, kind = entry[:10], entry[11:16], entry[17:18]
        obj_num = first + index
        if kind == b"f":
            continue
        target = int(offset)
        header = f"{obj_num} 0 obj".encode("latin-1")
        if pdf_bytes[target : target + len(header)] != header:
            problems.append(f"xref offset {target} for object {obj_num} is not '{obj_num} 0 obj'")

    trailer = re.search(rb"trailer\s*<<(.*?)>>", pdf_bytes[entries_start:], re.DOTALL)
    if not trailer:
        problems.append("Missing trailer dictionary")
    else:
        size_m = re.search(rb"/Size\s+(\d+)", trailer.group(1))
        if not size_m or int(size_m.group(1)) != first + count:
            problems.append(f"Trailer /Size does not match xref entry count {first + count}")

    return problems


def verify_document(pdf_bytes: bytes) -> DocumentCheck:
    """Verify a generated PDF structurally and with an independent parser."""
    details: list[str] = []

    xref_problems = check_xref(pdf_bytes)
    xref_ok = not xref_problems
    if xref_ok:
        details.append("xref table OK -- offsets and startxref are byte-exact")
    else:
        details.extend(xref_problems)

    pikepdf = _require_pikepdf()
    page_count = 0
    has_sig = False
    parsed_ok = False
    try:
        with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
            page_count = len(pdf.pages)
            if page_count:
                resources = pdf.pages[0].obj.get("/Resources", {})
                xobjects = resources.get("/XObject", {})
                has_sig = "/Sig" in xobjects
            parsed_ok = True
    except pikepdf.PdfError as e:
        details.append(f"pikepdf could not open the document: {e}")

    if parsed_ok:
        details.append(f"Pages: {page_count}")
        details.append("Signature image: " + ("embedded" if has_sig else "absent"))

    valid = xref_ok and parsed_ok and page_count > 0
    _logger.debug("Document verification: valid=%s pages=%d", valid, page_count)
    return {
        "valid": valid,
        "xref_ok": xref_ok,
        "page_count": page_count,
        "has_signature_image": has_sig,
        "details": details,
    }
