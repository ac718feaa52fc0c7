"""Whole-document PDF serialization.

Lays out header, indirect objects, cross-reference table and trailer
for a complete (non-incremental) PDF-1.4 file. Byte offsets are tracked
while writing so every xref entry lands exactly on its ``N 0 obj`` line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...constants import PDF_HEADER
from ...errors import GenerationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .objects import PdfObject

__all__ = ["build_xref_and_trailer", "serialize"]

_logger = logging.getLogger(__name__)

ROOT_OBJ_NUM = 1


def _check_object_ids(objects: Sequence[PdfObject]) -> int:
    """Validate the object set and return the highest object number."""
    if not objects:
        raise GenerationError("Cannot serialize a PDF without objects.")

    seen: set[int] = set()
    for obj in objects:
        if obj.id < 1:
            raise GenerationError(f"Invalid PDF object id {obj.id}")
        if obj.id in seen:
            raise GenerationError(f"Duplicate PDF object id {obj.id}")
        seen.add(obj.id)

    max_id = max(seen)
    if ROOT_OBJ_NUM not in seen:
        raise GenerationError("Catalog object 1 is missing.")
    missing = sorted(set(range(1, max_id + 1)) - seen)
    if missing:
        raise GenerationError(f"PDF object ids are not contiguous; missing {missing}")
    return max_id


def build_xref_and_trailer(offsets: dict[int, int], size: int, xref_offset: int) -> bytes:
    """Build the xref table, trailer and ``%%EOF`` marker.

    Args:
        offsets: Mapping of object number to byte offset of its header line.
        size: /Size value (highest object number + 1).
        xref_offset: Byte offset where the ``xref`` keyword starts.

    Returns:
        Raw bytes from ``xref`` to the final newline.
    """
    # ISO 32000-1 7.5.4: every entry is exactly 20 bytes including the EOL,
    # hence the trailing space before "\n".
    lines = ["xref", f"0 {size}", "0000000000 65535 f "]
    lines.extend(f"{offsets[obj_num]:010d} 00000 n " for obj_num in range(1, size))
    lines.append("trailer")
    lines.append(f"<< /Size {size} /Root {ROOT_OBJ_NUM} 0 R >>")
    lines.append("startxref")
    lines.append(str(xref_offset))
    lines.append("%%EOF")
    lines.append("")  # trailing newline
    return "\n".join(lines).encode("latin-1")


def serialize(objects: Sequence[PdfObject]) -> bytes:
    """Serialize indirect objects into a complete PDF file.

    Objects are written in id order. References between object bodies are
    not checked; the caller is responsible for consistent numbering.

    Raises:
        GenerationError: on an empty set, duplicate ids, a missing catalog,
            or gaps in the id range.
    """
    max_id = _check_object_ids(objects)

    chunks: list[bytes] = [PDF_HEADER]
    offsets: dict[int, int] = {}
    cursor = len(PDF_HEADER)

    for obj in sorted(objects, key=lambda o: o.id):
        offsets[obj.id] = cursor
        raw = f"{obj.id} 0 obj\n".encode("latin-1") + obj.body + b"\nendobj\n"
        chunks.append(raw)
        cursor += len(raw)

    chunks.append(build_xref_and_trailer(offsets, max_id + 1, cursor))
    pdf = b"".join(chunks)
    _logger.debug("Serialized %d objects into %d bytes", len(objects), len(pdf))
    return pdf
