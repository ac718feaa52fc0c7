"""Waiver certificate assembly.

High-level API that turns a submission record and its signature PNG into
a complete PDF: decode the signature, lay out the summary page and the
legal-text pages, number the objects, serialize.

PNG decoding is in png.py.
Page layout is in layout/.
Low-level object construction and serialization are in pdf/.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypedDict

from ..waiver import DEFAULT_LEGAL_TEXT
from .layout import (
    DEFAULT_LAYOUT,
    SIGNATURE_IMAGE_NAME,
    build_legal_page_content,
    build_summary_content,
    paginate,
)
from .pdf import (
    PdfObject,
    build_font_object,
    build_image_object,
    build_object,
    build_stream_object,
    format_number,
    serialize,
)
from .png import try_decode_png

if TYPE_CHECKING:
    from ..records import SubmissionRecord
    from ..waiver import LegalText
    from .layout import LayoutConfig
    from .png import RasterImage

__all__ = ["DocumentObjectNums", "allocate_objects", "build_legal_lines", "generate_waiver_pdf"]

_logger = logging.getLogger(__name__)

CATALOG_OBJ_NUM = 1
PAGES_OBJ_NUM = 2
FIRST_PAGE_OBJ_NUM = 3

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"


class DocumentObjectNums(TypedDict):
    """Object numbers of one generated document.

    ``pages`` holds (page dict, content stream) pairs in page order.
    ``image`` is None when the signature could not be decoded.
    """

    catalog: int
    pages_root: int
    pages: list[tuple[int, int]]
    font_regular: int
    font_bold: int
    image: int | None


# ── Object number allocation ────────────────────────────────────────


def allocate_objects(page_count: int, has_image: bool) -> DocumentObjectNums:
    """Assign object numbers: catalog, page tree, page/content pairs, fonts, image last."""
    next_obj = FIRST_PAGE_OBJ_NUM
    pages: list[tuple[int, int]] = []
    for _ in range(page_count):
        pages.append((next_obj, next_obj + 1))
        next_obj += 2

    font_regular = next_obj
    font_bold = next_obj + 1
    next_obj += 2

    return {
        "catalog": CATALOG_OBJ_NUM,
        "pages_root": PAGES_OBJ_NUM,
        "pages": pages,
        "font_regular": font_regular,
        "font_bold": font_bold,
        "image": next_obj if has_image else None,
    }


# ── Content ─────────────────────────────────────────────────────────


def build_legal_lines(record: SubmissionRecord, legal_text: LegalText) -> list[str]:
    """Raw (unwrapped) lines of the legal-text section, heading first."""
    return ["TERMO COMPLETO", f"ID de envio: {record.id}", "", *legal_text.lines()]


def _page_object(obj_nums: DocumentObjectNums, index: int, layout: LayoutConfig) -> PdfObject:
    page_num, content_num = obj_nums["pages"][index]
    resources = (
        f"<< /Font << /F1 {obj_nums['font_regular']} 0 R /F2 {obj_nums['font_bold']} 0 R >>"
    )
    if index == 0 and obj_nums["image"] is not None:
        resources += f" /XObject << /{SIGNATURE_IMAGE_NAME} {obj_nums['image']} 0 R >>"
    resources += " >>"
    media_box = f"[0 0 {format_number(layout.page_width)} {format_number(layout.page_height)}]"
    return build_object(
        page_num,
        f"<< /Type /Page /Parent {obj_nums['pages_root']} 0 R /MediaBox {media_box}"
        f" /Resources {resources} /Contents {content_num} 0 R >>",
    )


def _collect_objects(
    obj_nums: DocumentObjectNums,
    contents: list[bytes],
    image: RasterImage | None,
    layout: LayoutConfig,
) -> list[PdfObject]:
    """Build every object of the document in id order."""
    kids = " ".join(f"{page_num} 0 R" for page_num, _ in obj_nums["pages"])
    objects = [
        build_object(
            obj_nums["catalog"], f"<< /Type /Catalog /Pages {obj_nums['pages_root']} 0 R >>"
        ),
        build_object(
            obj_nums["pages_root"], f"<< /Type /Pages /Kids [{kids}] /Count {len(contents)} >>"
        ),
    ]
    for index, content in enumerate(contents):
        objects.append(_page_object(obj_nums, index, layout))
        objects.append(build_stream_object(obj_nums["pages"][index][1], content))

    objects.append(build_font_object(obj_nums["font_regular"], REGULAR_FONT))
    objects.append(build_font_object(obj_nums["font_bold"], BOLD_FONT))

    image_num = obj_nums["image"]
    if image is not None and image_num is not None:
        objects.append(build_image_object(image_num, image))
    return objects


# ── Public API ──────────────────────────────────────────────────────


def generate_waiver_pdf(
    record: SubmissionRecord,
    signature_png: bytes | None = None,
    *,
    legal_text: LegalText | None = None,
    layout: LayoutConfig | None = None,
) -> bytes:
    """Generate the waiver certificate PDF for one submission.

    A signature that cannot be decoded (missing, empty, not a PNG, an
    unsupported PNG variant) is logged and the document is produced
    without the image. Any other failure propagates.

    Args:
        record: Submission snapshot; never modified.
        signature_png: Raw signature PNG bytes, if available.
        legal_text: Legal text to append; defaults to the built-in pt-BR text.
        layout: Page geometry; defaults to A4 with 48pt margins.

    Returns:
        Complete PDF-1.4 file bytes.

    Raises:
        GenerationError: if the object set is internally inconsistent.
    """
    legal = legal_text or DEFAULT_LEGAL_TEXT
    geometry = layout or DEFAULT_LAYOUT

    outcome = try_decode_png(signature_png)
    image = outcome.image
    if image is None:
        _logger.warning("Signature image for %s not embedded: %s", record.id, outcome.error)

    legal_pages = paginate(build_legal_lines(record, legal), geometry)
    contents = [
        build_summary_content(record, image is not None, geometry),
        *(build_legal_page_content(lines, geometry) for lines in legal_pages),
    ]

    obj_nums = allocate_objects(len(contents), has_image=image is not None)
    objects = _collect_objects(obj_nums, contents, image, geometry)
    pdf = serialize(objects)

    _logger.debug(
        "Generated waiver PDF for %s: %d pages, %d objects, %d bytes, signature %s",
        record.id,
        len(contents),
        len(objects),
        len(pdf),
        "embedded" if image is not None else "absent",
    )
    return pdf
