"""Content-stream operator builders.

Small helpers that turn positioned text, rectangles and image placements
into PDF operator text. Streams are assembled as lists of operator
strings and encoded once; every non-ASCII character has already been
octal-escaped, so the result is plain ASCII.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from ..pdf.objects import format_number, pdf_escape
from .config import DEFAULT_LAYOUT

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .config import LayoutConfig

__all__ = [
    "FontName",
    "build_legal_page_content",
    "encode_ops",
    "image_op",
    "rect_stroke_op",
    "text_op",
]

FontName = Literal["F1", "F2"]  # F1 regular, F2 bold


def text_op(font: FontName, size: float, x: float, y: float, text: str) -> str:
    """One self-contained text object drawing a single line at (x, y)."""
    return "\n".join(
        [
            "BT",
            f"/{font} {format_number(size)} Tf",
            f"1 0 0 1 {format_number(x)} {format_number(y)} Tm",
            f"({pdf_escape(text)}) Tj",
            "ET",
        ]
    )


def rect_stroke_op(
    x: float, y: float, w: float, h: float, gray: float = 0.75, line_width: float = 1
) -> str:
    """Stroke a rectangle outline in the given gray level, graphics state isolated."""
    rect = f"{format_number(x)} {format_number(y)} {format_number(w)} {format_number(h)}"
    return "\n".join(
        [
            "q",
            f"{format_number(gray)} G",
            f"{format_number(line_width)} w",
            f"{rect} re S",
            "Q",
        ]
    )


def image_op(name: str, x: float, y: float, w: float, h: float) -> str:
    """Paint an image XObject scaled into the rectangle (x, y, w, h)."""
    return "\n".join(
        [
            "q",
            f"{format_number(w)} 0 0 {format_number(h)} {format_number(x)} {format_number(y)} cm",
            f"/{name} Do",
            "Q",
        ]
    )


def encode_ops(ops: Sequence[str]) -> bytes:
    """Join operators into stream bytes, newline-terminated."""
    return ("\n".join(ops) + "\n").encode("latin-1")


def build_legal_page_content(lines: Sequence[str], layout: LayoutConfig = DEFAULT_LAYOUT) -> bytes:
    """Render one page of pre-wrapped legal text as a single text object.

    Lines advance with the text leading (``TL`` / ``T*``), starting at the
    top-left corner of the content area.
    """
    ops = [
        "BT",
        f"/F1 {format_number(layout.legal_font_size)} Tf",
        f"{format_number(layout.legal_line_height)} TL",
        f"{format_number(layout.margin)} {format_number(layout.page_height - layout.margin)} Td",
    ]
    for index, line in enumerate(lines):
        if index > 0:
            ops.append("T*")
        ops.append(f"({pdf_escape(line)}) Tj")
    ops.append("ET")
    return encode_ops(ops)
