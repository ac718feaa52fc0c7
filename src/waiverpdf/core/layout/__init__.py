"""Page layout: wrapping, pagination, and content-stream construction."""

from .config import DEFAULT_LAYOUT, LayoutConfig
from .stream import (
    FontName,
    build_legal_page_content,
    encode_ops,
    image_op,
    rect_stroke_op,
    text_op,
)
from .summary import SIGNATURE_IMAGE_NAME, build_summary_content, format_datetime, format_flag
from .text import centered_x, max_chars_for, paginate, text_width, wrap_line, wrap_lines

__all__ = [
    "DEFAULT_LAYOUT",
    "SIGNATURE_IMAGE_NAME",
    "FontName",
    "LayoutConfig",
    "build_legal_page_content",
    "build_summary_content",
    "centered_x",
    "encode_ops",
    "format_datetime",
    "format_flag",
    "image_op",
    "max_chars_for",
    "paginate",
    "rect_stroke_op",
    "text_op",
    "text_width",
    "wrap_line",
    "wrap_lines",
]
