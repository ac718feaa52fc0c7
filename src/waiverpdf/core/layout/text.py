"""
Text measurement, word wrapping, and pagination.

Widths come from a flat per-character estimate (font size times a fixed
factor), not from font metrics. The estimate is deliberately kept as is:
changing it changes every wrapped line.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ...constants import APPROX_CHAR_WIDTH_FACTOR
from .config import DEFAULT_LAYOUT

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .config import LayoutConfig

__all__ = [
    "centered_x",
    "max_chars_for",
    "paginate",
    "text_width",
    "wrap_line",
    "wrap_lines",
]


def text_width(text: str, size: float, factor: float = APPROX_CHAR_WIDTH_FACTOR) -> float:
    """Approximate rendered width of text in PDF points."""
    return len(text) * size * factor


def max_chars_for(
    width: float, size: float, factor: float = APPROX_CHAR_WIDTH_FACTOR, minimum: int = 1
) -> int:
    """How many characters of the given size fit in width (at least ``minimum``)."""
    return max(minimum, math.floor(width / (size * factor)))


def centered_x(
    text: str,
    size: float,
    left: float = 0.0,
    width: float | None = None,
    factor: float = APPROX_CHAR_WIDTH_FACTOR,
) -> float:
    """X coordinate that centers text inside [left, left + width].

    ``width`` defaults to the page width, i.e. centering on the page.
    """
    if width is None:
        width = DEFAULT_LAYOUT.page_width
    return left + (width - text_width(text, size, factor)) / 2


def wrap_line(text: str, max_chars: int) -> list[str]:
    """Greedy word wrap to at most max_chars characters per line.

    Whitespace runs collapse to single spaces. A blank input yields one
    empty line so paragraph breaks survive pagination. Words longer than
    max_chars are split into max_chars-sized pieces; the last, shorter
    piece keeps filling the current line.
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    words = text.split()
    if not words:
        return [""]

    lines: list[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if len(word) <= max_chars:
            current = word
            continue

        for start in range(0, len(word), max_chars):
            chunk = word[start : start + max_chars]
            if len(chunk) == max_chars:
                lines.append(chunk)
            else:
                current = chunk

    if current:
        lines.append(current)
    return lines


def wrap_lines(lines: Iterable[str], max_chars: int) -> list[str]:
    """Wrap each input line independently and flatten the result."""
    return [wrapped for line in lines for wrapped in wrap_line(line, max_chars)]


def paginate(lines: Iterable[str], layout: LayoutConfig = DEFAULT_LAYOUT) -> list[list[str]]:
    """Wrap legal-text lines and slice them into fixed-size pages, in order."""
    wrapped = wrap_lines(lines, layout.legal_max_chars)
    per_page = layout.lines_per_page
    return [wrapped[i : i + per_page] for i in range(0, len(wrapped), per_page)]
