"""Page geometry and typography model for the layout engine."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ...constants import (
    APPROX_CHAR_WIDTH_FACTOR,
    LEGAL_FONT_SIZE,
    LEGAL_LINE_HEIGHT,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    PAGE_WIDTH,
)
from ...errors import GenerationError

__all__ = ["DEFAULT_LAYOUT", "LayoutConfig"]


@dataclass(frozen=True)
class LayoutConfig:
    """Fixed page geometry and the approximate-width font model.

    Attributes:
        page_width: Page width in PDF points.
        page_height: Page height in PDF points.
        margin: Margin on all four sides.
        legal_font_size: Font size of the legal text pages.
        legal_line_height: Baseline-to-baseline distance on legal pages.
        char_width_factor: Glyph advance as a fraction of the font size.
            There are no real font metrics; every character counts the same.
    """

    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    margin: float = PAGE_MARGIN
    legal_font_size: float = LEGAL_FONT_SIZE
    legal_line_height: float = LEGAL_LINE_HEIGHT
    char_width_factor: float = APPROX_CHAR_WIDTH_FACTOR

    def __post_init__(self) -> None:
        if self.content_width <= 0 or self.content_height <= 0:
            raise GenerationError(
                f"Margin {self.margin} leaves no room on a "
                f"{self.page_width}x{self.page_height} page"
            )
        if self.legal_font_size <= 0 or self.legal_line_height <= 0:
            raise GenerationError("Font size and line height must be positive")
        if self.char_width_factor <= 0:
            raise GenerationError("Character width factor must be positive")
        if self.legal_max_chars < 1 or self.lines_per_page < 1:
            raise GenerationError("Legal text does not fit a single character on the page")

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def approx_char_width(self) -> float:
        return self.legal_font_size * self.char_width_factor

    @property
    def legal_max_chars(self) -> int:
        """Characters per wrapped legal-text line."""
        return math.floor(self.content_width / self.approx_char_width)

    @property
    def lines_per_page(self) -> int:
        """Legal-text lines per page."""
        return math.floor(self.content_height / self.legal_line_height)


DEFAULT_LAYOUT = LayoutConfig()
