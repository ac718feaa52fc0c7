"""waiverpdf error types."""

from __future__ import annotations

__all__ = [
    "ConfigError",
    "FormatError",
    "GenerationError",
    "RecordError",
    "WaiverPdfError",
]


class WaiverPdfError(Exception):
    """Base error for waiverpdf operations."""


class FormatError(WaiverPdfError):
    """Input PNG is malformed or uses an unsupported configuration."""


class GenerationError(WaiverPdfError):
    """PDF could not be assembled (inconsistent object set, bad layout)."""


class ConfigError(WaiverPdfError):
    """Configuration validation error."""


class RecordError(WaiverPdfError):
    """Submission record is missing fields or has wrongly typed values.

    Args:
        message: Human-readable error description.
        field: Dotted path of the offending field, if known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def __reduce__(self) -> tuple[type[RecordError], tuple[str], dict[str, str | None]]:
        """Preserve the field name across pickle/unpickle."""
        return (type(self), (str(self),), {"field": self.field})

    def __setstate__(self, state: dict[str, str | None] | None) -> None:
        if state is None:
            return
        self.field = state.get("field")
