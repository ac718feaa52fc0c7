"""Core codecs and document assembly."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import WaiverPdfError

if TYPE_CHECKING:
    import types

__all__: list[str] = []


def require_pikepdf() -> types.ModuleType:
    """Lazily import pikepdf to avoid loading the C extension at startup.

    Generation never needs it; only structural verification of finished
    documents does.
    """
    try:
        import pikepdf
    except ImportError as exc:
        raise WaiverPdfError(
            "pikepdf is required for this operation.\nInstall with: pip install pikepdf"
        ) from exc
    else:
        return pikepdf
