"""
Common CLI helper functions for waiverpdf.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any

__all__ = [
    "atomic_write",
    "default_output_path",
    "format_size_kb",
    "load_json_object",
    "safe_read_file",
]

_BYTES_PER_KB = 1024


def format_size_kb(size_bytes: int) -> str:
    """Format a byte count as a human-readable KB string (e.g. '123.4 KB')."""
    return f"{size_bytes / _BYTES_PER_KB:.1f} KB"


def default_output_path(record_path: Path, record_id: str) -> Path:
    """Default output path for a rendered certificate: '<record dir>/<id>.pdf'."""
    safe_id = "".join(c if c.isalnum() or c in "-_." else "_" for c in record_id)
    return record_path.with_name(f"{safe_id or record_path.stem}.pdf")


def safe_read_file(path: Path, kind: str = "file") -> bytes | None:
    """
    Read a file with uniform error handling.

    Args:
        path: Path to the file to read.
        kind: Descriptive name for error messages (e.g., "PDF", "signature").

    Returns:
        File contents as bytes, or None if the file doesn't exist or can't be read.
    """
    if not path.exists():
        print(f"Error: {kind} not found: {path}", file=sys.stderr)
        return None

    try:
        return path.read_bytes()
    except OSError as e:
        print(f"Error reading {kind}: {e}", file=sys.stderr)
        return None


def load_json_object(path: Path, kind: str = "record") -> dict[str, Any] | None:
    """Read a JSON file that must contain an object; print errors and return None on failure."""
    raw = safe_read_file(path, kind)
    if raw is None:
        return None
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Error: {kind} {path} is not valid JSON: {e}", file=sys.stderr)
        return None
    if not isinstance(data, dict):
        print(f"Error: {kind} {path} must contain a JSON object", file=sys.stderr)
        return None
    return data


def atomic_write(path: Path, data: bytes) -> None:
    """Write data to a file atomically using temp file + rename.

    Args:
        path: Target file path.
        data: Bytes to write.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        os.write(fd, data)
        os.fsync(fd)
        os.close(fd)
        fd = -1
        tmp.replace(path)
    except Exception:
        if fd >= 0:
            os.close(fd)
        tmp.unlink(missing_ok=True)
        raise
