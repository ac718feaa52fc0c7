"""Tests for waiverpdf.ui.helpers -- CLI helper functions."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from waiverpdf.ui.helpers import (
    atomic_write,
    default_output_path,
    format_size_kb,
    load_json_object,
    safe_read_file,
)


@pytest.mark.parametrize(
    ("size", "expected"),
    [(0, "0.0 KB"), (1024, "1.0 KB"), (1536, "1.5 KB"), (10 * 1024 * 1024, "10240.0 KB")],
)
def test_format_size_kb(size, expected):
    assert format_size_kb(size) == expected


def test_default_output_path_uses_record_id():
    assert default_output_path(Path("/data/rec.json"), "sub_1_ab") == Path("/data/sub_1_ab.pdf")


def test_default_output_path_sanitizes_id():
    assert default_output_path(Path("rec.json"), "../x y") == Path(".._x_y.pdf")


def test_default_output_path_empty_id_falls_back_to_stem():
    assert default_output_path(Path("dir/rec.json"), "") == Path("dir/rec.pdf")


def test_safe_read_file_missing(tmp_path, capsys):
    assert safe_read_file(tmp_path / "nope.bin", "PNG") is None
    assert "PNG not found" in capsys.readouterr().err


def test_safe_read_file_os_error(tmp_path, capsys):
    path = tmp_path / "f.bin"
    path.write_bytes(b"x")
    with patch.object(Path, "read_bytes", side_effect=OSError("denied")):
        assert safe_read_file(path) is None
    assert "denied" in capsys.readouterr().err


def test_load_json_object_rejects_arrays(tmp_path, capsys):
    path = tmp_path / "a.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_json_object(path) is None
    assert "must contain a JSON object" in capsys.readouterr().err


def test_atomic_write(tmp_path):
    target = tmp_path / "out.pdf"
    atomic_write(target, b"%PDF-1.4")
    assert target.read_bytes() == b"%PDF-1.4"
    assert list(tmp_path.glob("*.tmp")) == []


def test_atomic_write_failure_cleans_up(tmp_path):
    target = tmp_path / "out.pdf"
    with patch("os.fsync", side_effect=OSError("disk full")), pytest.raises(OSError):
        atomic_write(target, b"data")
    assert not target.exists()
    assert list(tmp_path.glob("*.tmp")) == []
