"""Shared test fixtures for the waiverpdf test suite."""

from __future__ import annotations

import io
import struct
import zlib

import pytest

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def png_chunk(chunk_type: bytes, payload: bytes) -> bytes:
    """One PNG chunk with a correct CRC."""
    crc = zlib.crc32(chunk_type + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + chunk_type + payload + struct.pack(">I", crc)


def make_png(
    width: int,
    height: int,
    rows: list[bytes],
    *,
    color_type: int = 2,
    bit_depth: int = 8,
    interlace: int = 0,
    filters: list[int] | None = None,
    idat_splits: int = 1,
) -> bytes:
    """Build a PNG from already-filtered scanlines.

    Args:
        rows: Row bytes (without the filter byte), one per scanline.
        filters: Filter byte per row; all zeros by default.
        idat_splits: Spread the compressed stream over this many IDAT chunks.
    """
    filters = filters or [0] * height
    raw = b"".join(bytes([f]) + row for f, row in zip(filters, rows))
    compressed = zlib.compress(raw)
    ihdr = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, interlace)

    step = max(1, -(-len(compressed) // idat_splits))
    idats = b"".join(
        png_chunk(b"IDAT", compressed[i : i + step]) for i in range(0, len(compressed), step)
    )
    return PNG_SIGNATURE + png_chunk(b"IHDR", ihdr) + idats + png_chunk(b"IEND", b"")


def pillow_png(mode: str, size: tuple[int, int], pixels: list) -> bytes:
    """Encode pixels with Pillow (it picks its own filters per row)."""
    from PIL import Image

    img = Image.new(mode, size)
    img.putdata(pixels)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at an empty temp location for every test."""
    config_file = tmp_path / "waiverpdf-config.json"
    monkeypatch.setenv("WAIVERPDF_CONFIG", str(config_file))
    monkeypatch.delenv("WAIVERPDF_DEBUG_LOGS", raising=False)
    return config_file


@pytest.fixture
def record_dict():
    """Stored submission record in its camelCase JSON form."""
    return {
        "id": "sub_1717243200000_ab12cd34",
        "createdAt": "2024-06-01T12:00:00.000Z",
        "payload": {
            "fullName": "Ana Silva",
            "dateOfBirth": "1990-04-12",
            "email": "ana.silva@example.com",
            "phone": "+55 41 99999-0000",
            "idNumber": "12345678900",
            "emergencyContactName": "Joao Silva",
            "emergencyContactPhone": "+55 41 98888-0000",
            "emergencyContactRelationship": "Irmao",
            "consentWaiverText": True,
            "consentLiability": True,
            "consentMedical": True,
            "consentPrivacy": True,
            "photoKey": None,
        },
        "waiver": {
            "version": "waiver-v1.0-ptbr",
            "acceptedAt": "2024-06-01T12:00:00.000Z",
            "textHash": "a" * 64,
        },
        "signature": {
            "key": "signatures/sub_1717243200000_ab12cd34.png",
            "sha256": "b" * 64,
        },
        "tamperHash": "c" * 64,
    }


@pytest.fixture
def record(record_dict):
    from waiverpdf.records import record_from_dict

    return record_from_dict(record_dict)


@pytest.fixture
def form_payload():
    """Raw form submission as posted by the browser."""
    import base64

    png = make_png(2, 2, [b"\x00" * 6, b"\xff" * 6])
    return {
        "fullName": "  Ana Silva ",
        "dateOfBirth": "1990-04-12",
        "email": "Ana.Silva@Example.com",
        "phone": "+55 41 99999-0000",
        "idNumber": "RG-1234567",
        "emergencyContactName": "Joao Silva",
        "emergencyContactPhone": "+55 41 98888-0000",
        "emergencyContactRelationship": "Irmao",
        "consentWaiverText": True,
        "consentLiability": True,
        "consentMedical": True,
        "consentPrivacy": True,
        "signatureDataUrl": "data:image/png;base64," + base64.b64encode(png).decode("ascii"),
    }


@pytest.fixture
def signature_png():
    """Small RGBA signature: dark stroke on a transparent background."""
    transparent = b"\x00\x00\x00\x00"
    ink = b"\x10\x10\x40\xff"
    rows = [transparent * 2 + ink * 4 + transparent * 2 for _ in range(4)]
    return make_png(8, 4, rows, color_type=6)
