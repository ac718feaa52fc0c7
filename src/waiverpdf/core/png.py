"""
Minimal PNG decoder for captured signature images.

Decodes 8-bit, non-interlaced grayscale, RGB and RGBA PNGs down to raw
interleaved RGB pixels ready for a PDF ``/DeviceRGB`` image XObject.
Transparency is flattened onto opaque white, which is what a signature
drawn on a transparent canvas looks like on paper.

Only the chunks needed to reconstruct pixels are interpreted (IHDR, IDAT,
IEND); ancillary chunks are skipped and CRCs are not checked.
"""

from __future__ import annotations

import logging
import struct
import zlib
from dataclasses import dataclass

from ..constants import PNG_SIGNATURE
from ..errors import FormatError

__all__ = [
    "DecodeOutcome",
    "RasterImage",
    "decode_png",
    "paeth_predictor",
    "try_decode_png",
    "unfilter_scanline",
]

_logger = logging.getLogger(__name__)

# PNG colour type -> bytes per pixel at bit depth 8
_BYTES_PER_PIXEL = {
    0: 1,  # grayscale
    2: 3,  # truecolour
    6: 4,  # truecolour + alpha
}

_IHDR_LENGTH = 13
_CHUNK_HEADER = struct.Struct(">I4s")
_IHDR = struct.Struct(">IIBBBBB")

_FILTER_NONE = 0
_FILTER_SUB = 1
_FILTER_UP = 2
_FILTER_AVERAGE = 3
_FILTER_PAETH = 4


@dataclass(frozen=True)
class RasterImage:
    """8-bit RGB raster, row-major, three bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 3
        if len(self.pixels) != expected:
            raise ValueError(
                f"RasterImage {self.width}x{self.height} needs {expected} bytes, "
                f"got {len(self.pixels)}"
            )


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of :func:`try_decode_png`: either an image or the reason there is none."""

    image: RasterImage | None = None
    error: FormatError | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None


@dataclass
class _Header:
    width: int
    height: int
    bit_depth: int
    color_type: int
    compression: int
    filter_method: int
    interlace: int


# ── Filtering ─────────────────────────────────────────────────────────


def paeth_predictor(a: int, b: int, c: int) -> int:
    """Return whichever of left (a), up (b), upper-left (c) is closest to a + b - c.

    Ties go to a, then b, then c.
    """
    p = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def unfilter_scanline(
    filter_type: int, filtered: bytes, previous: bytes, bytes_per_pixel: int
) -> bytearray:
    """Reverse one scanline's filter using the previous unfiltered row.

    Args:
        filter_type: PNG filter byte (0-4).
        filtered: Filtered row bytes, without the leading filter byte.
        previous: Previous unfiltered row (all zeros for the first row).
        bytes_per_pixel: Distance to the corresponding byte of the left pixel.

    Returns:
        The reconstructed row.

    Raises:
        FormatError: if filter_type is not 0-4.
    """
    if filter_type == _FILTER_NONE:
        return bytearray(filtered)
    if filter_type == _FILTER_UP:
        return bytearray((f + u) & 0xFF for f, u in zip(filtered, previous))
    if filter_type not in (_FILTER_SUB, _FILTER_AVERAGE, _FILTER_PAETH):
        raise FormatError(f"Unsupported PNG filter type {filter_type}")

    bpp = bytes_per_pixel
    out = bytearray(len(filtered))
    for i, value in enumerate(filtered):
        left = out[i - bpp] if i >= bpp else 0
        if filter_type == _FILTER_SUB:
            out[i] = (value + left) & 0xFF
            continue
        up = previous[i]
        if filter_type == _FILTER_AVERAGE:
            out[i] = (value + ((left + up) >> 1)) & 0xFF
        else:
            up_left = previous[i - bpp] if i >= bpp else 0
            out[i] = (value + paeth_predictor(left, up, up_left)) & 0xFF
    return out


# ── Pixel conversion ──────────────────────────────────────────────────


def _composite_on_white(channel: int, alpha: int) -> int:
    """Blend one 8-bit channel over white, rounding half up."""
    return (channel * alpha + 255 * (255 - alpha) + 127) // 255


def _row_to_rgb(row: bytearray, color_type: int) -> bytes:
    if color_type == 2:
        return bytes(row)
    if color_type == 0:
        return bytes(v for v in row for _ in range(3))
    # RGBA
    rgb = bytearray()
    for x in range(0, len(row), 4):
        alpha = row[x + 3]
        if alpha == 255:
            rgb += row[x : x + 3]
        else:
            rgb.append(_composite_on_white(row[x], alpha))
            rgb.append(_composite_on_white(row[x + 1], alpha))
            rgb.append(_composite_on_white(row[x + 2], alpha))
    return bytes(rgb)


# ── Chunk parsing ─────────────────────────────────────────────────────


def _read_chunks(data: bytes) -> tuple[_Header | None, bytes]:
    """Walk the chunk list; return the IHDR fields and concatenated IDAT payload."""
    header: _Header | None = None
    idat: list[bytes] = []

    offset = len(PNG_SIGNATURE)
    while offset + _CHUNK_HEADER.size <= len(data):
        length, chunk_type = _CHUNK_HEADER.unpack_from(data, offset)
        offset += _CHUNK_HEADER.size
        if offset + length + 4 > len(data):
            raise FormatError(
                f"Invalid PNG chunk length: {chunk_type!r} declares {length} bytes "
                f"at offset {offset}, file has {len(data)}"
            )
        payload = data[offset : offset + length]
        offset += length + 4  # payload + CRC

        if chunk_type == b"IHDR":
            if length < _IHDR_LENGTH:
                raise FormatError(f"IHDR chunk too short ({length} bytes)")
            header = _Header(*_IHDR.unpack_from(payload))
        elif chunk_type == b"IDAT":
            idat.append(payload)
        elif chunk_type == b"IEND":
            break

    return header, b"".join(idat)


def _check_header(header: _Header | None, has_idat: bool) -> tuple[_Header, int]:
    """Validate IHDR fields and return them with the bytes per pixel."""
    if header is None or not header.width or not header.height or not has_idat:
        raise FormatError("PNG missing required image data")
    if header.bit_depth != 8:
        raise FormatError(f"Only 8-bit PNG images are supported (got {header.bit_depth})")
    if header.compression != 0 or header.filter_method != 0 or header.interlace != 0:
        raise FormatError("Unsupported PNG compression/filter/interlace mode")
    bpp = _BYTES_PER_PIXEL.get(header.color_type)
    if bpp is None:
        raise FormatError(f"Unsupported PNG color type {header.color_type}")
    return header, bpp


# ── Public API ────────────────────────────────────────────────────────


def decode_png(data: bytes) -> RasterImage:
    """Decode PNG bytes into an RGB raster.

    Args:
        data: Complete PNG file contents.

    Returns:
        RasterImage with alpha (if any) composited onto white.

    Raises:
        FormatError: if the data is not a PNG this decoder supports.
    """
    if len(data) < len(PNG_SIGNATURE) or data[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        raise FormatError("Unsupported signature PNG format")

    parsed, compressed = _read_chunks(data)
    header, bpp = _check_header(parsed, bool(compressed))

    stride = header.width * bpp
    expected = (stride + 1) * header.height

    # Inflate no more than the scanlines need; trailing data is ignored.
    try:
        inflated = zlib.decompressobj().decompress(compressed, expected)
    except zlib.error as e:
        raise FormatError(f"Corrupt PNG data stream: {e}") from e
    if len(inflated) < expected:
        raise FormatError(f"PNG data stream is truncated ({len(inflated)} < {expected} bytes)")

    previous = bytes(stride)
    rgb = bytearray()
    for row in range(header.height):
        start = row * (stride + 1)
        filter_type = inflated[start]
        filtered = inflated[start + 1 : start + 1 + stride]
        current = unfilter_scanline(filter_type, filtered, previous, bpp)
        rgb += _row_to_rgb(current, header.color_type)
        previous = bytes(current)

    _logger.debug(
        "Decoded PNG %dx%d (color type %d)", header.width, header.height, header.color_type
    )
    return RasterImage(width=header.width, height=header.height, pixels=bytes(rgb))


def try_decode_png(data: bytes | None) -> DecodeOutcome:
    """Decode PNG bytes without raising on malformed input.

    Empty or missing input is reported as an error outcome, like any other
    undecodable image.
    """
    if not data:
        return DecodeOutcome(error=FormatError("No signature image supplied"))
    try:
        return DecodeOutcome(image=decode_png(data))
    except FormatError as e:
        return DecodeOutcome(error=e)
