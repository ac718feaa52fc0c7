"""
Inspection commands: PDF structure check, PNG info, payload validation.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ...core.pdf import verify_document
from ...core.png import decode_png
from ...errors import FormatError, WaiverPdfError
from ...records import validate_payload
from ..helpers import format_size_kb, load_json_object, safe_read_file
from .render import is_form_payload, print_validation_errors

if TYPE_CHECKING:
    import argparse


def cmd_check(args: argparse.Namespace) -> None:
    """Check the structure of a generated PDF."""
    pdf_path = Path(args.pdf)
    pdf_bytes = safe_read_file(pdf_path, "PDF")
    if pdf_bytes is None:
        sys.exit(1)

    print(f"Checking {pdf_path.name} ({format_size_kb(len(pdf_bytes))})...")
    try:
        result = verify_document(pdf_bytes)
    except WaiverPdfError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    for line in result["details"]:
        print(f"  {line}")

    print()
    if result["valid"]:
        print("  RESULT: VALID")
    else:
        print("  RESULT: INVALID")
        sys.exit(1)


def cmd_png_info(args: argparse.Namespace) -> None:
    """Decode a PNG and report what the certificate would embed."""
    png_path = Path(args.png)
    data = safe_read_file(png_path, "PNG")
    if data is None:
        sys.exit(1)

    try:
        image = decode_png(data)
    except FormatError as e:
        print(f"Error: {png_path.name} cannot be embedded: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"{png_path.name}: {image.width}x{image.height} pixels")
    print(f"  RGB data: {format_size_kb(len(image.pixels))}")


def cmd_validate(args: argparse.Namespace) -> None:
    """Validate a raw form payload."""
    data = load_json_object(Path(args.payload), "payload")
    if data is None:
        sys.exit(1)
    if not is_form_payload(data):
        print(
            "Error: expected a form payload (with signatureDataUrl), not a stored record",
            file=sys.stderr,
        )
        sys.exit(1)

    errors = validate_payload(data)
    if errors:
        print_validation_errors(errors)
        sys.exit(1)
    print("Payload OK")
