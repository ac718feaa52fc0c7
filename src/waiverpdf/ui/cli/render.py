"""
Certificate rendering command.

Accepts either a stored submission record (camelCase JSON with a
``payload`` section) or a raw form payload carrying a
``signatureDataUrl``; the latter is validated and turned into a record
first, exactly as the submission handler would.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ...config import get_layout_config, get_legal_text
from ...core.document import generate_waiver_pdf
from ...errors import WaiverPdfError
from ...records import (
    build_record,
    decode_signature_data_url,
    record_from_dict,
    record_to_dict,
    validate_payload,
)
from ..helpers import (
    atomic_write,
    default_output_path,
    format_size_kb,
    load_json_object,
    safe_read_file,
)

if TYPE_CHECKING:
    import argparse

    from ...records import SubmissionRecord
    from ...waiver import LegalText

_logger = logging.getLogger(__name__)


def is_form_payload(data: dict[str, Any]) -> bool:
    """True for a raw form submission rather than a stored record."""
    return "payload" not in data and "signatureDataUrl" in data


def print_validation_errors(errors: dict[str, str]) -> None:
    print("Validation failed:", file=sys.stderr)
    for field, message in sorted(errors.items()):
        print(f"  {field}: {message}", file=sys.stderr)


def _record_from_form(
    data: dict[str, Any], legal: LegalText
) -> tuple[SubmissionRecord, bytes] | None:
    errors = validate_payload(data)
    if errors:
        print_validation_errors(errors)
        return None
    png = decode_signature_data_url(data["signatureDataUrl"])
    return build_record(data, png, legal), png


def cmd_render(args: argparse.Namespace) -> None:
    """Render a waiver certificate PDF from a record or form payload."""
    record_path = Path(args.record)
    data = load_json_object(record_path)
    if data is None:
        sys.exit(1)

    try:
        legal = get_legal_text(args.legal_text, args.legal_version)
        layout = get_layout_config()

        signature_png: bytes | None = None
        if is_form_payload(data):
            built = _record_from_form(data, legal)
            if built is None:
                sys.exit(1)
            record, signature_png = built
        else:
            record = record_from_dict(data)

        if args.signature:
            signature_png = safe_read_file(Path(args.signature), "signature")
            if signature_png is None:
                sys.exit(1)

        pdf_bytes = generate_waiver_pdf(
            record, signature_png, legal_text=legal, layout=layout
        )
    except WaiverPdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = Path(args.output) if args.output else default_output_path(record_path, record.id)
    try:
        atomic_write(output, pdf_bytes)
        if args.save_record:
            record_json = json.dumps(record_to_dict(record), ensure_ascii=False, indent=2)
            atomic_write(Path(args.save_record), record_json.encode("utf-8"))
    except OSError as e:
        print(f"Error: cannot write output: {e}", file=sys.stderr)
        sys.exit(1)

    if signature_png is None:
        print("  Note: no signature image supplied; summary page shows an empty box.")
    print(f"Wrote {output} ({format_size_kb(len(pdf_bytes))})")
    _logger.info("Rendered %s to %s", record.id, output)
