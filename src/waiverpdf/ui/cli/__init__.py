"""
Command-line interface for waiverpdf.

Argument parsing and dispatch. Rendering lives in ``render``,
inspection commands in ``inspection``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ...config import config_path, debug_logs_enabled
from ...constants import __version__
from .inspection import cmd_check, cmd_png_info, cmd_validate
from .render import cmd_render


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or debug_logs_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="waiverpdf",
        description="Render liability waiver acceptance certificates as PDF.",
        epilog=(
            "Environment variables:\n"
            f"  WAIVERPDF_CONFIG      Config file path (current: {config_path()})\n"
            "  WAIVERPDF_DEBUG_LOGS  Set to 1 to enable debug logging\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"waiverpdf {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # render
    p_render = sub.add_parser("render", help="Render a waiver certificate PDF")
    p_render.add_argument("record", help="Submission record or form payload (JSON)")
    p_render.add_argument(
        "-s",
        "--signature",
        default=None,
        help="Signature PNG (default: decoded from the payload's signatureDataUrl)",
    )
    p_render.add_argument("-o", "--output", help="Output PDF path (default: <id>.pdf)")
    p_render.add_argument(
        "--legal-text",
        default=None,
        help="UTF-8 file with the legal text (default: built-in pt-BR waiver)",
    )
    p_render.add_argument(
        "--legal-version",
        default=None,
        help="Version tag of the legal text (required with a custom --legal-text)",
    )
    p_render.add_argument(
        "--save-record",
        default=None,
        help="Also write the submission record JSON to this path",
    )

    # check
    p_check = sub.add_parser("check", help="Check the structure of a generated PDF")
    p_check.add_argument("pdf", help="PDF file")

    # png-info
    p_png = sub.add_parser("png-info", help="Decode a signature PNG and show its size")
    p_png.add_argument("png", help="PNG file")

    # validate
    p_validate = sub.add_parser("validate", help="Validate a form payload")
    p_validate.add_argument("payload", help="Form payload (JSON)")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "render":
        cmd_render(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "png-info":
        cmd_png_info(args)
    elif args.command == "validate":
        cmd_validate(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
