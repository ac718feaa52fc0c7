"""
Entry point for `python -m waiverpdf`.

Usage:
    python -m waiverpdf render submission.json -o waiver.pdf
    python -m waiverpdf check waiver.pdf
    python -m waiverpdf png-info signature.png
"""

from .ui.cli import main

main()
