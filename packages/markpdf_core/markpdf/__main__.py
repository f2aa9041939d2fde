"""
Entry point for running markpdf as a module.

Usage:
    python -m markpdf notes.md -o notes.pdf
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
