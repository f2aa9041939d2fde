"""
Command-line interface for markpdf.

Usage:
    markpdf convert notes.md -o notes.pdf
    markpdf convert notes.md --metrics glyph --margin 72
    markpdf notes.md -o notes.pdf
    markpdf version
"""

import argparse
import sys
from pathlib import Path

from .engine.geometry import DEFAULT_MARGIN, METRICS_MODES, LayoutOptions
from .exceptions import MarkPdfError
from .utils.rich_logger import setup_logging


def _add_convert_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-o", "--output",
        help="Output PDF path (default: input name with .pdf extension)"
    )
    parser.add_argument(
        "--metrics",
        choices=list(METRICS_MODES),
        default="average",
        help="Text width model (default: average)"
    )
    parser.add_argument(
        "--margin",
        type=float,
        default=DEFAULT_MARGIN,
        help=f"Page margin in points (default: {DEFAULT_MARGIN:g})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="markpdf",
        description="markpdf - convert Markdown to PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  markpdf convert notes.md -o notes.pdf
  markpdf notes.md -o notes.pdf
  markpdf version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    convert_parser = subparsers.add_parser("convert", help="Convert a Markdown file to PDF")
    convert_parser.add_argument("input", help="Input Markdown file")
    _add_convert_arguments(convert_parser)

    subparsers.add_parser("version", help="Show version information")

    return parser


def create_short_parser() -> argparse.ArgumentParser:
    """Parser for the short form ``markpdf INPUT [-o OUTPUT]``."""
    parser = argparse.ArgumentParser(prog="markpdf", description="markpdf - convert Markdown to PDF")
    parser.add_argument("input", help="Input Markdown file")
    _add_convert_arguments(parser)
    return parser


def cmd_convert(args) -> int:
    """Handle convert command."""
    from .api import convert_file

    setup_logging("DEBUG" if args.verbose else "WARNING")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1
    output_path = Path(args.output) if args.output else input_path.with_suffix(".pdf")

    options = LayoutOptions(margin=args.margin, metrics=args.metrics)
    try:
        convert_file(input_path, output_path, options)
    except (MarkPdfError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    size_kb = output_path.stat().st_size / 1024
    print(f"Saved: {output_path} ({size_kb:.1f} KB)")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"markpdf v{__version__}")
    print("Markdown to PDF converter")
    return 0


def main(argv=None) -> int:
    """Main entry point for CLI."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # Short form: the first argument is the input file rather than a command.
    if argv and argv[0] not in ("convert", "version") and not argv[0].startswith("-"):
        args = create_short_parser().parse_args(argv)
        return cmd_convert(args)

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "convert":
        return cmd_convert(args)
    elif args.command == "version":
        return cmd_version(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
