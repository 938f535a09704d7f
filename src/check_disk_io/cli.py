"""CLI interface for the check-disk-io check."""

from __future__ import annotations

import argparse
import sys

from .config import settings
from .core import run_check
from .formatters import FORMATS
from .logging import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def cmd_check(args: argparse.Namespace) -> int:
    """Collect disk I/O counters and print the report."""
    return run_check(
        fmt=args.format,
        sort=args.sort or None,
        all_partitions=args.all_partitions or None,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="check-disk-io",
        description="Check disk IO and provide metrics",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=FORMATS,
        default=settings.output_format,
        help=f"Output format (default: {settings.output_format})",
    )
    parser.add_argument(
        "--all-partitions",
        action="store_true",
        help="Include pseudo, memory, duplicate and inaccessible filesystems",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Sort series by name and tags by key",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Diagnostic log level (default: LOG_LEVEL env var or WARNING)",
    )
    parser.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # argparse does not check defaults against choices
    if args.format not in FORMATS:
        parser.error(
            f"invalid output format {args.format!r} (CHECK_DISK_IO_FORMAT); "
            f"choose from {', '.join(FORMATS)}"
        )

    configure_logging(level=args.log_level)

    if args.version:
        from . import __version__

        sys.stdout.write(f"check-disk-io version {__version__}\n")
        raise SystemExit(0)

    rc = int(args.func(args))
    raise SystemExit(rc)
