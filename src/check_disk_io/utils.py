"""Shared utility functions."""

from __future__ import annotations

import sys


def output_text(data: str) -> None:
    """Write the report to stdout; it is the only output channel."""
    sys.stdout.write(data + "\n")
    sys.stdout.flush()
