"""Output formatters."""

from __future__ import annotations

from .base import BaseFormatter
from .json_fmt import JsonFormatter
from .prometheus import PrometheusFormatter, format_tags, format_value, render_series

__all__ = [
    "BaseFormatter",
    "FORMATS",
    "JsonFormatter",
    "PrometheusFormatter",
    "format_tags",
    "format_value",
    "get_formatter",
    "render_series",
]

FORMATS = ("prometheus", "json")


def get_formatter(fmt: str, *, sort: bool = False) -> BaseFormatter:
    """Get formatter by name."""
    formatters: dict[str, type[JsonFormatter] | type[PrometheusFormatter]] = {
        "json": JsonFormatter,
        "prometheus": PrometheusFormatter,
    }

    if fmt not in formatters:
        raise ValueError(f"Unknown format: {fmt}. Available: {', '.join(formatters.keys())}")

    return formatters[fmt](sort=sort)
