"""Prometheus-style text exposition of metric series."""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal

from ..metrics import MetricSeries, Registry
from .base import BaseFormatter


def _shortest_digits(value: float) -> tuple[str, int]:
    """Shortest round-trip digits of ``abs(value)`` and its decimal exponent.

    ``1024.0`` -> ``("1024", 3)``, ``1e-05`` -> ``("1", -5)``.
    """
    _, digits, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    text = "".join(str(d) for d in digits)
    return text, len(text) + int(exponent) - 1


def format_value(value: float) -> str:
    """Shortest general-purpose rendering of a float.

    Same form as Go's ``%v``: shortest round-trip digits, exponent notation
    when the decimal exponent is below -4 or at least 6 (``999999``,
    ``1e+06``, ``1.073741824e+09``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0:
        return f"{sign}0"

    digits, exp = _shortest_digits(value)
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        return f"{sign}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"

    point = exp + 1
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= len(digits):
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    return f"{sign}{digits[:point]}.{digits[point:]}"


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_tags(tags: Mapping[str, str], *, sort_keys: bool = False) -> str:
    """``{k1="v1",k2="v2"}`` or an empty string when there are no tags."""
    keys = sorted(tags) if sort_keys else list(tags)
    fragment = ",".join(f'{k}="{_escape(tags[k])}"' for k in keys)
    return f"{{{fragment}}}" if fragment else ""


def render_series(series: MetricSeries, *, sort_keys: bool = False) -> list[str]:
    """Render one series: HELP, TYPE, one line per observation, blank line."""
    lines = [
        f"# HELP {series.name} [{series.type}] {series.help}",
        f"# TYPE {series.name} {series.type}",
    ]
    for obs in series.observations:
        tag_str = format_tags(obs.tags, sort_keys=sort_keys)
        lines.append(f"{series.name}{tag_str} {format_value(obs.value)}")
    lines.append("")
    return lines


class PrometheusFormatter(BaseFormatter):
    """Format a registry in the HELP/TYPE text exposition format."""

    def __init__(self, *, sort: bool = False) -> None:
        self.sort = sort

    def format(self, registry: Registry) -> str:
        series = list(registry.series())
        if self.sort:
            series.sort(key=lambda s: s.name)

        lines: list[str] = []
        for s in series:
            lines.extend(render_series(s, sort_keys=self.sort))
        return "\n".join(lines)
