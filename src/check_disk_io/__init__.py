"""
check_disk_io

Per-device disk I/O counters rendered as a text metrics report.

Project/distribution name = "check-disk-io", import package = "check_disk_io".
"""

from __future__ import annotations

from .core import CheckResult, CheckStatus, collect, run_check
from .metrics import MetricType, add_observation, initialize

__all__ = [
    "CheckResult",
    "CheckStatus",
    "MetricType",
    "__version__",
    "add_observation",
    "collect",
    "initialize",
    "run_check",
]

__version__ = "0.1.0"
