"""OS collaborators for disk I/O counters."""

from __future__ import annotations

from .base import BaseCollector, Outcome
from .disk import DiskCounters, DiskIOCollector, Partition

__all__ = [
    "BaseCollector",
    "DiskCounters",
    "DiskIOCollector",
    "Outcome",
    "Partition",
]
