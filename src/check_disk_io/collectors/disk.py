"""Disk partition and I/O counter collector."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import psutil

from ..errors import COUNTER_RETRIEVAL_FAILED, ENUMERATION_FAILED
from .base import BaseCollector, Outcome

log = logging.getLogger(__name__)

_PSUTIL_ERRORS = (OSError, RuntimeError, psutil.Error)


@dataclass(frozen=True, slots=True)
class Partition:
    device: str
    mountpoint: str
    fstype: str = ""


@dataclass(frozen=True, slots=True)
class DiskCounters:
    name: str
    read_bytes: int = 0
    write_bytes: int = 0
    read_count: int = 0
    write_count: int = 0
    read_time: int = 0
    write_time: int = 0
    io_time: int = 0
    weighted_io: int = 0
    iops_in_progress: int = 0
    merged_read_count: int = 0
    merged_write_count: int = 0


def _device_name(device: str) -> str:
    """Kernel block device name for a partition device path (/dev/sda1 -> sda1)."""
    return os.path.basename(device.rstrip("/")) or device


# ── /proc/diskstats helpers ───────────────────────────────────────────


def _parse_diskstats(path: Path) -> dict[str, tuple[int, int]]:
    """Return ``name -> (iops_in_progress, weighted_io_ms)`` from a diskstats file.

    psutil does not expose these two columns. Missing or unreadable files give
    an empty mapping.
    """
    stats: dict[str, tuple[int, int]] = {}
    try:
        text = path.read_text()
    except OSError:
        return stats

    for line in text.splitlines():
        parts = line.split()
        # major minor name + at least 11 counters
        if len(parts) < 14:
            continue
        try:
            stats[parts[2]] = (int(parts[11]), int(parts[13]))
        except ValueError:
            continue
    return stats


class DiskIOCollector(BaseCollector):
    """Collect partitions and per-device I/O counters via psutil."""

    def __init__(
        self,
        *,
        all_partitions: bool = False,
        diskstats_path: str | Path = "/proc/diskstats",
    ) -> None:
        self.all_partitions = all_partitions
        self.diskstats_path = Path(diskstats_path)
        self._snapshot: Outcome[dict[str, DiskCounters]] | None = None

    @property
    def name(self) -> str:
        return "disk"

    def partitions(self) -> Outcome[list[Partition]]:
        # a new pass starts here
        self._snapshot = None
        try:
            parts = psutil.disk_partitions(all=self.all_partitions)
        except _PSUTIL_ERRORS as e:
            return Outcome.failure(ENUMERATION_FAILED, f"Failed to get partitions, error: {e}")

        return Outcome.success(
            [Partition(device=p.device, mountpoint=p.mountpoint, fstype=p.fstype) for p in parts]
        )

    def _read_snapshot(self) -> Outcome[dict[str, DiskCounters]]:
        try:
            perdisk = psutil.disk_io_counters(perdisk=True) or {}
        except _PSUTIL_ERRORS as e:
            return Outcome.failure(
                COUNTER_RETRIEVAL_FAILED, f"Failed to get IO counters, error: {e}"
            )

        diskstats = _parse_diskstats(self.diskstats_path)
        snapshot: dict[str, DiskCounters] = {}
        for name, io in perdisk.items():
            in_progress, weighted = diskstats.get(name, (0, 0))
            snapshot[name] = DiskCounters(
                name=name,
                read_bytes=io.read_bytes,
                write_bytes=io.write_bytes,
                read_count=io.read_count,
                write_count=io.write_count,
                read_time=getattr(io, "read_time", 0),
                write_time=getattr(io, "write_time", 0),
                io_time=getattr(io, "busy_time", 0),
                weighted_io=weighted,
                iops_in_progress=in_progress,
                merged_read_count=getattr(io, "read_merged_count", 0),
                merged_write_count=getattr(io, "write_merged_count", 0),
            )
        return Outcome.success(snapshot)

    def counters(self, device: str) -> Outcome[list[DiskCounters]]:
        """Look *device* up in this pass's counter snapshot.

        The snapshot is read on first use and reused until the next
        ``partitions()`` call, so every device in one report comes from the
        same reading.
        """
        if self._snapshot is None:
            self._snapshot = self._read_snapshot()
        if self._snapshot.error is not None:
            return Outcome(error=self._snapshot.error)

        name = _device_name(device)
        io = (self._snapshot.value or {}).get(name)
        if io is None:
            log.debug("no_io_counters", extra={"device": name})
            return Outcome.success([])
        return Outcome.success([io])
