"""Disk I/O metric catalog and registry.

The catalog is static: the same eleven series exist on every run, whether
zero or fifty devices are found. Only the observation lists grow during a
collection pass.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .collectors.disk import DiskCounters


class MetricType(str, Enum):
    COUNTER = "COUNTER"
    GAUGE = "GAUGE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Observation:
    """One tagged sample within a series."""

    tags: dict[str, str]
    value: float


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    name: str
    type: MetricType
    help: str


@dataclass(frozen=True, slots=True)
class MetricSeries:
    """A named, typed series.

    Name, type and help text are fixed at creation; ``observations`` is the
    only part that changes.
    """

    name: str
    type: MetricType
    help: str
    observations: list[Observation] = field(default_factory=list)

    @classmethod
    def from_definition(cls, definition: MetricDefinition) -> MetricSeries:
        return cls(name=definition.name, type=definition.type, help=definition.help)


_BYTES_HELP = "These values count the number of bytes read from or written to this block device."
_COUNT_HELP = "These values increment when an I/O request completes."
_TIME_HELP = (
    "These values count the number of milliseconds that I/O requests have waited on this "
    "block device. If there are multiple I/O requests waiting, these values will increase at "
    "a rate greater than 1000/second; for example, if 60 read requests wait for an average "
    "of 30 ms, the read_time field will increase by 60*30 = 1800."
)
_MERGED_HELP = (
    "Reads and writes which are adjacent to each other may be merged for efficiency. Thus, "
    "two 4K reads may become one 8K read before it is ultimately handed to the disk, and so "
    "it will be counted (and queued) as only one I/O. These fields lets you know how often "
    "this was done."
)

CATALOG: tuple[MetricDefinition, ...] = (
    MetricDefinition("disk_read_bytes", MetricType.COUNTER, _BYTES_HELP),
    MetricDefinition("disk_write_bytes", MetricType.COUNTER, _BYTES_HELP),
    MetricDefinition("disk_read_count", MetricType.COUNTER, _COUNT_HELP),
    MetricDefinition("disk_write_count", MetricType.COUNTER, _COUNT_HELP),
    MetricDefinition("disk_read_time", MetricType.COUNTER, _TIME_HELP),
    MetricDefinition("disk_write_time", MetricType.COUNTER, _TIME_HELP),
    MetricDefinition(
        "disk_io_time",
        MetricType.COUNTER,
        "This value counts the number of milliseconds during which the device has had I/O "
        "requests queued.",
    ),
    MetricDefinition(
        "disk_weighted_io",
        MetricType.COUNTER,
        "This value counts the number of milliseconds that I/O requests have waited on this "
        "block device. If there are multiple I/O requests waiting, this value will increase "
        "as the product of the number of milliseconds times the number of requests waiting "
        "(see disk_read_time for an example).",
    ),
    MetricDefinition(
        "disk_iops_in_progress",
        MetricType.GAUGE,
        "This value counts the number of I/O requests that have been issued to the device "
        "driver but have not yet completed. It does not include I/O requests that are in the "
        "queue but not yet issued to the device driver.",
    ),
    MetricDefinition("disk_merged_read_count", MetricType.COUNTER, _MERGED_HELP),
    MetricDefinition("disk_merged_write_count", MetricType.COUNTER, _MERGED_HELP),
)

# DiskCounters attribute -> series name
COUNTER_FIELDS: tuple[tuple[str, str], ...] = (
    ("read_bytes", "disk_read_bytes"),
    ("write_bytes", "disk_write_bytes"),
    ("read_count", "disk_read_count"),
    ("write_count", "disk_write_count"),
    ("read_time", "disk_read_time"),
    ("write_time", "disk_write_time"),
    ("io_time", "disk_io_time"),
    ("weighted_io", "disk_weighted_io"),
    ("iops_in_progress", "disk_iops_in_progress"),
    ("merged_read_count", "disk_merged_read_count"),
    ("merged_write_count", "disk_merged_write_count"),
)


def add_observation(series: MetricSeries, tags: Mapping[str, str], value: float) -> None:
    """Append one observation to *series*.

    No deduplication and no validation: NaN and negative values are kept as-is.
    """
    series.observations.append(Observation(tags=dict(tags), value=float(value)))


class Registry(Mapping[str, MetricSeries]):
    """Series name -> MetricSeries, in catalog order, with fixed membership."""

    def __init__(self, series: list[MetricSeries]) -> None:
        self._series: dict[str, MetricSeries] = {}
        for s in series:
            if s.name in self._series:
                raise ValueError(f"Duplicate metric series: {s.name}")
            self._series[s.name] = s

    def __getitem__(self, name: str) -> MetricSeries:
        return self._series[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def series(self) -> Iterator[MetricSeries]:
        return iter(self._series.values())

    def add(self, name: str, tags: Mapping[str, str], value: float) -> None:
        """Append an observation to the series called *name* (KeyError if unknown)."""
        add_observation(self._series[name], tags, value)


def initialize(catalog: tuple[MetricDefinition, ...] = CATALOG) -> Registry:
    """Build a fresh registry with every catalog series and no observations."""
    return Registry([MetricSeries.from_definition(d) for d in catalog])


def record_counters(registry: Registry, counters: DiskCounters, tags: Mapping[str, str]) -> None:
    """Spread one device's counters across the eleven series."""
    for attr, name in COUNTER_FIELDS:
        registry.add(name, tags, getattr(counters, attr))
