"""Single-pass disk I/O collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum

from .collectors import BaseCollector, DiskIOCollector
from .config import settings
from .errors import CollectionError
from .formatters import get_formatter
from .metrics import Registry, initialize, record_counters
from .utils import output_text

log = logging.getLogger(__name__)


class CheckStatus(IntEnum):
    """Check-plugin exit codes."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass(slots=True)
class CheckResult:
    registry: Registry
    errors: list[CollectionError] = field(default_factory=list)
    status: CheckStatus = CheckStatus.OK

    @property
    def partial(self) -> bool:
        return bool(self.errors)


def collect(collector: BaseCollector) -> CheckResult:
    """Populate a fresh registry from *collector*.

    Failures are logged and recorded, never raised: an enumeration failure
    means zero devices, a counter failure skips that device. The status is
    OK either way.
    """
    result = CheckResult(registry=initialize())

    parts = collector.partitions()
    if parts.error is not None:
        log.warning(
            "%s", parts.error.message, extra={"code": parts.error.code, "collector": collector.name}
        )
        result.errors.append(parts.error)

    for part in parts.value or []:
        counters = collector.counters(part.device)
        if counters.error is not None:
            log.warning(
                "%s",
                counters.error.message,
                extra={
                    "code": counters.error.code,
                    "device": part.device,
                    "mountpoint": part.mountpoint,
                },
            )
            result.errors.append(counters.error)
            continue

        for io in counters.value or []:
            tags = {"device": io.name, "mountpoint": part.mountpoint}
            record_counters(result.registry, io, tags)

    log.debug(
        "collected %d observations from %d partitions",
        sum(len(s.observations) for s in result.registry.series()),
        len(parts.value or []),
        extra={"collector": collector.name},
    )
    return result


def run_check(
    *,
    fmt: str | None = None,
    sort: bool | None = None,
    all_partitions: bool | None = None,
    collector: BaseCollector | None = None,
) -> int:
    """Collect, render and print one report. Returns the check status code."""
    if collector is None:
        collector = DiskIOCollector(
            all_partitions=settings.all_partitions if all_partitions is None else all_partitions,
            diskstats_path=settings.diskstats_path,
        )
    formatter = get_formatter(
        fmt or settings.output_format,
        sort=settings.sort_output if sort is None else sort,
    )

    result = collect(collector)
    output_text(formatter.format(result.registry))
    return int(result.status)
