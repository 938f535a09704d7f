from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw not in {"0", "false", "False"}


@dataclass(frozen=True, slots=True)
class Settings:
    service_name: str = field(default_factory=lambda: _get_str("SERVICE_NAME", "check-disk-io"))
    output_format: str = field(
        default_factory=lambda: _get_str("CHECK_DISK_IO_FORMAT", "prometheus")
    )

    # Partition discovery
    all_partitions: bool = field(
        default_factory=lambda: _get_bool("CHECK_DISK_IO_ALL_PARTITIONS", False)
    )
    diskstats_path: str = field(
        default_factory=lambda: _get_str("CHECK_DISK_IO_DISKSTATS", "/proc/diskstats")
    )

    # Sort series by name and tags by key for reproducible output
    sort_output: bool = field(default_factory=lambda: _get_bool("CHECK_DISK_IO_SORT", False))


settings = Settings()
