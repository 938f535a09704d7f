from __future__ import annotations

import logging

import pytest

import check_disk_io.logging as cdi_logging
from check_disk_io.collectors import BaseCollector, DiskCounters, Outcome, Partition
from check_disk_io.errors import COUNTER_RETRIEVAL_FAILED, ENUMERATION_FAILED


class FakeCollector(BaseCollector):
    """In-memory collector: device -> counters, plus devices that fail."""

    def __init__(
        self,
        partitions: list[Partition],
        counters: dict[str, list[DiskCounters]],
        *,
        failing: set[str] | None = None,
        enumeration_error: bool = False,
    ) -> None:
        self._partitions = partitions
        self._counters = counters
        self._failing = failing or set()
        self._enumeration_error = enumeration_error

    @property
    def name(self) -> str:
        return "fake"

    def partitions(self) -> Outcome[list[Partition]]:
        if self._enumeration_error:
            return Outcome.failure(ENUMERATION_FAILED, "Failed to get partitions, error: boom")
        return Outcome.success(list(self._partitions))

    def counters(self, device: str) -> Outcome[list[DiskCounters]]:
        if device in self._failing:
            return Outcome.failure(COUNTER_RETRIEVAL_FAILED, "Failed to get IO counters, error: boom")
        return Outcome.success(self._counters.get(device, []))


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    cdi_logging._CONFIGURED = False


@pytest.fixture
def sda_collector() -> FakeCollector:
    return FakeCollector(
        [Partition(device="/dev/sda", mountpoint="/", fstype="ext4")],
        {"/dev/sda": [DiskCounters(name="sda", read_bytes=1024, write_bytes=2048)]},
    )
