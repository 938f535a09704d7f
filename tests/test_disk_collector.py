"""Tests for the psutil-backed disk collector."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import patch

import psutil

from check_disk_io.collectors.disk import DiskIOCollector, _device_name, _parse_diskstats
from check_disk_io.errors import COUNTER_RETRIEVAL_FAILED, ENUMERATION_FAILED

DISKSTATS = (
    "   8       0 sda 100 5 2000 40 200 7 4000 80 3 120 160 0 0 0 0\n"
    "   8       1 sda1 50 2 1000 20 100 3 2000 40 1 60 90\n"
    " 253       0 dm-0 bogus line\n"
)


def _sdiskio(**overrides):
    fields = {
        "read_count": 100,
        "write_count": 200,
        "read_bytes": 1024,
        "write_bytes": 2048,
        "read_time": 40,
        "write_time": 80,
        "read_merged_count": 5,
        "write_merged_count": 7,
        "busy_time": 120,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_device_name() -> None:
    assert _device_name("/dev/sda1") == "sda1"
    assert _device_name("/dev/mapper/vg-root") == "vg-root"
    assert _device_name("sdb") == "sdb"


def test_parse_diskstats(tmp_path) -> None:
    path = tmp_path / "diskstats"
    path.write_text(DISKSTATS)
    stats = _parse_diskstats(path)
    assert stats == {"sda": (3, 160), "sda1": (1, 90)}


def test_parse_diskstats_missing(tmp_path) -> None:
    assert _parse_diskstats(tmp_path / "nonexistent") == {}


def test_partitions() -> None:
    parts = [SimpleNamespace(device="/dev/sda1", mountpoint="/", fstype="ext4", opts="rw")]
    with patch("psutil.disk_partitions", return_value=parts) as mocked:
        outcome = DiskIOCollector(all_partitions=True).partitions()

    mocked.assert_called_once_with(all=True)
    assert outcome.ok
    assert outcome.value is not None
    assert outcome.value[0].device == "/dev/sda1"
    assert outcome.value[0].mountpoint == "/"


def test_partitions_failure() -> None:
    with patch("psutil.disk_partitions", side_effect=OSError("no mtab")):
        outcome = DiskIOCollector().partitions()

    assert not outcome.ok
    assert outcome.value is None
    assert outcome.error is not None
    assert outcome.error.code == ENUMERATION_FAILED
    assert "no mtab" in outcome.error.message


def test_counters_merges_diskstats(tmp_path) -> None:
    path = tmp_path / "diskstats"
    path.write_text(DISKSTATS)
    collector = DiskIOCollector(diskstats_path=path)

    with patch("psutil.disk_io_counters", return_value={"sda1": _sdiskio()}):
        outcome = collector.counters("/dev/sda1")

    assert outcome.ok
    assert outcome.value is not None
    [io] = outcome.value
    assert io.name == "sda1"
    assert io.read_bytes == 1024
    assert io.write_bytes == 2048
    assert io.io_time == 120
    assert io.merged_read_count == 5
    assert io.merged_write_count == 7
    assert io.iops_in_progress == 1
    assert io.weighted_io == 90


def test_counters_without_linux_fields(tmp_path) -> None:
    io = SimpleNamespace(read_count=1, write_count=2, read_bytes=3, write_bytes=4)
    collector = DiskIOCollector(diskstats_path=tmp_path / "nonexistent")

    with patch("psutil.disk_io_counters", return_value={"disk0": io}):
        outcome = collector.counters("/dev/disk0")

    assert outcome.value is not None
    [counters] = outcome.value
    assert counters.read_time == 0
    assert counters.io_time == 0
    assert counters.weighted_io == 0


def test_counters_unknown_device_is_empty() -> None:
    with patch("psutil.disk_io_counters", return_value={"sda": _sdiskio()}):
        outcome = DiskIOCollector().counters("/dev/loop9")

    assert outcome.ok
    assert outcome.value == []


def test_counters_none_from_psutil() -> None:
    with patch("psutil.disk_io_counters", return_value=None):
        outcome = DiskIOCollector().counters("/dev/sda")

    assert outcome.ok
    assert outcome.value == []


def test_counters_failure() -> None:
    with patch("psutil.disk_io_counters", side_effect=psutil.AccessDenied()):
        outcome = DiskIOCollector().counters("/dev/sda")

    assert not outcome.ok
    assert outcome.error is not None
    assert outcome.error.code == COUNTER_RETRIEVAL_FAILED


def test_counters_read_once_per_pass(tmp_path) -> None:
    path = tmp_path / "diskstats"
    path.write_text(DISKSTATS)
    collector = DiskIOCollector(diskstats_path=path)
    perdisk = {"sda": _sdiskio(read_bytes=1), "sda1": _sdiskio(read_bytes=2)}

    with (
        patch("psutil.disk_partitions", return_value=[]),
        patch("psutil.disk_io_counters", return_value=perdisk) as io_mock,
        patch(
            "check_disk_io.collectors.disk._parse_diskstats", wraps=_parse_diskstats
        ) as stats_mock,
    ):
        collector.partitions()
        first = collector.counters("/dev/sda")
        second = collector.counters("/dev/sda1")
        assert io_mock.call_count == 1
        assert stats_mock.call_count == 1

        collector.partitions()
        collector.counters("/dev/sda")
        assert io_mock.call_count == 2
        assert stats_mock.call_count == 2

    assert first.value is not None and first.value[0].read_bytes == 1
    assert second.value is not None and second.value[0].iops_in_progress == 1


def test_counters_failure_repeats_for_every_device_in_pass() -> None:
    collector = DiskIOCollector()
    with patch("psutil.disk_io_counters", side_effect=OSError("gone")) as io_mock:
        outcomes = [collector.counters(d) for d in ("/dev/sda", "/dev/sdb")]

    assert io_mock.call_count == 1
    assert all(o.error is not None and o.error.code == COUNTER_RETRIEVAL_FAILED for o in outcomes)
