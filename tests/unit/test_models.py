"""Unit tests for core sync state models."""

from datetime import date
from pathlib import Path

import pytest

from dailymirror.core.models import (
    Catalog,
    Dataset,
    DownloadOutcome,
    DownloadReport,
    DownloadStatus,
    DownloadTask,
    PartitionRecord,
    format_partition_key,
    parse_partition_key,
)


@pytest.mark.core
@pytest.mark.tier(0)
class TestPartitionKeys:
    """Tests for partition key parsing and formatting."""

    def test_parse_returns_calendar_date(self) -> None:
        assert parse_partition_key("20240229") == date(2024, 2, 29)

    def test_format_pads_month_and_day(self) -> None:
        assert format_partition_key(date(2024, 1, 3)) == "20240103"

    @pytest.mark.parametrize("key", ["2024010", "2024-01-01", "20241301", "abcdefgh", ""])
    def test_parse_rejects_malformed_keys(self, key: str) -> None:
        with pytest.raises(ValueError):
            parse_partition_key(key)

    def test_keys_sort_like_dates(self) -> None:
        keys = ["20240110", "20231231", "20240102"]
        assert sorted(keys) == [
            format_partition_key(d) for d in sorted(parse_partition_key(k) for k in keys)
        ]


@pytest.mark.core
@pytest.mark.tier(0)
class TestDataset:
    """Tests for Dataset validation."""

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            Dataset(name="")

    def test_name_with_slash_rejected(self) -> None:
        with pytest.raises(ValueError, match="/"):
            Dataset(name="trades/daily")


@pytest.mark.core
@pytest.mark.tier(0)
class TestPartitionRecord:
    """Tests for PartitionRecord."""

    def test_new_record_is_unlisted_and_not_downloaded(self) -> None:
        record = PartitionRecord()
        assert not record.is_listed
        assert not record.downloaded

    def test_with_files_keeps_downloaded_flag(self) -> None:
        record = PartitionRecord(downloaded=True).with_files(["a.zip", "b.zip"])
        assert record.files == ("a.zip", "b.zip")
        assert record.downloaded

    def test_with_downloaded_keeps_files(self) -> None:
        record = PartitionRecord(files=("a.zip",)).with_downloaded(True)
        assert record == PartitionRecord(downloaded=True, files=("a.zip",))


@pytest.mark.core
@pytest.mark.tier(0)
class TestCatalog:
    """Tests for Catalog mutation helpers."""

    def test_merge_adds_only_unknown_partitions(self) -> None:
        catalog = Catalog(records={"20240101": PartitionRecord(True, ("a.zip",))})

        added = catalog.merge_partitions(["20240102", "20240101"])

        assert added == ["20240102"]
        assert catalog.records["20240101"] == PartitionRecord(True, ("a.zip",))
        assert catalog.records["20240102"] == PartitionRecord()

    def test_unlisted_returns_empty_file_lists_oldest_first(self) -> None:
        catalog = Catalog(
            records={
                "20240103": PartitionRecord(),
                "20240101": PartitionRecord(),
                "20240102": PartitionRecord(files=("a.zip",)),
            }
        )
        assert catalog.unlisted() == ["20240101", "20240103"]

    def test_pending_skips_downloaded_unless_ignored(self) -> None:
        catalog = Catalog(
            records={
                "20240101": PartitionRecord(downloaded=True, files=("a.zip",)),
                "20240102": PartitionRecord(files=("a.zip",)),
            }
        )
        assert catalog.pending() == ["20240102"]
        assert catalog.pending(ignore_downloaded=True) == ["20240101", "20240102"]

    def test_status_is_newest_first(self) -> None:
        catalog = Catalog(
            records={
                "20240101": PartitionRecord(downloaded=True, files=("a.zip",)),
                "20240102": PartitionRecord(),
            }
        )
        statuses = catalog.status()
        assert [s.key for s in statuses] == ["20240102", "20240101"]
        assert not statuses[0].listed
        assert statuses[1].file_count == 1


@pytest.mark.core
@pytest.mark.tier(0)
def test_download_report_counts_by_status(tmp_path: Path) -> None:
    """DownloadReport aggregates outcome counts and exposes failures."""
    task = DownloadTask("20240101", "a.zip", "https://x/a.zip", tmp_path / "a.zip")
    error = OSError("disk full")
    report = DownloadReport(
        partitions={"20240101": False},
        outcomes=(
            DownloadOutcome(task, DownloadStatus.DOWNLOADED),
            DownloadOutcome(task, DownloadStatus.SKIPPED),
            DownloadOutcome(task, DownloadStatus.FAILED, error=error),
        ),
    )

    assert report.count(DownloadStatus.DOWNLOADED) == 1
    assert report.count(DownloadStatus.SKIPPED) == 1
    assert [o.error for o in report.failed] == [error]
