"""Core domain models for dailymirror.

These models are pure Python dataclasses with no I/O dependencies.
They represent the sync state of a date-partitioned remote catalog and the
units of work the download scheduler operates on.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Self


if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


PARTITION_KEY_FORMAT = "%Y%m%d"
_PARTITION_KEY_RE = re.compile(r"^\d{8}$")


def parse_partition_key(key: str) -> date:
    """Parse a YYYYMMDD partition key into a date.

    Raises:
        ValueError: If key is not an eight digit calendar date.
    """
    if not _PARTITION_KEY_RE.match(key):
        raise ValueError(f"Invalid partition key: {key!r}")
    return datetime.strptime(key, PARTITION_KEY_FORMAT).date()


def format_partition_key(day: date) -> str:
    """Format a date as a YYYYMMDD partition key."""
    return day.strftime(PARTITION_KEY_FORMAT)


@dataclass(frozen=True, slots=True)
class Dataset:
    """A logical remote dataset made of daily partitions.

    Attributes:
        name: Dataset identifier used in remote paths and local directories.
        description: Optional human-readable description.

    Example:
        >>> trades = Dataset(name="trades", description="Trade history")
        >>> trades.name
        'trades'
    """

    name: str
    description: str = ""

    def __post_init__(self) -> None:
        """Validate dataset fields after initialization."""
        if not self.name:
            raise ValueError("Dataset name cannot be empty")
        if "/" in self.name:
            raise ValueError(f"Dataset name cannot contain '/': {self.name!r}")


@dataclass(frozen=True, slots=True)
class PartitionRecord:
    """Sync state of one dated partition.

    An empty files tuple means the partition's file listing has not been
    fetched yet; the remote never exposes an empty partition.

    Attributes:
        downloaded: True once every filtered file has a local copy.
        files: File names belonging to the partition, in listing order.
    """

    downloaded: bool = False
    files: tuple[str, ...] = ()

    @property
    def is_listed(self) -> bool:
        """Whether the file listing for this partition is known."""
        return bool(self.files)

    def with_files(self, files: Iterable[str]) -> Self:
        """Return a new record with the given file list."""
        return type(self)(downloaded=self.downloaded, files=tuple(files))

    def with_downloaded(self, downloaded: bool) -> Self:
        """Return a new record with the given downloaded flag."""
        return type(self)(downloaded=downloaded, files=self.files)


@dataclass(slots=True)
class Catalog:
    """Persisted sync state for one dataset.

    Owned by a single orchestrating flow; concurrent download tasks never
    mutate it.

    Attributes:
        watermark: Date of the last discovery pass, or None if never run.
        records: Partition key to record.
    """

    watermark: date | None = None
    records: dict[str, PartitionRecord] = field(default_factory=dict)

    def merge_partitions(self, keys: Iterable[str]) -> list[str]:
        """Add empty records for unknown partitions.

        Existing records are never overwritten.

        Returns:
            Keys that were added.
        """
        added = []
        for key in keys:
            if key not in self.records:
                self.records[key] = PartitionRecord()
                added.append(key)
        return added

    def unlisted(self) -> list[str]:
        """Partition keys whose file listing has not been fetched, oldest first."""
        return sorted(k for k, r in self.records.items() if not r.is_listed)

    def pending(self, *, ignore_downloaded: bool = False) -> list[str]:
        """Partition keys that still need downloading, oldest first."""
        return sorted(
            k for k, r in self.records.items() if ignore_downloaded or not r.downloaded
        )

    def set_files(self, key: str, files: Iterable[str]) -> None:
        """Replace the file list of an existing partition."""
        self.records[key] = self.records[key].with_files(files)

    def set_downloaded(self, key: str, downloaded: bool) -> None:
        """Set the downloaded flag of an existing partition."""
        self.records[key] = self.records[key].with_downloaded(downloaded)

    def status(self) -> list[PartitionStatus]:
        """Status of every partition, newest first."""
        return [
            PartitionStatus(key=key, file_count=len(rec.files), downloaded=rec.downloaded)
            for key, rec in sorted(self.records.items(), reverse=True)
        ]


@dataclass(frozen=True, slots=True)
class DownloadTask:
    """A single file to fetch into the local mirror.

    Attributes:
        partition: Partition key the file belongs to.
        file_name: Remote file name, unique within the partition.
        url: Remote URL to fetch.
        dest: Final local path.
    """

    partition: str
    file_name: str
    url: str
    dest: Path


class DownloadStatus(str, Enum):
    """Result of a single download task."""

    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DownloadOutcome:
    """Outcome of one download task.

    Attributes:
        task: The task that ran.
        status: Whether the file was fetched, already present, or failed.
        error: The failure, when status is FAILED.
    """

    task: DownloadTask
    status: DownloadStatus
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True when the file is present locally after the task."""
        return self.status is not DownloadStatus.FAILED


@dataclass(frozen=True, slots=True)
class DownloadReport:
    """Aggregated result of a download pass.

    Attributes:
        partitions: Partition key to True if all of its filtered files are present.
        outcomes: Per-task outcomes, in completion order.
    """

    partitions: dict[str, bool] = field(default_factory=dict)
    outcomes: tuple[DownloadOutcome, ...] = ()

    def count(self, status: DownloadStatus) -> int:
        """Number of outcomes with the given status."""
        return Counter(o.status for o in self.outcomes)[status]

    @property
    def failed(self) -> list[DownloadOutcome]:
        """Outcomes of failed tasks."""
        return [o for o in self.outcomes if o.status is DownloadStatus.FAILED]


@dataclass(frozen=True, slots=True)
class PartitionStatus:
    """Read-only view of one partition for status displays."""

    key: str
    file_count: int
    downloaded: bool

    @property
    def listed(self) -> bool:
        """Whether the partition's files are known."""
        return self.file_count > 0
