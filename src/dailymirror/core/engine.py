"""Sync engine: reconciles local state with the remote catalog."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING

from dailymirror.core.discovery import PartitionDiscoverer
from dailymirror.core.exceptions import CatalogStateCorruptError
from dailymirror.core.listing import FileLister
from dailymirror.core.models import Catalog, DownloadTask
from dailymirror.core.path_utils import download_url, partition_dir
from dailymirror.core.ports import NullProgressReporter
from dailymirror.core.scheduler import DownloadScheduler


if TYPE_CHECKING:
    from collections.abc import Callable

    from dailymirror.config import MirrorSettings
    from dailymirror.core.models import Dataset, DownloadReport, PartitionStatus
    from dailymirror.core.ports import (
        CatalogStorePort,
        ExecutorFactory,
        NameFilter,
        ProgressReporter,
        RemotePort,
    )


logger = logging.getLogger(__name__)


class SyncEngine:
    """Mirrors one dataset's daily partitions to local storage.

    Construction bootstraps the sync state: the persisted catalog is loaded
    and, when it is missing, unreadable or was last reconciled on another
    day, a discovery pass adds the new partitions and the state is saved.
    After that, refresh_file_lists() and download_outstanding() drive the
    remaining phases. Each phase persists the full catalog once it ends.

    The catalog is only mutated here, between phases; download tasks report
    their outcomes back through the scheduler.
    """

    def __init__(
        self,
        dataset: Dataset,
        remote: RemotePort,
        store: CatalogStorePort,
        settings: MirrorSettings,
        *,
        executor_factory: ExecutorFactory | None = None,
        progress: ProgressReporter | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._dataset = dataset
        self._remote = remote
        self._store = store
        self._settings = settings
        self._progress = progress or NullProgressReporter()
        self._today = today
        self._ignore_downloaded = False

        self._discoverer = PartitionDiscoverer(
            remote,
            dataset.name,
            listing_url=settings.listing_url,
            listing_prefix=settings.listing_prefix,
            page_size=settings.page_size,
            today=today,
        )
        self._lister = FileLister(
            remote,
            dataset.name,
            listing_url=settings.listing_url,
            listing_prefix=settings.listing_prefix,
            page_size=settings.page_size,
        )
        self._scheduler = DownloadScheduler(
            remote, executor_factory=executor_factory, progress=self._progress
        )

        self._catalog = self._load()
        self.bootstrap()

    @property
    def dataset(self) -> Dataset:
        """The dataset being mirrored."""
        return self._dataset

    @property
    def catalog(self) -> Catalog:
        """Current in-memory sync state."""
        return self._catalog

    @property
    def ignore_downloaded(self) -> bool:
        """Whether partitions already marked downloaded are reconsidered."""
        return self._ignore_downloaded

    def set_ignore_downloaded(self, ignore: bool = True) -> None:
        """Reconsider partitions already marked downloaded (repair runs).

        Known file lists are kept; existing local files are still skipped.
        """
        self._ignore_downloaded = ignore

    def _load(self) -> Catalog:
        try:
            catalog = self._store.load()
        except CatalogStateCorruptError as e:
            logger.warning("Ignoring unreadable state %s: %s", e.path, e.cause or e)
            return Catalog()
        if catalog is None:
            logger.info("No saved state for %s; starting fresh", self._dataset.name)
            return Catalog()
        return catalog

    def bootstrap(self) -> list[str]:
        """Discover new partitions unless the state was reconciled today.

        Returns:
            Partition keys added to the catalog.
        """
        today = self._today()
        watermark = self._catalog.watermark
        if watermark == today:
            logger.info("State for %s is current (%s)", self._dataset.name, today)
            return []

        # The watermark day was still "today" when recorded, so its partition
        # was excluded; resume discovery from the day before it.
        since = watermark - timedelta(days=1) if watermark is not None else None
        discovered = self._discoverer.discover(since)
        added = self._catalog.merge_partitions(discovered)
        self._catalog.watermark = today
        self._store.save(self._catalog)
        logger.info("Added %d partition(s) to %s", len(added), self._dataset.name)
        return added

    def refresh_file_lists(self) -> int:
        """Fetch the file list of every partition that has none yet.

        Returns:
            Number of partitions still to download (all partitions when
            ignore_downloaded is set). Informational only.

        Raises:
            RemoteError: If a listing fails; lists fetched before the failure
                are not persisted.
        """
        unlisted = self._catalog.unlisted()
        listed: dict[str, list[str]] = {}

        callback = self._progress.start_task("file lists", len(unlisted))
        try:
            for i, key in enumerate(unlisted, 1):
                listed[key] = self._lister.list_files(key)
                callback(i, len(unlisted))
        finally:
            self._progress.finish_task("file lists")

        for key, files in listed.items():
            if not files:
                logger.warning("Partition %s listed no files; will retry next run", key)
                continue
            self._catalog.set_files(key, files)

        self._store.save(self._catalog)
        outstanding = len(self._catalog.pending(ignore_downloaded=self._ignore_downloaded))
        logger.info(
            "Listed %d partition(s); %d outstanding", len(listed), outstanding
        )
        return outstanding

    def download_outstanding(self, predicate: NameFilter | None = None) -> DownloadReport:
        """Download the files of every partition not yet fully downloaded.

        Partitions without a file list are left for the next refresh.

        Args:
            predicate: File name filter; filtered-out files do not count
                toward a partition being complete.

        Returns:
            The scheduler's report; its partition results have been applied
            to the catalog and saved.
        """
        tasks = []
        for key in self._catalog.pending(ignore_downloaded=self._ignore_downloaded):
            record = self._catalog.records[key]
            if not record.is_listed:
                continue
            tasks.extend(self._tasks_for(key, record.files))

        report = self._scheduler.download(
            tasks, predicate=predicate, concurrency_limit=self._settings.concurrency
        )
        for key, ok in report.partitions.items():
            self._catalog.set_downloaded(key, ok)

        self._store.save(self._catalog)
        return report

    def sync(self, predicate: NameFilter | None = None) -> DownloadReport:
        """Refresh file lists, then download everything outstanding."""
        self.refresh_file_lists()
        return self.download_outstanding(predicate)

    def partition_status(self) -> list[PartitionStatus]:
        """Status of every known partition, newest first."""
        return self._catalog.status()

    def _tasks_for(self, partition: str, files: tuple[str, ...]) -> list[DownloadTask]:
        directory = partition_dir(self._settings.data_dir, self._dataset.name, partition)
        return [
            DownloadTask(
                partition=partition,
                file_name=name,
                url=download_url(
                    self._settings.download_base_url,
                    self._dataset.name,
                    partition,
                    name,
                ),
                dest=directory / name,
            )
            for name in files
        ]
