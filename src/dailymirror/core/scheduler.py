"""Bounded-concurrency download scheduler.

Downloads run on an executor whose pool size is the concurrency ceiling.
Each task reports an outcome through its future; the scheduler aggregates
outcomes into a DownloadReport and never touches the sync state itself.
"""

from __future__ import annotations

import logging
import os
from collections import defaultdict
from concurrent.futures import as_completed
from typing import TYPE_CHECKING, cast

from dailymirror.core.exceptions import RemoteError
from dailymirror.core.filters import accept_all
from dailymirror.core.models import (
    DownloadOutcome,
    DownloadReport,
    DownloadStatus,
    DownloadTask,
)
from dailymirror.core.ports import NullProgressReporter


if TYPE_CHECKING:
    from collections.abc import Iterable
    from concurrent.futures import Future
    from pathlib import Path

    from dailymirror.core.ports import (
        ExecutorFactory,
        ExecutorPort,
        NameFilter,
        ProgressReporter,
        RemotePort,
    )


logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 16

PARTIAL_SUFFIX = ".part"


def _default_executor_factory(max_workers: int) -> ExecutorPort:
    from dailymirror.adapters.executor import ThreadPoolExecutorAdapter

    return ThreadPoolExecutorAdapter(max_workers=max_workers)


class DownloadScheduler:
    """Fetches partition files with a fixed concurrency ceiling.

    A file already present at its destination counts as done and is never
    fetched again. No checksum or size check is performed. New files are
    written to a ``.part`` sibling and renamed into place once complete, so
    an interrupted write never leaves a file that would be skipped later.
    """

    def __init__(
        self,
        remote: RemotePort,
        executor_factory: ExecutorFactory | None = None,
        progress: ProgressReporter | None = None,
    ) -> None:
        self._remote = remote
        self._executor_factory = executor_factory or _default_executor_factory
        self._progress = progress or NullProgressReporter()

    def download(
        self,
        tasks: Iterable[DownloadTask],
        predicate: NameFilter | None = None,
        concurrency_limit: int = DEFAULT_CONCURRENCY,
    ) -> DownloadReport:
        """Run download tasks and report per-partition success.

        Every partition that appears in tasks gets an entry in the report.
        A partition succeeds when all of its tasks accepted by predicate
        succeeded or were skipped; filtered-out files do not count. One
        failing file does not stop its siblings.

        Args:
            tasks: Files to fetch.
            predicate: File name filter; defaults to accepting everything.
            concurrency_limit: Maximum simultaneous downloads.

        Returns:
            DownloadReport with partition results and task outcomes.
        """
        if concurrency_limit < 1:
            raise ValueError("concurrency_limit must be at least 1")
        predicate = predicate or accept_all

        by_partition: dict[str, list[DownloadTask]] = defaultdict(list)
        partitions: dict[str, bool] = {}
        for task in tasks:
            partitions.setdefault(task.partition, True)
            if predicate(task.file_name):
                by_partition[task.partition].append(task)
            else:
                logger.debug("Filtered out %s/%s", task.partition, task.file_name)

        total = sum(len(group) for group in by_partition.values())
        if total == 0:
            return DownloadReport(partitions=partitions)

        outcomes: list[DownloadOutcome] = []
        callback = self._progress.start_task("downloads", total)
        try:
            with self._executor_factory(concurrency_limit) as executor:
                futures: list[Future[DownloadOutcome]] = []
                for partition, group in by_partition.items():
                    try:
                        for directory in {t.dest.parent for t in group}:
                            directory.mkdir(parents=True, exist_ok=True)
                    except OSError as e:
                        logger.error("Cannot create directory for %s: %s", partition, e)
                        outcomes.extend(
                            DownloadOutcome(t, DownloadStatus.FAILED, error=e)
                            for t in group
                        )
                        callback(len(outcomes), total)
                        continue
                    logger.info("Scheduling %d file(s) for %s", len(group), partition)
                    futures.extend(
                        cast("Future[DownloadOutcome]", executor.submit(self._run_task, t))
                        for t in group
                    )

                for future in as_completed(futures):
                    outcomes.append(future.result())
                    callback(len(outcomes), total)
        finally:
            self._progress.finish_task("downloads")

        for outcome in outcomes:
            if not outcome.ok:
                partitions[outcome.task.partition] = False

        report = DownloadReport(partitions=partitions, outcomes=tuple(outcomes))
        logger.info(
            "Downloads finished: %d fetched, %d skipped, %d failed",
            report.count(DownloadStatus.DOWNLOADED),
            report.count(DownloadStatus.SKIPPED),
            report.count(DownloadStatus.FAILED),
        )
        return report

    def _run_task(self, task: DownloadTask) -> DownloadOutcome:
        """Fetch one file, turning its failure into an outcome."""
        if task.dest.exists():
            logger.debug("Already present: %s", task.dest)
            return DownloadOutcome(task, DownloadStatus.SKIPPED)

        partial = _partial_path(task.dest)
        try:
            size = self._remote.download(task.url, partial)
            os.replace(partial, task.dest)
        except (RemoteError, OSError) as e:
            partial.unlink(missing_ok=True)
            logger.warning("Download failed for %s: %s", task.url, e)
            return DownloadOutcome(task, DownloadStatus.FAILED, error=e)
        except Exception as e:
            # Any other error still fails only this file.
            partial.unlink(missing_ok=True)
            logger.exception("Unexpected error downloading %s", task.url)
            return DownloadOutcome(task, DownloadStatus.FAILED, error=e)

        logger.debug("Downloaded %s (%d bytes)", task.dest, size)
        return DownloadOutcome(task, DownloadStatus.DOWNLOADED)


def _partial_path(dest: Path) -> Path:
    return dest.with_name(dest.name + PARTIAL_SUFFIX)
