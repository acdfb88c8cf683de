"""Rich-based progress reporter for terminal output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from rich.console import Console

    from dailymirror.core.ports import ProgressCallback


class RichProgressReporter:
    """Progress reporter using Rich for terminal display.

    Shows one bar per sync phase (file listing, downloads) with counts,
    elapsed time and ETA. Callbacks may be invoked from worker threads.

    Example:
        with RichProgressReporter() as reporter:
            engine = SyncEngine(dataset, remote, store, settings, progress=reporter)
            engine.sync()
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the progress display."""
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        self._tasks: dict[str, TaskID] = {}
        self._started = False

    @property
    def console(self) -> Console:
        """Console the bars render to; log handlers should share it."""
        return self._progress.console

    def __enter__(self) -> RichProgressReporter:
        """Start the progress display."""
        self._progress.start()
        self._started = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Stop the progress display."""
        self._progress.stop()
        self._started = False

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a phase.

        Args:
            name: Phase name.
            total: Units of work in the phase.

        Returns:
            A callback to update progress.
        """
        if not self._started:
            self._progress.start()
            self._started = True

        task_id = self._progress.add_task(name, total=total)
        self._tasks[name] = task_id

        def callback(completed: int, _total: int) -> None:
            self._progress.update(task_id, completed=completed)

        return callback

    def finish_task(self, name: str) -> None:
        """Mark a phase as complete.

        Args:
            name: The phase name.
        """
        task_id = self._tasks.pop(name, None)
        if task_id is not None:
            task = next(t for t in self._progress.tasks if t.id == task_id)
            self._progress.update(task_id, completed=task.total)
