"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future
    from pathlib import Path

    from dailymirror.core.models import Catalog

ProgressCallback = Callable[[int, int], None]

NameFilter = Callable[[str], bool]
"""Include/exclude predicate over file names."""


@runtime_checkable
class RemotePort(Protocol):
    """Remote catalog service: JSON listings and file downloads."""

    def get_json(self, url: str, params: Mapping[str, str]) -> Any:
        """Fetch and decode a JSON document.

        Args:
            url: Endpoint URL.
            params: Query parameters.

        Returns:
            The decoded JSON value.

        Raises:
            RemoteTransportError: On network failure or non-success status.
            ListingParseError: If the body is not valid JSON.
        """
        ...

    def download(self, url: str, dest: Path) -> int:
        """Stream the bytes at url into dest.

        Args:
            url: File URL.
            dest: Local path to write; overwritten if present.

        Returns:
            Number of bytes written.

        Raises:
            RemoteTransportError: On network failure or non-success status.
            OSError: If dest cannot be written.
        """
        ...


@runtime_checkable
class CatalogStorePort(Protocol):
    """Durable storage for a dataset's sync state."""

    def load(self) -> Catalog | None:
        """Load the persisted catalog.

        Returns:
            The catalog, or None if nothing has been persisted yet.

        Raises:
            CatalogStateCorruptError: If persisted data cannot be parsed.
        """
        ...

    def save(self, catalog: Catalog) -> None:
        """Persist the full catalog, replacing previous content.

        Raises:
            CatalogStateWriteError: If the state cannot be written.
        """
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """Reports phase progress to the user.

    The core domain uses this to report progress without depending
    on any specific UI library.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Start tracking a task.

        Args:
            name: Human-readable name for the task.
            total: Total units of work.

        Returns:
            A ProgressCallback to call with (completed, total).
        """
        ...

    def finish_task(self, name: str) -> None:
        """Mark a task as complete.

        Args:
            name: The task name passed to start_task().
        """
        ...


class NullProgressReporter:
    """A ProgressReporter that produces no output.

    Used as the default when no progress reporting is desired.
    """

    def start_task(self, name: str, total: int) -> ProgressCallback:  # noqa: ARG002
        """Return a no-op callback."""
        return lambda _completed, _total: None

    def finish_task(self, name: str) -> None:
        """Do nothing."""
        _ = name  # Unused but required by protocol


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for bounded parallel task execution.

    Abstracts over concurrent.futures executors so the download scheduler
    never imports a thread pool directly.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution."""
        ...

    def __enter__(self) -> ExecutorPort:
        """Enter context manager."""
        ...

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager, waiting for submitted work."""
        ...


ExecutorFactory = Callable[[int], ExecutorPort]
"""Builds an executor whose pool size is the given concurrency ceiling."""
