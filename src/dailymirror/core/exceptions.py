"""Domain exceptions for dailymirror.

All library errors inherit from DailyMirrorError, allowing callers to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


class DailyMirrorError(Exception):
    """Base class for all dailymirror exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class DatasetNotFoundError(DailyMirrorError):
    """Raised when a requested dataset is not known.

    Attributes:
        name: The dataset name that was not found.
        available: List of available dataset names.
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available if available is not None else []
        super().__init__(f"Dataset '{name}' not found")

    @property
    def recovery_hint(self) -> str:
        """Suggest available datasets."""
        if self.available:
            return f"Available datasets: {', '.join(self.available)}"
        return "Run 'dailymirror datasets' to list known datasets"


class ConfigurationError(DailyMirrorError):
    """Raised for configuration problems (invalid settings)."""

    pass


class RemoteError(DailyMirrorError):
    """Base class for errors talking to the remote catalog service.

    Attributes:
        url: The URL being requested when the error occurred.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        url: str,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)


class RemoteTransportError(RemoteError):
    """Raised on network failures and non-success HTTP responses."""

    @property
    def recovery_hint(self) -> str:
        """Suggest re-running later."""
        return "Check network connectivity and re-run; completed work is kept"


class ListingParseError(RemoteError):
    """Raised when a listing response is malformed or misses expected fields."""

    @property
    def recovery_hint(self) -> str:
        """Suggest inspecting the response."""
        return f"Inspect the response of {self.url}; the listing format may have changed"


class ListingOrderError(RemoteError):
    """Raised when a partition listing is not strictly newest-first.

    Discovery stops at the first partition at or before the watermark, which
    is only valid for a descending listing.

    Attributes:
        previous: Partition key seen before the offending entry.
        current: The offending partition key.
    """

    def __init__(self, url: str, previous: str, current: str) -> None:
        self.previous = previous
        self.current = current
        super().__init__(
            f"Partition listing is not newest-first: '{current}' follows '{previous}'",
            url=url,
        )

    @property
    def recovery_hint(self) -> str:
        """Explain why discovery refused to continue."""
        return "The remote listing order changed; discovery cannot stop safely"


class CatalogStateError(DailyMirrorError):
    """Base class for errors reading or writing the persisted sync state.

    Attributes:
        path: The state file involved.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)


class CatalogStateCorruptError(CatalogStateError):
    """Raised when the state file exists but cannot be parsed."""

    @property
    def recovery_hint(self) -> str:
        """Explain the automatic recovery."""
        return f"{self.path.name} will be rebuilt by a fresh discovery pass"


class CatalogStateWriteError(CatalogStateError):
    """Raised when the state file cannot be written."""

    @property
    def recovery_hint(self) -> str:
        """Suggest checking disk and permissions."""
        return f"Check free space and write permissions for {self.path.parent}"
