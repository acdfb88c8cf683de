"""Configuration for dailymirror.

This module provides the mirror settings, the built-in dataset registry and
project root discovery used to resolve relative directories.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Self

from dailymirror.core.exceptions import ConfigurationError, DatasetNotFoundError
from dailymirror.core.models import Dataset
from dailymirror.core.scheduler import DEFAULT_CONCURRENCY


DEFAULT_LISTING_URL = "https://www.okx.com/priapi/v5/broker/public/v2/orderRecord"
DEFAULT_LISTING_PREFIX = "cdn/okex/traderecords"
DEFAULT_DOWNLOAD_BASE_URL = "https://static.okx.com/cdn/okex/traderecords"
DEFAULT_PAGE_SIZE = 100

DATASETS: dict[str, Dataset] = {
    ds.name: ds
    for ds in (
        Dataset(name="swaprate", description="Perpetual swap funding rates"),
        Dataset(name="aggtrades", description="Aggregated trades"),
        Dataset(name="trades", description="Trade history"),
    )
}


def get_dataset(name: str) -> Dataset:
    """Look up a built-in dataset by name.

    Raises:
        DatasetNotFoundError: If no dataset with that name exists.
    """
    try:
        return DATASETS[name]
    except KeyError:
        raise DatasetNotFoundError(name, available=sorted(DATASETS)) from None


@dataclass(frozen=True, slots=True)
class MirrorSettings:
    """Settings shared by every component of a mirror run.

    Attributes:
        listing_url: Paginated listing endpoint.
        listing_prefix: Remote path prefix under which datasets are listed.
        download_base_url: Base URL for direct file downloads.
        page_size: Entries requested per listing page.
        concurrency: Maximum simultaneous downloads.
        data_dir: Root of the local mirror; files land in
            ``data_dir/<dataset>/<partition>/``.
        state_dir: Directory holding one ``<dataset>.json`` state file per dataset.
        timeout: HTTP timeout in seconds.
    """

    listing_url: str = DEFAULT_LISTING_URL
    listing_prefix: str = DEFAULT_LISTING_PREFIX
    download_base_url: str = DEFAULT_DOWNLOAD_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    concurrency: int = DEFAULT_CONCURRENCY
    data_dir: Path = Path("data")
    state_dir: Path = Path(".")
    timeout: float = 30.0

    def __post_init__(self) -> None:
        """Validate numeric settings."""
        if self.page_size < 1:
            raise ConfigurationError("page_size must be at least 1")
        if self.concurrency < 1:
            raise ConfigurationError("concurrency must be at least 1")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def state_path(self, dataset: str) -> Path:
        """Path of the state file for a dataset."""
        return self.state_dir / f"{dataset}.json"

    def with_resolved_paths(self, root: Path) -> Self:
        """Return settings with relative directories resolved against root."""
        data_dir = self.data_dir if self.data_dir.is_absolute() else root / self.data_dir
        state_dir = (
            self.state_dir if self.state_dir.is_absolute() else root / self.state_dir
        )
        return replace(self, data_dir=data_dir, state_dir=state_dir)


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .dailymirror - Explicit project marker
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.
    """
    if start is None:
        start = Path.cwd()

    markers = [".dailymirror", "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()
