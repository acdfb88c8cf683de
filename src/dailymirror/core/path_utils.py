"""Remote path, URL and local destination helpers.

Remote listings are addressed by a slash-separated path under the listing
prefix; files are fetched from ``{base}/{dataset}/daily/{partition}/{file}``
and land at ``{data_dir}/{dataset}/{partition}/{file}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


def listing_path(prefix: str, dataset: str, partition: str | None = None) -> str:
    """Build the listing path for a dataset or one of its partitions.

    Example:
        >>> listing_path("cdn/okex/traderecords", "trades")
        'cdn/okex/traderecords/trades/daily'
        >>> listing_path("cdn/okex/traderecords", "trades", "20240101")
        'cdn/okex/traderecords/trades/daily/20240101'
    """
    path = f"{prefix.strip('/')}/{dataset}/daily"
    if partition is not None:
        path = f"{path}/{partition}"
    return path


def download_url(base_url: str, dataset: str, partition: str, file_name: str) -> str:
    """Build the direct download URL of a partition file."""
    return f"{base_url.rstrip('/')}/{dataset}/daily/{partition}/{file_name}"


def partition_dir(data_dir: Path, dataset: str, partition: str) -> Path:
    """Local directory holding a partition's files."""
    return data_dir / dataset / partition


def is_safe_file_name(file_name: str) -> bool:
    """Whether a remote file name can be used as a single local path component."""
    return bool(file_name) and file_name not in {".", ".."} and not any(
        sep in file_name for sep in ("/", "\\")
    )
