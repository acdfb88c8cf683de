"""File listing for a single partition."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from dailymirror.core.exceptions import ListingParseError
from dailymirror.core.pagination import Clock, iter_pages
from dailymirror.core.path_utils import is_safe_file_name, listing_path


if TYPE_CHECKING:
    from dailymirror.core.ports import RemotePort


logger = logging.getLogger(__name__)


class FileLister:
    """Lists the files of one partition, draining every page."""

    def __init__(
        self,
        remote: RemotePort,
        dataset: str,
        listing_url: str,
        listing_prefix: str,
        page_size: int = 100,
        clock: Clock = time.time,
    ) -> None:
        self._remote = remote
        self._dataset = dataset
        self._listing_url = listing_url
        self._listing_prefix = listing_prefix
        self._page_size = page_size
        self._clock = clock

    def list_files(self, partition: str) -> list[str]:
        """Return the partition's file names in listing order, without duplicates.

        Raises:
            RemoteTransportError: If a page request fails.
            ListingParseError: If a page is malformed or a name is not a plain file name.
        """
        path = listing_path(self._listing_prefix, self._dataset, partition)
        files: dict[str, None] = {}
        for page in iter_pages(
            self._remote, self._listing_url, path, self._page_size, self._clock
        ):
            for name in page.names:
                if not is_safe_file_name(name):
                    raise ListingParseError(
                        f"Unsafe file name '{name}' in {path}", url=self._listing_url
                    )
                files.setdefault(name, None)

        logger.debug("Partition %s/%s has %d file(s)", self._dataset, partition, len(files))
        return list(files)
