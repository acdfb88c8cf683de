"""Partition discovery: find dated partitions newer than a boundary."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from dailymirror.core.exceptions import ListingOrderError, ListingParseError
from dailymirror.core.models import parse_partition_key
from dailymirror.core.pagination import Clock, iter_pages
from dailymirror.core.path_utils import listing_path


if TYPE_CHECKING:
    from dailymirror.core.ports import RemotePort


logger = logging.getLogger(__name__)


class PartitionDiscoverer:
    """Walks a dataset's partition listing, newest first.

    The remote lists partitions in strictly descending date order, so the
    walk stops at the first partition at or before the boundary. A listing
    that is not strictly descending raises ListingOrderError instead of
    silently stopping in the wrong place.
    """

    def __init__(
        self,
        remote: RemotePort,
        dataset: str,
        listing_url: str,
        listing_prefix: str,
        page_size: int = 100,
        today: Callable[[], date] = date.today,
        clock: Clock = time.time,
    ) -> None:
        self._remote = remote
        self._dataset = dataset
        self._listing_url = listing_url
        self._path = listing_path(listing_prefix, dataset)
        self._page_size = page_size
        self._today = today
        self._clock = clock

    def discover(self, since: date | None = None) -> list[str]:
        """Return partition keys strictly newer than since, newest first.

        Today's partition (and anything dated later) is never returned,
        since a day's partition is only final once the day has elapsed.

        Args:
            since: Boundary date; None discovers the full history.

        Raises:
            RemoteTransportError: If a page request fails.
            ListingParseError: If a page or entry cannot be parsed.
            ListingOrderError: If the listing is not strictly newest-first.
        """
        today = self._today()
        found: list[str] = []
        previous: tuple[str, date] | None = None

        logger.info("Discovering %s partitions newer than %s", self._dataset, since)
        pages = iter_pages(
            self._remote, self._listing_url, self._path, self._page_size, self._clock
        )
        for page in pages:
            for key in page.names:
                try:
                    day = parse_partition_key(key)
                except ValueError as e:
                    raise ListingParseError(
                        f"Unexpected partition name '{key}' in {self._path}",
                        url=self._listing_url,
                        cause=e,
                    ) from e

                if previous is not None and day >= previous[1]:
                    raise ListingOrderError(self._listing_url, previous[0], key)
                previous = (key, day)

                if since is not None and day <= since:
                    logger.info("Reached known partition %s; stopping discovery", key)
                    return found
                if day >= today:
                    continue
                found.append(key)

        logger.info("Discovered %d new %s partition(s)", len(found), self._dataset)
        return found
