"""Cursor pagination over the remote listing endpoint.

Both the partition discoverer and the file lister walk the same paginated
endpoint. A request carries the listing path, a page size, a millisecond
timestamp and, after the first page, the server-supplied cursor. A response
looks like::

    {"data": {"recordFileList": [{"fileName": "20240103"}, ...],
              "isTruncate": true,
              "nextMarker": "opaque-cursor"}}
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from dailymirror.core.exceptions import ListingParseError


if TYPE_CHECKING:
    from dailymirror.core.ports import RemotePort


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class Page:
    """One decoded listing page.

    Attributes:
        names: Entry names in listing order.
        has_more: Server reports further pages.
        cursor: Opaque cursor for the next page, if any.
    """

    names: tuple[str, ...]
    has_more: bool
    cursor: str | None


def parse_page(payload: Any, url: str) -> Page:
    """Decode a listing response.

    Raises:
        ListingParseError: If expected fields are missing or mistyped.
    """
    data = payload.get("data") if isinstance(payload, Mapping) else None
    if not isinstance(data, Mapping):
        raise ListingParseError("Listing response has no 'data' object", url=url)

    entries = data.get("recordFileList")
    if not isinstance(entries, list):
        raise ListingParseError("Listing response has no 'recordFileList'", url=url)

    names = []
    for entry in entries:
        name = entry.get("fileName") if isinstance(entry, Mapping) else None
        if not isinstance(name, str):
            raise ListingParseError(f"Listing entry without 'fileName': {entry!r}", url=url)
        names.append(name)

    cursor = data.get("nextMarker")
    return Page(
        names=tuple(names),
        has_more=bool(data.get("isTruncate", False)),
        cursor=cursor if isinstance(cursor, str) and cursor else None,
    )


def iter_pages(
    remote: RemotePort,
    url: str,
    path: str,
    page_size: int,
    clock: Clock = time.time,
) -> Iterator[Page]:
    """Yield listing pages until the server reports no continuation.

    The walk also ends on an empty page or a page without a cursor. Callers
    may stop early by abandoning the iterator. Errors propagate; nothing is
    retried.
    """
    cursor: str | None = None
    while True:
        params = {
            "path": path,
            "size": str(page_size),
            "t": str(int(clock() * 1000)),
        }
        if cursor is not None:
            params["nextMarker"] = cursor

        page = parse_page(remote.get_json(url, params), url)
        logger.debug("Listing %s: %d entries, more=%s", path, len(page.names), page.has_more)
        yield page

        if not page.names or not page.has_more or page.cursor is None:
            return
        if page.cursor == cursor:
            raise ListingParseError(
                f"Listing cursor did not advance for {path}: {cursor!r}", url=url
            )
        cursor = page.cursor
