"""One-shot conversion of legacy TOML sync state to the JSON store.

Older releases kept state in ``<dataset>.toml``::

    last_update = "2024-01-04"

    [dates.20240101]
    downloaded = true
    files = [{file_name = "a.zip"}, {file_name = "b.zip"}]

The layout matches the JSON document except that each file is a table with
a ``file_name`` key.
"""

from __future__ import annotations

import logging
import tomllib
from datetime import date
from typing import TYPE_CHECKING, Any

from dailymirror.adapters.state.json_store import catalog_from_dict
from dailymirror.core.exceptions import CatalogStateCorruptError


if TYPE_CHECKING:
    from pathlib import Path

    from dailymirror.core.models import Catalog
    from dailymirror.core.ports import CatalogStorePort


logger = logging.getLogger(__name__)


def load_legacy_state(path: Path) -> Catalog:
    """Parse a legacy TOML state file.

    Raises:
        CatalogStateCorruptError: If the file is missing, not TOML or malformed.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise CatalogStateCorruptError(
            f"Cannot read legacy state {path}", path=path, cause=e
        ) from e

    try:
        return catalog_from_dict(_flatten_files(data))
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogStateCorruptError(
            f"Invalid legacy state {path}: {e}", path=path, cause=e
        ) from e


def migrate_legacy_state(source: Path, store: CatalogStorePort) -> Catalog:
    """Convert a legacy TOML state file and save it through store.

    Returns:
        The migrated catalog.
    """
    catalog = load_legacy_state(source)
    store.save(catalog)
    logger.info("Migrated %d partition(s) from %s", len(catalog.records), source)
    return catalog


def _flatten_files(data: dict[str, Any]) -> dict[str, Any]:
    dates = data.get("dates", {})
    if not isinstance(dates, dict):
        raise TypeError("'dates' must be a table")

    flattened = {}
    for key, entry in dates.items():
        if not isinstance(entry, dict):
            raise TypeError(f"entry for {key} must be a table")
        files = entry.get("files", [])
        if not isinstance(files, list):
            raise TypeError(f"'files' for {key} must be an array")
        names = [f["file_name"] if isinstance(f, dict) else f for f in files]
        flattened[key] = {**entry, "files": names}

    result = {**data, "dates": flattened}
    last_update = data.get("last_update")
    if isinstance(last_update, date):
        result["last_update"] = last_update.isoformat()
    return result
