"""JSON file adapter implementing CatalogStorePort.

The state document looks like::

    {
      "last_update": "2024-01-04",
      "dates": {
        "20240101": {"downloaded": true, "files": ["a.zip", "b.zip"]},
        "20240102": {"downloaded": false, "files": []}
      }
    }
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Any

from dailymirror.core.exceptions import CatalogStateCorruptError, CatalogStateWriteError
from dailymirror.core.models import Catalog, PartitionRecord, parse_partition_key


logger = logging.getLogger(__name__)


class JsonCatalogStore:
    """Persists one dataset's sync state as a single JSON document.

    Attributes:
        path: Location of the state file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Catalog | None:
        """Load the catalog, or None if no state file exists.

        Raises:
            CatalogStateCorruptError: If the file cannot be read or parsed.
        """
        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise CatalogStateCorruptError(
                f"Cannot read sync state {self.path}", path=self.path, cause=e
            ) from e

        try:
            catalog = catalog_from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogStateCorruptError(
                f"Invalid sync state {self.path}: {e}", path=self.path, cause=e
            ) from e

        logger.debug("Loaded %d partition(s) from %s", len(catalog.records), self.path)
        return catalog

    def save(self, catalog: Catalog) -> None:
        """Atomically replace the state file with the full catalog.

        Raises:
            CatalogStateWriteError: If the file cannot be written.
        """
        payload = json.dumps(catalog_to_dict(catalog), indent=2, sort_keys=True)
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise CatalogStateWriteError(
                f"Cannot write sync state {self.path}", path=self.path, cause=e
            ) from e

        logger.debug("Saved %d partition(s) to %s", len(catalog.records), self.path)


def catalog_to_dict(catalog: Catalog) -> dict[str, Any]:
    """Serialize a catalog to the state document layout."""
    data: dict[str, Any] = {}
    if catalog.watermark is not None:
        data["last_update"] = catalog.watermark.isoformat()
    data["dates"] = {
        key: {"downloaded": record.downloaded, "files": list(record.files)}
        for key, record in catalog.records.items()
    }
    return data


def catalog_from_dict(data: Any) -> Catalog:
    """Build a catalog from a state document.

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If a date or partition key is malformed.
    """
    if not isinstance(data, dict):
        raise TypeError("state document must be an object")

    last_update = data.get("last_update")
    if last_update is not None and not isinstance(last_update, str):
        raise TypeError("'last_update' must be a string")
    watermark = date.fromisoformat(last_update) if last_update else None

    dates = data.get("dates", {})
    if not isinstance(dates, dict):
        raise TypeError("'dates' must be an object")

    records: dict[str, PartitionRecord] = {}
    for key, entry in dates.items():
        parse_partition_key(key)
        if not isinstance(entry, dict):
            raise TypeError(f"entry for {key} must be an object")
        downloaded = entry.get("downloaded", False)
        files = entry.get("files", [])
        if not isinstance(downloaded, bool):
            raise TypeError(f"'downloaded' for {key} must be a boolean")
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise TypeError(f"'files' for {key} must be a list of strings")
        records[key] = PartitionRecord(downloaded=downloaded, files=tuple(files))

    return Catalog(watermark=watermark, records=records)
