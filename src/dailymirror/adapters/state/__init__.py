"""Sync state persistence adapters."""

from dailymirror.adapters.state.json_store import JsonCatalogStore
from dailymirror.adapters.state.migration import migrate_legacy_state


__all__ = ["JsonCatalogStore", "migrate_legacy_state"]
