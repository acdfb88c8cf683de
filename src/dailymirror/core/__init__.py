"""Core domain module for dailymirror.

This module contains the sync state models, port definitions and the
discovery, listing, download and orchestration services. It depends only on
the ports, never on concrete adapters.
"""

from dailymirror.core.engine import SyncEngine
from dailymirror.core.models import Catalog, Dataset, PartitionRecord
from dailymirror.core.ports import (
    CatalogStorePort,
    ExecutorPort,
    ProgressCallback,
    ProgressReporter,
    RemotePort,
)


__all__ = [
    "Catalog",
    "CatalogStorePort",
    "Dataset",
    "ExecutorPort",
    "PartitionRecord",
    "ProgressCallback",
    "ProgressReporter",
    "RemotePort",
    "SyncEngine",
]
