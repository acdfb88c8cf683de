"""dailymirror - incremental mirroring of date-partitioned remote catalogs.

A remote service lists a dataset's daily partitions and, per partition, its
files. dailymirror discovers partitions newer than the last sync, lists their
files once, downloads what is missing with bounded concurrency and persists
enough state to resume after any interruption.

Example:
    >>> from dailymirror import HttpRemote, JsonCatalogStore, MirrorSettings, SyncEngine
    >>> from dailymirror.config import get_dataset
    >>> settings = MirrorSettings()
    >>> trades = get_dataset("trades")
    >>> with HttpRemote() as remote:
    ...     engine = SyncEngine(
    ...         trades, remote, JsonCatalogStore(settings.state_path("trades")), settings
    ...     )
    ...     report = engine.sync()
"""

from dailymirror.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from dailymirror.adapters.remote import HttpRemote
from dailymirror.adapters.state import JsonCatalogStore, migrate_legacy_state
from dailymirror.config import DATASETS, MirrorSettings, find_project_root, get_dataset
from dailymirror.core.engine import SyncEngine
from dailymirror.core.exceptions import (
    CatalogStateCorruptError,
    CatalogStateError,
    CatalogStateWriteError,
    ConfigurationError,
    DailyMirrorError,
    DatasetNotFoundError,
    ListingOrderError,
    ListingParseError,
    RemoteError,
    RemoteTransportError,
)
from dailymirror.core.filters import build_name_filter
from dailymirror.core.models import (
    Catalog,
    Dataset,
    DownloadOutcome,
    DownloadReport,
    DownloadStatus,
    DownloadTask,
    PartitionRecord,
)
from dailymirror.core.ports import (
    CatalogStorePort,
    ExecutorPort,
    NullProgressReporter,
    ProgressCallback,
    ProgressReporter,
    RemotePort,
)
from dailymirror.progress import RichProgressReporter


__version__ = "0.1.0"

__all__ = [
    "DATASETS",
    "Catalog",
    "CatalogStateCorruptError",
    "CatalogStateError",
    "CatalogStateWriteError",
    "CatalogStorePort",
    "ConfigurationError",
    "DailyMirrorError",
    "Dataset",
    "DatasetNotFoundError",
    "DownloadOutcome",
    "DownloadReport",
    "DownloadStatus",
    "DownloadTask",
    "ExecutorPort",
    "HttpRemote",
    "JsonCatalogStore",
    "ListingOrderError",
    "ListingParseError",
    "MirrorSettings",
    "NullProgressReporter",
    "PartitionRecord",
    "ProgressCallback",
    "ProgressReporter",
    "RemoteError",
    "RemotePort",
    "RemoteTransportError",
    "RichProgressReporter",
    "SyncEngine",
    "SynchronousExecutor",
    "ThreadPoolExecutorAdapter",
    "__version__",
    "build_name_filter",
    "find_project_root",
    "get_dataset",
    "migrate_legacy_state",
]
