"""Filtered sync with progress bars.

Only BTC spot files are mirrored. A partition counts as complete once every
file matching the filter is present, so widening the filter later together
with ignore_downloaded picks up the remaining files.
"""

from dailymirror import (
    HttpRemote,
    JsonCatalogStore,
    MirrorSettings,
    RichProgressReporter,
    SyncEngine,
    build_name_filter,
    get_dataset,
)


settings = MirrorSettings(concurrency=8)
aggtrades = get_dataset("aggtrades")
btc_spot = build_name_filter(include=["BTC-USDT"], exclude=["-SWAP"])

with HttpRemote() as remote, RichProgressReporter() as progress:
    engine = SyncEngine(
        aggtrades,
        remote,
        JsonCatalogStore(settings.state_path(aggtrades.name)),
        settings,
        progress=progress,
    )

    # Fetch file lists only; nothing is downloaded yet
    outstanding = engine.refresh_file_lists()
    print(f"{outstanding} partitions outstanding")

    # Repair run: revisit partitions already marked downloaded
    engine.set_ignore_downloaded()
    report = engine.download_outstanding(btc_spot)

print(f"{len(report.failed)} downloads failed")
