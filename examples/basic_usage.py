"""Basic single-dataset sync example.

This example shows the simplest usage pattern: pick a dataset, wire the
HTTP remote and JSON state store, and sync. Re-running the script only
fetches what is new or missing.
"""

from pathlib import Path

from dailymirror import HttpRemote, JsonCatalogStore, MirrorSettings, SyncEngine, get_dataset


settings = MirrorSettings(data_dir=Path("./data"), state_dir=Path("./state"))
trades = get_dataset("trades")

with HttpRemote(timeout=settings.timeout) as remote:
    # Construction loads ./state/trades.json and discovers new partitions
    engine = SyncEngine(trades, remote, JsonCatalogStore(settings.state_path("trades")), settings)

    # List files of new partitions, then download everything missing
    report = engine.sync()

complete = sum(report.partitions.values())
print(f"{complete}/{len(report.partitions)} partitions complete")
for outcome in report.failed:
    print(f"failed: {outcome.task.url} ({outcome.error})")
