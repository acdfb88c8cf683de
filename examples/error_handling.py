"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from dailymirror import (
    CatalogStateWriteError,
    DailyMirrorError,
    DatasetNotFoundError,
    HttpRemote,
    JsonCatalogStore,
    ListingOrderError,
    MirrorSettings,
    RemoteTransportError,
    SyncEngine,
    get_dataset,
)


settings = MirrorSettings()


# Pattern 1: Handle unknown dataset names
def resolve(name: str):
    """Look up a dataset with helpful error messages."""
    try:
        return get_dataset(name)
    except DatasetNotFoundError as e:
        # recovery_hint lists available datasets
        print(f"Dataset '{name}' not found.")
        print(f"Hint: {e.recovery_hint}")
        raise


# Pattern 2: Network failures during discovery or listing
def sync_or_retry_later(name: str) -> bool:
    """Sync a dataset; return False when the remote is unreachable."""
    dataset = resolve(name)
    with HttpRemote() as remote:
        try:
            engine = SyncEngine(
                dataset, remote, JsonCatalogStore(settings.state_path(name)), settings
            )
            report = engine.sync()
        except RemoteTransportError as e:
            # Completed work was saved; a later run resumes from there
            print(f"Remote unavailable: {e.url}")
            print(f"Hint: {e.recovery_hint}")
            return False
    return not report.failed


# Pattern 3: Catch-all for any library error
def sync_safe(name: str) -> bool:
    """Sync with comprehensive error handling."""
    try:
        return sync_or_retry_later(name)
    except ListingOrderError as e:
        print(f"Refusing to trust the listing: {e}")
        return False
    except CatalogStateWriteError as e:
        print(f"Cannot save state to {e.path}")
        print(f"Hint: {e.recovery_hint}")
        return False
    except DailyMirrorError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
        return False


if __name__ == "__main__":
    sync_safe("swaprate")
