"""CLI commands for dailymirror."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer

from dailymirror.core.exceptions import DailyMirrorError


if TYPE_CHECKING:
    from dailymirror.config import MirrorSettings
    from dailymirror.core.engine import SyncEngine
    from dailymirror.core.ports import ProgressReporter, RemotePort


app = typer.Typer(
    name="dailymirror",
    help="Incrementally mirror a date-partitioned remote file catalog.",
    no_args_is_help=True,
)


def _fail(error: DailyMirrorError) -> typer.Exit:
    """Print a library error with its hint and return the exit to raise."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    return typer.Exit(1)


def build_settings(
    data_dir: Path | None = None,
    state_dir: Path | None = None,
    concurrency: int | None = None,
) -> MirrorSettings:
    """Build settings from CLI options, resolved against the project root."""
    from dataclasses import replace

    from dailymirror.config import MirrorSettings, find_project_root

    settings = MirrorSettings()
    overrides: dict[str, object] = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if state_dir is not None:
        overrides["state_dir"] = state_dir
    if concurrency is not None:
        overrides["concurrency"] = concurrency
    if overrides:
        settings = replace(settings, **overrides)
    return settings.with_resolved_paths(find_project_root())


def make_remote(settings: MirrorSettings) -> RemotePort:
    """Create the remote adapter used by network commands."""
    from dailymirror.adapters.remote import HttpRemote

    return HttpRemote(timeout=settings.timeout)


def _close(remote: RemotePort) -> None:
    close = getattr(remote, "close", None)
    if close is not None:
        close()


def open_engine(
    dataset_name: str,
    settings: MirrorSettings,
    remote: RemotePort,
    progress: ProgressReporter,
) -> SyncEngine:
    """Resolve the dataset and bootstrap a SyncEngine for it."""
    from dailymirror.adapters.state import JsonCatalogStore
    from dailymirror.config import get_dataset
    from dailymirror.core.engine import SyncEngine

    dataset = get_dataset(dataset_name)
    store = JsonCatalogStore(settings.state_path(dataset.name))
    return SyncEngine(dataset, remote, store, settings, progress=progress)


@app.command()
def sync(
    dataset: str = typer.Argument(help="Dataset to mirror (see 'dailymirror datasets')."),
    include: list[str] | None = typer.Option(
        None,
        "--include",
        "-i",
        help="Only download files whose name contains this text. Repeatable.",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Skip files whose name contains this text. Repeatable.",
    ),
    ignore_downloaded: bool = typer.Option(
        False,
        "--ignore-downloaded",
        "-s",
        help="Reconsider partitions already marked downloaded (repair runs).",
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        min=1,
        help="Maximum simultaneous downloads.",
    ),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", help="Local mirror root. Defaults to ./data."
    ),
    state_dir: Path | None = typer.Option(
        None, "--state-dir", help="Directory for sync state files."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Discover new partitions, list their files and download what is missing."""
    from dailymirror.core.filters import build_name_filter
    from dailymirror.logging_config import configure_logging
    from dailymirror.progress import RichProgressReporter

    settings = build_settings(data_dir, state_dir, concurrency)
    predicate = build_name_filter(include, exclude)

    remote = make_remote(settings)
    try:
        with RichProgressReporter() as progress:
            configure_logging(verbose, console=progress.console)
            engine = open_engine(dataset, settings, remote, progress)
            if ignore_downloaded:
                engine.set_ignore_downloaded()
            report = engine.sync(predicate)
    except DailyMirrorError as e:
        raise _fail(e) from None
    finally:
        _close(remote)

    complete = sum(report.partitions.values())
    typer.echo(
        f"{dataset}: {complete}/{len(report.partitions)} partition(s) complete, "
        f"{len(report.failed)} download(s) failed."
    )
    if report.failed:
        typer.echo("Re-run to retry the failed downloads.")
        raise typer.Exit(1)


@app.command()
def refresh(
    dataset: str = typer.Argument(help="Dataset to refresh."),
    ignore_downloaded: bool = typer.Option(
        False,
        "--ignore-downloaded",
        "-s",
        help="Count partitions already marked downloaded as outstanding.",
    ),
    state_dir: Path | None = typer.Option(
        None, "--state-dir", help="Directory for sync state files."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Discover new partitions and fetch missing file lists without downloading."""
    from dailymirror.logging_config import configure_logging
    from dailymirror.progress import RichProgressReporter

    settings = build_settings(state_dir=state_dir)
    remote = make_remote(settings)
    try:
        with RichProgressReporter() as progress:
            configure_logging(verbose, console=progress.console)
            engine = open_engine(dataset, settings, remote, progress)
            if ignore_downloaded:
                engine.set_ignore_downloaded()
            outstanding = engine.refresh_file_lists()
    except DailyMirrorError as e:
        raise _fail(e) from None
    finally:
        _close(remote)

    typer.echo(f"{dataset}: {outstanding} partition(s) outstanding.")


@app.command()
def datasets() -> None:
    """List the built-in datasets."""
    from dailymirror.config import DATASETS

    for ds in DATASETS.values():
        typer.echo(f"{ds.name}: {ds.description}")


@app.command()
def migrate(
    source: Path = typer.Argument(help="Legacy TOML state file."),
    dest: Path = typer.Argument(help="JSON state file to write."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite dest."),
) -> None:
    """Convert a legacy TOML state file to the JSON state format."""
    from dailymirror.adapters.state import JsonCatalogStore, migrate_legacy_state

    if dest.exists() and not force:
        typer.echo(f"Error: {dest} already exists. Use --force to overwrite.", err=True)
        raise typer.Exit(1)

    try:
        catalog = migrate_legacy_state(source, JsonCatalogStore(dest))
    except DailyMirrorError as e:
        raise _fail(e) from None

    typer.echo(f"Migrated {len(catalog.records)} partition(s) to {dest}.")


def main() -> None:
    """Entry point for the CLI."""
    app()
