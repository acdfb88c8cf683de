"""Status command for CLI."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dailymirror.cli.formatting import _format_state_with_color
from dailymirror.cli.main import _fail, app, build_settings
from dailymirror.core.exceptions import DailyMirrorError
from dailymirror.core.formatting import partition_state


@app.command()
def status(
    dataset: str = typer.Argument(help="Dataset to inspect."),
    limit: int = typer.Option(
        30,
        "--limit",
        "-n",
        min=0,
        help="Show at most this many partitions, newest first (0 for all).",
    ),
    state_dir: Path | None = typer.Option(
        None, "--state-dir", help="Directory for sync state files."
    ),
) -> None:
    """Show the saved sync state of a dataset without contacting the remote."""
    from dailymirror.adapters.state import JsonCatalogStore
    from dailymirror.config import get_dataset

    settings = build_settings(state_dir=state_dir)
    try:
        ds = get_dataset(dataset)
        catalog = JsonCatalogStore(settings.state_path(ds.name)).load()
    except DailyMirrorError as e:
        raise _fail(e) from None

    if catalog is None or not catalog.records:
        typer.echo(f"No partitions known for '{dataset}'. Run 'dailymirror sync {dataset}'.")
        return

    statuses = catalog.status()
    shown = statuses[:limit] if limit else statuses

    table = Table(title=f"{dataset} (last update {catalog.watermark or 'never'})")
    table.add_column("Partition")
    table.add_column("Files", justify="right")
    table.add_column("State")
    for st in shown:
        table.add_row(st.key, str(st.file_count), _format_state_with_color(partition_state(st)))

    # Force terminal output to ensure tables render correctly in all environments
    console = Console(force_terminal=True)
    console.print(table)

    done = sum(1 for st in statuses if st.downloaded)
    typer.echo(f"{done}/{len(statuses)} partition(s) downloaded.")
