"""CLI for codegraph-store: manage saved projects, history and preferences."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from codegraph_store.core.config import AppSettings, StorageConfig
from codegraph_store.core.logging_config import setup_logging
from codegraph_store.core.startup_checks import validate_settings
from codegraph_store.models import ActivityKind
from codegraph_store.persistence.codec import dumps, dumps_pretty, loads
from codegraph_store.services.workspace import Workspace, create_workspace
from codegraph_store.templates import categories, list_templates

app = typer.Typer(name="codegraph-store", help="Local persistence for Code-to-Graph projects")
console = Console()


class Dataset(str, Enum):
    GRAPHS = "graphs"
    HAMMING = "hamming"


def _build_settings(store_path: Optional[Path], backend: Optional[str]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    overrides: dict = {}
    if store_path:
        overrides["store_path"] = store_path
    if backend:
        overrides["backend"] = backend
    if overrides:
        storage = StorageConfig(**{**settings.storage.model_dump(), **overrides})
        settings = settings.model_copy(update={"storage": storage})
    return settings


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def _workspace(ctx: typer.Context) -> Workspace:
    return ctx.obj["workspace"]


def _parse_value(raw: str) -> Any:
    """JSON literal if it parses (``true``, ``3``, ``"x"``), the raw text otherwise."""
    try:
        return loads(raw)
    except ValueError:
        return raw


@app.callback()
def main(
    ctx: typer.Context,
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="Directory for stored data"),
    backend: Optional[str] = typer.Option(None, "--backend", help="Storage backend: file or memory"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Manage saved graph projects, activity history and preferences."""
    try:
        settings = _build_settings(store_path, backend)
    except ValidationError as exc:
        console.print(f"[red]Invalid settings: {_describe(exc)}[/red]")
        raise typer.Exit(code=2) from exc
    if verbose:
        settings.observability.log_level = "DEBUG"
    setup_logging(settings)
    try:
        validate_settings(settings)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc
    ctx.obj = {"settings": settings, "workspace": create_workspace(settings)}


@app.command("list")
def list_projects(
    ctx: typer.Context,
    dataset: Dataset = typer.Option(Dataset.GRAPHS, help="Project collection"),
) -> None:
    """List saved projects, newest first."""
    storage = _workspace(ctx).dataset(dataset.value)
    items = storage.get_all()

    table = Table(title=f"Saved {dataset.value}")
    table.add_column("Name", style="cyan")
    table.add_column("Saved", style="green")
    table.add_column("Timestamp")
    for name in storage.names():
        record = items[name]
        if isinstance(record, dict):
            table.add_row(name, str(record.get("dateCreated", "")), str(record.get("timestamp", "")))
        else:
            table.add_row(name, "", "")
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
    dataset: Dataset = typer.Option(Dataset.GRAPHS, help="Project collection"),
) -> None:
    """Print one saved project as JSON."""
    record = _workspace(ctx).dataset(dataset.value).get(name)
    if record is None:
        console.print(f"[red]No project named {name!r} in {dataset.value}[/red]")
        raise typer.Exit(code=1)
    typer.echo(dumps_pretty(record))


@app.command()
def save(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
    payload_file: Path = typer.Argument(..., help="JSON file holding the project payload"),
    dataset: Dataset = typer.Option(Dataset.GRAPHS, help="Project collection"),
) -> None:
    """Save (or overwrite) a project from a JSON file."""
    workspace = _workspace(ctx)
    try:
        payload = loads(payload_file.read_text(encoding="utf-8"))
    except ValueError as exc:
        console.print(f"[red]Payload is not valid JSON ({exc}): {payload_file}[/red]")
        raise typer.Exit(code=1) from exc
    workspace.dataset(dataset.value).save(name, payload)
    kind = ActivityKind.HAMMING if dataset is Dataset.HAMMING else ActivityKind.GRAPH
    workspace.history.add(kind, f"Saved {name}", {"name": name})
    console.print(f"[green]Saved {name!r} to {dataset.value}[/green]")


@app.command()
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
    dataset: Dataset = typer.Option(Dataset.GRAPHS, help="Project collection"),
) -> None:
    """Delete a saved project."""
    workspace = _workspace(ctx)
    storage = workspace.dataset(dataset.value)
    if storage.get(name) is None:
        console.print(f"[red]No project named {name!r} in {dataset.value}[/red]")
        raise typer.Exit(code=1)
    storage.delete(name)
    workspace.history.add(ActivityKind.DELETE, f"Deleted {name}", {"name": name})
    console.print(f"[green]Deleted {name!r} from {dataset.value}[/green]")


@app.command("export")
def export_projects(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, help="Write to this file instead of stdout"),
    dataset: Dataset = typer.Option(Dataset.GRAPHS, help="Project collection"),
) -> None:
    """Export every project in a dataset as JSON."""
    workspace = _workspace(ctx)
    document = workspace.dataset(dataset.value).export()
    if output:
        output.write_text(document, encoding="utf-8")
        console.print(f"[green]Exported {dataset.value} to {output}[/green]")
    else:
        typer.echo(document)
    workspace.history.add(ActivityKind.EXPORT, f"Exported {dataset.value}")


@app.command("import")
def import_projects(
    ctx: typer.Context,
    input_file: Path = typer.Argument(..., help="JSON file produced by export"),
    dataset: Dataset = typer.Option(Dataset.GRAPHS, help="Project collection"),
) -> None:
    """Replace a dataset with the contents of an export file."""
    workspace = _workspace(ctx)
    result = workspace.dataset(dataset.value).import_json(input_file.read_text(encoding="utf-8"))
    if not result.success:
        console.print(f"[red]Import failed: {result.error}[/red]")
        raise typer.Exit(code=1)
    workspace.history.add(ActivityKind.IMPORT, f"Imported {dataset.value} from {input_file.name}")
    console.print(f"[green]Imported {dataset.value} from {input_file}[/green]")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show record counts and sizes for both datasets."""
    workspace = _workspace(ctx)
    table = Table(title="Storage")
    table.add_column("Dataset", style="cyan")
    table.add_column("Projects")
    table.add_column("Size (KB)")
    for dataset in ("graphs", "hamming"):
        result = workspace.dataset(dataset).get_stats()
        table.add_row(dataset, str(result.count), result.size_kb)
    console.print(table)


@app.command()
def history(
    ctx: typer.Context,
    clear: bool = typer.Option(False, "--clear", help="Delete the activity history"),
) -> None:
    """Show recent activity."""
    activity = _workspace(ctx).history
    if clear:
        activity.clear()
        console.print("[green]History cleared[/green]")
        return

    table = Table(title="Recent activity")
    table.add_column("When", style="green")
    table.add_column("Type", style="cyan")
    table.add_column("Description")
    for entry in activity.get_all():
        if isinstance(entry, dict):
            table.add_row(
                str(entry.get("dateFormatted", "")),
                str(entry.get("type", "")),
                str(entry.get("description", "")),
            )
    console.print(table)


@app.command()
def prefs(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="Preference to read or set"),
    value: Optional[str] = typer.Argument(None, help="New value (JSON literal or text)"),
    reset: bool = typer.Option(False, "--reset", help="Restore every preference to its default"),
) -> None:
    """Read, set or reset preferences."""
    preferences = _workspace(ctx).preferences
    if reset:
        preferences.reset()
        console.print("[green]Preferences reset to defaults[/green]")
        return
    if key is None:
        typer.echo(dumps_pretty(preferences.get_all()))
        return
    if value is None:
        typer.echo(dumps(preferences.get(key)))
        return
    preferences.set(key, _parse_value(value))
    console.print(f"[green]{key} updated[/green]")


@app.command()
def templates(
    category: Optional[str] = typer.Option(
        None, help=f"Only templates in this category ({', '.join(categories())})"
    ),
) -> None:
    """List the preset example graphs."""
    if category is not None and category not in categories():
        console.print(f"[red]Unknown category {category!r}. Choose from: {', '.join(categories())}[/red]")
        raise typer.Exit(code=1)
    table = Table(title="Graph templates")
    table.add_column("Key", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Category")
    table.add_column("Description", max_width=50)
    for key, template in list_templates(category).items():
        table.add_row(key, template.name, template.category, template.description)
    console.print(table)


if __name__ == "__main__":
    app()
