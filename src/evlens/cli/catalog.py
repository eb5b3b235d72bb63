"""Catalog CLI commands for evlens."""

from pathlib import Path

import click

from evlens.catalog.security import EventCatalog, catalog_for_path
from evlens.cli.output import OutputFormatter, output_human_table
from evlens.core.config import ViewSettings
from evlens.core.errors import EvlensError, ValidationError, handle_error


def _get_catalog(ctx: click.Context, catalog_path: Path | None) -> EventCatalog:
    settings: ViewSettings = ctx.obj["settings"]
    try:
        return catalog_for_path(catalog_path or settings.catalog)
    except EvlensError as e:
        handle_error(e)


@click.group()
def catalog() -> None:
    """Inspect the high-value event catalog."""
    pass


@catalog.command("list")
@click.option("--category", default=None, help="Only show events in this category")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML event catalog",
)
@click.pass_context
def list_events(ctx: click.Context, category: str | None, catalog_path: Path | None) -> None:
    """List catalogued event identifiers."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    events = _get_catalog(ctx, catalog_path)

    records = [
        {"event_id": event_id, **entry.model_dump(mode="json")}
        for event_id, entry in events.items()
        if category is None or entry.category.lower() == category.lower()
    ]

    if formatter.is_human():
        output_human_table(
            ["event_id", "label", "category", "severity"],
            [[r["event_id"], r["label"], r["category"], r["severity"]] for r in records],
            title=f"{len(records)} catalogued events",
        )
    else:
        formatter.output(records)


@catalog.command("show")
@click.argument("event_id")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML event catalog",
)
@click.pass_context
def show(ctx: click.Context, event_id: str, catalog_path: Path | None) -> None:
    """Show the catalog entry for one event identifier."""
    formatter: OutputFormatter = ctx.obj["formatter"]
    events = _get_catalog(ctx, catalog_path)

    entry = events.lookup(event_id)
    if entry is None:
        handle_error(ValidationError(f"Event ID {event_id} is not in the catalog", field="event_id"))

    formatter.output({"event_id": event_id.strip(), **entry.model_dump(mode="json")})
