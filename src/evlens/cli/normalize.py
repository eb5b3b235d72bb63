"""Normalize CLI command for evlens."""

import json
import sys
from pathlib import Path

import click

from evlens.catalog.security import catalog_for_path
from evlens.cli.output import OutputFormatter, output_event_card
from evlens.core.config import ViewSettings
from evlens.core.errors import EvlensError, ValidationError, handle_error
from evlens.normalizer.record import RecordNormalizer
from evlens.view import SecurityEventCard


def _load_row(row_json: str) -> dict[str, str]:
    try:
        data = json.loads(row_json)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Row is not valid JSON: {e}", field="row")
    if not isinstance(data, dict):
        raise ValidationError("Row must be a JSON object", field="row")
    return {str(k): "" if v is None else str(v) for k, v in data.items()}


@click.command()
@click.argument("row_json", required=False)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML event catalog",
)
@click.option(
    "--used-fields",
    type=click.Choice(["key", "value"]),
    default=None,
    help="Exclude consumed columns from extras by key or by value equality",
)
@click.pass_context
def normalize(
    ctx: click.Context,
    row_json: str | None,
    catalog_path: Path | None,
    used_fields: str | None,
) -> None:
    """Normalize one security event row given as a JSON object.

    Reads ROW_JSON from stdin when it is omitted.
    """
    formatter: OutputFormatter = ctx.obj["formatter"]
    settings: ViewSettings = ctx.obj["settings"]

    try:
        settings = settings.merged(catalog=catalog_path, used_field_tracking=used_fields)
        row = _load_row(row_json if row_json is not None else sys.stdin.read())
        normalizer = RecordNormalizer(
            catalog=catalog_for_path(settings.catalog),
            value_cap=settings.value_cap,
            extras_cap=settings.extras_cap,
            used_field_tracking=settings.used_field_tracking,
        )
        view = normalizer.normalize(row)
    except EvlensError as e:
        handle_error(e)

    if formatter.is_human():
        output_event_card(SecurityEventCard(index=settings.specialized_index, view=view))
    else:
        formatter.output(view)
