"""Search CLI command for evlens."""

from pathlib import Path

import click

from evlens.catalog.security import catalog_for_path
from evlens.cli.output import OutputFormatter
from evlens.core.config import ViewSettings
from evlens.core.errors import EvlensError, handle_error
from evlens.core.logging import debug, info, warning
from evlens.store.csv_store import IndexStore
from evlens.view import build_results_view


def _parse_index_option(value: str) -> tuple[str, Path]:
    name, sep, path = value.partition("=")
    if not sep or not name or not path:
        raise click.BadParameter(f"Expected NAME=PATH, got '{value}'", param_hint="--index")
    return name, Path(path)


@click.command()
@click.argument("files", nargs=-1, type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--index",
    "-i",
    "named_files",
    multiple=True,
    help="Load a CSV into a named index (NAME=PATH); repeatable",
)
@click.option("--query", "-Q", default="", help="Search query (words, Column=value, index=Name)")
@click.option("--page", "-p", type=int, default=1, show_default=True, help="Page number (1-based)")
@click.option("--page-size", "-n", type=int, default=None, help="Results per page")
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
@click.option("--specialized-index", default=None, help="Index that enables the security event view")
@click.pass_context
def search(
    ctx: click.Context,
    files: tuple[Path, ...],
    named_files: tuple[str, ...],
    query: str,
    page: int,
    page_size: int | None,
    catalog_path: Path | None,
    used_fields: str | None,
    specialized_index: str | None,
) -> None:
    """Search CSV indexes and print one page of results.

    Each FILE becomes an index named after its file stem. If every hit
    comes from the security events index, high-value events are shown
    as normalized cards; otherwise a plain table is printed.
    """
    formatter: OutputFormatter = ctx.obj["formatter"]
    settings: ViewSettings = ctx.obj["settings"]

    try:
        settings = settings.merged(
            page_size=page_size,
            catalog=catalog_path,
            used_field_tracking=used_fields,
            specialized_index=specialized_index,
        )
        catalog = catalog_for_path(settings.catalog)
        debug(f"Using catalog with {len(catalog)} events", catalog=str(settings.catalog or "builtin"))

        store = IndexStore()
        for path in files:
            store.load_csv(path)
        for value in named_files:
            name, path = _parse_index_option(value)
            store.load_csv(path, index_name=name)
        store.set_query(query)

        view = build_results_view(store, page=page, catalog=catalog, settings=settings)
    except EvlensError as e:
        handle_error(e)

    if view is None:
        info("No indexes loaded")
        return

    if view.page["page"] > view.page["total_pages"]:
        warning(f"Page {page} is past the last page ({view.page['total_pages']})")

    formatter.results(view)
