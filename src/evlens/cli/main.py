"""evlens CLI entry point and global options."""

import sys
from pathlib import Path
from typing import Literal

import click

from evlens import __version__
from evlens.cli.catalog import catalog
from evlens.cli.normalize import normalize
from evlens.cli.output import OutputFormat, OutputFormatter, set_output_format
from evlens.cli.search import search
from evlens.core.config import load_settings
from evlens.core.errors import EvlensError, handle_error
from evlens.core.logging import configure_logging, set_verbose


@click.group()
@click.option(
    "--format",
    "-f",
    type=click.Choice(["json", "jsonl", "human"]),
    default="json",
    help="Output format (default: json)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging to stderr",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress progress output",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Log format for stderr (default: text)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML settings file",
)
@click.version_option(version=__version__, prog_name="evlens")
@click.pass_context
def cli(
    ctx: click.Context,
    format: OutputFormat,
    verbose: bool,
    quiet: bool,
    log_format: Literal["text", "json"],
    config_path: Path | None,
) -> None:
    """evlens: search imported event indexes with a Windows Security event view.

    When every result comes from the security events index, rows are
    normalized into forensic fields and low-value events are hidden.
    """
    set_output_format(format)
    set_verbose(verbose)
    configure_logging(log_format=log_format, quiet=quiet)

    try:
        settings = load_settings(config_path)
    except EvlensError as e:
        handle_error(e, exit_code=EXIT_INVALID_ARGS)

    ctx.ensure_object(dict)
    ctx.obj = {
        "format": format,
        "verbose": verbose,
        "quiet": quiet,
        "log_format": log_format,
        "settings": settings,
        "formatter": OutputFormatter(format=format),
    }


cli.add_command(search)
cli.add_command(normalize)
cli.add_command(catalog)


# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_INVALID_ARGS = 2


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
