"""Output formatting for evlens CLI.

Implements JSON, JSONL, and human-readable output modes.
stdout contains only results.
stderr carries progress, logs, and diagnostics.
"""

import json
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel

from evlens.normalizer.record import SEVERITY_MARKERS
from evlens.view import NO_RESULTS

OutputFormat = Literal["json", "jsonl", "human"]

_output_format: OutputFormat = "json"


def set_output_format(format: OutputFormat) -> None:
    """Set the global output format."""
    global _output_format
    _output_format = format


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for evlens types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, BaseModel):
            return obj.model_dump(mode="json")
        return super().default(obj)


def output_json(data: Any, file: Any = None) -> None:
    """Output data as JSON to stdout.

    Args:
        data: Data to output (dict, list, or Pydantic model)
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    if isinstance(data, BaseModel):
        output = data.model_dump(mode="json")
    else:
        output = data

    json.dump(output, file, cls=JSONEncoder, ensure_ascii=False)
    file.write("\n")
    file.flush()


def output_jsonl(records: Iterator[Any], file: Any = None) -> None:
    """Output records as JSONL (one JSON object per line) to stdout."""
    if file is None:
        file = sys.stdout

    for record in records:
        if isinstance(record, BaseModel):
            output = record.model_dump(mode="json")
        else:
            output = record
        json.dump(output, file, cls=JSONEncoder, ensure_ascii=False)
        file.write("\n")
    file.flush()


def output_human(data: Any, title: str | None = None, file: Any = None) -> None:
    """Output data in human-readable format to stdout."""
    if file is None:
        file = sys.stdout

    if title:
        file.write(f"\n{title}\n")
        file.write("=" * len(title) + "\n\n")

    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    if isinstance(data, dict):
        _format_dict(data, file)
    elif isinstance(data, list):
        _format_list(data, file)
    else:
        file.write(str(data) + "\n")

    file.flush()


def output_human_table(
    columns: list[str],
    rows: list[list[str]],
    title: str | None = None,
    file: Any = None,
    max_width: int = 50,
    empty_message: str = "No records.",
) -> None:
    """Output rows as a human-readable table.

    Args:
        columns: Column headers
        rows: Cell values, one list per row, aligned with columns
        title: Optional title for the table
        file: Output file (defaults to stdout)
        max_width: Maximum column width
        empty_message: Line written instead of the body when rows is empty
    """
    if file is None:
        file = sys.stdout

    if title:
        file.write(f"\n{title}\n")
        file.write("=" * len(title) + "\n\n")

    widths = [len(col) for col in columns]
    for row in rows[:100]:
        for i, value in enumerate(row):
            widths[i] = min(max_width, max(widths[i], len(value)))
    widths = [min(max_width, w) for w in widths]

    header = " | ".join(col.ljust(widths[i])[: widths[i]] for i, col in enumerate(columns))
    file.write(header + "\n")
    file.write("-" * len(header) + "\n")

    if not rows:
        file.write(f"{empty_message}\n")

    for row in rows:
        cells = []
        for i, value in enumerate(row):
            if len(value) > widths[i]:
                value = value[: widths[i] - 3] + "..."
            cells.append(value.ljust(widths[i]))
        file.write(" | ".join(cells) + "\n")

    file.flush()


def output_event_card(card: Any, file: Any = None) -> None:
    """Output one security event card.

    Args:
        card: SecurityEventCard from the results view
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    view = card.view
    header = f"{SEVERITY_MARKERS[view.severity]} {view.event_id or '?'} {view.label}"
    if view.category:
        header += f" [{view.category}]"
    header += f"  ({card.index})"
    file.write(header + "\n")

    for item in view.canonical_fields:
        file.write(f"    {item.label}: {item.value}\n")

    if view.extra_fields:
        extras = "  ".join(f"{extra.key}: {extra.value}" for extra in view.extra_fields)
        if view.extra_overflow:
            extras += f"  +{view.extra_overflow} more"
        file.write(f"    -- {extras}\n")

    file.write("\n")


def output_results_view(view: Any, file: Any = None) -> None:
    """Output a results view in human-readable form.

    Args:
        view: ResultsView to render
        file: Output file (defaults to stdout)
    """
    if file is None:
        file = sys.stdout

    page = view.page
    file.write(f"{view.summary}    Page {page['page']} of {page['total_pages']}\n\n")

    if view.mode == "security_events":
        for card in view.cards:
            output_event_card(card, file=file)
    else:
        output_human_table(
            ["Index", *view.table.columns],
            [[row.index, *row.cells] for row in view.table.rows],
            file=file,
            empty_message=NO_RESULTS,
        )

    file.flush()


def _format_dict(data: dict[str, Any], file: Any, indent: int = 0) -> None:
    """Format a dictionary for human-readable output."""
    prefix = "  " * indent
    for key, value in data.items():
        if isinstance(value, dict):
            file.write(f"{prefix}{key}:\n")
            _format_dict(value, file, indent + 1)
        elif isinstance(value, list):
            file.write(f"{prefix}{key}:\n")
            _format_list(value, file, indent + 1)
        else:
            file.write(f"{prefix}{key}: {value}\n")


def _format_list(data: list[Any], file: Any, indent: int = 0) -> None:
    """Format a list for human-readable output."""
    prefix = "  " * indent
    for i, item in enumerate(data):
        if isinstance(item, dict):
            file.write(f"{prefix}[{i}]:\n")
            _format_dict(item, file, indent + 1)
        else:
            file.write(f"{prefix}- {item}\n")


def output(data: Any, format: OutputFormat | None = None, **kwargs: Any) -> None:
    """Output data in the specified format.

    Args:
        data: Data to output
        format: Output format (uses global if not specified)
        **kwargs: Additional arguments passed to format-specific function
    """
    if format is None:
        format = _output_format

    if format == "jsonl":
        if not hasattr(data, "__iter__") or isinstance(data, (dict, str, BaseModel)):
            output_json(data, **kwargs)
        else:
            output_jsonl(iter(data), **kwargs)
    elif format == "human":
        output_human(data, **kwargs)
    else:
        output_json(data, **kwargs)


def output_error(error: Any, file: Any = None) -> None:
    """Output an error to stdout in the current format.

    Errors are output to stdout (not stderr) for programmatic handling.
    """
    output(error, file=file)


class OutputFormatter:
    """Encapsulates output formatting for commands."""

    def __init__(self, format: OutputFormat = "json"):
        self.format = format

    def output(self, data: Any) -> None:
        """Output data in the configured format."""
        output(data, format=self.format)

    def results(self, view: Any) -> None:
        """Output a results view.

        JSON carries the whole view plus its summary line; JSONL streams
        one line per card or table row; human draws cards or a table.
        """
        if view is None:
            return

        if self.format == "human":
            output_results_view(view)
        elif self.format == "jsonl":
            if view.mode == "security_events":
                output_jsonl(iter(view.cards))
            else:
                columns = view.table.columns
                output_jsonl(
                    {"index": row.index, "row": dict(zip(columns, row.cells))} for row in view.table.rows
                )
        else:
            payload = view.model_dump(mode="json", exclude_none=True)
            payload["summary"] = view.summary
            output_json(payload)

    def error(self, error: Any) -> None:
        """Output error in the configured format."""
        output_error(error)

    def is_human(self) -> bool:
        """Check if output format is human-readable."""
        return self.format == "human"
