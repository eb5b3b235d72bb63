"""CSV-backed index store.

Each CSV file becomes (or extends) a named index of flat string rows.
Searching returns every matching row tagged with its index, in index
insertion order and then row order.
"""

import csv
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

from evlens.core.errors import IndexFileError
from evlens.core.logging import ProgressReporter, debug, warning
from evlens.models.event import ResultEntry, Row


class SearchSource(Protocol):
    """What the results view needs from a tabular store."""

    @property
    def indexes(self) -> Mapping[str, list[Row]]: ...

    def get_search_results(self) -> list[ResultEntry]: ...


def _matches(index: str, row: Row, terms: list[tuple[str | None, str]]) -> bool:
    """Check a row against parsed query terms (all must match)."""
    for key, value in terms:
        if key is None:
            if not any(value in (cell or "").lower() for cell in row.values()):
                return False
        elif key == "index":
            if index.lower() != value:
                return False
        else:
            cells = [cell for col, cell in row.items() if col.lower() == key]
            if not any((cell or "").strip().lower() == value for cell in cells):
                return False
    return True


def parse_query(query: str) -> list[tuple[str | None, str]]:
    """Split a query into (column or None, lower-cased value) terms.

    ``index=Name`` and ``Column=value`` restrict by index or column;
    bare words match any cell as a substring.
    """
    terms: list[tuple[str | None, str]] = []
    for token in query.split():
        key, sep, value = token.partition("=")
        if sep and key:
            terms.append((key.lower(), value.lower()))
        else:
            terms.append((None, token.lower()))
    return terms


class IndexStore:
    """In-memory indexes loaded from CSV files."""

    def __init__(self) -> None:
        self._indexes: dict[str, list[Row]] = {}
        self.search_query = ""

    @property
    def indexes(self) -> Mapping[str, list[Row]]:
        return self._indexes

    def add_index(self, name: str, rows: Iterable[Mapping[str, str]]) -> int:
        """Append rows to an index, creating it if needed.

        Returns:
            Number of rows added
        """
        bucket = self._indexes.setdefault(name, [])
        before = len(bucket)
        for row in rows:
            bucket.append({str(k): "" if v is None else str(v) for k, v in row.items()})
        return len(bucket) - before

    def load_csv(self, path: Path, index_name: str | None = None) -> int:
        """Load a CSV file into an index named after the file stem.

        Args:
            path: CSV file with a header row
            index_name: Index to load into (defaults to the file stem)

        Returns:
            Number of rows loaded

        Raises:
            IndexFileError: If the file cannot be read or parsed
        """
        name = index_name or path.stem
        if not path.is_file():
            raise IndexFileError(f"Index file not found: {path}", path=str(path))

        progress = ProgressReporter(description=f"Loading {name}")
        try:
            with open(path, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f)
                if not reader.fieldnames:
                    raise IndexFileError(f"CSV file has no header row: {path}", path=str(path))
                rows = []
                spilled = 0
                for row in reader:
                    # Short rows leave None cells, long rows put spill-over under None
                    if None in row:
                        spilled += 1
                    rows.append({k: v for k, v in row.items() if k is not None})
                    progress.update()
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise IndexFileError(f"Cannot read {path}: {e}", path=str(path))
        progress.finish()

        if spilled:
            warning(f"Dropped extra cells from {spilled} rows wider than the header", path=str(path))

        count = self.add_index(name, rows)
        debug(f"Loaded {count} rows into index {name}", path=str(path), index=name)
        return count

    def set_query(self, query: str) -> None:
        self.search_query = query or ""

    def get_search_results(self) -> list[ResultEntry]:
        """Rows matching the current query, tagged with their index."""
        terms = parse_query(self.search_query)
        results = []
        for index, rows in self._indexes.items():
            for row in rows:
                if _matches(index, row, terms):
                    results.append(ResultEntry(index=index, row=row))
        return results
