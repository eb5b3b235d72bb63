"""Results view assembly.

Turns the current search results into either security event cards or a
generic table, with the summary line and page navigation state. The
high-value filter runs over the full result set before pagination.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from evlens.catalog.security import EventCatalog, default_catalog
from evlens.core.config import ViewSettings
from evlens.core.pagination import PageWindow
from evlens.models.event import NormalizedView, ResultEntry
from evlens.normalizer.eligibility import EligibilityClassifier
from evlens.normalizer.record import RecordNormalizer
from evlens.store.csv_store import SearchSource

NO_RESULTS = "No results found"


class SecurityEventCard(BaseModel):
    """One security event as displayed in the specialized view."""

    index: str
    view: NormalizedView

    model_config = {"frozen": True}


class TableRow(BaseModel):
    """One generic table row: source index plus a cell per column."""

    index: str
    cells: list[str] = Field(default_factory=list)


class ResultsTable(BaseModel):
    """Generic tabular rendering of mixed-index results."""

    columns: list[str] = Field(default_factory=list)
    rows: list[TableRow] = Field(default_factory=list)


class ResultsView(BaseModel):
    """Everything needed to draw one page of results."""

    mode: Literal["security_events", "table"]
    displayed_count: int = Field(..., ge=0, description="Results after the high-value filter")
    hidden_count: int = Field(default=0, ge=0, description="Low-value events hidden by the filter")
    index_count: int = Field(..., ge=0, description="Distinct indexes in the unfiltered results")
    page: dict[str, Any]
    cards: list[SecurityEventCard] = Field(default_factory=list)
    table: ResultsTable | None = None

    @property
    def summary(self) -> str:
        """Stats line, e.g. '12 high-value events from 1 index (40 low-value events hidden)'."""
        noun = "high-value events" if self.mode == "security_events" else "results"
        index_noun = "index" if self.index_count == 1 else "indexes"
        text = f"{self.displayed_count:,} {noun} from {self.index_count} {index_noun}"
        if self.hidden_count > 0:
            text += f" ({self.hidden_count} low-value events hidden)"
        return text

    @property
    def is_empty_page(self) -> bool:
        if self.mode == "security_events":
            return not self.cards
        return self.table is None or not self.table.rows


def collect_columns(results: list[ResultEntry]) -> list[str]:
    """Union of row keys in first-seen order."""
    columns: dict[str, None] = {}
    for entry in results:
        for key in entry.row:
            columns.setdefault(key, None)
    return list(columns)


def build_results_view(
    source: SearchSource,
    page: int = 1,
    page_size: int | None = None,
    catalog: EventCatalog | None = None,
    settings: ViewSettings | None = None,
) -> ResultsView | None:
    """Build the view for one page of the current search.

    Args:
        source: Store providing indexes and search results
        page: 1-based page number
        page_size: Results per page (settings value when None)
        catalog: Event catalog (built-in when None)
        settings: View settings (defaults when None)

    Returns:
        ResultsView, or None when the store has no indexes at all

    Raises:
        ValidationError: If page or page_size is below 1
    """
    settings = settings or ViewSettings()
    catalog = catalog if catalog is not None else default_catalog()
    page_size = page_size if page_size is not None else settings.page_size

    if not source.indexes:
        return None

    results = source.get_search_results()
    classifier = EligibilityClassifier(catalog=catalog, index_name=settings.specialized_index)
    specialized = classifier.is_specialized_view(results)
    displayed, hidden_count = classifier.filter_high_value(results)

    window = PageWindow.compute(len(displayed), page, page_size)
    paged = window.slice(displayed)
    index_count = len({entry.index for entry in results})

    if specialized:
        normalizer = RecordNormalizer(
            catalog=catalog,
            value_cap=settings.value_cap,
            extras_cap=settings.extras_cap,
            used_field_tracking=settings.used_field_tracking,
        )
        return ResultsView(
            mode="security_events",
            displayed_count=len(displayed),
            hidden_count=hidden_count,
            index_count=index_count,
            page=window.to_dict(),
            cards=[SecurityEventCard(index=entry.index, view=normalizer.normalize(entry.row)) for entry in paged],
        )

    columns = collect_columns(results)
    rows = [TableRow(index=entry.index, cells=[entry.row.get(col, "") for col in columns]) for entry in paged]
    return ResultsView(
        mode="table",
        displayed_count=len(displayed),
        hidden_count=0,
        index_count=index_count,
        page=window.to_dict(),
        table=ResultsTable(columns=columns, rows=rows),
    )
