"""Eligibility classifier for the security event view.

The specialized view applies only when every result comes from the
security events index. In that view, rows whose event identifier is not
in the catalog are hidden as low-value noise; rows without any
identifier are kept.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from evlens.catalog.security import EventCatalog, default_catalog
from evlens.core.config import DEFAULT_SPECIALIZED_INDEX
from evlens.models.event import ResultEntry
from evlens.normalizer.aliases import resolve_event_id


def is_specialized_view(
    results: Sequence[ResultEntry],
    index_name: str = DEFAULT_SPECIALIZED_INDEX,
) -> bool:
    """Check whether a result set qualifies for the specialized view.

    An empty result set never qualifies; it falls back to the generic
    table and its "no results" row.
    """
    return len(results) > 0 and all(entry.index == index_name for entry in results)


def is_high_value(entry: ResultEntry, catalog: EventCatalog) -> bool:
    """Whether a row is kept by the high-value filter."""
    event_id = resolve_event_id(entry.row)
    if not event_id:
        return True
    return event_id in catalog


def filter_high_value(
    results: Sequence[ResultEntry],
    catalog: EventCatalog | None = None,
    index_name: str = DEFAULT_SPECIALIZED_INDEX,
) -> tuple[list[ResultEntry], int]:
    """Drop rows whose event identifier is not catalogued.

    Applies to the whole result set, before any pagination.

    Args:
        results: Full result set, in search order
        catalog: Event catalog (the built-in one by default)
        index_name: Index that enables the specialized view

    Returns:
        (kept entries in input order, number of hidden entries)
    """
    if not is_specialized_view(results, index_name):
        return list(results), 0

    if catalog is None:
        catalog = default_catalog()

    kept = [entry for entry in results if is_high_value(entry, catalog)]
    return kept, len(results) - len(kept)


@dataclass(frozen=True)
class EligibilityClassifier:
    """Eligibility decisions bound to one catalog and index name."""

    catalog: EventCatalog
    index_name: str = DEFAULT_SPECIALIZED_INDEX

    def is_specialized_view(self, results: Sequence[ResultEntry]) -> bool:
        return is_specialized_view(results, self.index_name)

    def filter_high_value(self, results: Sequence[ResultEntry]) -> tuple[list[ResultEntry], int]:
        return filter_high_value(results, self.catalog, self.index_name)
