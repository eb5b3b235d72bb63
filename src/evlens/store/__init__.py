"""Tabular stores that feed search results into the view."""

from evlens.store.csv_store import IndexStore, SearchSource, parse_query

__all__ = ["IndexStore", "SearchSource", "parse_query"]
