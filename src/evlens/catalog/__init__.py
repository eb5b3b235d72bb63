"""Static event classification catalogs."""

from evlens.catalog.security import (
    BUILTIN_EVENTS,
    EventCatalog,
    catalog_for_path,
    default_catalog,
    load_catalog,
)

__all__ = [
    "BUILTIN_EVENTS",
    "EventCatalog",
    "catalog_for_path",
    "default_catalog",
    "load_catalog",
]
