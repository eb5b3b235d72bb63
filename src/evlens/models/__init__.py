"""Pydantic models for evlens."""

from evlens.models.error import ErrorCode, StructuredError
from evlens.models.event import (
    AliasGroup,
    CatalogEntry,
    ExtraField,
    FieldValue,
    NormalizedView,
    ResultEntry,
    Row,
    Severity,
)

__all__ = [
    "StructuredError",
    "ErrorCode",
    "AliasGroup",
    "CatalogEntry",
    "ExtraField",
    "FieldValue",
    "NormalizedView",
    "ResultEntry",
    "Row",
    "Severity",
]
