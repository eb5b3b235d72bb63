"""Event, catalog and view models for evlens."""

from typing import Literal

from pydantic import BaseModel, Field

Severity = Literal["info", "warn", "critical"]

Row = dict[str, str]


class ResultEntry(BaseModel):
    """One search hit: a row tagged with the index it came from."""

    index: str = Field(
        ...,
        description="Source index name",
    )

    row: dict[str, str] = Field(
        default_factory=dict,
        description="Column name to string value",
    )

    model_config = {"extra": "forbid", "frozen": True}


class CatalogEntry(BaseModel):
    """Classification of a well-known event identifier."""

    label: str = Field(
        ...,
        min_length=1,
        description="Human label (e.g., Failed Logon)",
    )

    category: str = Field(
        ...,
        min_length=1,
        description="Forensic category (e.g., Authentication)",
    )

    severity: Severity = Field(
        default="info",
        description="Severity of the event",
    )

    model_config = {"extra": "forbid", "frozen": True}


class AliasGroup(BaseModel):
    """Ordered candidate column names for one canonical field."""

    label: str = Field(
        ...,
        description="Display label of the canonical field",
    )

    aliases: tuple[str, ...] = Field(
        ...,
        description="Candidate column names in priority order (case-insensitive)",
    )

    model_config = {"extra": "forbid", "frozen": True}


class FieldValue(BaseModel):
    """A resolved canonical field."""

    label: str
    value: str

    model_config = {"frozen": True}


class ExtraField(BaseModel):
    """A residual row field not consumed by any canonical field."""

    key: str
    value: str

    model_config = {"frozen": True}


class NormalizedView(BaseModel):
    """Per-row view model derived from a row and the event catalog.

    Never persisted; recomputed on every render pass.
    """

    event_id: str = Field(
        default="",
        description="Resolved event identifier (empty when none found)",
    )

    label: str = Field(
        ...,
        description="Catalog label or 'Unknown Event'",
    )

    category: str | None = Field(
        default=None,
        description="Catalog category, if the event is catalogued",
    )

    severity: Severity = Field(
        default="info",
        description="Catalog severity, info when not catalogued",
    )

    canonical_fields: list[FieldValue] = Field(
        default_factory=list,
        description="Resolved canonical fields in fixed order, empty ones omitted",
    )

    extra_fields: list[ExtraField] = Field(
        default_factory=list,
        description="Visible residual fields in row order, values truncated",
    )

    extra_overflow: int = Field(
        default=0,
        ge=0,
        description="Residual fields beyond the visible cap",
    )

    model_config = {"extra": "forbid", "frozen": True}

    def field(self, label: str) -> str | None:
        """Return the value of a canonical field by label."""
        for item in self.canonical_fields:
            if item.label == label:
                return item.value
        return None
