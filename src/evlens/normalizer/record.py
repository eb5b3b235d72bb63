"""Record normalizer for security event rows.

Projects a row with arbitrary column names onto the canonical forensic
fields, classifies it through the event catalog and keeps whatever is
left over as truncated extra fields.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from evlens.catalog.security import EventCatalog, default_catalog
from evlens.core.config import UsedFieldTracking
from evlens.models.event import ExtraField, FieldValue, NormalizedView, Severity
from evlens.normalizer.aliases import (
    CANONICAL_FIELDS,
    DESCRIPTION_LABEL,
    EVENT_ID,
    FieldResolver,
    clean_value,
)

UNKNOWN_EVENT = "Unknown Event"
ELLIPSIS = "…"

SEVERITY_MARKERS: dict[Severity, str] = {
    "info": "[i]",
    "warn": "[!]",
    "critical": "[!!]",
}


def truncate(value: str, cap: int) -> str:
    """Cut a value to cap characters, marking the cut with an ellipsis."""
    if len(value) > cap:
        return value[:cap] + ELLIPSIS
    return value


@dataclass(frozen=True)
class RecordNormalizer:
    """Builds NormalizedView objects for security event rows.

    Holds no state besides its configuration, so one instance can be
    shared across render passes.
    """

    catalog: EventCatalog
    value_cap: int = 50
    extras_cap: int = 6
    used_field_tracking: UsedFieldTracking = "key"

    def normalize(self, row: Mapping[str, str]) -> NormalizedView:
        """Normalize one row.

        Args:
            row: Column name to string value

        Returns:
            NormalizedView for the row
        """
        resolver = FieldResolver(row)
        used_keys: set[str] = set()

        event_match = resolver.resolve(EVENT_ID)
        event_id = ""
        if event_match:
            used_keys.add(event_match[0])
            event_id = event_match[1]

        meta = self.catalog.lookup(event_id)
        label = meta.label if meta else UNKNOWN_EVENT
        severity: Severity = meta.severity if meta else "info"

        fields: list[FieldValue] = []
        if event_id:
            fields.append(FieldValue(label=EVENT_ID.label, value=event_id))
        fields.append(FieldValue(label=DESCRIPTION_LABEL, value=label))

        for group in CANONICAL_FIELDS:
            match = resolver.resolve(group)
            if match is None:
                continue
            key, value = match
            used_keys.add(key)
            fields.append(FieldValue(label=group.label, value=value))

        if self.used_field_tracking == "value":
            used_keys = self._keys_matching_values(row, {f.value for f in fields})

        extras = [
            (key, value)
            for key, value in ((k, clean_value(v)) for k, v in row.items())
            if key not in used_keys and value
        ]
        visible = extras[: self.extras_cap]

        return NormalizedView(
            event_id=event_id,
            label=label,
            category=meta.category if meta else None,
            severity=severity,
            canonical_fields=fields,
            extra_fields=[
                ExtraField(key=str(key), value=truncate(value, self.value_cap)) for key, value in visible
            ],
            extra_overflow=len(extras) - len(visible),
        )

    @staticmethod
    def _keys_matching_values(row: Mapping[str, str], shown: set[str]) -> set[str]:
        """Keys whose trimmed value equals any shown canonical value."""
        return {key for key, value in row.items() if clean_value(value) in shown}


def normalize(
    row: Mapping[str, str],
    catalog: EventCatalog | None = None,
    value_cap: int = 50,
    extras_cap: int = 6,
    used_field_tracking: UsedFieldTracking = "key",
) -> NormalizedView:
    """Normalize a row against a catalog (the built-in one by default)."""
    normalizer = RecordNormalizer(
        catalog=catalog if catalog is not None else default_catalog(),
        value_cap=value_cap,
        extras_cap=extras_cap,
        used_field_tracking=used_field_tracking,
    )
    return normalizer.normalize(row)
