"""High-value Windows Security event catalog.

Only events listed here are shown when every result comes from the
security events index; everything else is counted as hidden noise.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from evlens.core.errors import CatalogNotFoundError, CatalogValidationError
from evlens.models.event import CatalogEntry

BUILTIN_EVENTS: Mapping[str, CatalogEntry] = MappingProxyType({
    # Authentication
    "4624": CatalogEntry(label="Successful Logon", category="Authentication", severity="info"),
    "4625": CatalogEntry(label="Failed Logon", category="Authentication", severity="warn"),
    "4648": CatalogEntry(label="Logon Using Explicit Credentials", category="Authentication", severity="warn"),
    "4771": CatalogEntry(label="Kerberos Pre-Auth Failed", category="Authentication", severity="warn"),
    "4776": CatalogEntry(label="NTLM Credential Validation", category="Authentication", severity="info"),

    # Privilege Escalation
    "4672": CatalogEntry(
        label="Special Privileges Assigned to Logon", category="Privilege Escalation", severity="warn"
    ),

    # Account Management
    "4720": CatalogEntry(label="User Account Created", category="Account Management", severity="warn"),
    "4724": CatalogEntry(label="Password Reset Attempt", category="Account Management", severity="warn"),
    "4726": CatalogEntry(label="User Account Deleted", category="Account Management", severity="warn"),
    "4728": CatalogEntry(
        label="Member Added to Security-Enabled Global Group", category="Account Management", severity="warn"
    ),
    "4732": CatalogEntry(
        label="Member Added to Security-Enabled Local Group", category="Account Management", severity="warn"
    ),
    "4740": CatalogEntry(label="Account Locked Out", category="Account Management", severity="critical"),
    "4756": CatalogEntry(
        label="Member Added to Universal Security Group", category="Account Management", severity="warn"
    ),

    # Persistence & Execution
    "4688": CatalogEntry(label="New Process Created", category="Execution", severity="info"),
    "4697": CatalogEntry(label="Service Installed on System", category="Persistence", severity="warn"),
    "7045": CatalogEntry(label="New Service Installed", category="Persistence", severity="warn"),
    "4698": CatalogEntry(label="Scheduled Task Created", category="Persistence", severity="warn"),

    # Lateral Movement
    "4768": CatalogEntry(label="Kerberos TGT Requested", category="Lateral Movement", severity="info"),
    "4769": CatalogEntry(label="Kerberos Service Ticket Requested", category="Lateral Movement", severity="info"),
    "5140": CatalogEntry(label="Network Share Object Accessed", category="Lateral Movement", severity="info"),
    "5145": CatalogEntry(label="Network Share Object Checked", category="Lateral Movement", severity="info"),

    # Defense Evasion
    "1102": CatalogEntry(label="Audit Log Was Cleared", category="Defense Evasion", severity="critical"),
    "4719": CatalogEntry(label="System Audit Policy Changed", category="Defense Evasion", severity="critical"),
})


class EventCatalog(Mapping[str, CatalogEntry]):
    """Immutable event identifier to CatalogEntry lookup."""

    def __init__(self, entries: Mapping[str, CatalogEntry] | None = None) -> None:
        self._entries: Mapping[str, CatalogEntry] = MappingProxyType(
            dict(BUILTIN_EVENTS if entries is None else entries)
        )

    def __getitem__(self, event_id: str) -> CatalogEntry:
        return self._entries[event_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EventCatalog({len(self)} events)"

    def lookup(self, event_id: str) -> CatalogEntry | None:
        """Return the entry for an identifier, ignoring surrounding whitespace."""
        if not event_id:
            return None
        return self._entries.get(event_id.strip())

    def categories(self) -> list[str]:
        """Categories in first-seen order."""
        seen: list[str] = []
        for entry in self._entries.values():
            if entry.category not in seen:
                seen.append(entry.category)
        return seen

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {event_id: entry.model_dump(mode="json") for event_id, entry in self._entries.items()}


_DEFAULT_CATALOG = EventCatalog()


def default_catalog() -> EventCatalog:
    """Return the built-in catalog."""
    return _DEFAULT_CATALOG


def load_catalog(path: Path, inherit_builtin: bool | None = None) -> EventCatalog:
    """Load an event catalog from a YAML file.

    The file holds an ``events`` mapping of identifier to
    ``{label, category, severity}`` and may set ``inherit_builtin: true``
    to layer its entries over the built-in catalog.

    Args:
        path: Catalog file
        inherit_builtin: Overrides the file's ``inherit_builtin`` flag

    Returns:
        EventCatalog built from the file

    Raises:
        CatalogNotFoundError: If the file does not exist
        CatalogValidationError: If the file is not a valid catalog
    """
    if not path.exists():
        raise CatalogNotFoundError(str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise CatalogValidationError(str(path), [f"Invalid YAML: {e}"])
    except OSError as e:
        raise CatalogValidationError(str(path), [f"Cannot read file: {e}"])

    if not isinstance(data, dict) or not isinstance(data.get("events", {}), dict):
        raise CatalogValidationError(str(path), ["Catalog must be a mapping with an 'events' mapping"])

    if inherit_builtin is None:
        inherit_builtin = bool(data.get("inherit_builtin", False))

    entries: dict[str, CatalogEntry] = dict(BUILTIN_EVENTS) if inherit_builtin else {}
    errors: list[str] = []

    for raw_id, raw_entry in (data.get("events") or {}).items():
        # YAML reads bare identifiers such as 4625 as integers
        event_id = str(raw_id).strip()
        try:
            entries[event_id] = CatalogEntry.model_validate(raw_entry)
        except PydanticValidationError as e:
            for err in e.errors():
                loc = ".".join(str(p) for p in err["loc"])
                errors.append(f"{event_id}.{loc}: {err['msg']}" if loc else f"{event_id}: {err['msg']}")

    if errors:
        raise CatalogValidationError(str(path), errors)

    return EventCatalog(entries)


def catalog_for_path(path: Path | None) -> EventCatalog:
    """Catalog from a YAML file, or the built-in one when path is None."""
    if path is None:
        return default_catalog()
    return load_catalog(path)
