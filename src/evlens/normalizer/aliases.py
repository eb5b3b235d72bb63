"""Canonical field alias groups and case-insensitive field resolution.

Imported security event exports name the same column many ways
(``EventID``, ``EventId``, ``Event ID``...). Each canonical field lists
its acceptable column names in priority order; the first one present
with a non-blank value wins.
"""

from collections.abc import Mapping

from evlens.models.event import AliasGroup

EVENT_ID = AliasGroup(label="Event ID", aliases=("EventId", "EventID", "Event ID", "Id", "ID"))

DESCRIPTION_LABEL = "Description"

# Resolved in this order after Event ID and Description
CANONICAL_FIELDS: tuple[AliasGroup, ...] = (
    AliasGroup(label="Time", aliases=("TimeCreated", "Time", "Timestamp", "Date", "DateTime", "EventTime")),
    AliasGroup(label="Computer", aliases=("Computer", "ComputerName", "MachineName", "Host")),
    AliasGroup(label="Subject Account", aliases=("SubjectUserName", "SubjectAccount")),
    AliasGroup(label="Subject Domain", aliases=("SubjectDomainName", "SubjectDomain")),
    AliasGroup(label="Account", aliases=("TargetUserName", "AccountName", "Account", "UserName", "User")),
    AliasGroup(label="Target Domain", aliases=("TargetDomainName", "TargetDomain")),
    AliasGroup(label="Logon Type", aliases=("LogonType", "Logon Type")),
    AliasGroup(label="Logon ID", aliases=("SubjectLogonId", "TargetLogonId", "LogonId")),
    AliasGroup(label="Source IP", aliases=("IpAddress", "SourceAddress", "SourceIP", "ClientAddress")),
    AliasGroup(label="Source Port", aliases=("IpPort", "SourcePort")),
    AliasGroup(label="Workstation", aliases=("WorkstationName", "Workstation")),
    AliasGroup(label="Process", aliases=("ProcessName", "NewProcessName", "Process", "Image")),
    AliasGroup(label="Process ID", aliases=("ProcessId", "NewProcessId")),
    AliasGroup(label="Parent Process", aliases=("ParentProcessName", "ParentImage")),
    AliasGroup(label="Service Name", aliases=("ServiceName", "Service")),
    AliasGroup(label="Task Name", aliases=("TaskName",)),
    AliasGroup(label="Status", aliases=("Status",)),
    AliasGroup(label="Failure Reason", aliases=("FailureReason", "SubStatus")),
    AliasGroup(label="Logon Process", aliases=("LogonProcessName", "LogonProcess")),
    AliasGroup(label="Auth Package", aliases=("AuthenticationPackageName", "AuthPackage")),
    AliasGroup(label="Share Name", aliases=("ShareName",)),
    AliasGroup(label="Share Path", aliases=("ShareLocalPath", "RelativeTargetName")),
)


def clean_value(value: object) -> str:
    """Trimmed string form of a cell, empty for None."""
    if value is None:
        return ""
    return str(value).strip()


class FieldResolver:
    """Resolves alias groups against one row.

    The row keys are lower-cased once; each alias lookup is then a dict
    hit. Keys that differ only by case keep their row order, so alias
    priority decides first and row order breaks the remaining tie.
    """

    def __init__(self, row: Mapping[str, str]) -> None:
        self.row = row
        self._by_lower: dict[str, list[str]] = {}
        for key in row:
            self._by_lower.setdefault(str(key).lower(), []).append(key)

    def resolve(self, group: AliasGroup) -> tuple[str, str] | None:
        """Find the winning column for an alias group.

        Returns:
            (row key, trimmed value), or None when no alias has a value
        """
        for alias in group.aliases:
            for key in self._by_lower.get(alias.lower(), ()):
                value = clean_value(self.row.get(key))
                if value:
                    return key, value
        return None

    def value(self, group: AliasGroup) -> str:
        """Resolved value for an alias group, empty when unresolved."""
        match = self.resolve(group)
        return match[1] if match else ""


def resolve_event_id(row: Mapping[str, str]) -> str:
    """Resolve a row's event identifier, empty when it has none."""
    return FieldResolver(row).value(EVENT_ID)
