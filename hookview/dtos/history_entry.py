"""Data Transfer Objects used by the query history."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryEntry:
    """Represent a previously submitted query kept for quick recall."""

    label: str
    resourceId: str
    resourceType: str

    def matches(self, resource_type: str, resource_id: str) -> bool:
        """Return ``True`` when the entry refers to the same (type, id) pair."""

        return self.resourceType == resource_type and self.resourceId == resource_id
