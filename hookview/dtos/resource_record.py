"""Data transfer objects describing lookup queries and the records they return."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


MISSING_DATE = "missing date"
MISSING_CHECKSUM = "missing checksum"


@dataclass(frozen=True)
class ResourceQuery:
    """Represent a (resource type, resource id) pair submitted by the operator."""

    resourceType: str
    resourceId: str

    @classmethod
    def build(cls, resource_type: str, resource_id: str) -> "ResourceQuery":
        """Create a query trimming the surrounding whitespace of both fields."""

        return cls((resource_type or "").strip(), (resource_id or "").strip())

    def is_valid(self) -> bool:
        """Return ``True`` when the identifier is not empty."""

        return bool(self.resourceId)

    @property
    def path(self) -> str:
        """Return the ``type/id`` form used in messages and logs."""

        return f"{self.resourceType}/{self.resourceId}"


@dataclass(frozen=True)
class ResourceRecord:
    """Represent a single stored snapshot of a tracked resource."""

    recordKey: str
    fetchDate: str = MISSING_DATE
    hookDate: str = MISSING_DATE
    checksum: str = MISSING_CHECKSUM
    payload: Any = field(default_factory=dict)

    @classmethod
    def from_payload(cls, record_key: str, data: Mapping[str, Any]) -> "ResourceRecord":
        """Build a record from the JSON object returned by the lookup endpoint."""

        return cls(
            recordKey=record_key,
            fetchDate=str(data.get("fetchdate") or MISSING_DATE),
            hookDate=str(data.get("hookdate") or MISSING_DATE),
            checksum=str(data.get("sha1") or MISSING_CHECKSUM),
            payload=data.get("resource", {}),
        )

    @property
    def orderingKey(self) -> str:
        """Return the value used to sort records newest-first."""

        return self.fetchDate
