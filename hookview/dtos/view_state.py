"""Data transfer objects exchanged between the controllers and the views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from hookview.dtos.history_entry import HistoryEntry
from hookview.dtos.resource_record import ResourceQuery, ResourceRecord


class QueryState(str, Enum):
    """Enumerate the phases of a lookup cycle."""

    IDLE = "idle"
    FETCHING = "fetching"
    POPULATED = "populated"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class RecordsReset:
    """Event emitted when the record store replaces its result set."""

    query: ResourceQuery
    records: Tuple[ResourceRecord, ...]


@dataclass(frozen=True)
class HistoryEntryAdded:
    """Event emitted when a new entry lands at the head of the history."""

    entry: HistoryEntry
    index: int
    entries: Tuple[HistoryEntry, ...]


@dataclass(frozen=True)
class SelectorOption:
    """Single option of the result selector."""

    key: Optional[str]
    label: str


@dataclass(frozen=True)
class SelectorState:
    """Projection of the record store into selectable options."""

    options: List[SelectorOption] = field(default_factory=list)
    selectedKey: Optional[str] = None
    placeholder: Optional[str] = None

    @property
    def isEmpty(self) -> bool:
        return self.placeholder is not None


@dataclass(frozen=True)
class DetailState:
    """Values rendered in the detail panel for the selected record."""

    recordKey: str
    fetchDate: str
    hookDate: str
    checksum: str
    payloadText: str


@dataclass(frozen=True)
class QuerySnapshot:
    """Complete controller state handed to subscribed views."""

    state: QueryState
    formQuery: Optional[ResourceQuery]
    selector: SelectorState
    detail: Optional[DetailState]
    message: Optional[str] = None

    @property
    def detailVisible(self) -> bool:
        return self.detail is not None
