"""Data transfer objects shared by the hook resource viewer."""

from hookview.dtos.history_entry import HistoryEntry
from hookview.dtos.resource_record import ResourceQuery, ResourceRecord
from hookview.dtos.view_state import (
    DetailState,
    HistoryEntryAdded,
    QuerySnapshot,
    QueryState,
    RecordsReset,
    SelectorOption,
    SelectorState,
)

__all__ = [
    "DetailState",
    "HistoryEntry",
    "HistoryEntryAdded",
    "QuerySnapshot",
    "QueryState",
    "RecordsReset",
    "ResourceQuery",
    "ResourceRecord",
    "SelectorOption",
    "SelectorState",
]
