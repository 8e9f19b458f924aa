"""In-memory, deduplicated history of submitted queries."""

from __future__ import annotations

from typing import Callable, List, Tuple

from hookview.dtos.history_entry import HistoryEntry
from hookview.dtos.view_state import HistoryEntryAdded


HistoryListener = Callable[[HistoryEntryAdded], None]


class HistoryStore:
    """Keep one entry per (type, id) pair, most recent first.

    Entries are never removed during the session.
    """

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []
        self._listeners: List[HistoryListener] = []

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def contains(self, resource_type: str, resource_id: str) -> bool:
        """Return ``True`` when the pair is already stored anywhere in the list."""

        return any(entry.matches(resource_type, resource_id) for entry in self._entries)

    def record(self, resource_type: str, resource_id: str, label: str) -> bool:
        """Insert a new entry at the head unless the pair already exists.

        Returns:
            ``True`` when the entry was inserted, ``False`` for duplicates.
        """

        if self.contains(resource_type, resource_id):
            return False
        entry = HistoryEntry(label=label, resourceId=resource_id, resourceType=resource_type)
        self._entries.insert(0, entry)
        event = HistoryEntryAdded(entry=entry, index=0, entries=self.entries)
        for listener in list(self._listeners):
            listener(event)
        return True

    def recall(self, index: int) -> Tuple[str, str]:
        """Return the ``(type, id)`` stored at ``index``.

        Raises:
            IndexError: when ``index`` does not point to a stored entry.
        """

        if index < 0 or index >= len(self._entries):
            raise IndexError(f"history index out of range: {index}")
        entry = self._entries[index]
        return entry.resourceType, entry.resourceId

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register ``listener`` for insertions and return its unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
