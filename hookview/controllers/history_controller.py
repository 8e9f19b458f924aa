"""Controller responsible for exposing the query history to the views."""

from __future__ import annotations

from typing import Callable, List

from hookview.dtos.history_entry import HistoryEntry
from hookview.dtos.view_state import HistoryEntryAdded
from hookview.services.history_service import HistoryService


class HistoryController:
    """Coordinate read access and change notifications of the history store."""

    def __init__(self, history_service: HistoryService) -> None:
        """Initialize the controller with the history service dependency."""

        self._history_service = history_service

    def load_history(self) -> List[HistoryEntry]:
        """Return the entries newest first."""

        return self._history_service.load_history()

    def subscribe(self, listener: Callable[[HistoryEntryAdded], None]) -> Callable[[], None]:
        """Notify ``listener`` every time an entry is inserted."""

        return self._history_service.store.subscribe(listener)
