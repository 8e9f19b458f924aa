"""Business logic to manage the query history shown in the desktop UI."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from hookview.daos.history_store import HistoryStore
from hookview.dtos.history_entry import HistoryEntry
from hookview.dtos.resource_record import ResourceQuery


logger = logging.getLogger(__name__)


class HistoryService:
    """Derive history labels and register successful queries."""

    def __init__(self, store: HistoryStore, resource_types: Optional[Iterable[Tuple[str, str]]] = None) -> None:
        """Create the service with its store and the type display names."""
        self.store = store
        self._display_names: Dict[str, str] = dict(resource_types or ())

    def build_label(self, query: ResourceQuery) -> str:
        """Return the ``"Type: id"`` label used in the history list."""
        display = self._display_names.get(query.resourceType) or query.resourceType.capitalize()
        return f"{display}: {query.resourceId}"

    def register_query(self, query: ResourceQuery) -> bool:
        """Store ``query`` at the head of the history unless it is already known."""
        inserted = self.store.record(query.resourceType, query.resourceId, self.build_label(query))
        if inserted:
            logger.info("Consulta %s agregada al historial", query.path)
        else:
            logger.debug("Consulta %s ya existe en el historial", query.path)
        return inserted

    def load_history(self) -> List[HistoryEntry]:
        """Return the history entries as a list for the view layer."""
        return list(self.store.entries)

    def recall(self, index: int) -> ResourceQuery:
        """Return the query stored at ``index`` ready to be submitted again."""
        resource_type, resource_id = self.store.recall(index)
        return ResourceQuery(resource_type, resource_id)
