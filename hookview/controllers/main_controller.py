"""Controller coordinating the desktop view with domain services."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from hookview.config.lookup_config import LookupConfiguration
from hookview.controllers.history_controller import HistoryController
from hookview.controllers.query_controller import QueryController, TaskDispatcher
from hookview.daos.history_store import HistoryStore
from hookview.daos.record_store import RecordStore
from hookview.services.history_service import HistoryService
from hookview.services.lookup_client import ResourceLookupClient


class MainController:
    """Aggregate the stores and controllers required by the desktop GUI.

    Both stores live as long as this controller; nothing is shared through
    module level state.
    """

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        configuration: Optional[LookupConfiguration] = None,
        client: Optional[ResourceLookupClient] = None,
        dispatcher: Optional[TaskDispatcher] = None,
    ) -> None:
        """Bootstrap services and expose domain specific controllers."""

        self.configuration = configuration or LookupConfiguration()
        self.resource_types: List[Tuple[str, str]] = self.configuration.get_resource_types()

        lookup_client = client or ResourceLookupClient(
            base_url=self.configuration.get_base_url(),
            timeout_seconds=self.configuration.get_timeout_seconds(),
            max_response_bytes=self.configuration.get_max_response_bytes(),
        )
        self.record_store = RecordStore(lookup_client)
        self.history_store = HistoryStore()

        history_service = HistoryService(self.history_store, self.resource_types)
        self.history = HistoryController(history_service)
        self.query = QueryController(self.record_store, history_service, dispatcher)

        self._logger.info(
            "Visor inicializado contra %s con %d tipos de recurso",
            self.configuration.get_base_url(),
            len(self.resource_types),
        )
