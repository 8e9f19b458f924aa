"""Controller driving the lookup cycle: submit, fetch, render and history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

from hookview.daos.record_store import RecordStore, RecordStoreError
from hookview.dtos.resource_record import ResourceQuery, ResourceRecord
from hookview.dtos.view_state import QuerySnapshot, QueryState, SelectorState
from hookview.services.history_service import HistoryService
from hookview.services.selector_service import render_detail, render_selector


logger = logging.getLogger(__name__)

SnapshotListener = Callable[[QuerySnapshot], None]


@dataclass
class LoadOutcome:
    """Result of a background load: the ordered records or an error message."""

    records: List[ResourceRecord] = field(default_factory=list)
    error: Optional[str] = None


class TaskDispatcher(Protocol):
    """Run ``work`` somewhere and hand its result to ``on_done`` on the writer thread."""

    def run(self, work: Callable[[], LoadOutcome], on_done: Callable[[LoadOutcome], None]) -> None:
        """Schedule ``work`` and deliver its outcome."""


class ImmediateDispatcher:
    """Dispatcher that runs the work inline on the calling thread."""

    def run(self, work: Callable[[], LoadOutcome], on_done: Callable[[LoadOutcome], None]) -> None:
        on_done(work())


class QueryController:
    """Own the query state machine and coordinate both stores.

    Every accepted submission receives an increasing token. Only the response
    carrying the latest token is applied; older responses are discarded so the
    last submission always defines the final state.
    """

    EMPTY_ID_MESSAGE = "Captura el identificador del recurso antes de consultar."

    def __init__(
        self,
        record_store: RecordStore,
        history_service: HistoryService,
        dispatcher: Optional[TaskDispatcher] = None,
    ) -> None:
        """Store the injected stores, services and the background dispatcher."""

        self._record_store = record_store
        self._history_service = history_service
        self._dispatcher = dispatcher or ImmediateDispatcher()
        self._state = QueryState.IDLE
        self._form_query: Optional[ResourceQuery] = None
        self._selected_key: Optional[str] = None
        self._message: Optional[str] = None
        self._latest_token = 0
        self._listeners: List[SnapshotListener] = []

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def selected_key(self) -> Optional[str]:
        return self._selected_key

    def submit(self, resource_type: str, resource_id: str) -> Optional[str]:
        """Start a lookup cycle for the given pair.

        Returns:
            ``None`` when the lookup was started, or a validation message when
            the identifier is empty. Rejected submissions change nothing.
        """

        query = ResourceQuery.build(resource_type, resource_id)
        if not query.is_valid():
            logger.debug("Consulta descartada: identificador vacío para el tipo '%s'", query.resourceType)
            return self.EMPTY_ID_MESSAGE

        self._latest_token += 1
        token = self._latest_token
        self._form_query = query
        self._state = QueryState.FETCHING
        self._message = None
        logger.info("Consultando %s (solicitud %d)", query.path, token)
        self._notify()

        self._dispatcher.run(
            lambda: self._load(query),
            lambda outcome: self._on_response(token, query, outcome),
        )
        return None

    def recall(self, index: int) -> Optional[str]:
        """Populate the form with a history entry and submit it again."""

        try:
            query = self._history_service.recall(index)
        except IndexError:
            return "La entrada del historial seleccionada ya no existe."
        return self.submit(query.resourceType, query.resourceId)

    def select(self, record_key: Optional[str]) -> None:
        """Choose the record shown in the detail panel; unknown keys hide it."""

        record = self._record_store.get(record_key)
        self._selected_key = record.recordKey if record is not None else None
        self._notify()

    def snapshot(self) -> QuerySnapshot:
        """Return the current state as consumed by the views."""

        if self._record_store.query is None:
            selector = SelectorState()
        else:
            selector = render_selector(self._record_store.records, self._record_store.query)
        return QuerySnapshot(
            state=self._state,
            formQuery=self._form_query,
            selector=selector,
            detail=render_detail(self._record_store.get(self._selected_key)),
            message=self._message,
        )

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for snapshots and return its unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _load(self, query: ResourceQuery) -> LoadOutcome:
        """Fetch the records for ``query``; runs on the dispatcher's worker."""

        try:
            return LoadOutcome(records=self._record_store.load(query))
        except RecordStoreError as exc:
            return LoadOutcome(error=str(exc))

    def _on_response(self, token: int, query: ResourceQuery, outcome: LoadOutcome) -> None:
        """Apply a finished lookup if it belongs to the latest submission."""

        if token != self._latest_token:
            logger.info("Respuesta descartada para %s: solicitud %d superada por %d", query.path, token, self._latest_token)
            return

        if outcome.error is not None:
            logger.warning("No fue posible consultar %s: %s", query.path, outcome.error)
            self._state = QueryState.FAILED
            self._message = outcome.error
            self._notify()
            return

        self._record_store.reset(query, outcome.records)
        if outcome.records:
            self._selected_key = outcome.records[0].recordKey
            self._state = QueryState.POPULATED
            self._history_service.register_query(query)
        else:
            self._selected_key = None
            self._state = QueryState.EMPTY
        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
