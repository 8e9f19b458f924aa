"""Scenario tests for the query controller state machine."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Tuple, Union

import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from hookview.controllers.history_controller import HistoryController
from hookview.controllers.query_controller import LoadOutcome, QueryController
from hookview.daos.history_store import HistoryStore
from hookview.daos.record_store import RecordStore
from hookview.dtos.resource_record import ResourceQuery
from hookview.dtos.view_state import HistoryEntryAdded, QuerySnapshot, QueryState
from hookview.services.history_service import HistoryService
from hookview.services.lookup_client import LookupClientError


Response = Union[List[Dict[str, object]], Exception]
RESOURCE_TYPES = [("departures", "Departures"), ("arrivals", "Arrivals")]


class FakeLookupClient:
    """Serve canned responses keyed by (type, id)."""

    def __init__(self, responses: Dict[Tuple[str, str], Response]) -> None:
        self.responses = responses
        self.calls: List[ResourceQuery] = []

    def fetch_records(self, query: ResourceQuery) -> List[Dict[str, object]]:
        self.calls.append(query)
        response = self.responses.get((query.resourceType, query.resourceId), [])
        if isinstance(response, Exception):
            raise response
        return [dict(item) for item in response]


class ManualDispatcher:
    """Hold scheduled lookups until the test resolves them in any order."""

    def __init__(self) -> None:
        self.pending: List[Tuple[Callable[[], LoadOutcome], Callable[[LoadOutcome], None]]] = []

    def run(self, work: Callable[[], LoadOutcome], on_done: Callable[[LoadOutcome], None]) -> None:
        self.pending.append((work, on_done))

    def resolve(self, index: int) -> None:
        work, on_done = self.pending[index]
        on_done(work())


def _build(responses: Dict[Tuple[str, str], Response], dispatcher=None):
    client = FakeLookupClient(responses)
    record_store = RecordStore(client)
    history_store = HistoryStore()
    history_service = HistoryService(history_store, RESOURCE_TYPES)
    controller = QueryController(record_store, history_service, dispatcher)
    return controller, client, record_store, history_store


def _record(fetch_date: str, **resource: object) -> Dict[str, object]:
    return {"fetchdate": fetch_date, "hookdate": "2024-01-01T09:00Z", "sha1": "f00d", "resource": resource}


def test_successful_lookup_populates_selector_detail_and_history() -> None:
    """Departures 123 with one record selects it and adds it to the history."""

    controller, client, _, history_store = _build({("departures", "123"): [_record("2024-01-01T10:00Z", id=123)]})

    assert controller.submit("departures", "123") is None

    snapshot = controller.snapshot()
    assert snapshot.state == QueryState.POPULATED
    assert [option.label for option in snapshot.selector.options] == ["2024-01-01T10:00Z"]
    assert snapshot.selector.selectedKey == snapshot.selector.options[0].key
    assert snapshot.detailVisible
    assert snapshot.detail.fetchDate == "2024-01-01T10:00Z"
    assert '"id": 123' in snapshot.detail.payloadText
    entry = history_store.entries[0]
    assert (entry.label, entry.resourceId, entry.resourceType) == ("Departures: 123", "123", "departures")
    assert client.calls == [ResourceQuery("departures", "123")]


def test_whitespace_identifier_is_rejected_without_side_effects() -> None:
    """Blank ids return a validation message and change nothing."""

    controller, client, record_store, history_store = _build({})
    snapshots: List[QuerySnapshot] = []
    controller.subscribe(snapshots.append)

    message = controller.submit("arrivals", "  ")

    assert message == QueryController.EMPTY_ID_MESSAGE
    assert controller.state == QueryState.IDLE
    assert client.calls == []
    assert record_store.query is None
    assert len(history_store) == 0
    assert snapshots == []


def test_empty_result_shows_placeholder_and_skips_history() -> None:
    """Zero records is the EMPTY state with the query named in the placeholder."""

    controller, _, record_store, history_store = _build({("departures", "999"): []})

    controller.submit("departures", "999")

    snapshot = controller.snapshot()
    assert snapshot.state == QueryState.EMPTY
    assert [option.label for option in snapshot.selector.options] == ["No results found for departures/999"]
    assert snapshot.selector.options[0].key is None
    assert snapshot.detail is None
    assert len(record_store) == 0
    assert len(history_store) == 0


def test_repeated_lookup_keeps_a_single_history_entry() -> None:
    """Submitting the same pair twice records it once."""

    controller, client, _, history_store = _build({("departures", "123"): [_record("2024-01-01T10:00Z")]})

    controller.submit("departures", "123")
    controller.submit("departures", " 123 ")

    assert len(client.calls) == 2
    assert [(entry.resourceId, entry.resourceType) for entry in history_store.entries] == [("123", "departures")]


def test_recall_fills_the_form_and_runs_a_new_lookup() -> None:
    """Clicking a history entry behaves like a manual submission."""

    controller, client, _, _ = _build(
        {
            ("arrivals", "456"): [_record("2024-04-01T08:00Z")],
            ("departures", "123"): [_record("2024-01-01T10:00Z")],
        }
    )
    controller.submit("arrivals", "456")
    controller.submit("departures", "123")
    snapshots: List[QuerySnapshot] = []
    controller.subscribe(snapshots.append)

    assert controller.recall(1) is None

    assert snapshots[0].state == QueryState.FETCHING
    assert snapshots[0].formQuery == ResourceQuery("arrivals", "456")
    assert client.calls[-1] == ResourceQuery("arrivals", "456")
    assert controller.snapshot().state == QueryState.POPULATED
    assert controller.snapshot().detail.fetchDate == "2024-04-01T08:00Z"


def test_recall_with_unknown_index_reports_message() -> None:
    """Recalling past the end of the history does not submit anything."""

    controller, client, _, _ = _build({})

    assert controller.recall(3)
    assert client.calls == []
    assert controller.state == QueryState.IDLE


def test_transport_failure_keeps_previous_results_and_history() -> None:
    """A failed lookup is a visible FAILED state and mutates nothing."""

    controller, _, record_store, history_store = _build(
        {
            ("departures", "123"): [_record("2024-01-01T10:00Z")],
            ("departures", "500"): LookupClientError("El servicio de consulta respondió con código 500."),
        }
    )
    controller.submit("departures", "123")
    previous_records = record_store.records
    previous_history = history_store.entries

    controller.submit("departures", "500")

    snapshot = controller.snapshot()
    assert snapshot.state == QueryState.FAILED
    assert "500" in snapshot.message
    assert record_store.records == previous_records
    assert history_store.entries == previous_history
    assert snapshot.detail is not None
    assert snapshot.selector.options[0].label == "2024-01-01T10:00Z"


def test_select_changes_detail_and_unknown_key_hides_it() -> None:
    """The selected record is controller state independent of widgets."""

    controller, _, record_store, _ = _build(
        {("departures", "1"): [_record("2024-01-01T10:00Z"), _record("2024-02-01T10:00Z")]}
    )
    controller.submit("departures", "1")
    older = record_store.records[1]

    controller.select(older.recordKey)
    assert controller.selected_key == older.recordKey
    assert controller.snapshot().detail.fetchDate == "2024-01-01T10:00Z"

    controller.select(None)
    assert controller.snapshot().detail is None

    controller.select("missing")
    assert controller.selected_key is None


def test_state_moves_through_fetching_before_the_response() -> None:
    """Subscribers see FETCHING first and the final state afterwards."""

    dispatcher = ManualDispatcher()
    controller, _, _, _ = _build({("departures", "1"): [_record("a")]}, dispatcher)
    states: List[QueryState] = []
    controller.subscribe(lambda snapshot: states.append(snapshot.state))

    controller.submit("departures", "1")
    assert controller.state == QueryState.FETCHING
    dispatcher.resolve(0)

    assert states == [QueryState.FETCHING, QueryState.POPULATED]


def test_stale_response_is_discarded_when_resolved_late() -> None:
    """Only the latest submission defines the final state and the history."""

    dispatcher = ManualDispatcher()
    controller, _, record_store, history_store = _build(
        {
            ("departures", "1"): [_record("2024-01-01T00:00Z")],
            ("departures", "2"): [_record("2024-02-02T00:00Z")],
        },
        dispatcher,
    )
    controller.submit("departures", "1")
    controller.submit("departures", "2")

    dispatcher.resolve(1)
    dispatcher.resolve(0)

    assert record_store.query == ResourceQuery("departures", "2")
    assert [record.fetchDate for record in record_store.records] == ["2024-02-02T00:00Z"]
    assert [entry.resourceId for entry in history_store.entries] == ["2"]
    assert controller.snapshot().formQuery == ResourceQuery("departures", "2")


def test_history_controller_relays_insertions() -> None:
    """The history view receives every insertion through the controller."""

    controller, _, _, history_store = _build({("arrivals", "7"): [_record("a")]})
    history = HistoryController(HistoryService(history_store, RESOURCE_TYPES))
    events: List[HistoryEntryAdded] = []
    history.subscribe(events.append)

    controller.submit("arrivals", "7")

    assert [event.entry.label for event in events] == ["Arrivals: 7"]
    assert [entry.label for entry in history.load_history()] == ["Arrivals: 7"]
