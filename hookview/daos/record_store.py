"""In-memory store holding the result set of the current lookup."""

from __future__ import annotations

import itertools
import logging
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from hookview.dtos.resource_record import ResourceQuery, ResourceRecord
from hookview.dtos.view_state import RecordsReset
from hookview.services.lookup_client import LookupClientError, ResourceLookupClient


logger = logging.getLogger(__name__)

RecordsListener = Callable[[RecordsReset], None]


class RecordStoreError(RuntimeError):
    """Raised when the result set for a query cannot be loaded."""


def compare_records(left: ResourceRecord, right: ResourceRecord) -> int:
    """Three-way comparison of two records by their ordering key."""

    if left.orderingKey < right.orderingKey:
        return -1
    if left.orderingKey > right.orderingKey:
        return 1
    return 0


def sort_newest_first(records: Iterable[ResourceRecord]) -> List[ResourceRecord]:
    """Return ``records`` in descending order keeping equal keys in input order."""

    return sorted(records, key=cmp_to_key(lambda left, right: compare_records(right, left)))


class RecordStore:
    """Keep the newest-first records of one query and notify subscribers on reset."""

    def __init__(self, client: ResourceLookupClient) -> None:
        """Store the lookup client used to load result sets."""

        self._client = client
        self._query: Optional[ResourceQuery] = None
        self._records: Tuple[ResourceRecord, ...] = ()
        self._index: Dict[str, ResourceRecord] = {}
        self._listeners: List[RecordsListener] = []
        self._key_sequence = itertools.count(1)

    @property
    def query(self) -> Optional[ResourceQuery]:
        return self._query

    @property
    def records(self) -> Tuple[ResourceRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_key: Optional[str]) -> Optional[ResourceRecord]:
        """Return the record registered under ``record_key`` if present."""

        if not record_key:
            return None
        return self._index.get(record_key)

    def set_query(self, resource_type: str, resource_id: str) -> None:
        """Set the fetch target without contacting the endpoint."""

        self._query = ResourceQuery.build(resource_type, resource_id)

    def fetch(self) -> bool:
        """Load the current target and replace the result set.

        Returns ``False`` without any network call or notification when no
        target is set or its identifier is empty.

        Raises:
            RecordStoreError: when the endpoint cannot answer the query. The
                current result set is left untouched.
        """

        query = self._query
        if query is None or not query.is_valid():
            return False
        self.reset(query, self.load(query))
        return True

    def load(self, query: ResourceQuery) -> List[ResourceRecord]:
        """Fetch and order the records for ``query`` without mutating the store."""

        try:
            raw_records = self._client.fetch_records(query)
        except LookupClientError as exc:
            raise RecordStoreError(str(exc)) from exc
        records = [
            ResourceRecord.from_payload(f"r{next(self._key_sequence)}", item)
            for item in raw_records
        ]
        return sort_newest_first(records)

    def reset(self, query: ResourceQuery, records: Iterable[ResourceRecord]) -> None:
        """Replace the whole result set and notify subscribers."""

        ordered = tuple(records)
        self._query = query
        self._records = ordered
        self._index = {record.recordKey: record for record in ordered}
        logger.info("Consulta %s cargada con %d registros", query.path, len(ordered))
        event = RecordsReset(query=query, records=ordered)
        for listener in list(self._listeners):
            listener(event)

    def subscribe(self, listener: RecordsListener) -> Callable[[], None]:
        """Register ``listener`` for reset events and return its unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
