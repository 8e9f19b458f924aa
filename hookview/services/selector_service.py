"""Project the record store into selector options and detail panel values."""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from hookview.dtos.resource_record import ResourceQuery, ResourceRecord
from hookview.dtos.view_state import DetailState, SelectorOption, SelectorState


EMPTY_RESULTS_TEMPLATE = "No results found for {path}"


def render_selector(records: Sequence[ResourceRecord], query: Optional[ResourceQuery]) -> SelectorState:
    """Return the options for ``records`` auto-selecting the newest one.

    An empty result set yields a single placeholder option without key.
    """

    if not records:
        placeholder = EMPTY_RESULTS_TEMPLATE.format(path=query.path if query else "")
        return SelectorState(
            options=[SelectorOption(key=None, label=placeholder)],
            selectedKey=None,
            placeholder=placeholder,
        )
    options = [SelectorOption(key=record.recordKey, label=record.fetchDate) for record in records]
    return SelectorState(options=options, selectedKey=options[0].key)


def format_payload(payload: Any) -> str:
    """Pretty print the opaque resource payload for the detail panel."""

    try:
        return json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return str(payload)


def render_detail(record: Optional[ResourceRecord]) -> Optional[DetailState]:
    """Return the detail values for ``record`` or ``None`` to hide the panel."""

    if record is None:
        return None
    return DetailState(
        recordKey=record.recordKey,
        fetchDate=record.fetchDate,
        hookDate=record.hookDate,
        checksum=record.checksum,
        payloadText=format_payload(record.payload),
    )
