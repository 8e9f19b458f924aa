"""Clickable list with the queries submitted during the session."""

from __future__ import annotations

from typing import Callable, Sequence

import tkinter as tk
import ttkbootstrap as tb
from ttkbootstrap.constants import BOTH, LEFT, RIGHT, SECONDARY, W, Y, YES

from hookview.controllers.history_controller import HistoryController
from hookview.dtos.history_entry import HistoryEntry
from hookview.dtos.view_state import HistoryEntryAdded


def build_history_view(
    parent: tk.Misc,
    history_controller: HistoryController,
    on_recall: Callable[[int], None],
) -> tb.Labelframe:
    """Render the history list inside ``parent``.

    Args:
        parent: Container receiving the list.
        history_controller: Source of the entries and insertion events.
        on_recall: Callback invoked with the clicked entry index.

    Returns:
        The frame holding the history list.
    """

    frame = tb.Labelframe(parent, text="Historial", bootstyle=SECONDARY, padding=10)
    body = tb.Frame(frame)
    body.pack(fill=BOTH, expand=YES)

    listbox = tk.Listbox(body, activestyle="none", exportselection=False, height=20)
    scroll = tb.Scrollbar(body, orient="vertical", command=listbox.yview)
    listbox.configure(yscrollcommand=scroll.set)
    listbox.pack(side=LEFT, fill=BOTH, expand=YES)
    scroll.pack(side=RIGHT, fill=Y)

    tb.Label(frame, text="Haz clic en una consulta para repetirla.", bootstyle=SECONDARY).pack(anchor=W, pady=(6, 0))

    def _render(entries: Sequence[HistoryEntry]) -> None:
        """Redraw the whole list, newest entry on top."""

        listbox.delete(0, "end")
        for entry in entries:
            listbox.insert("end", entry.label)

    def _on_added(event: HistoryEntryAdded) -> None:
        _render(event.entries)

    def _on_click(event: tk.Event) -> None:
        if not listbox.size():
            return
        index = listbox.nearest(event.y)
        bbox = listbox.bbox(index)
        if not bbox or event.y > bbox[1] + bbox[3]:
            return
        on_recall(index)

    history_controller.subscribe(_on_added)
    listbox.bind("<ButtonRelease-1>", _on_click)
    _render(history_controller.load_history())
    return frame
