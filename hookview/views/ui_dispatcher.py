"""Run lookups on worker threads and apply their results on the Tkinter thread."""

from __future__ import annotations

import logging
import threading
from queue import Empty, Queue
from typing import Callable

import tkinter as tk

from hookview.controllers.query_controller import LoadOutcome


logger = logging.getLogger(__name__)


class ThreadedDispatcher:
    """Execute work in daemon threads and funnel callbacks through a UI queue.

    The queue is drained from the Tk event loop, so every store mutation
    happens on the Tkinter thread.
    """

    POLL_INTERVAL_MS = 50

    def __init__(self, root: tk.Misc) -> None:
        """Start polling the UI queue on ``root``."""

        self._root = root
        self._ui_queue: Queue[Callable[[], None]] = Queue()
        self._root.after(self.POLL_INTERVAL_MS, self._process_ui_queue)

    def run(self, work: Callable[[], LoadOutcome], on_done: Callable[[LoadOutcome], None]) -> None:
        """Execute ``work`` in a background thread and enqueue ``on_done``."""

        def worker() -> None:
            try:
                outcome = work()
            except Exception as exc:
                logger.exception("La consulta en segundo plano falló")
                outcome = LoadOutcome(error=f"Ocurrió un error inesperado al consultar: {exc}")
            self._ui_queue.put(lambda: on_done(outcome))

        threading.Thread(target=worker, daemon=True).start()

    def _process_ui_queue(self) -> None:
        """Execute callbacks produced by background workers."""

        while True:
            try:
                callback = self._ui_queue.get_nowait()
            except Empty:
                break
            try:
                callback()
            except Exception:  # pragma: no cover - safeguard for UI callbacks
                logger.exception("Ocurrió un error al actualizar la interfaz")
        self._root.after(self.POLL_INTERVAL_MS, self._process_ui_queue)
