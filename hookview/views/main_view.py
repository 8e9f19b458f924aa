"""Main Tkinter view for the hook resource viewer."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

import tkinter as tk
import ttkbootstrap as tb
from ttkbootstrap.constants import BOTH, DANGER, EW, INFO, LEFT, PRIMARY, RIGHT, SECONDARY, SUCCESS, W, WARNING, X, Y, YES

from hookview.config.lookup_config import LookupConfiguration
from hookview.controllers.main_controller import MainController
from hookview.dtos.view_state import QuerySnapshot, QueryState
from hookview.views.history_view import build_history_view
from hookview.views.resource_detail_view import ResourceDetailPanel
from hookview.views.ui_dispatcher import ThreadedDispatcher


STATUS_STYLES = {
    QueryState.IDLE: INFO,
    QueryState.FETCHING: INFO,
    QueryState.POPULATED: SUCCESS,
    QueryState.EMPTY: WARNING,
    QueryState.FAILED: DANGER,
}


def _status_text(snapshot: QuerySnapshot) -> str:
    """Return the status bar message for ``snapshot``."""

    query = snapshot.formQuery
    if snapshot.state == QueryState.FETCHING and query:
        return f"Consultando {query.path}..."
    if snapshot.state == QueryState.POPULATED:
        return f"Registros encontrados: {len(snapshot.selector.options)}"
    if snapshot.state == QueryState.EMPTY and query:
        return f"Sin resultados para {query.path}."
    if snapshot.state == QueryState.FAILED:
        return snapshot.message or "No fue posible completar la consulta."
    return "Listo."


def bind_submit_keys(widgets: Iterable[tk.Misc], submit: Callable[[], None]) -> Callable[[tk.Event], str]:
    """Bind both Enter keys on ``widgets`` to ``submit`` and return the handler.

    The handler returns ``"break"`` so no other binding of the widget handles
    the same key press.
    """

    def _submit_on_enter(_event: tk.Event) -> str:
        submit()
        return "break"

    for widget in widgets:
        widget.bind("<Return>", _submit_on_enter)
        widget.bind("<KP_Enter>", _submit_on_enter)
    return _submit_on_enter


def build_main_view(app: tb.Window, controller: MainController) -> None:
    """Render the query form, result selector, detail panel and history."""

    type_values = [value for value, _ in controller.resource_types]
    type_labels = [label for _, label in controller.resource_types]
    label_to_value: Dict[str, str] = dict(zip(type_labels, type_values))
    value_to_label: Dict[str, str] = dict(zip(type_values, type_labels))
    option_keys: List[Optional[str]] = []

    container = tb.Frame(app, padding=(16, 12))
    container.pack(fill=BOTH, expand=YES)

    content = tb.Frame(container)
    content.pack(side=LEFT, fill=BOTH, expand=YES)

    # --- Formulario de consulta ---
    form = tb.Labelframe(content, text="Consulta", bootstyle=SECONDARY, padding=12)
    form.pack(fill=X)
    form.columnconfigure(1, weight=1)

    tb.Label(form, text="Tipo de recurso").grid(row=0, column=0, sticky=W, pady=2)
    type_var = tk.StringVar(value=type_labels[0] if type_labels else "")
    type_combo = tb.Combobox(form, textvariable=type_var, values=type_labels, state="readonly")
    type_combo.grid(row=0, column=1, sticky=EW, padx=(10, 0), pady=2)

    tb.Label(form, text="Identificador").grid(row=1, column=0, sticky=W, pady=2)
    id_var = tk.StringVar()
    id_entry = tb.Entry(form, textvariable=id_var)
    id_entry.grid(row=1, column=1, sticky=EW, padx=(10, 0), pady=2)

    status_var = tk.StringVar(value="Listo.")

    def _selected_type() -> str:
        label = type_var.get()
        return label_to_value.get(label, label)

    def _submit() -> None:
        """Send the form values to the query controller."""

        message = controller.query.submit(_selected_type(), id_var.get())
        if message:
            status_var.set(message)
            status_label.configure(bootstyle=WARNING)
            id_entry.focus_set()

    submit_button = tb.Button(form, text="Consultar", command=_submit, bootstyle=PRIMARY, width=14)
    submit_button.grid(row=0, column=2, rowspan=2, sticky="ns", padx=(12, 0))
    bind_submit_keys((type_combo, id_entry, submit_button), _submit)

    # --- Selector de resultados ---
    results = tb.Labelframe(content, text="Resultados", bootstyle=SECONDARY, padding=12)
    results.pack(fill=X, pady=(12, 0))
    result_var = tk.StringVar()
    result_combo = tb.Combobox(results, textvariable=result_var, state="readonly")
    result_combo.pack(fill=X)

    def _on_result_selected(_event: tk.Event) -> None:
        index = result_combo.current()
        key = option_keys[index] if 0 <= index < len(option_keys) else None
        controller.query.select(key)

    result_combo.bind("<<ComboboxSelected>>", _on_result_selected)

    detail_panel = ResourceDetailPanel(content)

    # --- Historial ---
    def _recall(index: int) -> None:
        message = controller.query.recall(index)
        if message:
            status_var.set(message)
            status_label.configure(bootstyle=WARNING)

    history_frame = build_history_view(container, controller.history, _recall)
    history_frame.pack(side=RIGHT, fill=Y, padx=(12, 0))

    status_label = tb.Label(app, textvariable=status_var, bootstyle=INFO, anchor=W, padding=(16, 6))
    status_label.pack(fill=X)

    def _apply_snapshot(snapshot: QuerySnapshot) -> None:
        """Re-render every widget that depends on the controller state."""

        if snapshot.formQuery is not None and snapshot.state == QueryState.FETCHING:
            type_var.set(value_to_label.get(snapshot.formQuery.resourceType, snapshot.formQuery.resourceType))
            id_var.set(snapshot.formQuery.resourceId)

        option_keys[:] = [option.key for option in snapshot.selector.options]
        result_combo.configure(values=[option.label for option in snapshot.selector.options])
        if snapshot.selector.options:
            selected = snapshot.detail.recordKey if snapshot.detail else snapshot.selector.selectedKey
            index = option_keys.index(selected) if selected in option_keys else 0
            result_combo.current(index)
        else:
            result_var.set("")

        detail_panel.render(snapshot.detail)
        status_var.set(_status_text(snapshot))
        status_label.configure(bootstyle=STATUS_STYLES.get(snapshot.state, INFO))

    controller.query.subscribe(_apply_snapshot)
    id_entry.focus_set()


def run_gui() -> None:
    """Render and start the Tkinter interface for the viewer."""

    configuration = LookupConfiguration()
    logging.basicConfig(
        level=getattr(logging, configuration.get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = tb.Window(themename=configuration.get_theme())
    app.title("Visor de recursos")
    app.geometry("1100x680")

    controller = MainController(configuration, dispatcher=ThreadedDispatcher(app))
    build_main_view(app, controller)
    app.mainloop()


if __name__ == "__main__":
    run_gui()
