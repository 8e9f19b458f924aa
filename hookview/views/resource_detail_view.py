"""Detail panel rendering the selected resource record."""

from __future__ import annotations

from typing import Optional

import tkinter as tk
import ttkbootstrap as tb
from ttkbootstrap.constants import BOTH, LEFT, RIGHT, SECONDARY, W, X, Y, YES

from hookview.dtos.view_state import DetailState


class ResourceDetailPanel:
    """Show fetch date, hook date, checksum and payload of one record."""

    def __init__(self, parent: tk.Misc) -> None:
        """Create the widgets inside ``parent`` without packing the panel."""

        self.frame = tb.Labelframe(parent, text="Detalle del recurso", bootstyle=SECONDARY, padding=12)
        self._visible = False

        self._fetch_var = tk.StringVar()
        self._hook_var = tk.StringVar()
        self._checksum_var = tk.StringVar()

        fields = tb.Frame(self.frame)
        fields.pack(fill=X)
        fields.columnconfigure(1, weight=1)
        for row, (caption, variable) in enumerate(
            (
                ("Fecha de consulta", self._fetch_var),
                ("Fecha del hook", self._hook_var),
                ("SHA-1", self._checksum_var),
            )
        ):
            tb.Label(fields, text=caption, font=("Segoe UI", 10, "bold")).grid(row=row, column=0, sticky=W, pady=2)
            tb.Label(fields, textvariable=variable).grid(row=row, column=1, sticky=W, padx=(10, 0), pady=2)

        tb.Label(self.frame, text="Recurso", font=("Segoe UI", 10, "bold")).pack(anchor=W, pady=(10, 2))
        body = tb.Frame(self.frame)
        body.pack(fill=BOTH, expand=YES)
        self._payload = tk.Text(body, height=18, wrap="none", font=("Consolas", 10))
        scroll = tb.Scrollbar(body, orient="vertical", command=self._payload.yview)
        self._payload.configure(yscrollcommand=scroll.set, state="disabled")
        self._payload.pack(side=LEFT, fill=BOTH, expand=YES)
        scroll.pack(side=RIGHT, fill=Y)

    def render(self, detail: Optional[DetailState]) -> None:
        """Fill the panel with ``detail`` or hide it when there is nothing to show."""

        if detail is None:
            self.hide()
            return
        self._fetch_var.set(detail.fetchDate)
        self._hook_var.set(detail.hookDate)
        self._checksum_var.set(detail.checksum)
        self._payload.configure(state="normal")
        self._payload.delete("1.0", "end")
        self._payload.insert("1.0", detail.payloadText)
        self._payload.configure(state="disabled")
        if not self._visible:
            self.frame.pack(fill=BOTH, expand=YES, pady=(12, 0))
            self._visible = True

    def hide(self) -> None:
        if self._visible:
            self.frame.pack_forget()
            self._visible = False
