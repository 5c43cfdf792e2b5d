from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from .view_utils import ModalDialog, safe_call

FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "Name"),
    ("years", "Active years"),
    ("instagram", "Instagram URL"),
    ("username", "Username"),
    ("email", "Email"),
    ("portfolio_label", "Portfolio label"),
)


class IdentityDialog(ModalDialog):
    """Artist details form plus style preset choice (UI-only)."""

    OnSubmit = Optional[Callable[[Dict[str, str], str], None]]

    width = 520
    height = 520

    def __init__(
        self,
        parent: tk.Misc,
        *,
        presets: Sequence[Tuple[str, str]],
        on_submit: OnSubmit = None,
        first_run: bool = False,
        on_open_existing: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__(parent, "Welcome to Folio" if first_run else "Artist Details")
        self._presets = tuple(presets)
        self._on_submit = on_submit
        self._on_open_existing = on_open_existing
        self._first_run = first_run

        self.vars: Dict[str, tk.StringVar] = {key: tk.StringVar(value="") for key, _label in FIELDS}
        self.preset_var = tk.StringVar(value=self._presets[0][0] if self._presets else "default")

        self._build_ui()
        self._show(parent)

    def _build_ui(self) -> None:
        pad = dict(padx=10, pady=6)
        if self._first_run:
            ttk.Label(self, text="Tell us about yourself to start a portfolio.", style="Subtle.TLabel").grid(
                row=0, column=0, sticky="w", **pad
            )

        form = ttk.Frame(self)
        form.grid(row=1, column=0, sticky="ew", **pad)
        form.columnconfigure(1, weight=1)
        for row, (key, label) in enumerate(FIELDS):
            ttk.Label(form, text=label).grid(row=row, column=0, sticky="w", pady=3)
            entry = ttk.Entry(form, textvariable=self.vars[key], width=42)
            entry.grid(row=row, column=1, sticky="ew", padx=(8, 0), pady=3)
            if key == "name":
                entry.focus_set()

        ttk.Label(form, text="Statement").grid(row=len(FIELDS), column=0, sticky="nw", pady=3)
        self.statement = tk.Text(form, height=5, width=42, wrap="word")
        self.statement.grid(row=len(FIELDS), column=1, sticky="ew", padx=(8, 0), pady=3)

        style = ttk.Labelframe(self, text="Style")
        style.grid(row=2, column=0, sticky="ew", **pad)
        for col, (key, label) in enumerate(self._presets):
            ttk.Radiobutton(style, text=label, value=key, variable=self.preset_var).grid(
                row=0, column=col, sticky="w", padx=6, pady=4
            )

        footer = ttk.Frame(self)
        footer.grid(row=3, column=0, sticky="ew", **pad)
        ttk.Button(footer, text="Save", style="Primary.TButton", command=self._emit_submit).pack(side="right")
        ttk.Button(footer, text="Cancel", command=self._on_close_clicked).pack(side="right", padx=(0, 6))
        if self._first_run and self._on_open_existing:
            ttk.Button(footer, text="Open Existing…", command=self._emit_open_existing).pack(side="left")

    # ------------------------------------------------------------------
    def set_values(self, values: Mapping[str, str], preset: str) -> None:
        for key, var in self.vars.items():
            var.set(values.get(key, ""))
        self.statement.delete("1.0", "end")
        self.statement.insert("1.0", values.get("statement", ""))
        self.preset_var.set(preset)

    def _emit_submit(self) -> None:
        values = {key: var.get() for key, var in self.vars.items()}
        values["statement"] = self.statement.get("1.0", "end-1c")
        preset = self.preset_var.get()
        self._on_close_clicked()
        safe_call(self._on_submit, values, preset)

    def _emit_open_existing(self) -> None:
        self._on_close_clicked()
        safe_call(self._on_open_existing)


__all__ = ["IdentityDialog"]
