from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from .view_utils import ModalDialog, safe_call

DEFAULT_IMAGE_COUNT = 3
MAX_IMAGE_COUNT = 50


class ProjectDialog(ModalDialog):
    """Collects title/year/description/image count for a new series (UI-only)."""

    OnSubmit = Optional[Callable[[str, str, str, int], None]]

    width = 460
    height = 320

    def __init__(self, parent: tk.Misc, *, on_submit: OnSubmit = None) -> None:
        super().__init__(parent, "Add Project")
        self._on_submit = on_submit
        self.title_var = tk.StringVar(value="")
        self.year_var = tk.StringVar(value="")
        self.count_var = tk.StringVar(value=str(DEFAULT_IMAGE_COUNT))
        self._build_ui()
        self._show(parent)

    def _build_ui(self) -> None:
        form = ttk.Frame(self)
        form.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)
        form.columnconfigure(1, weight=1)

        ttk.Label(form, text="Title").grid(row=0, column=0, sticky="w", pady=3)
        title_entry = ttk.Entry(form, textvariable=self.title_var, width=36)
        title_entry.grid(row=0, column=1, sticky="ew", padx=(8, 0), pady=3)
        title_entry.focus_set()
        ttk.Label(form, text="Year").grid(row=1, column=0, sticky="w", pady=3)
        ttk.Entry(form, textvariable=self.year_var, width=12).grid(row=1, column=1, sticky="w", padx=(8, 0), pady=3)
        ttk.Label(form, text="Description").grid(row=2, column=0, sticky="nw", pady=3)
        self.desc = tk.Text(form, height=4, width=36, wrap="word")
        self.desc.grid(row=2, column=1, sticky="ew", padx=(8, 0), pady=3)
        ttk.Label(form, text="Number of images").grid(row=3, column=0, sticky="w", pady=3)
        ttk.Spinbox(form, from_=0, to=MAX_IMAGE_COUNT, textvariable=self.count_var, width=6).grid(
            row=3, column=1, sticky="w", padx=(8, 0), pady=3
        )

        footer = ttk.Frame(self)
        footer.grid(row=1, column=0, sticky="ew", padx=10, pady=(0, 10))
        ttk.Button(footer, text="Add", style="Primary.TButton", command=self._emit_submit).pack(side="right")
        ttk.Button(footer, text="Cancel", command=self._on_close_clicked).pack(side="right", padx=(0, 6))

    def _emit_submit(self) -> None:
        try:
            count = int(self.count_var.get())
        except ValueError:
            count = DEFAULT_IMAGE_COUNT
        count = max(0, min(MAX_IMAGE_COUNT, count))
        values = (self.title_var.get(), self.year_var.get(), self.desc.get("1.0", "end-1c"), count)
        self._on_close_clicked()
        safe_call(self._on_submit, *values)


__all__ = ["ProjectDialog"]
