from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from .view_utils import ModalDialog, safe_call

APPEARANCE_CHOICES = (("system", "Follow system"), ("light", "Light"), ("dark", "Dark"))


class PreferencesDialog(ModalDialog):
    """Modal dialog to edit UI preferences (UI-only)."""

    OnSave = Optional[Callable[[dict], None]]

    width = 420
    height = 260

    def __init__(self, parent: tk.Misc, *, on_save: OnSave = None) -> None:
        super().__init__(parent, "Preferences")
        self._on_save = on_save
        self.appearance_var = tk.StringVar(value="system")
        self.autosave_var = tk.BooleanVar(value=False)
        self.debug_logging_var = tk.BooleanVar(value=False)
        self._build_ui()
        self._show(parent)

    def _build_ui(self) -> None:
        pad = dict(padx=10, pady=6)
        appearance = ttk.Labelframe(self, text="Appearance")
        appearance.grid(row=0, column=0, sticky="ew", **pad)
        for col, (value, label) in enumerate(APPEARANCE_CHOICES):
            ttk.Radiobutton(appearance, text=label, value=value, variable=self.appearance_var).grid(
                row=0, column=col, sticky="w", padx=6, pady=4
            )

        flags = ttk.Frame(self)
        flags.grid(row=1, column=0, sticky="ew", **pad)
        ttk.Checkbutton(flags, text="Autosave after edits", variable=self.autosave_var).pack(anchor="w")
        ttk.Checkbutton(flags, text="Enable debug logging", variable=self.debug_logging_var).pack(anchor="w", pady=(6, 0))

        footer = ttk.Frame(self)
        footer.grid(row=2, column=0, sticky="ew", **pad)
        ttk.Button(footer, text="Save", style="Primary.TButton", command=self._emit_save).pack(side="right")
        ttk.Button(footer, text="Close", command=self._on_close_clicked).pack(side="right", padx=(0, 6))

    # ------------------------------------------------------------------
    def set_ui_dark(self, value: Optional[bool]) -> None:
        self.appearance_var.set("system" if value is None else ("dark" if value else "light"))

    def set_autosave(self, enabled: bool) -> None:
        self.autosave_var.set(bool(enabled))

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging_var.set(bool(enabled))

    def _emit_save(self) -> None:
        appearance = self.appearance_var.get()
        settings = {
            "ui_dark": None if appearance == "system" else appearance == "dark",
            "autosave": bool(self.autosave_var.get()),
            "debug_logging": bool(self.debug_logging_var.get()),
        }
        self._on_close_clicked()
        safe_call(self._on_save, settings)


__all__ = ["PreferencesDialog"]
