from __future__ import annotations

import tkinter as tk
from tkinter import colorchooser, ttk
from typing import Callable, Optional, Sequence, Tuple

from .view_utils import ModalDialog, safe_call


class StyleDialog(ModalDialog):
    """Preset, color and typography controls; state lives in ThemeEditorVM."""

    OnVoid = Optional[Callable[[], None]]
    OnText = Optional[Callable[[str], None]]

    width = 520
    height = 420

    def __init__(
        self,
        parent: tk.Misc,
        *,
        presets: Sequence[Tuple[str, str]],
        targets: Sequence[Tuple[str, str]],
        font_families: Sequence[Tuple[str, str]],
        font_size_range: Tuple[int, int],
        on_preset: OnText = None,
        on_target: OnText = None,
        on_color: OnText = None,
        on_reset_target: OnVoid = None,
        on_font_family: OnText = None,
        on_font_size: OnText = None,
        on_reset_typography: OnVoid = None,
        on_apply: OnVoid = None,
        on_cancel: OnVoid = None,
    ) -> None:
        super().__init__(parent, "Style")
        self._presets = tuple(presets)
        self._targets = tuple(targets)
        self._font_families = tuple(font_families)
        self._font_size_range = font_size_range
        self._on_preset = on_preset
        self._on_target = on_target
        self._on_color = on_color
        self._on_reset_target = on_reset_target
        self._on_font_family = on_font_family
        self._on_font_size = on_font_size
        self._on_reset_typography = on_reset_typography
        self._on_apply = on_apply
        self._on_cancel = on_cancel

        self.preset_var = tk.StringVar(value="")
        self.target_var = tk.StringVar(value="")
        self.color_var = tk.StringVar(value="")
        self.font_family_var = tk.StringVar(value="")
        self.font_size_var = tk.StringVar(value="")

        self._build_ui()
        self._show(parent)

    def _build_ui(self) -> None:
        pad = dict(padx=10, pady=6)

        presets = ttk.Labelframe(self, text="Preset")
        presets.grid(row=0, column=0, sticky="ew", **pad)
        for col, (key, label) in enumerate(self._presets):
            ttk.Radiobutton(
                presets,
                text=label,
                value=key,
                variable=self.preset_var,
                command=lambda: safe_call(self._on_preset, self.preset_var.get()),
            ).grid(row=0, column=col, sticky="w", padx=6, pady=4)

        colors = ttk.Labelframe(self, text="Colors")
        colors.grid(row=1, column=0, sticky="ew", **pad)
        for col, (key, label) in enumerate(self._targets):
            ttk.Radiobutton(
                colors,
                text=label,
                value=key,
                variable=self.target_var,
                command=lambda: safe_call(self._on_target, self.target_var.get()),
            ).grid(row=0, column=col, sticky="w", padx=6, pady=4)
        row = ttk.Frame(colors)
        row.grid(row=1, column=0, columnspan=max(1, len(self._targets)), sticky="ew", pady=(4, 6))
        self.swatch = tk.Label(row, width=4, relief="solid", borderwidth=1)
        self.swatch.pack(side="left", padx=(6, 8))
        entry = ttk.Entry(row, textvariable=self.color_var, width=10)
        entry.pack(side="left")
        entry.bind("<Return>", lambda e: safe_call(self._on_color, self.color_var.get()))
        entry.bind("<FocusOut>", lambda e: safe_call(self._on_color, self.color_var.get()))
        ttk.Button(row, text="Pick…", command=self._pick_color).pack(side="left", padx=6)
        ttk.Button(row, text="Reset", command=lambda: safe_call(self._on_reset_target)).pack(side="left")

        typography = ttk.Labelframe(self, text="Typography")
        typography.grid(row=2, column=0, sticky="ew", **pad)
        ttk.Label(typography, text="Font").grid(row=0, column=0, sticky="w", padx=6, pady=4)
        family = ttk.Combobox(
            typography,
            textvariable=self.font_family_var,
            values=[label for label, _value in self._font_families],
            state="readonly",
            width=18,
        )
        family.grid(row=0, column=1, sticky="w", pady=4)
        family.bind("<<ComboboxSelected>>", lambda e: self._emit_font_family())
        ttk.Label(typography, text="Size (px)").grid(row=0, column=2, sticky="w", padx=(12, 6))
        low, high = self._font_size_range
        size = ttk.Spinbox(
            typography,
            from_=low,
            to=high,
            textvariable=self.font_size_var,
            width=5,
            command=lambda: safe_call(self._on_font_size, self.font_size_var.get()),
        )
        size.grid(row=0, column=3, sticky="w")
        size.bind("<Return>", lambda e: safe_call(self._on_font_size, self.font_size_var.get()))
        ttk.Button(typography, text="Reset", command=lambda: safe_call(self._on_reset_typography)).grid(
            row=0, column=4, padx=(12, 6)
        )

        footer = ttk.Frame(self)
        footer.grid(row=3, column=0, sticky="ew", **pad)
        ttk.Button(footer, text="Apply", style="Primary.TButton", command=self._emit_apply).pack(side="right")
        ttk.Button(footer, text="Cancel", command=self._on_close_clicked).pack(side="right", padx=(0, 6))

    # ------------------------------------------------------------------
    # Public setters to refresh controls from the VM
    # ------------------------------------------------------------------
    def show_state(self, preset: str, target: str, color: str, font_family: str, font_size: int) -> None:
        self.preset_var.set(preset)
        self.target_var.set(target)
        self.color_var.set(color)
        self.swatch.configure(bg=color)
        label = next((lbl for lbl, value in self._font_families if value == font_family), font_family)
        self.font_family_var.set(label)
        self.font_size_var.set(str(font_size))

    # ------------------------------------------------------------------
    def _pick_color(self) -> None:
        _rgb, hex_value = colorchooser.askcolor(color=self.color_var.get() or None, parent=self)
        if hex_value:
            safe_call(self._on_color, hex_value)

    def _emit_font_family(self) -> None:
        label = self.font_family_var.get()
        value = next((v for lbl, v in self._font_families if lbl == label), label)
        safe_call(self._on_font_family, value)

    def _emit_apply(self) -> None:
        safe_call(self._on_color, self.color_var.get())
        safe_call(self._on_apply)
        super()._on_close_clicked()

    def _on_close_clicked(self) -> None:
        safe_call(self._on_cancel)
        super()._on_close_clicked()


__all__ = ["StyleDialog"]
