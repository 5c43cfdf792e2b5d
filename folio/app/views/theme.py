"""Shared visual theme for Folio desktop views.

The module centralizes ttk style tokens so all views render the app chrome
(light or dark) without carrying styling logic in each view class. Page
cards are painted with the portfolio's own theme, not with these tokens.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Dict

LIGHT: Dict[str, str] = {
    "bg": "#f3f5f9",
    "card_bg": "#ffffff",
    "border": "#d9dfeb",
    "primary": "#2457ff",
    "primary_active": "#1b45ce",
    "text": "#1f2937",
    "muted": "#64748b",
    "hover": "#edf2ff",
    "selected": "#d9e4ff",
    "field": "#ffffff",
}

DARK: Dict[str, str] = {
    "bg": "#1b1d22",
    "card_bg": "#24272e",
    "border": "#3a3f4b",
    "primary": "#5b7cff",
    "primary_active": "#4664e0",
    "text": "#e5e7eb",
    "muted": "#9aa3b2",
    "hover": "#2f3440",
    "selected": "#34406a",
    "field": "#2a2d35",
}


def palette(dark: bool) -> Dict[str, str]:
    return DARK if dark else LIGHT


def apply_app_theme(root: tk.Misc, dark: bool = False) -> Dict[str, str]:
    """Apply a cohesive ttk + tk visual theme to the full application.

    Args:
        root: Root Tk object or any widget tied to the app Tcl interpreter.
        dark: Use the dark chrome palette.

    Returns:
        The palette that was applied, for views drawing on plain tk widgets.
    """
    tokens = palette(dark)
    style = ttk.Style(root)
    if "clam" in style.theme_names():
        style.theme_use("clam")

    bg = tokens["bg"]
    card_bg = tokens["card_bg"]
    border = tokens["border"]
    text = tokens["text"]

    root.option_add("*Font", "TkDefaultFont 10")
    root.configure(bg=bg)

    style.configure(".", background=bg, foreground=text)
    style.configure("TFrame", background=bg)
    style.configure("Card.TFrame", background=card_bg, relief="flat", borderwidth=1)
    style.configure("TLabelframe", background=bg, bordercolor=border, relief="solid", borderwidth=1)
    style.configure("TLabelframe.Label", foreground=text, background=bg, font=("TkDefaultFont", 10, "bold"))
    style.configure("TLabel", background=bg, foreground=text)
    style.configure("Subtle.TLabel", background=bg, foreground=tokens["muted"])
    style.configure("Title.TLabel", background=bg, foreground=text, font=("TkDefaultFont", 14, "bold"))
    style.configure("TRadiobutton", background=bg, foreground=text)
    style.configure("TCheckbutton", background=bg, foreground=text)

    style.configure("TButton", padding=(10, 6), background=card_bg, foreground=text, bordercolor=border, relief="flat")
    style.map("TButton", background=[("active", tokens["hover"])])
    style.configure("Primary.TButton", background=tokens["primary"], foreground="#ffffff", bordercolor=tokens["primary"])
    style.map("Primary.TButton", background=[("active", tokens["primary_active"])])

    style.configure("Treeview", rowheight=34, fieldbackground=card_bg, background=card_bg, foreground=text)
    style.configure("Treeview.Heading", background=tokens["hover"], foreground=text, relief="flat")
    style.map("Treeview", background=[("selected", tokens["selected"])], foreground=[("selected", text)])

    style.configure("TEntry", fieldbackground=tokens["field"], foreground=text, bordercolor=border)
    style.configure("TCombobox", fieldbackground=tokens["field"], foreground=text, bordercolor=border)
    style.configure("TSpinbox", fieldbackground=tokens["field"], foreground=text, bordercolor=border)
    return tokens


__all__ = ["DARK", "LIGHT", "apply_app_theme", "palette"]
