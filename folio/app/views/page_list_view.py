from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, List, Optional, Sequence

from ...viewmodels.page_view import PageRow


class PageListView(ttk.Frame):
    """Sidebar listing pages in document order with reorder/delete actions (UI-only)."""

    OnIndex = Optional[Callable[[int], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_select: OnIndex = None,
        on_move_up: OnIndex = None,
        on_move_down: OnIndex = None,
        on_delete: OnIndex = None,
        on_delete_series: OnIndex = None,
    ) -> None:
        super().__init__(parent)
        self._on_select = on_select
        self._on_move_up = on_move_up
        self._on_move_down = on_move_down
        self._on_delete = on_delete
        self._on_delete_series = on_delete_series
        self._rows: List[PageRow] = []

        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        ttk.Label(self, text="Pages", style="Title.TLabel").grid(row=0, column=0, sticky="w", pady=(0, 6))

        self.tree = ttk.Treeview(self, columns=("thumb", "title", "caption"), show="headings", selectmode="browse")
        self.tree.heading("thumb", text="")
        self.tree.heading("title", text="Title")
        self.tree.heading("caption", text="Page")
        self.tree.column("thumb", width=34, anchor="center", stretch=False)
        self.tree.column("title", width=150, anchor="w")
        self.tree.column("caption", width=120, anchor="w")
        self.tree.grid(row=1, column=0, sticky="nsew")
        vbar = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        vbar.grid(row=1, column=1, sticky="ns")
        self.tree.configure(yscrollcommand=vbar.set)
        self.tree.bind("<<TreeviewSelect>>", self._handle_select)

        self.empty_label = ttk.Label(self, text="No pages yet", style="Subtle.TLabel")

        actions = ttk.Frame(self)
        actions.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(6, 0))
        ttk.Button(actions, text="↑", width=3, command=lambda: self._fire(self._on_move_up)).pack(side="left")
        ttk.Button(actions, text="↓", width=3, command=lambda: self._fire(self._on_move_down)).pack(
            side="left", padx=4
        )
        ttk.Button(actions, text="Delete", command=lambda: self._fire(self._on_delete)).pack(side="left", padx=(12, 4))
        self.btn_delete_series = ttk.Button(
            actions, text="Delete Project", command=lambda: self._fire(self._on_delete_series)
        )
        self.btn_delete_series.pack(side="left")

    # ------------------------------------------------------------------
    def set_rows(self, rows: Sequence[PageRow], selected: Optional[int] = None) -> None:
        self._rows = list(rows)
        self.tree.delete(*self.tree.get_children())
        for row in self._rows:
            thumb = "▣" if row.has_image else row.thumb_letter
            self.tree.insert("", "end", iid=str(row.index), values=(thumb, row.title, row.caption))
        if not self._rows:
            self.empty_label.grid(row=1, column=0, pady=20)
        else:
            self.empty_label.grid_forget()
        if selected is not None and 0 <= selected < len(self._rows):
            self.select(selected)
        self._refresh_buttons()

    def select(self, index: int) -> None:
        iid = str(index)
        if self.tree.exists(iid):
            self.tree.selection_set(iid)
            self.tree.see(iid)

    def selected_index(self) -> Optional[int]:
        selection = self.tree.selection()
        if not selection:
            return None
        return int(selection[0])

    def _fire(self, callback: OnIndex) -> None:
        index = self.selected_index()
        if callback and index is not None:
            callback(index)

    def _handle_select(self, _event: tk.Event) -> None:
        self._refresh_buttons()
        index = self.selected_index()
        if self._on_select and index is not None:
            self._on_select(index)

    def _refresh_buttons(self) -> None:
        index = self.selected_index()
        is_series_cover = index is not None and index < len(self._rows) and self._rows[index].kind == "series-cover"
        self.btn_delete_series.state(["!disabled"] if is_series_cover else ["disabled"])


__all__ = ["PageListView"]
