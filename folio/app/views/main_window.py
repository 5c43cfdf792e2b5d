"""
MainWindowView
---------------
Tkinter main window for Folio following MVVM + Hexagonal architecture.
This file contains **only View code**: no file I/O, no document logic. It
exposes callback hooks that are connected by ``folio.app.main.App``.

Notes:
- The window provides:
  * Menu bar (File / Edit / View) and a toolbar with the core actions
  * Left area for the PageListView
  * Right area for the PageCanvasView
  * StatusBar at the bottom (path, unsaved marker, zoom, messages)
- The root is a ``TkinterDnD.Tk`` so child views can register as file drop
  targets.
- All external interactions are signaled via callbacks passed to the constructor.
"""
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from tkinterdnd2 import TkinterDnD


class MainWindowView(TkinterDnD.Tk):
    """Top-level application window.

    UI-only: it defines layout containers and wires menu/toolbar events to
    callbacks provided by the App. The page list and canvas views are created
    by the App and mounted into the host frames.
    """

    # ---- Callback type aliases ----
    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_new: OnVoid = None,
        on_open: OnVoid = None,
        on_save: OnVoid = None,
        on_save_as: OnVoid = None,
        on_export_pdf: OnVoid = None,
        on_open_preferences: OnVoid = None,
        on_edit_identity: OnVoid = None,
        on_edit_style: OnVoid = None,
        on_add_images: OnVoid = None,
        on_add_project: OnVoid = None,
        on_zoom_in: OnVoid = None,
        on_zoom_out: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__()

        # ---- Window basics ----
        self.title("Folio")
        self.geometry("1280x860")
        self.minsize(960, 640)

        self._on_new = on_new
        self._on_open = on_open
        self._on_save = on_save
        self._on_save_as = on_save_as
        self._on_export_pdf = on_export_pdf
        self._on_open_preferences = on_open_preferences
        self._on_edit_identity = on_edit_identity
        self._on_edit_style = on_edit_style
        self._on_add_images = on_add_images
        self._on_add_project = on_add_project
        self._on_zoom_in = on_zoom_in
        self._on_zoom_out = on_zoom_out
        self._on_close = on_close

        self._path_label = "Untitled"
        self._dirty = False

        # ---- High-level layout: 3 rows (Toolbar, Main, Status) ----
        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_menu()
        self._build_toolbar(self)
        self._build_main_area(self)
        self._build_statusbar(self)

        self.protocol("WM_DELETE_WINDOW", self._handle_close)

        self.bind("<Control-n>", lambda e: self._fire(self._on_new))
        self.bind("<Control-o>", lambda e: self._fire(self._on_open))
        self.bind("<Control-s>", lambda e: self._fire(self._on_save))
        self.bind("<Control-S>", lambda e: self._fire(self._on_save_as))
        self.bind("<Control-p>", lambda e: self._fire(self._on_export_pdf))
        self.bind("<Control-plus>", lambda e: self._fire(self._on_zoom_in))
        self.bind("<Control-equal>", lambda e: self._fire(self._on_zoom_in))
        self.bind("<Control-minus>", lambda e: self._fire(self._on_zoom_out))

    @staticmethod
    def _fire(callback: OnVoid) -> None:
        if callback:
            callback()

    def _handle_close(self) -> None:
        if self._on_close:
            self._on_close()
        else:
            self.destroy()

    # ------------------------------------------------------------------
    # Menu / Toolbar
    # ------------------------------------------------------------------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self)

        file_menu = tk.Menu(menubar, tearoff=False)
        file_menu.add_command(label="New Portfolio", accelerator="Ctrl+N", command=lambda: self._fire(self._on_new))
        file_menu.add_command(label="Open…", accelerator="Ctrl+O", command=lambda: self._fire(self._on_open))
        file_menu.add_command(label="Save", accelerator="Ctrl+S", command=lambda: self._fire(self._on_save))
        file_menu.add_command(label="Save As…", accelerator="Ctrl+Shift+S", command=lambda: self._fire(self._on_save_as))
        file_menu.add_separator()
        file_menu.add_command(label="Export PDF…", accelerator="Ctrl+P", command=lambda: self._fire(self._on_export_pdf))
        file_menu.add_separator()
        file_menu.add_command(label="Preferences…", command=lambda: self._fire(self._on_open_preferences))
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self._handle_close)
        menubar.add_cascade(label="File", menu=file_menu)

        edit_menu = tk.Menu(menubar, tearoff=False)
        edit_menu.add_command(label="Artist Details…", command=lambda: self._fire(self._on_edit_identity))
        edit_menu.add_command(label="Style…", command=lambda: self._fire(self._on_edit_style))
        edit_menu.add_separator()
        edit_menu.add_command(label="Add Images…", command=lambda: self._fire(self._on_add_images))
        edit_menu.add_command(label="Add Project…", command=lambda: self._fire(self._on_add_project))
        menubar.add_cascade(label="Edit", menu=edit_menu)

        view_menu = tk.Menu(menubar, tearoff=False)
        view_menu.add_command(label="Zoom In", accelerator="Ctrl++", command=lambda: self._fire(self._on_zoom_in))
        view_menu.add_command(label="Zoom Out", accelerator="Ctrl+-", command=lambda: self._fire(self._on_zoom_out))
        menubar.add_cascade(label="View", menu=view_menu)

        self.config(menu=menubar)

    def _build_toolbar(self, parent: tk.Widget) -> None:
        toolbar = ttk.Frame(parent)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))

        ttk.Button(toolbar, text="Add Images", style="Primary.TButton", command=self._on_add_images).grid(
            row=0, column=0, padx=(0, 6)
        )
        ttk.Button(toolbar, text="Add Project", command=self._on_add_project).grid(row=0, column=1, padx=6)

        ttk.Button(toolbar, text="Artist Details", command=self._on_edit_identity).grid(
            row=0, column=2, padx=(24, 6)
        )
        ttk.Button(toolbar, text="Style", command=self._on_edit_style).grid(row=0, column=3, padx=6)

        ttk.Button(toolbar, text="Save", command=self._on_save).grid(row=0, column=4, padx=(24, 6))
        ttk.Button(toolbar, text="Export PDF", command=self._on_export_pdf).grid(row=0, column=5, padx=6)

    # ------------------------------------------------------------------
    # Main Area (split: left page list, right canvas)
    # ------------------------------------------------------------------
    def _build_main_area(self, parent: tk.Widget) -> None:
        content = ttk.Frame(parent)
        content.grid(row=1, column=0, sticky="nsew", padx=8, pady=4)
        content.rowconfigure(0, weight=1)
        content.columnconfigure(0, weight=0, minsize=300)
        content.columnconfigure(1, weight=1)

        self.page_list_host = ttk.Frame(content)
        self.page_list_host.grid(row=0, column=0, sticky="nsew", padx=(0, 8))

        self.canvas_host = ttk.Frame(content)
        self.canvas_host.grid(row=0, column=1, sticky="nsew")

    # ------------------------------------------------------------------
    # StatusBar
    # ------------------------------------------------------------------
    def _build_statusbar(self, parent: tk.Widget) -> None:
        status = ttk.Frame(parent)
        status.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 8))
        status.columnconfigure(1, weight=1)

        self.lbl_path = ttk.Label(status, text=self._path_label, style="Subtle.TLabel")
        self.lbl_path.grid(row=0, column=0, sticky="w")

        self.status_message_var = tk.StringVar(value="Ready.")
        ttk.Label(status, textvariable=self.status_message_var).grid(row=0, column=1, sticky="e", padx=12)

        self.lbl_zoom = ttk.Label(status, text="100%", style="Subtle.TLabel")
        self.lbl_zoom.grid(row=0, column=2, sticky="e")

    # ------------------------------------------------------------------
    # Public API (called by the App)
    # ------------------------------------------------------------------
    def show_toast(self, message: str, level: str = "info") -> None:
        """Lightweight user feedback in the statusbar."""
        self.status_message_var.set(message)

    def set_document_path(self, path: Optional[str]) -> None:
        self._path_label = path or "Untitled"
        self._refresh_title()

    def set_dirty(self, dirty: bool) -> None:
        self._dirty = bool(dirty)
        self._refresh_title()

    def set_zoom(self, percent: int) -> None:
        self.lbl_zoom.configure(text=f"{int(percent)}%")

    def mount(self, host: tk.Widget, view: tk.Widget) -> None:
        """Mount a child view created with ``host`` as parent."""
        for child in list(host.winfo_children()):
            if child is not view:
                child.destroy()
        view.pack(fill="both", expand=True)

    def _refresh_title(self) -> None:
        marker = " •" if self._dirty else ""
        self.lbl_path.configure(text=f"{self._path_label}{marker}")
        name = self._path_label.replace("\\", "/").rsplit("/", 1)[-1]
        self.title(f"{name}{marker} – Folio")


__all__ = ["MainWindowView"]
