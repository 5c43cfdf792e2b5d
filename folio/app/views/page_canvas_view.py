"""Scrollable page canvas: one paper-colored card per page, edited in place.

Double-click a text element to edit it; Return (Ctrl+Return for multi-line
fields) or leaving the field commits, Escape cancels. An edit in progress
survives a re-render. Image files dropped on the canvas become new pages;
files dropped on an image slot replace that page's image.
"""

from __future__ import annotations

import io
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from PIL import Image as PILImage
from PIL import ImageTk
from tkinterdnd2 import COPY, DND_FILES

from ...domain.entities import CoverPage
from ...domain.theme import ThemeStyle
from ...viewmodels.page_view import PageCard

BASE_CARD_WIDTH = 560
A4_RATIO = 297 / 210
MULTILINE_FIELDS = ("desc", "statement")


def tk_font_family(theme: ThemeStyle) -> str:
    """First family of a CSS-like font list."""
    first = (theme.font_family or "").split(",")[0]
    return first.strip().strip("'\"") or "TkDefaultFont"


class PageCanvasView(ttk.Frame):
    """Renders page cards with the portfolio theme (UI-only)."""

    OnEdit = Optional[Callable[[int, str, str], None]]
    OnIndex = Optional[Callable[[int], None]]
    OnDrop = Optional[Callable[[Sequence[str]], None]]
    OnDropOnPage = Optional[Callable[[int, Sequence[str]], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_edit_field: OnEdit = None,
        on_attach_image: OnIndex = None,
        on_select: OnIndex = None,
        on_drop_images: OnDrop = None,
        on_drop_image_on_page: OnDropOnPage = None,
    ) -> None:
        super().__init__(parent)
        self._on_edit_field = on_edit_field
        self._on_attach_image = on_attach_image
        self._on_select = on_select
        self._on_drop_images = on_drop_images
        self._on_drop_image_on_page = on_drop_image_on_page
        self._photos: List[ImageTk.PhotoImage] = []
        self._cards: Dict[int, tk.Frame] = {}
        # (page_id, field) -> label showing that field, with its card
        self._field_labels: Dict[Tuple[str, str], Tuple[tk.Label, PageCard]] = {}
        self._zoom = 100
        self._editor: Optional[tk.Widget] = None
        self._editor_target: Optional[Tuple[PageCard, str]] = None

        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)
        self.canvas = tk.Canvas(self, highlightthickness=0)
        vbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=vbar.set)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        vbar.grid(row=0, column=1, sticky="ns")

        self.inner = ttk.Frame(self.canvas)
        self._window = self.canvas.create_window((0, 0), window=self.inner, anchor="n")

        self.inner.bind("<Configure>", lambda e: self.canvas.configure(scrollregion=self.canvas.bbox("all")))
        self.canvas.bind("<Configure>", self._on_canvas_configure)
        self.canvas.bind_all("<MouseWheel>", self._on_mousewheel)
        for target in (self.canvas, self.inner):
            self._register_drop(target, self._on_bulk_drop)

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------
    def _register_drop(self, widget: tk.Widget, handler: Callable[[tk.Event], str]) -> None:
        widget.drop_target_register(DND_FILES)
        widget.dnd_bind("<<Drop>>", handler)

    def _dropped_paths(self, event: tk.Event) -> Tuple[str, ...]:
        # tkdnd hands over a Tcl list; paths with spaces arrive brace-quoted
        return tuple(path for path in self.tk.splitlist(event.data) if path)

    def _on_bulk_drop(self, event: tk.Event) -> str:
        paths = self._dropped_paths(event)
        if paths and self._on_drop_images:
            self._on_drop_images(paths)
        return COPY

    def _on_slot_drop(self, index: int, event: tk.Event) -> str:
        paths = self._dropped_paths(event)
        if paths and self._on_drop_image_on_page:
            self._on_drop_image_on_page(index, paths)
        return COPY

    # ------------------------------------------------------------------
    def _on_canvas_configure(self, event: tk.Event) -> None:
        self.canvas.coords(self._window, event.width / 2, 0)

    def _on_mousewheel(self, event: tk.Event) -> None:
        delta = -1 * (event.delta // 120) if event.delta else 0
        self.canvas.yview_scroll(delta, "units")

    def set_zoom(self, percent: int) -> None:
        self._zoom = int(percent)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, cards: Sequence[PageCard], theme: ThemeStyle, chrome_bg: Optional[str] = None) -> None:
        held = self._detach_editor()
        for child in list(self.inner.winfo_children()):
            child.destroy()
        self._photos.clear()
        self._cards.clear()
        self._field_labels.clear()
        if chrome_bg:
            self.canvas.configure(bg=chrome_bg)

        if not cards:
            ttk.Label(
                self.inner,
                text="No pages yet. Add a project or some images to get started.",
                style="Subtle.TLabel",
            ).pack(padx=40, pady=40)
            return

        scale = self._zoom / 100.0
        width = int(BASE_CARD_WIDTH * scale)
        height = int(width * A4_RATIO)
        for card in cards:
            frame = tk.Frame(self.inner, width=width, height=height, bg=theme.paper, highlightthickness=1)
            frame.configure(highlightbackground=theme.muted)
            frame.pack(pady=12)
            frame.pack_propagate(False)
            frame.bind("<Button-1>", lambda e, idx=card.index: self._select(idx))
            self._register_drop(frame, self._on_bulk_drop)
            self._cards[card.index] = frame
            if card.has_image_slot:
                painter = self._paint_image_page
            elif card.kind == CoverPage.kind:
                painter = self._paint_cover
            else:
                painter = self._paint_series_cover
            painter(frame, card, theme, scale, width, height)

        if held is not None:
            self._restore_editor(*held)

    def scroll_to(self, index: int) -> None:
        frame = self._cards.get(index)
        if frame is None:
            return
        self.update_idletasks()
        total = max(1, self.inner.winfo_height())
        self.canvas.yview_moveto(frame.winfo_y() / total)

    def _select(self, index: int) -> None:
        if self._on_select:
            self._on_select(index)

    def _font(self, theme: ThemeStyle, scale: float, factor: float = 1.0, bold: bool = False):
        size = max(6, int(round(theme.font_size_px * factor * scale)))
        return (tk_font_family(theme), size, "bold") if bold else (tk_font_family(theme), size)

    def _text(
        self,
        parent: tk.Widget,
        card: PageCard,
        field: Optional[str],
        text: str,
        *,
        font,
        fg: str,
        bg: str,
        wrap: int = 0,
        anchor: str = "w",
    ) -> tk.Label:
        label = tk.Label(parent, text=text, font=font, fg=fg, bg=bg, wraplength=wrap, justify="left", anchor=anchor)
        if field is not None:
            label.configure(cursor="xterm")
            label.bind("<Double-Button-1>", lambda e: self._begin_edit(label, card, field))
            self._field_labels[(card.page_id, field)] = (label, card)
        return label

    def _paint_cover(self, frame: tk.Frame, card: PageCard, theme: ThemeStyle, scale: float, width: int, height: int) -> None:
        pad = int(40 * scale)
        body = tk.Frame(frame, bg=theme.paper)
        body.place(x=pad, rely=0.35, width=width - 2 * pad)
        wrap = int((width - 2 * pad) * 0.85)
        self._text(body, card, "portfolio_label", card.label.upper(), font=self._font(theme, scale, 0.85), fg=theme.muted, bg=theme.paper).pack(anchor="w", pady=(0, pad // 2))
        self._text(body, card, "name", card.heading, font=self._font(theme, scale, 2.6, bold=True), fg=theme.text, bg=theme.paper).pack(anchor="w")
        values = {name: value for name, value, _empty in card.editable}
        for field, factor, color in (("years", 1.3, theme.muted), ("statement", 1.0, theme.text)):
            if values.get(field):
                self._text(body, card, field, values[field], font=self._font(theme, scale, factor), fg=color, bg=theme.paper, wrap=wrap).pack(anchor="w", pady=(pad // 4, 0))
        for field in ("instagram", "username", "email"):
            if values.get(field):
                self._text(body, card, field, values[field], font=self._font(theme, scale, 0.9), fg=theme.muted, bg=theme.paper).pack(anchor="w", pady=(pad // 6, 0))

    def _paint_series_cover(self, frame: tk.Frame, card: PageCard, theme: ThemeStyle, scale: float, width: int, height: int) -> None:
        pad = int(40 * scale)
        body = tk.Frame(frame, bg=theme.paper)
        body.place(x=pad, rely=0.38, width=width - 2 * pad)
        wrap = int((width - 2 * pad) * 0.85)
        self._text(body, card, "title", card.heading, font=self._font(theme, scale, 2.2, bold=True), fg=theme.text, bg=theme.paper, wrap=wrap).pack(anchor="w")
        self._text(body, card, "year", card.year or "Year", font=self._font(theme, scale, 1.1), fg=theme.muted, bg=theme.paper).pack(anchor="w", pady=(pad // 4, 0))
        self._text(body, card, "desc", card.desc or "Description", font=self._font(theme, scale), fg=theme.text if card.desc else theme.muted, bg=theme.paper, wrap=wrap).pack(anchor="w", pady=(pad // 3, 0))
        self._text(body, card, None, card.info, font=self._font(theme, scale, 0.9), fg=theme.muted, bg=theme.paper).pack(anchor="w", pady=(pad // 2, 0))

    def _paint_image_page(self, frame: tk.Frame, card: PageCard, theme: ThemeStyle, scale: float, width: int, height: int) -> None:
        pad = int(32 * scale)
        if card.tag:
            self._text(frame, card, None, card.tag, font=self._font(theme, scale, 0.8), fg=theme.muted, bg=theme.paper).place(relx=1.0, x=-pad, y=pad // 3, anchor="ne")

        slot_w = width - 2 * pad
        slot_h = int(height * 0.72)
        slot = tk.Frame(frame, bg=theme.paper)
        slot.place(x=pad, y=pad, width=slot_w, height=slot_h)
        photo = self._photo_for(card, slot_w, slot_h)
        if photo is not None:
            image_label = tk.Label(slot, image=photo, bg=theme.paper)
        else:
            image_label = tk.Label(slot, text=card.image_placeholder, fg=theme.muted, bg=theme.paper, font=self._font(theme, scale), relief="groove")
        image_label.place(relx=0.5, rely=0.5, anchor="center", relwidth=1.0 if photo is None else None, relheight=1.0 if photo is None else None)
        image_label.bind("<Double-Button-1>", lambda e, idx=card.index: self._attach(idx))
        for target in (slot, image_label):
            self._register_drop(target, lambda e, idx=card.index: self._on_slot_drop(idx, e))
        ttk.Button(frame, text="Set image…", command=lambda idx=card.index: self._attach(idx)).place(relx=1.0, x=-pad, y=pad + slot_h + 4, anchor="ne")

        meta = tk.Frame(frame, bg=theme.paper)
        meta.place(x=pad, y=pad + slot_h + int(36 * scale), width=int(slot_w * 0.7))
        values = {name: value for name, value, _empty in card.editable}
        self._text(meta, card, "title", card.heading, font=self._font(theme, scale, 1.0, bold=True), fg=theme.text, bg=theme.paper).pack(anchor="w")
        self._text(meta, card, "desc", values.get("desc") or "Description", font=self._font(theme, scale, 0.9), fg=theme.muted, bg=theme.paper, wrap=int(slot_w * 0.7)).pack(anchor="w")
        self._text(frame, card, "year", card.year or "Year", font=self._font(theme, scale), fg=theme.muted, bg=theme.paper, anchor="e").place(relx=1.0, x=-pad, y=pad + slot_h + int(36 * scale), anchor="ne")

    def _photo_for(self, card: PageCard, max_w: int, max_h: int) -> Optional[ImageTk.PhotoImage]:
        if card.image is None:
            return None
        try:
            with PILImage.open(io.BytesIO(card.image.data)) as img:
                img.thumbnail((max_w, max_h))
                photo = ImageTk.PhotoImage(img.copy())
        except (OSError, ValueError):
            return None
        self._photos.append(photo)
        return photo

    def _attach(self, index: int) -> None:
        if self._on_attach_image:
            self._on_attach_image(index)

    # ------------------------------------------------------------------
    # Inline editing
    # ------------------------------------------------------------------
    def _begin_edit(self, label: tk.Label, card: PageCard, field: str, text: Optional[str] = None) -> None:
        self._close_editor(commit=True)
        if text is not None:
            current = text
        else:
            current = next((value for name, value, _empty in card.editable if name == field), "")
        parent = label.master
        if field in MULTILINE_FIELDS:
            editor: tk.Widget = tk.Text(parent, height=4, wrap="word", font=label.cget("font"))
            editor.insert("1.0", current)
            editor.bind("<Control-Return>", lambda e: self._close_editor(commit=True) or "break")
        else:
            editor = tk.Entry(parent, font=label.cget("font"))
            editor.insert(0, current)
            editor.bind("<Return>", lambda e: self._close_editor(commit=True))
        editor.bind("<Escape>", lambda e: self._close_editor(commit=False))
        editor.bind("<FocusOut>", lambda e: self._close_editor(commit=True))
        editor.place(in_=label, x=0, y=0, relwidth=1.0, width=40)
        editor.focus_set()
        self._editor = editor
        self._editor_target = (card, field)

    def _take_editor(self) -> Optional[Tuple[PageCard, str, str]]:
        """Destroy the open editor and return its target and typed text."""
        editor, target = self._editor, self._editor_target
        self._editor, self._editor_target = None, None
        if editor is None or target is None:
            return None
        if isinstance(editor, tk.Text):
            value = editor.get("1.0", "end-1c")
        else:
            value = editor.get()
        editor.destroy()
        card, field = target
        return card, field, value

    def _close_editor(self, *, commit: bool) -> None:
        taken = self._take_editor()
        if taken is None:
            return
        card, field, value = taken
        if commit and self._on_edit_field:
            self._on_edit_field(card.index, field, value)

    def _detach_editor(self) -> Optional[Tuple[str, str, str]]:
        taken = self._take_editor()
        if taken is None:
            return None
        card, field, value = taken
        return card.page_id, field, value

    def _restore_editor(self, page_id: str, field: str, value: str) -> None:
        entry = self._field_labels.get((page_id, field))
        if entry is None:
            return
        label, card = entry
        self._begin_edit(label, card, field, text=value)


__all__ = ["PageCanvasView", "tk_font_family"]
