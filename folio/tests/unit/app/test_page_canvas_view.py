from __future__ import annotations

import tkinter as tk
from types import SimpleNamespace

import pytest
from tkinterdnd2 import COPY, TkinterDnD

from folio.app.views.page_canvas_view import PageCanvasView
from folio.domain.document import PortfolioDocument
from folio.domain.entities import SinglePage
from folio.domain.theme import THEME_PRESETS
from folio.viewmodels.page_view import build_cards

THEME = THEME_PRESETS["default"]


@pytest.fixture
def root():
    try:
        win = TkinterDnD.Tk()
    except (tk.TclError, RuntimeError) as exc:
        pytest.skip(f"Tk with tkdnd is not available: {exc}")
    win.withdraw()
    yield win
    win.destroy()


def _cards():
    return build_cards(PortfolioDocument(pages=[SinglePage(title="First"), SinglePage(title="Second")]))


def test_rerender_keeps_typed_inline_edit(root) -> None:
    edits = []
    view = PageCanvasView(root, on_edit_field=lambda *args: edits.append(args))
    cards = _cards()
    view.render(cards, THEME)

    label, card = view._field_labels[(cards[1].page_id, "title")]
    view._begin_edit(label, card, "title")
    view._editor.delete(0, "end")
    view._editor.insert(0, "Typed")

    view.render(cards, THEME)

    assert edits == []
    assert view._editor.get() == "Typed"
    assert view._editor_target[1] == "title"
    view._close_editor(commit=True)
    assert edits == [(1, "title", "Typed")]


def test_rerender_drops_edit_for_removed_page(root) -> None:
    edits = []
    view = PageCanvasView(root, on_edit_field=lambda *args: edits.append(args))
    cards = _cards()
    view.render(cards, THEME)
    label, card = view._field_labels[(cards[1].page_id, "title")]
    view._begin_edit(label, card, "title")

    view.render(cards[:1], THEME)

    assert view._editor is None
    assert view._editor_target is None
    assert edits == []


def test_drops_are_split_into_paths(root) -> None:
    bulk, slots = [], []
    view = PageCanvasView(
        root,
        on_drop_images=bulk.append,
        on_drop_image_on_page=lambda index, paths: slots.append((index, paths)),
    )

    assert view._on_bulk_drop(SimpleNamespace(data="{/pics/with space.png} /pics/b.jpg")) == COPY
    view._on_slot_drop(3, SimpleNamespace(data="/pics/c.png"))
    view._on_bulk_drop(SimpleNamespace(data=""))

    assert bulk == [("/pics/with space.png", "/pics/b.jpg")]
    assert slots == [(3, ("/pics/c.png",))]
