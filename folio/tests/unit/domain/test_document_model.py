from __future__ import annotations

import pytest

from folio.domain.document import PortfolioDocument
from folio.domain.entities import (
    CoverPage,
    SeriesCoverPage,
    SeriesImagePage,
    SinglePage,
    UserIdentity,
)
from folio.domain.errors import PageIndexError, PageMoveError


def _series(key: str, count: int):
    pages = [SeriesCoverPage(title=key, total=count, series_key=key)]
    pages += [SeriesImagePage(title=f"Image {i}", series_key=key, series_total=count) for i in range(1, count + 1)]
    return pages


def test_sync_cover_inserts_at_front_once() -> None:
    doc = PortfolioDocument(pages=[SinglePage(title="a")])
    doc.set_identity(UserIdentity(name="A. Artist"))
    doc.set_identity(UserIdentity(name="B. Artist"))

    assert isinstance(doc.pages[0], CoverPage)
    assert sum(isinstance(p, CoverPage) for p in doc.pages) == 1
    assert doc.pages[0].identity.name == "B. Artist"


def test_sync_cover_keeps_existing_position() -> None:
    cover = CoverPage()
    doc = PortfolioDocument(pages=[SinglePage(), cover])
    doc.set_identity(UserIdentity(name="X"))

    assert doc.cover_index() == 1
    assert doc.pages[1] is cover
    assert cover.identity.name == "X"


def test_series_ordinals_follow_document_order() -> None:
    doc = PortfolioDocument(pages=_series("A", 2) + [SinglePage()] + _series("B", 1))
    assert doc.series_ordinals() == [0, 1, 2, 0, 0, 1]

    doc.swap(1, 2)
    assert doc.pages[1].title == "Image 2"
    assert doc.series_ordinals()[1:3] == [1, 2]


def test_swap_twice_restores_order() -> None:
    doc = PortfolioDocument(pages=[SinglePage(title=str(i)) for i in range(4)])
    before = list(doc.pages)
    doc.swap(0, 3)
    doc.swap(0, 3)
    assert doc.pages == before


def test_swap_rejects_same_and_out_of_range() -> None:
    doc = PortfolioDocument(pages=[SinglePage(), SinglePage()])
    with pytest.raises(PageMoveError):
        doc.swap(1, 1)
    with pytest.raises(PageIndexError):
        doc.swap(0, 2)
    with pytest.raises(PageIndexError):
        doc.swap(-1, 0)


def test_remove_and_index_of() -> None:
    first, second = SinglePage(title="a"), SinglePage(title="b")
    doc = PortfolioDocument(pages=[first, second])

    assert doc.index_of(second.page_id) == 1
    assert doc.remove(0) is first
    assert doc.index_of(first.page_id) is None
    with pytest.raises(PageIndexError):
        doc.remove(5)


def test_unique_series_key_suffixes_collisions() -> None:
    doc = PortfolioDocument(pages=_series("Show", 1))
    assert doc.unique_series_key("Show") == "Show (2)"
    doc.pages += _series("Show (2)", 1)
    assert doc.unique_series_key("Show") == "Show (3)"
    assert doc.unique_series_key("Other") == "Other"


def test_series_block_stops_at_foreign_page() -> None:
    pages = _series("A", 2) + [SinglePage()] + _series("A", 1)[1:]
    doc = PortfolioDocument(pages=pages)

    assert list(doc.series_block(0)) == [0, 1, 2]
    assert list(doc.series_block(3)) == [3]
    removed = doc.remove_series(0)
    assert len(removed) == 3
    assert [p.kind for p in doc.pages] == ["single", "series-image"]


def test_count_single_pages() -> None:
    doc = PortfolioDocument(pages=[CoverPage(), SinglePage(), SinglePage()] + _series("S", 1))
    assert doc.count_single_pages() == 2
