from __future__ import annotations

from folio.domain.document import PortfolioDocument
from folio.domain.entities import (
    CoverPage,
    SeriesCoverPage,
    SeriesImagePage,
    SinglePage,
    UserIdentity,
)
from folio.domain.images import ImageData
from folio.viewmodels import page_view
from folio.viewmodels.page_view import (
    NAME_PLACEHOLDER,
    PROJECT_PLACEHOLDER,
    TITLE_PLACEHOLDER,
    build_cards,
    build_rows,
)


def _document() -> PortfolioDocument:
    doc = PortfolioDocument(
        identity=UserIdentity(instagram="https://instagram.com/a", email="a@x.org"),
        pages=[
            SinglePage(image=ImageData(mime="image/png", data=b"x")),
            SeriesCoverPage(title="", total=2, series_key="S"),
            SeriesImagePage(title="", series_key="S", series_total=2),
            SeriesImagePage(title="Detail", series_key="S", series_total=2),
        ],
    )
    doc.sync_cover()
    return doc


def test_cards_fill_placeholders() -> None:
    cover, single, series, first, second = build_cards(_document())

    assert cover.heading == NAME_PLACEHOLDER
    assert cover.label == "Portfolio"
    assert cover.links == ("https://instagram.com/a", "a@x.org")
    assert ("name", "", True) in cover.editable

    assert single.heading == TITLE_PLACEHOLDER
    assert single.has_image_slot is True
    assert single.image_placeholder == "Drop image here"

    assert series.heading == PROJECT_PLACEHOLDER
    assert series.info == "2 images · Project"
    assert series.has_image_slot is False

    assert first.heading == "Image 1"
    assert first.tag == "Image 1 of 2"
    assert first.image_placeholder == "Drop image for: Image 1"
    assert second.tag == "Image 2 of 2"
    assert second.heading == "Detail"


def test_cards_follow_reordering() -> None:
    doc = _document()
    doc.swap(3, 4)
    cards = build_cards(doc)
    assert cards[3].heading == "Detail"
    assert cards[3].tag == "Image 1 of 2"


def test_rows_summarize_pages() -> None:
    rows = build_rows(_document())

    assert [r.kind for r in rows] == ["cover", "single", "series-cover", "series-image", "series-image"]
    assert rows[0].thumb_letter == "C"
    assert rows[1].thumb_letter == "P"
    assert rows[1].has_image is True
    assert rows[0].title == "cover"
    assert rows[4].title == "Detail"
    assert rows[2].caption == "series-cover: page 3"
    assert isinstance(_document().pages[0], CoverPage)


def test_module_is_documented() -> None:
    assert page_view.__doc__ is not None
    assert page_view.__doc__.startswith("Render projection")
