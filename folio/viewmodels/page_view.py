"""Render projection of the document: page cards for the canvas and PDF, rows for the page list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..domain.document import PortfolioDocument
from ..domain.entities import (
    DEFAULT_PORTFOLIO_LABEL,
    CoverPage,
    Page,
    SeriesCoverPage,
    SeriesImagePage,
    SinglePage,
)
from ..domain.images import ImageData

NAME_PLACEHOLDER = "Your Name"
TITLE_PLACEHOLDER = "Untitled"
PROJECT_PLACEHOLDER = "Untitled Project"

# (field name, display text, placeholder shown when empty)
CardField = Tuple[str, str, bool]


@dataclass(frozen=True)
class PageCard:
    """Everything a view needs to draw one page."""

    index: int
    kind: str
    page_id: str
    heading: str
    """Main line: artist name, page title or project title (placeholder-filled)."""
    label: str = ""
    """Small caption above the heading (cover portfolio label)."""
    subheading: str = ""
    year: str = ""
    desc: str = ""
    tag: str = ""
    """Series position, e.g. ``Image 2 of 5``."""
    info: str = ""
    """Series summary, e.g. ``5 images · Project``."""
    links: Tuple[str, ...] = ()
    image: Optional[ImageData] = None
    image_placeholder: str = ""
    editable: Tuple[CardField, ...] = ()
    """Inline-editable fields in display order."""

    @property
    def has_image_slot(self) -> bool:
        return self.kind in (SinglePage.kind, SeriesImagePage.kind)


@dataclass(frozen=True)
class PageRow:
    index: int
    kind: str
    title: str
    thumb_letter: str
    has_image: bool

    @property
    def caption(self) -> str:
        return f"{self.kind}: page {self.index + 1}"


def _field(name: str, value: str) -> CardField:
    return (name, value, not value)


def _cover_card(index: int, page: CoverPage) -> PageCard:
    ident = page.identity
    links = tuple(value for value in (ident.instagram, ident.username, ident.email) if value)
    return PageCard(
        index=index,
        kind=page.kind,
        page_id=page.page_id,
        heading=ident.name or NAME_PLACEHOLDER,
        label=ident.portfolio_label or DEFAULT_PORTFOLIO_LABEL,
        subheading=ident.years,
        desc=ident.statement,
        links=links,
        editable=tuple(_field(name, getattr(ident, name)) for name in CoverPage.EDITABLE_FIELDS),
    )


def _single_card(index: int, page: SinglePage) -> PageCard:
    return PageCard(
        index=index,
        kind=page.kind,
        page_id=page.page_id,
        heading=page.title or TITLE_PLACEHOLDER,
        year=page.year,
        desc=page.desc,
        image=page.image,
        image_placeholder="Drop image here",
        editable=(_field("title", page.title), _field("desc", page.desc), _field("year", page.year)),
    )


def _series_cover_card(index: int, page: SeriesCoverPage) -> PageCard:
    return PageCard(
        index=index,
        kind=page.kind,
        page_id=page.page_id,
        heading=page.title or PROJECT_PLACEHOLDER,
        year=page.year,
        desc=page.desc,
        info=f"{page.total or 0} images · Project",
        editable=(_field("title", page.title), _field("year", page.year), _field("desc", page.desc)),
    )


def _series_image_card(index: int, page: SeriesImagePage, ordinal: int) -> PageCard:
    title = page.title or f"Image {ordinal}"
    return PageCard(
        index=index,
        kind=page.kind,
        page_id=page.page_id,
        heading=title,
        year=page.year,
        desc=page.desc,
        tag=f"Image {ordinal} of {page.series_total}",
        image=page.image,
        image_placeholder=f"Drop image for: {title}",
        editable=(_field("title", page.title), _field("desc", page.desc), _field("year", page.year)),
    )


def build_card(index: int, page: Page, ordinal: int = 0) -> PageCard:
    if isinstance(page, CoverPage):
        return _cover_card(index, page)
    if isinstance(page, SinglePage):
        return _single_card(index, page)
    if isinstance(page, SeriesCoverPage):
        return _series_cover_card(index, page)
    if isinstance(page, SeriesImagePage):
        return _series_image_card(index, page, ordinal)
    raise TypeError(f"Unsupported page type: {type(page).__name__}")


def build_cards(document: PortfolioDocument) -> List[PageCard]:
    ordinals = document.series_ordinals()
    return [build_card(idx, page, ordinals[idx]) for idx, page in enumerate(document.pages)]


def build_rows(document: PortfolioDocument) -> List[PageRow]:
    rows: List[PageRow] = []
    for idx, page in enumerate(document.pages):
        if isinstance(page, CoverPage):
            title = page.identity.name
        else:
            title = page.title
        rows.append(
            PageRow(
                index=idx,
                kind=page.kind,
                title=title or page.kind,
                thumb_letter="C" if isinstance(page, CoverPage) else "P",
                has_image=page.image is not None,
            )
        )
    return rows


__all__ = ["PageCard", "PageRow", "build_card", "build_cards", "build_rows"]
