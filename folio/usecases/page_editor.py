"""Page editing engine: every mutation of the open portfolio goes through here.

The editor works on the session's current :class:`PortfolioDocument` and calls
``on_change`` after each successful mutation; the session turns that into the
dirty flag, autosave re-arm and a re-render.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import replace
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from ..domain.document import PortfolioDocument
from ..domain.entities import (
    DEFAULT_PORTFOLIO_LABEL,
    IMAGE_PAGE_TYPES,
    CoverPage,
    SeriesCoverPage,
    SeriesImagePage,
    SinglePage,
    UserIdentity,
)
from ..domain.errors import PageFieldError
from ..domain.images import ImageData
from ..domain.theme import ThemeStyle, resolve_theme
from .image_attach import ImageAttachQueue, ImageSlot

_log = logging.getLogger(__name__)

IdentityFields = Mapping[str, Any]


def _noop() -> None:
    """Default change listener."""


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class PageEditor:
    """Mutation contract over the open document."""

    def __init__(
        self,
        document: PortfolioDocument,
        attach_queue: ImageAttachQueue,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.document = document
        self.attach_queue = attach_queue
        self.on_change = on_change or _noop

    def _changed(self) -> None:
        self.on_change()

    # ---- Identity / theme ----
    def set_identity(self, identity: UserIdentity) -> CoverPage:
        cover = self.document.set_identity(identity)
        self._changed()
        return cover

    def update_identity(self, values: IdentityFields, preset_key: Any = None) -> UserIdentity:
        """Apply an identity form submit.

        Text fields are stripped; an empty portfolio label falls back to the
        default. Passing ``preset_key`` switches the preset (overrides are
        dropped when it differs from the current one).
        """
        allowed = set(CoverPage.EDITABLE_FIELDS)
        unknown = set(values) - allowed
        if unknown:
            raise PageFieldError(f"Unknown identity fields: {', '.join(sorted(unknown))}")
        changes = {name: _clean(value) for name, value in values.items()}
        if "portfolio_label" in changes and not changes["portfolio_label"]:
            changes["portfolio_label"] = DEFAULT_PORTFOLIO_LABEL
        identity = self.document.identity.with_fields(**changes)
        if preset_key is not None:
            identity = identity.with_preset(preset_key)
        self.set_identity(identity)
        return identity

    def apply_theme(self, preset_key: Any, theme: Union[ThemeStyle, Mapping[str, Any], None]) -> UserIdentity:
        """Commit an edited theme: preset defaults with ``theme`` merged on top."""
        current = self.document.identity
        resolved = resolve_theme(preset_key, theme)
        identity = replace(current, theme_preset=preset_key, theme=resolved)
        self.set_identity(identity)
        return identity

    # ---- Page creation ----
    def append_single_page(
        self,
        image: Optional[ImageData] = None,
        title: Optional[str] = None,
        year: Optional[str] = None,
        desc: Optional[str] = None,
    ) -> int:
        if title is None:
            title = f"Image {self.document.count_single_pages() + 1}"
        page = SinglePage(title=title, year=year or "", desc=desc or "")
        index = self.document.append(page)
        self._changed()
        if image is not None:
            self.attach_image(index, image)
        return index

    def add_images(self, images: Iterable[ImageData]) -> List[Future]:
        """One single page per image; capture years are filled in later."""
        futures: List[Future] = []
        for image in images:
            index = self.append_single_page()
            futures.append(self.attach_image(index, image))
        return futures

    def append_series(self, title: str, year: str, desc: str, image_count: int) -> int:
        """Append a series cover and ``image_count`` members; returns the cover index."""
        count = int(image_count)
        if count < 0:
            raise ValueError("A series needs a non-negative image count.")
        title = _clean(title)
        key = self.document.unique_series_key(title)
        cover_index = self.document.append(
            SeriesCoverPage(title=title, year=_clean(year), desc=_clean(desc), total=count, series_key=key)
        )
        for ordinal in range(1, count + 1):
            self.document.append(
                SeriesImagePage(title=f"Image {ordinal}", series_key=key, series_total=count)
            )
        self._changed()
        return cover_index

    # ---- Images ----
    def attach_image(self, index: int, image: ImageData) -> Future:
        """Put ``image`` on the page and schedule capture-year extraction.

        The returned future resolves to the year written to the page, or
        ``None`` when nothing was written (no EXIF year, a newer attach on the
        same page, or the page was deleted meanwhile).
        """
        page = self.document.page_at(index)
        if not isinstance(page, IMAGE_PAGE_TYPES):
            raise PageFieldError(f"Page {index} ({page.kind}) does not hold an image.")
        if not isinstance(image, ImageData):
            raise TypeError("attach_image expects ImageData.")
        page.image = image
        self._changed()
        page_id = page.page_id
        return self.attach_queue.submit(page_id, image, lambda year: self._apply_year(page_id, year))

    def _apply_year(self, page_id: str, year: str) -> Optional[str]:
        index = self.document.index_of(page_id)
        if index is None:
            _log.debug("Capture year for removed page %s ignored", page_id)
            return None
        page = self.document.pages[index]
        page.year = year
        self._changed()
        return year

    def image_state(self, index: int) -> ImageSlot:
        page = self.document.page_at(index)
        if page.image is None:
            return ImageSlot.EMPTY
        if self.attach_queue.is_pending(page.page_id):
            return ImageSlot.PENDING
        return ImageSlot.POPULATED

    # ---- Inline edits ----
    def edit_field(self, index: int, field_name: str, value: Any) -> str:
        """Commit an inline text edit; returns the stored (stripped) value."""
        page = self.document.page_at(index)
        if field_name not in page.EDITABLE_FIELDS:
            raise PageFieldError(f"{page.kind} pages have no editable field {field_name!r}.")
        text = _clean(value)
        if isinstance(page, CoverPage):
            if field_name == "portfolio_label" and not text:
                text = DEFAULT_PORTFOLIO_LABEL
            self.set_identity(self.document.identity.with_fields(**{field_name: text}))
            return text
        setattr(page, field_name, text)
        self._changed()
        return text

    # ---- Reorder / delete ----
    def swap(self, i: int, j: int) -> None:
        self.document.swap(i, j)
        self._changed()

    def move_up(self, index: int) -> int:
        self.swap(index, index - 1)
        return index - 1

    def move_down(self, index: int) -> int:
        self.swap(index, index + 1)
        return index + 1

    def delete_page(self, index: int) -> None:
        self.document.remove(index)
        self._changed()

    def delete_series(self, index: int) -> int:
        """Remove a series cover together with its contiguous members."""
        page = self.document.page_at(index)
        if not isinstance(page, SeriesCoverPage):
            raise PageFieldError(f"Page {index} is not a series cover.")
        removed = self.document.remove_series(index)
        self._changed()
        return len(removed)


__all__ = ["PageEditor"]
