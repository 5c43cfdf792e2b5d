"""Ordered page sequence paired with the user identity.

The cover page is always derived from the identity: it is inserted at position
0 when missing and overwritten in place otherwise. Series ordinals are derived
from document order on demand.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .entities import CoverPage, Page, SeriesCoverPage, SeriesImagePage, SinglePage, UserIdentity
from .errors import PageIndexError, PageMoveError


class PortfolioDocument:
    """Aggregate of pages and identity; structural mutations only, no dirty state."""

    def __init__(
        self,
        identity: Optional[UserIdentity] = None,
        pages: Optional[List[Page]] = None,
    ) -> None:
        self.identity: UserIdentity = identity or UserIdentity()
        self.pages: List[Page] = list(pages or [])

    # ---- Read helpers ----
    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PortfolioDocument):
            return NotImplemented
        return self.identity == other.identity and self.pages == other.pages

    def __repr__(self) -> str:
        kinds = ", ".join(page.kind for page in self.pages)
        return f"PortfolioDocument(name={self.identity.name!r}, pages=[{kinds}])"

    def page_at(self, index: int) -> Page:
        self.check_index(index)
        return self.pages[index]

    def check_index(self, index: int) -> None:
        if not isinstance(index, int) or index < 0 or index >= len(self.pages):
            raise PageIndexError(index, len(self.pages))

    def index_of(self, page_id: str) -> Optional[int]:
        for idx, page in enumerate(self.pages):
            if page.page_id == page_id:
                return idx
        return None

    def cover_index(self) -> Optional[int]:
        for idx, page in enumerate(self.pages):
            if isinstance(page, CoverPage):
                return idx
        return None

    def count_single_pages(self) -> int:
        return sum(1 for page in self.pages if isinstance(page, SinglePage))

    def unique_series_key(self, title: str) -> str:
        """Series key for a new series titled ``title``; suffixed on collision."""
        base = (title or "").strip()
        taken = {
            page.series_key
            for page in self.pages
            if isinstance(page, (SeriesCoverPage, SeriesImagePage))
        }
        if base not in taken:
            return base
        n = 2
        while f"{base} ({n})" in taken:
            n += 1
        return f"{base} ({n})"

    def series_ordinals(self) -> List[int]:
        """Per-position ordinal of series images (0 for other kinds), one pass."""
        seen: Dict[str, int] = {}
        ordinals: List[int] = []
        for page in self.pages:
            if isinstance(page, SeriesImagePage):
                seen[page.series_key] = seen.get(page.series_key, 0) + 1
                ordinals.append(seen[page.series_key])
            else:
                ordinals.append(0)
        return ordinals

    # ---- Structural mutations ----
    def sync_cover(self) -> CoverPage:
        """Write the identity into the cover page, creating it at 0 if absent."""
        idx = self.cover_index()
        if idx is None:
            cover = CoverPage(identity=self.identity)
            self.pages.insert(0, cover)
            return cover
        cover = self.pages[idx]
        cover.identity = self.identity
        return cover

    def set_identity(self, identity: UserIdentity) -> CoverPage:
        self.identity = identity
        return self.sync_cover()

    def append(self, page: Page) -> int:
        self.pages.append(page)
        return len(self.pages) - 1

    def swap(self, i: int, j: int) -> None:
        self.check_index(i)
        self.check_index(j)
        if i == j:
            raise PageMoveError(f"Cannot swap page {i} with itself.")
        self.pages[i], self.pages[j] = self.pages[j], self.pages[i]

    def remove(self, index: int) -> Page:
        self.check_index(index)
        return self.pages.pop(index)

    def series_block(self, index: int) -> range:
        """Positions of a series cover and the members contiguously following it."""
        page = self.page_at(index)
        if not isinstance(page, SeriesCoverPage):
            return range(index, index + 1)
        end = index + 1
        while end < len(self.pages):
            member = self.pages[end]
            if not (isinstance(member, SeriesImagePage) and member.series_key == page.series_key):
                break
            end += 1
        return range(index, end)

    def remove_series(self, index: int) -> List[Page]:
        block = self.series_block(index)
        removed = self.pages[block.start:block.stop]
        del self.pages[block.start:block.stop]
        return removed


__all__ = ["PortfolioDocument"]
