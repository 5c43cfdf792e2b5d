"""Domain-level error types for use-case and adapter mapping.

These errors cross layer boundaries; use-cases translate them into
``UseCaseError`` instances before they reach the views.
"""

from __future__ import annotations


class FolioError(Exception):
    """Base class for domain failures."""


class DocumentFormatError(FolioError, ValueError):
    """Persisted payload cannot be read as a portfolio document."""


class PageIndexError(FolioError, ValueError):
    """Editing operation addressed a page position that does not exist."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Page index {index} out of range (document has {size} pages).")
        self.index = index
        self.size = size


class PageMoveError(FolioError, ValueError):
    """Reorder request that cannot be applied (e.g. swapping a page with itself)."""


class PageFieldError(FolioError, ValueError):
    """Inline edit targeted a field the page kind does not carry."""


__all__ = ["DocumentFormatError", "FolioError", "PageFieldError", "PageIndexError", "PageMoveError"]
