
"""Domain package exports for value objects and aggregates."""

from .document import PortfolioDocument
from .entities import (
    CoverPage,
    Page,
    SeriesCoverPage,
    SeriesImagePage,
    SinglePage,
    UserIdentity,
    switch_preset,
)
from .errors import DocumentFormatError, FolioError, PageFieldError, PageIndexError, PageMoveError
from .images import ImageData
from .metadata import extract_capture_year, extract_capture_year_from_data_uri
from .theme import ThemeStyle, normalize_preset_key, normalize_to_hex, resolve_theme

__all__ = [
    "CoverPage",
    "DocumentFormatError",
    "FolioError",
    "ImageData",
    "Page",
    "PageFieldError",
    "PageIndexError",
    "PageMoveError",
    "PortfolioDocument",
    "SeriesCoverPage",
    "SeriesImagePage",
    "SinglePage",
    "ThemeStyle",
    "UserIdentity",
    "extract_capture_year",
    "extract_capture_year_from_data_uri",
    "normalize_preset_key",
    "normalize_to_hex",
    "resolve_theme",
    "switch_preset",
]
