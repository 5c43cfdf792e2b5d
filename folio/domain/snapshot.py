"""JSON shape of a persisted portfolio and the codec between it and the domain.

Shape::

    {"userInfo": {...}, "pages": [{"type": ..., "data": {...}, "image": ...}, ...]}

Images travel as base64 data URIs so a portfolio file is self-contained.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from .document import PortfolioDocument
from .entities import (
    DEFAULT_PORTFOLIO_LABEL,
    CoverPage,
    Page,
    SeriesCoverPage,
    SeriesImagePage,
    SinglePage,
    UserIdentity,
)
from .errors import DocumentFormatError
from .images import ImageData

# persisted camelCase key -> UserIdentity field
_IDENTITY_KEYS: Dict[str, str] = {
    "name": "name",
    "years": "years",
    "statement": "statement",
    "instagram": "instagram",
    "username": "username",
    "email": "email",
    "portfolioLabel": "portfolio_label",
}


# ---- Encoding ----
def identity_to_payload(identity: UserIdentity) -> Dict[str, Any]:
    payload: Dict[str, Any] = {key: getattr(identity, attr) for key, attr in _IDENTITY_KEYS.items()}
    payload["themePreset"] = identity.theme_preset
    payload["theme"] = identity.theme.to_payload()
    return payload


def _image_uri(image: Optional[ImageData]) -> Optional[str]:
    return image.to_data_uri() if image is not None else None


def page_to_payload(page: Page) -> Dict[str, Any]:
    if isinstance(page, CoverPage):
        return {"type": page.kind, "data": identity_to_payload(page.identity), "image": None}
    if isinstance(page, SinglePage):
        return {
            "type": page.kind,
            "data": {"title": page.title, "year": page.year, "desc": page.desc},
            "image": _image_uri(page.image),
        }
    if isinstance(page, SeriesCoverPage):
        return {
            "type": page.kind,
            "data": {"title": page.title, "year": page.year, "desc": page.desc, "total": page.total},
            "image": None,
            "seriesKey": page.series_key,
        }
    if isinstance(page, SeriesImagePage):
        return {
            "type": page.kind,
            "data": {"title": page.title, "desc": page.desc, "year": page.year},
            "image": _image_uri(page.image),
            "seriesKey": page.series_key,
            "seriesTotal": page.series_total,
        }
    raise TypeError(f"Unsupported page type: {type(page).__name__}")


def document_to_payload(document: PortfolioDocument) -> Dict[str, Any]:
    return {
        "userInfo": identity_to_payload(document.identity),
        "pages": [page_to_payload(page) for page in document.pages],
    }


def dumps_document(document: PortfolioDocument) -> str:
    return json.dumps(document_to_payload(document), ensure_ascii=False, indent=2)


# ---- Decoding ----
def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _count(value: Any) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise DocumentFormatError(f"{what} must be an object.")
    return value


def identity_from_payload(raw: Any) -> UserIdentity:
    data = _mapping(raw, "userInfo")
    fields = {attr: _text(data.get(key)) for key, attr in _IDENTITY_KEYS.items()}
    if not fields["portfolio_label"]:
        fields["portfolio_label"] = DEFAULT_PORTFOLIO_LABEL
    theme = data.get("theme")
    identity = UserIdentity(**fields, theme_preset=_text(data.get("themePreset")))
    if isinstance(theme, Mapping):
        identity = identity.with_preset(identity.theme_preset, theme)
    return identity


def _image_from_payload(raw: Any, position: int) -> Optional[ImageData]:
    if raw in (None, ""):
        return None
    try:
        return ImageData.from_data_uri(raw)
    except ValueError as exc:
        raise DocumentFormatError(f"Page {position + 1}: invalid image data ({exc}).") from exc


def page_from_payload(raw: Any, position: int = 0) -> Page:
    entry = _mapping(raw, f"Page {position + 1}")
    kind = entry.get("type")
    data = _mapping(entry.get("data"), f"Page {position + 1} data")
    series_key = _text(entry.get("seriesKey", entry.get("seriesTitle")))

    if kind == CoverPage.kind:
        return CoverPage()
    if kind == SinglePage.kind:
        return SinglePage(
            title=_text(data.get("title")),
            year=_text(data.get("year")),
            desc=_text(data.get("desc")),
            image=_image_from_payload(entry.get("image"), position),
        )
    if kind == SeriesCoverPage.kind:
        return SeriesCoverPage(
            title=_text(data.get("title")),
            year=_text(data.get("year")),
            desc=_text(data.get("desc")),
            total=_count(data.get("total")),
            series_key=series_key or _text(data.get("title")),
        )
    if kind == SeriesImagePage.kind:
        return SeriesImagePage(
            title=_text(data.get("title")),
            desc=_text(data.get("desc")),
            year=_text(data.get("year")),
            image=_image_from_payload(entry.get("image"), position),
            series_key=series_key,
            series_total=_count(entry.get("seriesTotal")),
        )
    raise DocumentFormatError(f"Page {position + 1}: unknown page type {kind!r}.")


def document_from_payload(raw: Any) -> PortfolioDocument:
    """Build a document from a decoded payload; the cover is re-derived from userInfo."""
    if not isinstance(raw, Mapping):
        raise DocumentFormatError("Portfolio must be an object.")
    payload = raw
    identity = identity_from_payload(payload.get("userInfo"))
    raw_pages = payload.get("pages") or []
    if not isinstance(raw_pages, list):
        raise DocumentFormatError("pages must be a list.")

    pages: List[Page] = []
    has_cover = False
    for position, entry in enumerate(raw_pages):
        page = page_from_payload(entry, position)
        if isinstance(page, CoverPage):
            if has_cover:
                continue
            has_cover = True
        pages.append(page)

    document = PortfolioDocument(identity=identity, pages=pages)
    if has_cover or identity.has_content():
        document.sync_cover()
    return document


def loads_document(text: str) -> PortfolioDocument:
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise DocumentFormatError(f"Invalid portfolio JSON: {exc}") from exc
    return document_from_payload(raw)


__all__ = [
    "document_from_payload",
    "document_to_payload",
    "dumps_document",
    "identity_from_payload",
    "identity_to_payload",
    "loads_document",
    "page_from_payload",
    "page_to_payload",
]
