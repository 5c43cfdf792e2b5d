"""Portfolio value objects: the user identity and the closed set of page kinds."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, Mapping, Optional, Tuple, Union

from .images import ImageData
from .theme import ThemeStyle, normalize_preset_key, preset_defaults, resolve_theme

DEFAULT_PORTFOLIO_LABEL = "Portfolio"


def new_page_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class UserIdentity:
    """Artist details shown on the cover page plus the selected theme."""

    name: str = ""
    years: str = ""
    """Active-years label, free text (e.g. ``"2015–2024"``)."""
    statement: str = ""
    instagram: str = ""
    """Social-link URL rendered as the profile link."""
    username: str = ""
    """Handle shown next to the social link."""
    email: str = ""
    portfolio_label: str = DEFAULT_PORTFOLIO_LABEL
    theme_preset: str = "default"
    theme: Optional[ThemeStyle] = None
    """Resolved style; always fully populated after construction."""

    def __post_init__(self) -> None:
        preset = normalize_preset_key(self.theme_preset)
        object.__setattr__(self, "theme_preset", preset)
        if self.theme is None:
            object.__setattr__(self, "theme", preset_defaults(preset))
        else:
            object.__setattr__(self, "theme", resolve_theme(preset, self.theme))

    def has_content(self) -> bool:
        """True once any identity text has been entered."""
        return any(
            (getattr(self, name) or "").strip()
            for name in ("name", "years", "statement", "instagram", "username", "email")
        )

    def with_preset(
        self, preset_key: Any, overrides: Optional[Mapping[str, Any]] = None
    ) -> "UserIdentity":
        """Return a copy using ``preset_key``.

        A different preset starts from its defaults; the same preset keeps the
        current customizations. ``overrides`` are merged last in both cases.
        """
        target = normalize_preset_key(preset_key)
        merged = {} if target != self.theme_preset else _theme_dict(self.theme)
        merged.update(overrides or {})
        return replace(self, theme_preset=target, theme=resolve_theme(target, merged))

    def with_fields(self, **changes: str) -> "UserIdentity":
        return replace(self, **changes)


def _theme_dict(theme: ThemeStyle) -> dict:
    return {f.name: getattr(theme, f.name) for f in fields(ThemeStyle)}


def switch_preset(
    identity: UserIdentity, preset_key: Any, overrides: Optional[Mapping[str, Any]] = None
) -> UserIdentity:
    return identity.with_preset(preset_key, overrides)


@dataclass(eq=True)
class CoverPage:
    """Cover synthesized from the user identity; never edited independently."""

    kind: ClassVar[str] = "cover"
    EDITABLE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name",
        "years",
        "statement",
        "instagram",
        "username",
        "email",
        "portfolio_label",
    )

    identity: UserIdentity = field(default_factory=UserIdentity)
    page_id: str = field(default_factory=new_page_id, compare=False, repr=False)

    @property
    def image(self) -> Optional[ImageData]:
        return None


@dataclass(eq=True)
class SinglePage:
    kind: ClassVar[str] = "single"
    EDITABLE_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "year", "desc")

    title: str = ""
    year: str = ""
    desc: str = ""
    image: Optional[ImageData] = None
    page_id: str = field(default_factory=new_page_id, compare=False, repr=False)


@dataclass(eq=True)
class SeriesCoverPage:
    """Opening page of a series; ``total`` is the declared image count."""

    kind: ClassVar[str] = "series-cover"
    EDITABLE_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "year", "desc")

    title: str = ""
    year: str = ""
    desc: str = ""
    total: int = 0
    series_key: str = ""
    page_id: str = field(default_factory=new_page_id, compare=False, repr=False)

    @property
    def image(self) -> Optional[ImageData]:
        return None


@dataclass(eq=True)
class SeriesImagePage:
    """Member of a series; its ordinal comes from document order."""

    kind: ClassVar[str] = "series-image"
    EDITABLE_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "year", "desc")

    title: str = ""
    desc: str = ""
    year: str = ""
    image: Optional[ImageData] = None
    series_key: str = ""
    series_total: int = 0
    page_id: str = field(default_factory=new_page_id, compare=False, repr=False)


Page = Union[CoverPage, SinglePage, SeriesCoverPage, SeriesImagePage]
IMAGE_PAGE_TYPES: Tuple[type, ...] = (SinglePage, SeriesImagePage)


__all__ = [
    "CoverPage",
    "DEFAULT_PORTFOLIO_LABEL",
    "IMAGE_PAGE_TYPES",
    "Page",
    "SeriesCoverPage",
    "SeriesImagePage",
    "SinglePage",
    "UserIdentity",
    "new_page_id",
    "switch_preset",
]
