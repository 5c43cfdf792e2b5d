"""Theme presets and the resolver that turns a preset key into a full style.

Overrides are scoped to the preset they were made under: switching to a
different preset starts again from that preset's defaults.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Union

DEFAULT_PRESET = "default"
BLACK = "#000000"

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_COLOR_FIELDS = ("paper", "text", "muted")


@dataclass(frozen=True)
class ThemeStyle:
    """Concrete page style applied to every rendered page."""

    paper: str
    """Page background color, canonical ``#RRGGBB``."""
    text: str
    """Primary text color, canonical ``#RRGGBB``."""
    muted: str
    """Secondary text color, canonical ``#RRGGBB``."""
    font_family: str
    """Font family list as understood by the renderer."""
    body_font_size: str
    """Base font size with unit, e.g. ``"14px"``."""

    def to_payload(self) -> Dict[str, str]:
        """Serialize using the persisted (camelCase) key names."""
        return {
            "paper": self.paper,
            "text": self.text,
            "muted": self.muted,
            "fontFamily": self.font_family,
            "bodyFontSize": self.body_font_size,
        }

    @property
    def font_size_px(self) -> int:
        """Numeric part of ``body_font_size``; 14 when unparsable."""
        match = re.match(r"^\s*(\d+)", self.body_font_size or "")
        return int(match.group(1)) if match else 14


_SANS = "Manrope, system-ui, -apple-system, 'Segoe UI', Roboto, 'Helvetica Neue', Arial"

THEME_PRESETS: Dict[str, ThemeStyle] = {
    "default": ThemeStyle(
        paper="#FFFFFF",
        text="#0B0B0B",
        muted="#6F6F6F",
        font_family=_SANS,
        body_font_size="14px",
    ),
    "default-dark": ThemeStyle(
        paper="#121212",
        text="#F5F5F5",
        muted="#A0A0A0",
        font_family=_SANS,
        body_font_size="14px",
    ),
    "classic": ThemeStyle(
        paper="#FDF7EF",
        text="#1F1A14",
        muted="#887869",
        font_family="'Garamond', 'Times New Roman', Times, serif",
        body_font_size="13px",
    ),
}

LEGACY_PRESET_ALIASES: Dict[str, str] = {
    "light": "default",
    "dark": "default-dark",
}

PRESET_LABELS: Dict[str, str] = {
    "default": "Default",
    "default-dark": "Default (Dark)",
    "classic": "Classic",
}

# persisted camelCase key -> dataclass field
_PAYLOAD_KEYS: Dict[str, str] = {
    "paper": "paper",
    "text": "text",
    "muted": "muted",
    "fontFamily": "font_family",
    "bodyFontSize": "body_font_size",
    "font_family": "font_family",
    "body_font_size": "body_font_size",
}

Overrides = Union[ThemeStyle, Mapping[str, Any], None]


def normalize_preset_key(raw: Any) -> str:
    """Return a known preset key for ``raw``; never raises."""
    key = raw.strip() if isinstance(raw, str) else ""
    if not key:
        return DEFAULT_PRESET
    if key in THEME_PRESETS:
        return key
    alias = LEGACY_PRESET_ALIASES.get(key)
    if alias in THEME_PRESETS:
        return alias
    return DEFAULT_PRESET


def preset_defaults(preset: Any) -> ThemeStyle:
    return THEME_PRESETS[normalize_preset_key(preset)]


def normalize_to_hex(value: Any) -> str:
    """Normalize ``#RGB`` / ``#RRGGBB`` (``#`` optional) to upper-case ``#RRGGBB``.

    Anything that does not validate resolves to black. Idempotent.
    """
    if not value or not isinstance(value, str):
        return BLACK
    text = value.strip()
    if not text.startswith("#"):
        text = "#" + text
    if len(text) == 4:
        text = "#" + "".join(ch * 2 for ch in text[1:])
    if not _HEX_RE.match(text):
        return BLACK
    return text.upper()


def _override_items(overrides: Overrides) -> Dict[str, str]:
    if isinstance(overrides, ThemeStyle):
        overrides = asdict(overrides)
    if not isinstance(overrides, Mapping):
        return {}
    items: Dict[str, str] = {}
    for key, value in overrides.items():
        field_name = _PAYLOAD_KEYS.get(str(key))
        if field_name is None:
            continue
        if value is None:
            continue
        text = str(value).strip()
        if text:
            items[field_name] = text
    return items


def resolve_theme(preset_key: Any, overrides: Overrides = None) -> ThemeStyle:
    """Start from the preset defaults and merge non-empty overrides on top."""
    base = preset_defaults(preset_key)
    updates = _override_items(overrides)
    for name in _COLOR_FIELDS:
        if name in updates:
            updates[name] = normalize_to_hex(updates[name])
    if not updates:
        return base
    return replace(base, **updates)


__all__ = [
    "BLACK",
    "DEFAULT_PRESET",
    "LEGACY_PRESET_ALIASES",
    "PRESET_LABELS",
    "THEME_PRESETS",
    "ThemeStyle",
    "normalize_preset_key",
    "normalize_to_hex",
    "preset_defaults",
    "resolve_theme",
]
