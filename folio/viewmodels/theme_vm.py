"""Working copy of the theme while the style dialog is open."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Optional, Tuple

from ..domain.entities import UserIdentity
from ..domain.theme import (
    PRESET_LABELS,
    ThemeStyle,
    normalize_preset_key,
    normalize_to_hex,
    preset_defaults,
)

COLOR_TARGETS: Tuple[str, ...] = ("paper", "text", "muted")
TARGET_LABELS = {"paper": "Paper", "text": "Text", "muted": "Muted text"}
FONT_SIZE_MIN = 8
FONT_SIZE_MAX = 32

FONT_FAMILIES: Tuple[Tuple[str, str], ...] = (
    ("Manrope", "Manrope, system-ui, -apple-system, 'Segoe UI', Roboto, 'Helvetica Neue', Arial"),
    ("Helvetica", "'Helvetica Neue', Helvetica, Arial, sans-serif"),
    ("Garamond", "'Garamond', 'Times New Roman', Times, serif"),
    ("Georgia", "Georgia, 'Times New Roman', serif"),
)


class ThemeEditorVM:
    """Edits preset/colors/typography without touching the document until commit."""

    def __init__(
        self,
        *,
        on_preview: Optional[Callable[[ThemeStyle], None]] = None,
        on_commit: Optional[Callable[[str, ThemeStyle], None]] = None,
    ) -> None:
        self.on_preview = on_preview
        self.on_commit = on_commit
        self.preset: str = normalize_preset_key(None)
        self.working: ThemeStyle = preset_defaults(self.preset)
        self.target: str = COLOR_TARGETS[0]
        self._original: Optional[ThemeStyle] = None

    @property
    def is_open(self) -> bool:
        return self._original is not None

    @property
    def preset_label(self) -> str:
        return PRESET_LABELS.get(self.preset, self.preset)

    @property
    def target_color(self) -> str:
        return getattr(self.working, self.target)

    @property
    def font_size(self) -> int:
        return self.working.font_size_px

    def open(self, identity: UserIdentity) -> None:
        self.preset = identity.theme_preset
        self.working = identity.theme
        self.target = COLOR_TARGETS[0]
        self._original = identity.theme

    def set_target(self, target: str) -> None:
        if target not in COLOR_TARGETS:
            raise ValueError(f"Unknown color target: {target!r}")
        self.target = target

    def set_color(self, value: Any) -> str:
        color = normalize_to_hex(value)
        self._update(**{self.target: color})
        return color

    def reset_target(self) -> str:
        color = getattr(preset_defaults(self.preset), self.target)
        self._update(**{self.target: color})
        return color

    def set_preset(self, preset_key: Any) -> None:
        """Changing the preset starts over from that preset's defaults."""
        self.preset = normalize_preset_key(preset_key)
        self.working = preset_defaults(self.preset)
        self._preview()

    def set_font_family(self, family: str) -> None:
        family = (family or "").strip()
        if family:
            self._update(font_family=family)

    def set_font_size(self, size: Any) -> int:
        try:
            number = int(float(size))
        except (TypeError, ValueError) as exc:
            raise ValueError("Font size must be a number.") from exc
        number = max(FONT_SIZE_MIN, min(FONT_SIZE_MAX, number))
        self._update(body_font_size=f"{number}px")
        return number

    def reset_typography(self) -> None:
        defaults = preset_defaults(self.preset)
        self._update(font_family=defaults.font_family, body_font_size=defaults.body_font_size)

    def commit(self) -> Tuple[str, ThemeStyle]:
        result = (self.preset, self.working)
        self._original = None
        if self.on_commit:
            self.on_commit(*result)
        return result

    def cancel(self) -> None:
        original, self._original = self._original, None
        if original is not None and self.on_preview:
            self.on_preview(original)

    def _update(self, **changes: str) -> None:
        self.working = replace(self.working, **changes)
        self._preview()

    def _preview(self) -> None:
        if self.on_preview:
            self.on_preview(self.working)


__all__ = ["COLOR_TARGETS", "FONT_FAMILIES", "FONT_SIZE_MAX", "FONT_SIZE_MIN", "ThemeEditorVM"]
