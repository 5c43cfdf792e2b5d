from __future__ import annotations

import pytest

from folio.domain.entities import UserIdentity, switch_preset
from folio.domain.theme import (
    BLACK,
    THEME_PRESETS,
    normalize_preset_key,
    normalize_to_hex,
    preset_defaults,
    resolve_theme,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("#abc", "#AABBCC"),
        ("abc", "#AABBCC"),
        ("#a1b2c3", "#A1B2C3"),
        ("  ffffff ", "#FFFFFF"),
        ("#12345", BLACK),
        ("#gggggg", BLACK),
        ("", BLACK),
        (None, BLACK),
        (123, BLACK),
    ],
)
def test_normalize_to_hex(raw, expected) -> None:
    assert normalize_to_hex(raw) == expected


def test_normalize_to_hex_is_idempotent() -> None:
    for raw in ("#abc", "0b0b0b", "#FfFfFf", "nope"):
        once = normalize_to_hex(raw)
        assert normalize_to_hex(once) == once


def test_unknown_and_legacy_preset_keys() -> None:
    assert normalize_preset_key("classic") == "classic"
    assert normalize_preset_key("dark") == "default-dark"
    assert normalize_preset_key("light") == "default"
    assert normalize_preset_key("neon") == "default"
    assert normalize_preset_key(None) == "default"


def test_resolve_theme_merges_non_empty_overrides() -> None:
    theme = resolve_theme("classic", {"paper": "#fff", "text": "", "fontFamily": None, "bodyFontSize": "16px"})

    base = THEME_PRESETS["classic"]
    assert theme.paper == "#FFFFFF"
    assert theme.text == base.text
    assert theme.font_family == base.font_family
    assert theme.body_font_size == "16px"
    assert theme.font_size_px == 16


def test_resolve_theme_invalid_color_becomes_black() -> None:
    assert resolve_theme("default", {"muted": "purple"}).muted == BLACK


def test_resolve_theme_is_idempotent() -> None:
    first = resolve_theme("default-dark", {"paper": "#123"})
    assert resolve_theme("default-dark", first) == first


def test_switching_preset_drops_customizations() -> None:
    identity = UserIdentity(name="A").with_preset("default", {"paper": "#ff0000"})
    assert identity.theme.paper == "#FF0000"

    switched = switch_preset(identity, "classic")
    assert switched.theme_preset == "classic"
    assert switched.theme == preset_defaults("classic")

    same = switch_preset(identity, "default", {"muted": "#00f"})
    assert same.theme.paper == "#FF0000"
    assert same.theme.muted == "#0000FF"


def test_identity_theme_always_populated() -> None:
    identity = UserIdentity(theme_preset="dark")
    assert identity.theme_preset == "default-dark"
    assert identity.theme == THEME_PRESETS["default-dark"]
