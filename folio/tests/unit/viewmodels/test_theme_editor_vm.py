from __future__ import annotations

import pytest

from folio.domain.entities import UserIdentity
from folio.domain.theme import preset_defaults
from folio.viewmodels.theme_vm import FONT_SIZE_MAX, FONT_SIZE_MIN, ThemeEditorVM


def _vm():
    previews = []
    commits = []
    vm = ThemeEditorVM(on_preview=previews.append, on_commit=lambda p, t: commits.append((p, t)))
    return vm, previews, commits


def test_color_edits_are_normalized_and_previewed() -> None:
    vm, previews, _commits = _vm()
    vm.open(UserIdentity())
    vm.set_target("muted")

    assert vm.set_color("abc") == "#AABBCC"
    assert vm.working.muted == "#AABBCC"
    assert vm.target_color == "#AABBCC"
    assert previews[-1] == vm.working
    with pytest.raises(ValueError):
        vm.set_target("border")


def test_reset_target_restores_preset_value() -> None:
    vm, _previews, _commits = _vm()
    vm.open(UserIdentity(theme_preset="classic"))
    vm.set_color("#000")
    assert vm.reset_target() == preset_defaults("classic").paper


def test_switching_preset_starts_from_defaults() -> None:
    vm, _previews, _commits = _vm()
    vm.open(UserIdentity())
    vm.set_color("#123456")
    vm.set_preset("default-dark")

    assert vm.preset == "default-dark"
    assert vm.working == preset_defaults("default-dark")
    assert vm.preset_label == "Default (Dark)"


def test_font_size_is_clamped() -> None:
    vm, _previews, _commits = _vm()
    vm.open(UserIdentity())
    assert vm.set_font_size("100") == FONT_SIZE_MAX
    assert vm.set_font_size(2) == FONT_SIZE_MIN
    assert vm.set_font_size("15.7") == 15
    assert vm.working.body_font_size == "15px"
    with pytest.raises(ValueError):
        vm.set_font_size("big")


def test_reset_typography() -> None:
    vm, _previews, _commits = _vm()
    vm.open(UserIdentity(theme_preset="classic"))
    vm.set_font_family("Georgia, serif")
    vm.set_font_size(20)
    vm.reset_typography()
    defaults = preset_defaults("classic")
    assert vm.working.font_family == defaults.font_family
    assert vm.working.body_font_size == defaults.body_font_size


def test_commit_and_cancel() -> None:
    vm, previews, commits = _vm()
    identity = UserIdentity()
    vm.open(identity)
    vm.set_color("#fff000")
    assert vm.is_open is True

    vm.cancel()
    assert previews[-1] == identity.theme
    assert vm.is_open is False

    vm.open(identity)
    vm.set_color("#00ff00")
    preset, theme = vm.commit()
    assert commits == [(preset, theme)]
    assert theme.paper == "#00FF00"
    assert vm.is_open is False
