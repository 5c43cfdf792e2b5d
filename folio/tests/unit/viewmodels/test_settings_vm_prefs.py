from __future__ import annotations

import pytest

from folio.viewmodels.settings_vm import SettingsVM, default_settings_payload, snap_zoom


def test_apply_dict_coerces_values() -> None:
    vm = SettingsVM()
    vm.apply_dict(
        {
            "ui_dark": "yes",
            "autosave": 1,
            "autosave_delay_ms": "2000",
            "zoom": 83,
            "last_portfolio_path": "  /data/p.json ",
            "has_run": True,
            "debug_logging": "off",
        }
    )

    assert vm.ui_dark is True
    assert vm.autosave is True
    assert vm.autosave_delay_ms == 2000
    assert vm.zoom == 85
    assert vm.last_portfolio_path == "/data/p.json"
    assert vm.has_run is True
    assert vm.debug_logging is False


def test_apply_dict_rejects_unknown_keys() -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError, match="Unsupported settings keys: theme"):
        vm.apply_dict({"theme": "dark"})
    with pytest.raises(ValueError):
        vm.apply_dict(["zoom"])  # type: ignore[arg-type]


def test_invalid_delay_raises() -> None:
    vm = SettingsVM()
    with pytest.raises(ValueError):
        vm.apply_dict({"autosave_delay_ms": -5})
    with pytest.raises(ValueError):
        vm.apply_dict({"autosave_delay_ms": True})


def test_to_dict_round_trips() -> None:
    vm = SettingsVM()
    vm.ui_dark = None
    vm.zoom = 60
    snapshot = vm.to_dict()

    other = SettingsVM()
    other.apply_dict(snapshot)
    assert other.to_dict() == snapshot
    assert set(default_settings_payload()) == set(snapshot)


def test_zoom_steps_are_clamped() -> None:
    vm = SettingsVM()
    assert vm.zoom == 100
    assert vm.zoom_in() == 100
    assert vm.zoom_out() == 95
    for _ in range(20):
        vm.zoom_out()
    assert vm.zoom == 50


@pytest.mark.parametrize("raw, expected", [(52, 50), (53, 55), (120, 100), ("x", 100), (None, 100)])
def test_snap_zoom(raw, expected) -> None:
    assert snap_zoom(raw) == expected


def test_effective_dark_follows_system_when_unset() -> None:
    vm = SettingsVM()
    assert vm.effective_dark(system_dark=True) is True
    vm.ui_dark = False
    assert vm.effective_dark(system_dark=True) is False


def test_cmd_save_emits_snapshot() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)
    vm.autosave = True
    vm.cmd_save()
    assert saved[-1]["autosave"] is True
