import json
import os

import pytest

from folio.adapters.storage_local import PortfolioFileStore, StorageLocal, unique_default_path
from folio.domain.errors import DocumentFormatError
from folio.viewmodels.settings_vm import SettingsVM


def test_user_prefs_round_trip(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path))
    payload = {
        "ui_dark": True,
        "autosave": True,
        "autosave_delay_ms": 1500,
        "zoom": 80,
        "last_portfolio_path": "/data/Portfolio.json",
        "has_run": True,
        "debug_logging": False,
    }

    storage.save_user_prefs(payload)

    assert storage.load_user_prefs() == payload
    assert [p.name for p in tmp_path.iterdir()] == ["user_prefs.json"]


def test_user_prefs_missing_file_and_defaults(tmp_path):
    storage = StorageLocal(root_dir=str(tmp_path / "nested"))
    prefs_path = tmp_path / "nested" / "user_prefs.json"

    assert storage.load_user_prefs() is None
    assert not prefs_path.exists()

    vm = SettingsVM()
    storage.save_user_prefs(vm.to_dict())

    with prefs_path.open("r", encoding="utf-8") as fh:
        persisted = json.load(fh)
    assert persisted == vm.to_dict()


def test_user_prefs_non_object_ignored(tmp_path):
    (tmp_path / "user_prefs.json").write_text("[1, 2]", encoding="utf-8")
    assert StorageLocal(root_dir=str(tmp_path)).load_user_prefs() is None


def test_unique_default_path(tmp_path):
    assert unique_default_path(str(tmp_path)) == str(tmp_path / "Portfolio.json")
    (tmp_path / "Portfolio.json").write_text("{}", encoding="utf-8")
    (tmp_path / "Portfolio 2.json").write_text("{}", encoding="utf-8")
    assert unique_default_path(str(tmp_path)) == str(tmp_path / "Portfolio 3.json")


def test_create_document_suggests_unique_name_and_appends_extension(tmp_path):
    (tmp_path / "Portfolio.json").write_text("{}", encoding="utf-8")
    asked = []

    def ask_save(initial_dir, initial_file):
        asked.append((initial_dir, initial_file))
        return os.path.join(initial_dir, "Mine")

    store = PortfolioFileStore(ask_save, lambda _dir: None, default_dir=str(tmp_path))
    path = store.create_document({"userInfo": {}, "pages": []})

    assert asked == [(str(tmp_path), "Portfolio 2.json")]
    assert path == str(tmp_path / "Mine.json")
    assert json.loads((tmp_path / "Mine.json").read_text(encoding="utf-8")) == {"userInfo": {}, "pages": []}


def test_save_known_path_skips_dialog(tmp_path):
    target = tmp_path / "p.json"

    def ask_save(*_args):  # pragma: no cover
        raise AssertionError("dialog must not open for a known path")

    store = PortfolioFileStore(ask_save, lambda _dir: None, default_dir=str(tmp_path))
    assert store.save({"pages": []}, str(target)) == str(target)
    assert json.loads(target.read_text(encoding="utf-8")) == {"pages": []}
    assert not [p for p in tmp_path.iterdir() if p.suffix == ".tmp"]


def test_save_cancel_returns_none(tmp_path):
    store = PortfolioFileStore(lambda *_: None, lambda _dir: None, default_dir=str(tmp_path))
    assert store.save({"pages": []}, None) is None
    assert list(tmp_path.iterdir()) == []


def test_open_reads_payload(tmp_path):
    target = tmp_path / "p.json"
    target.write_text(json.dumps({"pages": []}), encoding="utf-8")
    store = PortfolioFileStore(lambda *_: None, lambda _dir: str(target), default_dir=str(tmp_path))

    assert store.open() == ({"pages": []}, str(target))


def test_open_cancel_returns_none(tmp_path):
    store = PortfolioFileStore(lambda *_: None, lambda _dir: "", default_dir=str(tmp_path))
    assert store.open() is None


@pytest.mark.parametrize("content", ["{broken", "[]", "\"text\""])
def test_open_at_rejects_non_portfolio(tmp_path, content):
    target = tmp_path / "bad.json"
    target.write_text(content, encoding="utf-8")
    store = PortfolioFileStore(lambda *_: None, lambda _dir: None)

    with pytest.raises(DocumentFormatError):
        store.open_at(str(target))


def test_open_at_missing_file(tmp_path):
    store = PortfolioFileStore(lambda *_: None, lambda _dir: None)
    with pytest.raises(FileNotFoundError):
        store.open_at(str(tmp_path / "missing.json"))
