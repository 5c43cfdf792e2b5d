from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from folio.domain.ports import UseCaseError
from folio.usecases.create_portfolio import CreatePortfolio
from folio.usecases.open_portfolio import OpenPortfolio, OpenPortfolioAt
from folio.usecases.save_portfolio import SavePortfolio


def test_save_passes_known_path() -> None:
    storage = MagicMock()
    storage.save.return_value = "/tmp/p.json"

    assert SavePortfolio(storage)({"pages": []}, "/tmp/p.json") == "/tmp/p.json"
    storage.save.assert_called_once_with({"pages": []}, "/tmp/p.json")


def test_save_maps_os_error() -> None:
    storage = MagicMock()
    storage.save.side_effect = OSError(28, "No space left on device")

    with pytest.raises(UseCaseError) as excinfo:
        SavePortfolio(storage)({"pages": []})
    assert excinfo.value.code == "FILE_ERROR"
    assert "No space left" in excinfo.value.message


def test_create_cancel_returns_none() -> None:
    storage = MagicMock()
    storage.create_document.return_value = None
    assert CreatePortfolio(storage)({"pages": []}) is None


def test_open_decodes_payload() -> None:
    storage = MagicMock()
    storage.open.return_value = ({"userInfo": {"name": "A"}, "pages": []}, "/tmp/a.json")

    opened = OpenPortfolio(storage)()

    assert opened.path == "/tmp/a.json"
    assert opened.document.identity.name == "A"
    assert [p.kind for p in opened.document.pages] == ["cover"]


def test_open_cancel_and_invalid_payload() -> None:
    storage = MagicMock()
    storage.open.return_value = None
    assert OpenPortfolio(storage)() is None

    storage.open_at.return_value = ({"pages": [{"type": "poster"}]}, "/tmp/b.json")
    with pytest.raises(UseCaseError) as excinfo:
        OpenPortfolioAt(storage)("/tmp/b.json")
    assert excinfo.value.code == "INVALID_PORTFOLIO"
