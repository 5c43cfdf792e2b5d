from __future__ import annotations
import json, os, tempfile
from typing import Any, Callable, Dict, Optional, Tuple
from folio.domain.errors import DocumentFormatError
from folio.domain.ports import Payload, PortfolioStoragePort, PreferencesPort

PREFS_FILENAME = "user_prefs.json"
PORTFOLIO_EXT = ".json"
DEFAULT_BASENAME = "Portfolio"

AskSavePath = Callable[[str, str], Optional[str]]
"""``(initial_dir, initial_file) -> path | None``."""
AskOpenPath = Callable[[str], Optional[str]]
"""``(initial_dir) -> path | None``."""


def default_storage_root() -> str:
    env_root = os.getenv("FOLIO_STORAGE_ROOT")
    if env_root:
        return env_root
    return os.path.join(os.path.expanduser("~"), ".folio")


def _write_json_atomic(path: str, payload: Any, prefix: str) -> None:
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=prefix, suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def unique_default_path(directory: str, basename: str = DEFAULT_BASENAME) -> str:
    """First free ``Portfolio.json``, ``Portfolio 2.json``, ... inside ``directory``."""
    candidate = os.path.join(directory, f"{basename}{PORTFOLIO_EXT}")
    n = 2
    while os.path.exists(candidate):
        candidate = os.path.join(directory, f"{basename} {n}{PORTFOLIO_EXT}")
        n += 1
    return candidate


class StorageLocal(PreferencesPort):
    """Local filesystem storage for user prefs (JSON)."""

    def __init__(self, root_dir: Optional[str] = None) -> None:
        self.root = root_dir or default_storage_root()

    @property
    def prefs_path(self) -> str:
        return os.path.join(self.root, PREFS_FILENAME)

    # ---- User prefs (JSON) ----
    def save_user_prefs(self, prefs: Dict) -> None:
        _write_json_atomic(self.prefs_path, prefs, prefix="user_prefs_")

    def load_user_prefs(self) -> Optional[Dict]:
        path = self.prefs_path
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else None


class PortfolioFileStore(PortfolioStoragePort):
    """Portfolio documents as JSON files chosen through file dialogs."""

    def __init__(
        self,
        ask_save_path: AskSavePath,
        ask_open_path: AskOpenPath,
        default_dir: Optional[str] = None,
    ) -> None:
        self.ask_save_path = ask_save_path
        self.ask_open_path = ask_open_path
        self.default_dir = default_dir or os.path.expanduser("~")

    def _initial_dir(self, known_path: Optional[str] = None) -> str:
        if known_path:
            return os.path.dirname(os.path.abspath(known_path))
        return self.default_dir

    def _choose_save_path(self, known_path: Optional[str] = None) -> Optional[str]:
        initial_dir = self._initial_dir(known_path)
        suggestion = os.path.basename(unique_default_path(initial_dir))
        path = self.ask_save_path(initial_dir, suggestion)
        if not path:
            return None
        if not os.path.splitext(path)[1]:
            path += PORTFOLIO_EXT
        return os.path.abspath(path)

    def create_document(self, payload: Payload) -> Optional[str]:
        path = self._choose_save_path()
        if path is None:
            return None
        _write_json_atomic(path, payload, prefix=".portfolio_")
        return path

    def save(self, payload: Payload, known_path: Optional[str]) -> Optional[str]:
        path = os.path.abspath(known_path) if known_path else self._choose_save_path()
        if path is None:
            return None
        _write_json_atomic(path, payload, prefix=".portfolio_")
        return path

    def open(self) -> Optional[Tuple[Payload, str]]:
        path = self.ask_open_path(self.default_dir)
        if not path:
            return None
        return self.open_at(path)

    def open_at(self, path: str) -> Tuple[Payload, str]:
        resolved = os.path.abspath(path)
        with open(resolved, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except ValueError as exc:
                raise DocumentFormatError(f"{os.path.basename(resolved)} is not valid JSON ({exc}).") from exc
        if not isinstance(payload, dict):
            raise DocumentFormatError(f"{os.path.basename(resolved)} does not contain a portfolio object.")
        return payload, resolved
