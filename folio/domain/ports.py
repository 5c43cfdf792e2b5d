from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from .images import ImageData
from .theme import ThemeStyle

Payload = Dict[str, Any]
"""Persisted portfolio JSON (``{"userInfo": ..., "pages": [...]}``)."""


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


# ---- Ports (Hexagonal boundaries) ----
class PortfolioStoragePort(Protocol):
    """Document persistence. ``None`` means the user canceled a dialog."""

    def create_document(self, payload: Payload) -> Optional[str]: ...
    def save(self, payload: Payload, known_path: Optional[str]) -> Optional[str]: ...
    def open(self) -> Optional[Tuple[Payload, str]]: ...
    def open_at(self, path: str) -> Tuple[Payload, str]: ...


class PdfExportPort(Protocol):
    """Renders page cards to a PDF file; returns the written path."""

    def export_pdf(self, cards: Sequence[Any], theme: ThemeStyle) -> Optional[str]: ...


class ImageSourcePort(Protocol):
    """Reads image files from disk, picked by dialog or dropped on the window."""

    def select_image_files(self) -> Optional[List[ImageData]]: ...
    def read_image_files(self, paths: Sequence[str]) -> List[ImageData]: ...


class PreferencesPort(Protocol):
    """Persistence for UI preferences."""

    def save_user_prefs(self, prefs: Dict) -> None: ...
    def load_user_prefs(self) -> Optional[Dict]: ...


class SchedulerPort(Protocol):
    """Keyed one-shot timers on the UI event loop; rescheduling a key replaces it."""

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None: ...
    def cancel(self, key: str) -> None: ...
    def cancel_all(self) -> None: ...
