"""Session controller owning the open portfolio and its persistence lifecycle."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..domain.document import PortfolioDocument
from ..domain.images import ImageData
from ..domain.ports import (
    ImageSourcePort,
    PdfExportPort,
    PortfolioStoragePort,
    SchedulerPort,
    UseCaseError,
)
from ..domain.snapshot import document_to_payload
from .create_portfolio import CreatePortfolio
from .dirty_tracker import DirtyTracker
from .export_portfolio import ExportPortfolio
from .image_attach import ImageAttachQueue, YearExtractor
from .open_portfolio import OpenedPortfolio, OpenPortfolio, OpenPortfolioAt
from .page_editor import PageEditor
from .save_portfolio import SavePortfolio
from .select_images import ReadImageFiles, SelectImages

_log = logging.getLogger(__name__)

AUTOSAVE_KEY = "autosave"
DEFAULT_AUTOSAVE_DELAY_MS = 1500


def _noop(*_: object, **__: object) -> None:
    """Default no-op callback used for hooks."""


@dataclass(frozen=True)
class SaveOutcome:
    """Result of a save request; decides whether exit/new may proceed."""

    success: bool = False
    canceled: bool = False
    path: Optional[str] = None
    error: Optional[UseCaseError] = None

    @classmethod
    def saved(cls, path: Optional[str]) -> "SaveOutcome":
        return cls(success=True, path=path)

    @classmethod
    def cancel(cls) -> "SaveOutcome":
        return cls(canceled=True)

    @classmethod
    def failed(cls, error: UseCaseError) -> "SaveOutcome":
        return cls(error=error)


@dataclass
class SessionHooks:
    """Optional callbacks triggered on session events."""

    on_document_changed: Callable[[], None] = _noop
    on_document_replaced: Callable[[], None] = _noop
    on_dirty_changed: Callable[[bool], None] = _noop
    on_path_changed: Callable[[Optional[str]], None] = _noop
    on_save_failed: Callable[[UseCaseError], None] = _noop

    def __post_init__(self) -> None:
        self.on_document_changed = self.on_document_changed or _noop
        self.on_document_replaced = self.on_document_replaced or _noop
        self.on_dirty_changed = self.on_dirty_changed or _noop
        self.on_path_changed = self.on_path_changed or _noop
        self.on_save_failed = self.on_save_failed or _noop


class PortfolioSession:
    """Owns the document, dirty flag, autosave timer and image queue."""

    def __init__(
        self,
        storage: PortfolioStoragePort,
        scheduler: SchedulerPort,
        *,
        exporter: Optional[PdfExportPort] = None,
        image_source: Optional[ImageSourcePort] = None,
        hooks: Optional[SessionHooks] = None,
        extract_year: Optional[YearExtractor] = None,
        autosave_enabled: bool = False,
        autosave_delay_ms: int = DEFAULT_AUTOSAVE_DELAY_MS,
    ) -> None:
        self.scheduler = scheduler
        self.hooks = hooks or SessionHooks()
        self.autosave_enabled = autosave_enabled
        self.autosave_delay_ms = autosave_delay_ms
        self.path: Optional[str] = None

        self.uc_create = CreatePortfolio(storage)
        self.uc_save = SavePortfolio(storage)
        self.uc_open = OpenPortfolio(storage)
        self.uc_open_at = OpenPortfolioAt(storage)
        self.uc_export = ExportPortfolio(exporter) if exporter is not None else None
        self.uc_select_images = SelectImages(image_source) if image_source is not None else None
        self.uc_read_images = ReadImageFiles(image_source) if image_source is not None else None

        self.dirty = DirtyTracker(on_change=lambda value: self.hooks.on_dirty_changed(value))
        queue_kwargs: Dict[str, Any] = {}
        if extract_year is not None:
            queue_kwargs["extract"] = extract_year
        self.attach_queue = ImageAttachQueue(scheduler, **queue_kwargs)
        self.editor = PageEditor(PortfolioDocument(), self.attach_queue, on_change=self._on_mutation)

    # ---- State ----
    @property
    def document(self) -> PortfolioDocument:
        return self.editor.document

    @property
    def is_dirty(self) -> bool:
        return self.dirty.dirty

    def payload(self) -> Dict[str, Any]:
        """Full persisted JSON of the current document, produced synchronously."""
        return document_to_payload(self.document)

    def configure_autosave(self, enabled: bool, delay_ms: Optional[int] = None) -> None:
        self.autosave_enabled = bool(enabled)
        if delay_ms is not None:
            self.autosave_delay_ms = max(1, int(delay_ms))
        if not self.autosave_enabled:
            self.scheduler.cancel(AUTOSAVE_KEY)
        else:
            self._arm_autosave()

    # ---- Mutation plumbing ----
    def _on_mutation(self) -> None:
        self.dirty.mark()
        self._arm_autosave()
        self.hooks.on_document_changed()

    def _arm_autosave(self) -> None:
        if not (self.autosave_enabled and self.path and self.dirty.dirty):
            return
        self.scheduler.schedule(AUTOSAVE_KEY, self.autosave_delay_ms, self._autosave)

    def _autosave(self) -> None:
        if not (self.autosave_enabled and self.path and self.dirty.dirty):
            return
        _log.debug("Autosave firing for %s", self.path)
        outcome = self.save()
        if outcome.error is not None:
            _log.warning("Autosave failed: %s", outcome.error.message)
            self.hooks.on_save_failed(outcome.error)

    def _replace_document(self, document: PortfolioDocument, path: Optional[str]) -> None:
        self.scheduler.cancel(AUTOSAVE_KEY)
        self.attach_queue.cancel_all()
        self.editor.document = document
        self._set_path(path)
        self.dirty.clear()
        self.hooks.on_document_replaced()

    def _set_path(self, path: Optional[str]) -> None:
        if path == self.path:
            return
        self.path = path
        self.hooks.on_path_changed(path)

    # ---- Lifecycle ----
    def new_portfolio(self) -> SaveOutcome:
        """Create an empty portfolio file and make it the open document."""
        document = PortfolioDocument()
        try:
            path = self.uc_create(document_to_payload(document))
        except UseCaseError as err:
            _log.warning("Creating portfolio failed: %s", err.message)
            return SaveOutcome.failed(err)
        if path is None:
            return SaveOutcome.cancel()
        self._replace_document(document, path)
        _log.info("Created portfolio %s", path)
        return SaveOutcome.saved(path)

    def open(self) -> Optional[OpenedPortfolio]:
        """Open via dialog; ``None`` when canceled. Raises ``UseCaseError``."""
        opened = self.uc_open()
        if opened is None:
            return None
        self._replace_document(opened.document, opened.path)
        _log.info("Opened portfolio %s (%d pages)", opened.path, len(opened.document))
        return opened

    def open_at(self, path: str) -> OpenedPortfolio:
        opened = self.uc_open_at(path)
        self._replace_document(opened.document, opened.path)
        _log.info("Opened portfolio %s (%d pages)", opened.path, len(opened.document))
        return opened

    def reset(self) -> None:
        """Drop the open document without touching disk."""
        self._replace_document(PortfolioDocument(), None)

    def save(self, *, save_as: bool = False) -> SaveOutcome:
        known_path = None if save_as else self.path
        try:
            path = self.uc_save(self.payload(), known_path)
        except UseCaseError as err:
            _log.warning("Saving portfolio failed: %s", err.message)
            return SaveOutcome.failed(err)
        if path is None:
            return SaveOutcome.cancel()
        self.scheduler.cancel(AUTOSAVE_KEY)
        self._set_path(path)
        self.dirty.clear()
        _log.info("Saved portfolio %s", path)
        return SaveOutcome.saved(path)

    def save_before_exit(self) -> SaveOutcome:
        if not self.dirty.dirty:
            return SaveOutcome.saved(self.path)
        return self.save()

    def export(self, cards: Sequence[Any]) -> Optional[str]:
        if self.uc_export is None:
            raise UseCaseError("EXPORT_UNAVAILABLE", "PDF export is not configured.")
        path = self.uc_export(cards, self.document.identity.theme)
        if path:
            _log.info("Exported PDF %s", path)
        return path

    def add_images_from_dialog(self) -> int:
        """Pick images and append one single page each; returns the count added."""
        if self.uc_select_images is None:
            raise UseCaseError("IMAGES_UNAVAILABLE", "Image selection is not configured.")
        images = self.uc_select_images()
        if not images:
            return 0
        self.editor.add_images(images)
        return len(images)

    def add_dropped_images(self, paths: Sequence[str]) -> int:
        """Append one single page per dropped image file; returns the count added."""
        images = self._read_dropped(paths)
        if images:
            self.editor.add_images(images)
        return len(images)

    def attach_dropped_image(self, index: int, paths: Sequence[str]) -> Optional[Future]:
        """Put the first dropped image on page ``index``; ``None`` if nothing usable was dropped."""
        images = self._read_dropped(paths)
        if not images:
            return None
        return self.editor.attach_image(index, images[0])

    def _read_dropped(self, paths: Sequence[str]) -> List[ImageData]:
        if self.uc_read_images is None:
            raise UseCaseError("IMAGES_UNAVAILABLE", "Image selection is not configured.")
        return self.uc_read_images(paths)

    def shutdown(self) -> None:
        self.scheduler.cancel(AUTOSAVE_KEY)
        self.attach_queue.cancel_all()


__all__ = ["AUTOSAVE_KEY", "DEFAULT_AUTOSAVE_DELAY_MS", "PortfolioSession", "SaveOutcome", "SessionHooks"]
