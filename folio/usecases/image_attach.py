"""Deferred capture-year extraction for images attached to pages.

Every attach gets a ticket that increases monotonically. When extraction
completes, the result is applied only if that ticket is still the latest one
issued for the page; older completions resolve to ``None`` without touching
the document.
"""

from __future__ import annotations

import enum
import itertools
import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..domain.images import ImageData
from ..domain.metadata import extract_capture_year
from ..domain.ports import SchedulerPort

_log = logging.getLogger(__name__)

YearExtractor = Callable[[bytes], Optional[str]]
ApplyYear = Callable[[str], Optional[str]]
"""Receives the extracted year; returns the year actually written or ``None``."""


class ImageSlot(str, enum.Enum):
    EMPTY = "empty"
    PENDING = "pending"
    POPULATED = "populated"


@dataclass
class _AttachTask:
    ticket: int
    page_id: str
    image: ImageData
    apply: ApplyYear
    future: Future

    @property
    def key(self) -> str:
        return f"image-attach:{self.ticket}"


class ImageAttachQueue:
    """Schedules metadata extraction through the UI scheduler."""

    def __init__(
        self,
        scheduler: SchedulerPort,
        *,
        extract: YearExtractor = extract_capture_year,
        delay_ms: int = 1,
    ) -> None:
        self._scheduler = scheduler
        self._extract = extract
        self._delay_ms = delay_ms
        self._counter = itertools.count(1)
        self._latest: Dict[str, int] = {}
        self._tasks: Dict[int, _AttachTask] = {}

    def submit(self, page_id: str, image: ImageData, apply: ApplyYear) -> Future:
        ticket = next(self._counter)
        task = _AttachTask(ticket=ticket, page_id=page_id, image=image, apply=apply, future=Future())
        self._latest[page_id] = ticket
        self._tasks[ticket] = task
        self._scheduler.schedule(task.key, self._delay_ms, lambda: self._complete(task))
        return task.future

    def is_pending(self, page_id: str) -> bool:
        ticket = self._latest.get(page_id)
        return ticket is not None and ticket in self._tasks

    def pending_count(self) -> int:
        return len(self._tasks)

    def cancel_all(self) -> None:
        for task in list(self._tasks.values()):
            self._scheduler.cancel(task.key)
            task.future.cancel()
        self._tasks.clear()
        self._latest.clear()

    def _complete(self, task: _AttachTask) -> None:
        if self._tasks.pop(task.ticket, None) is None:
            return
        year = self._extract(task.image.data)
        if self._latest.get(task.page_id) != task.ticket:
            _log.debug("Dropping stale capture year for page %s (ticket %s)", task.page_id, task.ticket)
            task.future.set_result(None)
            return
        del self._latest[task.page_id]
        if not year:
            task.future.set_result(None)
            return
        try:
            applied = task.apply(year)
        except Exception as exc:
            _log.exception("Applying capture year to page %s failed", task.page_id)
            task.future.set_exception(exc)
            return
        task.future.set_result(applied)


__all__ = ["ImageAttachQueue", "ImageSlot"]
