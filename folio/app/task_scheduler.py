"""Scheduler helper that owns deferred-task timers for the portfolio session.

The App passes Tk ``after`` and ``after_cancel`` callables into this class so
timer state (autosave debounce, image metadata tasks) is tracked in one place
and canceled safely when a document is replaced or the app closes.
"""

from __future__ import annotations


import logging
from dataclasses import dataclass
from typing import Callable, Dict


ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]

_log = logging.getLogger(__name__)


@dataclass
class TaskHandle:
    """Timer token associated with a single task key.

    Attributes:
        key: Task key (``autosave`` or ``image-attach:<ticket>``).
        token: Scheduler token returned by the UI scheduler implementation.
    """
    key: str
    token: str


class TaskScheduler:
    """Manage keyed one-shot timers using a UI scheduler (for example Tk)."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        """Store schedule/cancel functions and initialize handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, TaskHandle] = {}

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule or reschedule a task; an earlier timer for ``key`` is dropped."""
        delay = max(1, int(delay_ms))
        self.cancel(key)

        handle = TaskHandle(key=key, token="")

        def _fire() -> None:
            if self._handles.get(key) is handle:
                del self._handles[key]
            callback()

        handle.token = self._schedule(delay, _fire)
        self._handles[key] = handle
        _log.debug("Scheduled %s in %d ms", key, delay)

    def cancel(self, key: str) -> None:
        handle = self._handles.pop(key, None)
        if not handle:
            return
        try:
            self._cancel(handle.token)
        except Exception as exc:  # Tk raises TclError for tokens that already fired
            _log.debug("Cancel of %s ignored: %s", key, exc)

    def cancel_all(self) -> None:
        for key in list(self._handles.keys()):
            self.cancel(key)


__all__ = ["TaskHandle", "TaskScheduler"]
