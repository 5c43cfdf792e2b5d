"""Unsaved-changes flag owned by the portfolio session."""

from __future__ import annotations

from typing import Callable, Optional


class DirtyTracker:
    """Tracks unsaved mutations and announces transitions to a listener."""

    def __init__(self, on_change: Optional[Callable[[bool], None]] = None) -> None:
        self._dirty = False
        self.on_change = on_change

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark(self) -> None:
        self._set(True)

    def clear(self) -> None:
        """Only called after persistence has been confirmed."""
        self._set(False)

    def _set(self, value: bool) -> None:
        if self._dirty == value:
            return
        self._dirty = value
        if self.on_change:
            self.on_change(value)


__all__ = ["DirtyTracker"]
