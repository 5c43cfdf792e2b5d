from __future__ import annotations

import logging
import tkinter as tk
from typing import Any, Callable, Optional

_log = logging.getLogger(__name__)


def safe_call(
    fn: Optional[Callable[..., Any]],
    *args: Any,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> None:
    if fn is None:
        return
    try:
        fn(*args)
    except Exception as exc:
        if on_error:
            on_error(exc)
        else:
            _log.exception("Callback failed: %s", exc)


def center_over_parent(parent: tk.Misc, width: int, height: int) -> str:
    try:
        x = parent.winfo_rootx() + (parent.winfo_width() - width) // 2
        y = parent.winfo_rooty() + (parent.winfo_height() - height) // 2
        return f"{width}x{height}+{max(0, x)}+{max(0, y)}"
    except tk.TclError:
        return f"{width}x{height}"


class ModalDialog(tk.Toplevel):
    """Transient, grabbed Toplevel centered over its parent."""

    width = 480
    height = 360

    def __init__(self, parent: tk.Misc, title: str) -> None:
        super().__init__(parent)
        self.title(title)
        self.transient(parent)
        self.resizable(False, False)
        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)
        self.bind("<Escape>", lambda e: self._on_close_clicked())

    def _show(self, parent: tk.Misc) -> None:
        self.update_idletasks()
        self.geometry(center_over_parent(parent, self.width, self.height))
        self.grab_set()
        self.focus_set()

    def _on_close_clicked(self) -> None:
        try:
            if self.winfo_exists():
                self.destroy()
        except tk.TclError:
            pass


__all__ = ["ModalDialog", "center_over_parent", "safe_call"]
