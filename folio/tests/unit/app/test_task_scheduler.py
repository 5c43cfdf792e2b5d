from __future__ import annotations

from typing import Callable, Dict, List

from folio.app.task_scheduler import TaskScheduler


class FakeTk:
    def __init__(self) -> None:
        self.pending: Dict[str, Callable[[], None]] = {}
        self.delays: List[int] = []
        self.canceled: List[str] = []
        self._n = 0

    def after(self, delay_ms: int, callback: Callable[[], None]) -> str:
        self._n += 1
        token = f"after#{self._n}"
        self.pending[token] = callback
        self.delays.append(delay_ms)
        return token

    def after_cancel(self, token: str) -> None:
        self.canceled.append(token)
        if token not in self.pending:
            raise RuntimeError("invalid command name")
        del self.pending[token]

    def fire(self, token: str) -> None:
        self.pending.pop(token)()


def test_reschedule_replaces_previous_timer() -> None:
    tk = FakeTk()
    scheduler = TaskScheduler(tk.after, tk.after_cancel)
    fired: List[str] = []

    scheduler.schedule("autosave", 1500, lambda: fired.append("first"))
    scheduler.schedule("autosave", 1500, lambda: fired.append("second"))

    assert tk.canceled == ["after#1"]
    assert list(tk.pending) == ["after#2"]
    tk.fire("after#2")
    assert fired == ["second"]

    # a fired task is forgotten, so canceling it does not reach Tk
    scheduler.cancel("autosave")
    assert tk.canceled == ["after#1"]


def test_cancel_all_and_stale_tokens() -> None:
    tk = FakeTk()
    scheduler = TaskScheduler(tk.after, tk.after_cancel)
    scheduler.schedule("a", 10, lambda: None)
    scheduler.schedule("b", 10, lambda: None)
    tk.pending.clear()

    scheduler.cancel_all()
    scheduler.cancel_all()

    assert sorted(tk.canceled) == ["after#1", "after#2"]


def test_min_delay_and_unknown_cancel() -> None:
    tk = FakeTk()
    scheduler = TaskScheduler(tk.after, tk.after_cancel)
    scheduler.schedule("image-attach:1", 0, lambda: None)
    scheduler.cancel("missing")

    assert tk.delays == [1]
    assert tk.canceled == []
    assert list(tk.pending) == ["after#1"]
