from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from folio.domain.images import ImageData
from folio.domain.ports import UseCaseError
from folio.domain.snapshot import document_to_payload
from folio.domain.document import PortfolioDocument
from folio.domain.entities import SinglePage, UserIdentity
from folio.usecases.portfolio_session import AUTOSAVE_KEY, PortfolioSession, SessionHooks


class FakeScheduler:
    def __init__(self) -> None:
        self.tasks: Dict[str, Tuple[int, Callable[[], None]]] = {}
        self.scheduled: List[str] = []

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        self.tasks[key] = (delay_ms, callback)
        self.scheduled.append(key)

    def cancel(self, key: str) -> None:
        self.tasks.pop(key, None)

    def cancel_all(self) -> None:
        self.tasks.clear()

    def fire(self, key: str) -> None:
        _delay, callback = self.tasks.pop(key)
        callback()


class MemoryStorage:
    def __init__(self) -> None:
        self.files: Dict[str, Dict[str, Any]] = {}
        self.next_path: Optional[str] = "/tmp/Portfolio.json"
        self.fail_with: Optional[Exception] = None
        self.save_calls = 0

    def create_document(self, payload):
        if self.next_path is None:
            return None
        self.files[self.next_path] = payload
        return self.next_path

    def save(self, payload, known_path):
        self.save_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        path = known_path or self.next_path
        if path is None:
            return None
        self.files[path] = payload
        return path

    def open(self):
        if self.next_path is None:
            return None
        return self.open_at(self.next_path)

    def open_at(self, path):
        if path not in self.files:
            raise FileNotFoundError(2, "No such file", path)
        return self.files[path], path


class RecordingExporter:
    def __init__(self) -> None:
        self.calls: List[Tuple[Any, Any]] = []

    def export_pdf(self, cards, theme):
        self.calls.append((cards, theme))
        return "/tmp/out.pdf"


class StaticImages:
    def __init__(self, images) -> None:
        self.images = images

    def select_image_files(self):
        return self.images

    def read_image_files(self, paths):
        self.read_paths = list(paths)
        return [image for image, path in zip(self.images, paths) if path.endswith(".png")]


def _session(**kwargs):
    scheduler = FakeScheduler()
    storage = MemoryStorage()
    events: Dict[str, List[Any]] = {"changed": [], "replaced": [], "dirty": [], "path": []}
    hooks = SessionHooks(
        on_document_changed=lambda: events["changed"].append(True),
        on_document_replaced=lambda: events["replaced"].append(True),
        on_dirty_changed=events["dirty"].append,
        on_path_changed=events["path"].append,
    )
    kwargs.setdefault("extract_year", lambda data: None)
    session = PortfolioSession(storage, scheduler, hooks=hooks, **kwargs)
    return session, storage, scheduler, events


def test_mutation_marks_dirty_and_notifies() -> None:
    session, _storage, _scheduler, events = _session()
    session.editor.append_single_page()

    assert session.is_dirty is True
    assert events["dirty"] == [True]
    assert events["changed"]


def test_save_without_path_cancel_keeps_dirty() -> None:
    session, storage, _scheduler, _events = _session()
    storage.next_path = None
    session.editor.append_single_page()

    outcome = session.save()
    assert outcome.canceled is True
    assert outcome.success is False
    assert session.is_dirty is True


def test_save_success_clears_dirty_and_sets_path() -> None:
    session, storage, _scheduler, events = _session()
    session.editor.update_identity({"name": "A"})

    outcome = session.save()
    assert outcome.success is True
    assert outcome.path == "/tmp/Portfolio.json"
    assert session.path == "/tmp/Portfolio.json"
    assert session.is_dirty is False
    assert events["path"] == ["/tmp/Portfolio.json"]
    assert storage.files[outcome.path] == session.payload()


def test_save_failure_reports_error() -> None:
    session, storage, _scheduler, _events = _session()
    storage.fail_with = PermissionError(13, "Permission denied", "/tmp/Portfolio.json")
    session.editor.append_single_page()

    outcome = session.save()
    assert outcome.success is False
    assert outcome.error is not None
    assert outcome.error.code == "PERMISSION_DENIED"
    assert session.is_dirty is True


def test_autosave_requires_enabled_path_and_dirty() -> None:
    session, _storage, scheduler, _events = _session(autosave_enabled=True, autosave_delay_ms=1500)
    session.editor.append_single_page()
    assert AUTOSAVE_KEY not in scheduler.tasks

    session.save()
    session.editor.append_single_page()
    assert scheduler.tasks[AUTOSAVE_KEY][0] == 1500


def test_autosave_debounces_to_one_save() -> None:
    session, storage, scheduler, _events = _session(autosave_enabled=True)
    session.save()
    calls_before = storage.save_calls

    for _ in range(5):
        session.editor.append_single_page()
    assert scheduler.scheduled.count(AUTOSAVE_KEY) == 5
    assert len([k for k in scheduler.tasks if k == AUTOSAVE_KEY]) == 1

    scheduler.fire(AUTOSAVE_KEY)
    assert storage.save_calls == calls_before + 1
    assert session.is_dirty is False


def test_disabling_autosave_cancels_timer() -> None:
    session, _storage, scheduler, _events = _session(autosave_enabled=True)
    session.save()
    session.editor.append_single_page()
    session.configure_autosave(False)
    assert AUTOSAVE_KEY not in scheduler.tasks


def test_new_portfolio_replaces_state_and_cancels_tasks() -> None:
    session, storage, scheduler, events = _session(autosave_enabled=True)
    session.save()
    index = session.editor.append_single_page()
    session.editor.attach_image(index, ImageData(mime="image/png", data=b"x"))
    assert session.attach_queue.pending_count() == 1

    storage.next_path = "/tmp/Portfolio 2.json"
    outcome = session.new_portfolio()

    assert outcome.success is True
    assert session.document.pages == []
    assert session.path == "/tmp/Portfolio 2.json"
    assert session.is_dirty is False
    assert session.attach_queue.pending_count() == 0
    assert scheduler.tasks == {}
    assert events["replaced"] == [True]


def test_new_portfolio_cancel_keeps_current_document() -> None:
    session, storage, _scheduler, _events = _session()
    session.editor.append_single_page()
    storage.next_path = None

    outcome = session.new_portfolio()
    assert outcome.canceled is True
    assert len(session.document) == 1
    assert session.is_dirty is True


def test_open_at_loads_document() -> None:
    session, storage, _scheduler, _events = _session()
    doc = PortfolioDocument(identity=UserIdentity(name="Z"), pages=[SinglePage(title="t")])
    doc.sync_cover()
    storage.files["/tmp/a.json"] = document_to_payload(doc)

    opened = session.open_at("/tmp/a.json")
    assert opened.path == "/tmp/a.json"
    assert session.document == doc
    assert session.path == "/tmp/a.json"


def test_open_missing_file_raises_use_case_error() -> None:
    session, _storage, _scheduler, _events = _session()
    with pytest.raises(UseCaseError) as excinfo:
        session.open_at("/tmp/missing.json")
    assert excinfo.value.code == "FILE_NOT_FOUND"


def test_save_before_exit_only_saves_when_dirty() -> None:
    session, storage, _scheduler, _events = _session()
    assert session.save_before_exit().success is True
    assert storage.save_calls == 0

    session.editor.append_single_page()
    assert session.save_before_exit().success is True
    assert storage.save_calls == 1


def test_export_and_add_images() -> None:
    exporter = RecordingExporter()
    images = [ImageData(mime="image/png", data=b"1"), ImageData(mime="image/png", data=b"2")]
    session, _storage, _scheduler, _events = _session(exporter=exporter, image_source=StaticImages(images))

    assert session.add_images_from_dialog() == 2
    assert session.export(["card"]) == "/tmp/out.pdf"
    assert exporter.calls[0][1] == session.document.identity.theme


def test_export_without_exporter_raises() -> None:
    session, _storage, _scheduler, _events = _session()
    with pytest.raises(UseCaseError):
        session.export(["card"])


def test_autosave_failure_reaches_hook() -> None:
    scheduler = FakeScheduler()
    storage = MemoryStorage()
    failures: List[UseCaseError] = []
    session = PortfolioSession(
        storage,
        scheduler,
        hooks=SessionHooks(on_save_failed=failures.append),
        extract_year=lambda data: None,
        autosave_enabled=True,
    )
    session.save()
    session.editor.append_single_page()
    storage.fail_with = PermissionError(13, "Permission denied", "/tmp/Portfolio.json")

    scheduler.fire(AUTOSAVE_KEY)

    assert [err.code for err in failures] == ["PERMISSION_DENIED"]
    assert session.is_dirty is True


def test_malformed_open_keeps_current_document() -> None:
    session, storage, _scheduler, events = _session()
    session.editor.update_identity({"name": "Kept"})
    session.editor.append_single_page()
    before = session.payload()
    storage.files["/tmp/Portfolio.json"] = {"userInfo": {"name": "Other"}, "pages": [{"type": "bogus"}]}

    with pytest.raises(UseCaseError) as excinfo:
        session.open()

    assert excinfo.value.code == "INVALID_PORTFOLIO"
    assert session.document.identity.name == "Kept"
    assert session.payload() == before
    assert session.path is None
    assert events["replaced"] == []


def test_dropped_images_become_single_pages() -> None:
    images = [ImageData(mime="image/png", data=b"1"), ImageData(mime="image/png", data=b"2")]
    source = StaticImages(images)
    session, _storage, _scheduler, _events = _session(image_source=source)

    added = session.add_dropped_images(["/pics/a.png", "/pics/b.png"])

    assert added == 2
    assert source.read_paths == ["/pics/a.png", "/pics/b.png"]
    assert [page.image for page in session.document.pages] == images
    assert session.is_dirty is True


def test_drop_without_images_changes_nothing() -> None:
    session, _storage, _scheduler, _events = _session(image_source=StaticImages([ImageData(mime="image/png", data=b"1")]))

    assert session.add_dropped_images(["/notes.txt"]) == 0
    assert session.attach_dropped_image(0, ["/notes.txt"]) is None
    assert len(session.document) == 0
    assert session.is_dirty is False


def test_drop_on_slot_attaches_first_image() -> None:
    images = [ImageData(mime="image/png", data=b"1"), ImageData(mime="image/png", data=b"2")]
    session, _storage, scheduler, _events = _session(image_source=StaticImages(images))
    index = session.editor.append_single_page()

    future = session.attach_dropped_image(index, ["/pics/a.png", "/pics/b.png"])

    assert future is not None
    assert session.document.pages[index].image == images[0]
    assert any(key.startswith("image-attach:") for key in scheduler.tasks)


def test_drop_without_image_source_raises() -> None:
    session, _storage, _scheduler, _events = _session()
    with pytest.raises(UseCaseError) as excinfo:
        session.add_dropped_images(["/pics/a.png"])
    assert excinfo.value.code == "IMAGES_UNAVAILABLE"
