# folio/app/main.py
from __future__ import annotations
import logging
import os
from tkinter import filedialog, messagebox
from typing import Dict, Optional, Sequence

# ---- Views (UI-only) ----
from .views.main_window import MainWindowView
from .views.page_list_view import PageListView
from .views.page_canvas_view import PageCanvasView
from .views.identity_dialog import IdentityDialog
from .views.project_dialog import ProjectDialog
from .views.style_dialog import StyleDialog
from .views.preferences_dialog import PreferencesDialog
from .views.theme import apply_app_theme
from .task_scheduler import TaskScheduler

# ---- ViewModels ----
from ..viewmodels.settings_vm import SettingsVM
from ..viewmodels.theme_vm import (
    COLOR_TARGETS,
    FONT_FAMILIES,
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    TARGET_LABELS,
    ThemeEditorVM,
)
from ..viewmodels.page_view import build_cards, build_rows

# ---- UseCases & Adapters ----
from ..usecases.portfolio_session import PortfolioSession, SaveOutcome, SessionHooks
from ..adapters.storage_local import PortfolioFileStore, StorageLocal
from ..adapters.image_files import FILE_TYPES, LocalImageSource
from ..adapters.pdf_export import ReportlabPdfExporter
from ..domain.ports import UseCaseError
from ..domain.theme import PRESET_LABELS, ThemeStyle
from ..utils import logging as logging_utils

logging_utils.configure_root()

PORTFOLIO_FILE_TYPES = [("Portfolio JSON", "*.json"), ("All files", "*.*")]


class App:
    """Bootstrap: wire Views <-> ViewModels, the portfolio session and adapters."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self.win = MainWindowView(
            on_new=self._on_new,
            on_open=self._on_open,
            on_save=self._on_save,
            on_save_as=lambda: self._on_save(save_as=True),
            on_export_pdf=self._on_export_pdf,
            on_open_preferences=self._on_open_preferences,
            on_edit_identity=self._on_edit_identity,
            on_edit_style=self._on_edit_style,
            on_add_images=self._on_add_images,
            on_add_project=self._on_add_project,
            on_zoom_in=lambda: self._on_zoom(+1),
            on_zoom_out=lambda: self._on_zoom(-1),
            on_close=self._on_close,
        )
        self._selected: Optional[int] = None
        self._preview_theme: Optional[ThemeStyle] = None
        self._chrome: Dict[str, str] = {}

        # ---- Preferences ----
        self._storage = StorageLocal()
        self.settings_vm = SettingsVM()
        self._load_user_settings()
        self._apply_chrome()

        # ---- Subviews ----
        self.page_list = PageListView(
            self.win.page_list_host,
            on_select=self._on_select_page,
            on_move_up=self._on_move_up,
            on_move_down=self._on_move_down,
            on_delete=self._on_delete_page,
            on_delete_series=self._on_delete_series,
        )
        self.win.mount(self.win.page_list_host, self.page_list)
        self.page_canvas = PageCanvasView(
            self.win.canvas_host,
            on_edit_field=self._on_edit_field,
            on_attach_image=self._on_attach_image,
            on_select=self._on_select_page,
            on_drop_images=self._on_drop_images,
            on_drop_image_on_page=self._on_drop_image_on_page,
        )
        self.win.mount(self.win.canvas_host, self.page_canvas)
        self.page_canvas.set_zoom(self.settings_vm.zoom)
        self.win.set_zoom(self.settings_vm.zoom)

        # ---- Session ----
        self.scheduler = TaskScheduler(self.win.after, self.win.after_cancel)
        storage_root = self._storage.root
        self.session = PortfolioSession(
            PortfolioFileStore(self._ask_save_path, self._ask_open_path, default_dir=os.path.expanduser("~")),
            self.scheduler,
            exporter=ReportlabPdfExporter(self._ask_pdf_path),
            image_source=LocalImageSource(self._ask_image_paths),
            hooks=SessionHooks(
                on_document_changed=self._refresh,
                on_document_replaced=self._on_document_replaced,
                on_dirty_changed=self.win.set_dirty,
                on_path_changed=self._on_path_changed,
                on_save_failed=self._on_autosave_failed,
            ),
            autosave_enabled=self.settings_vm.autosave,
            autosave_delay_ms=self.settings_vm.autosave_delay_ms,
        )
        self._log.debug("Preferences stored under %s", storage_root)

        self.theme_vm = ThemeEditorVM(on_preview=self._on_theme_preview, on_commit=self._on_theme_commit)
        self._style_dialog: Optional[StyleDialog] = None

        self._refresh()
        self.win.after(50, self._startup)

    # ==================================================================
    # Preferences
    # ==================================================================
    def _load_user_settings(self) -> None:
        payload: Optional[Dict] = None
        try:
            payload = self._storage.load_user_prefs()
        except (OSError, ValueError) as exc:
            self.win.show_toast(f"Could not load preferences: {exc}")
        if payload is not None:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self.win.show_toast(str(exc))
        self._apply_logging_preferences()

    def _apply_logging_preferences(self) -> None:
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective GUI log level: %s", logging_utils.level_name(level))

    def _persist_settings(self) -> None:
        try:
            self._storage.save_user_prefs(self.settings_vm.to_dict())
        except OSError as exc:
            self._log.warning("Saving preferences failed: %s", exc)
            self.win.show_toast(f"Could not save preferences: {exc}")

    def _apply_chrome(self) -> None:
        self._chrome = apply_app_theme(self.win, dark=self.settings_vm.effective_dark())

    def _on_open_preferences(self) -> None:
        dialog = PreferencesDialog(self.win, on_save=self._on_settings_saved)
        dialog.set_ui_dark(self.settings_vm.ui_dark)
        dialog.set_autosave(self.settings_vm.autosave)
        dialog.set_debug_logging(self.settings_vm.debug_logging)

    def _on_settings_saved(self, cfg: dict) -> None:
        try:
            self.settings_vm.apply_dict(cfg)
        except ValueError as exc:
            self.win.show_toast(str(exc))
            return
        self._persist_settings()
        self._apply_logging_preferences()
        self._apply_chrome()
        self.session.configure_autosave(self.settings_vm.autosave, self.settings_vm.autosave_delay_ms)
        self._refresh()
        self.win.show_toast("Preferences saved.")

    def _on_zoom(self, direction: int) -> None:
        zoom = self.settings_vm.zoom_in() if direction > 0 else self.settings_vm.zoom_out()
        self.page_canvas.set_zoom(zoom)
        self.win.set_zoom(zoom)
        self._persist_settings()
        self._refresh()

    # ==================================================================
    # Startup / lifecycle
    # ==================================================================
    def _startup(self) -> None:
        last = self.settings_vm.last_portfolio_path
        if last and os.path.exists(last):
            try:
                self.session.open_at(last)
                self.win.show_toast(f"Opened {os.path.basename(last)}")
                return
            except UseCaseError as err:
                self._toast_error(err, context="Could not reopen last portfolio")
        first_run = not self.settings_vm.has_run
        if first_run:
            self.settings_vm.has_run = True
            self._persist_settings()
        self._show_identity_dialog(first_run=first_run)

    def _confirm_discard(self, action: str) -> bool:
        """Unsaved-changes prompt. True when ``action`` may proceed."""
        if not self.session.is_dirty:
            return True
        answer = messagebox.askyesnocancel(
            "Unsaved changes",
            f"Save changes to your portfolio before {action}?",
            parent=self.win,
        )
        if answer is None:
            return False
        if answer is False:
            return True
        outcome = self.session.save_before_exit()
        return self._report_save(outcome)

    def _on_new(self) -> None:
        if not self._confirm_discard("starting a new one"):
            return
        outcome = self.session.new_portfolio()
        if outcome.error is not None:
            self._toast_error(outcome.error)
            return
        if outcome.success:
            self.win.show_toast(f"Created {os.path.basename(outcome.path or '')}")
            self._show_identity_dialog()

    def _on_open(self) -> None:
        if not self._confirm_discard("opening another portfolio"):
            return
        try:
            opened = self.session.open()
        except UseCaseError as err:
            self._toast_error(err)
            if err.code == "INVALID_PORTFOLIO":
                messagebox.showerror("Open portfolio", err.message, parent=self.win)
            return
        if opened is not None:
            self.win.show_toast(f"Opened {os.path.basename(opened.path)}")

    def _on_save(self, save_as: bool = False) -> None:
        outcome = self.session.save(save_as=save_as)
        if self._report_save(outcome):
            self.win.show_toast(f"Saved {os.path.basename(outcome.path or '')}")

    def _report_save(self, outcome: SaveOutcome) -> bool:
        if outcome.error is not None:
            self._toast_error(outcome.error, context="Save failed")
            messagebox.showerror("Save failed", outcome.error.message, parent=self.win)
            return False
        return outcome.success

    def _on_close(self) -> None:
        if not self._confirm_discard("closing"):
            return
        self.session.shutdown()
        self.scheduler.cancel_all()
        self.win.destroy()

    def _on_document_replaced(self) -> None:
        self._selected = None
        self._refresh()

    def _on_path_changed(self, path: Optional[str]) -> None:
        self.win.set_document_path(path)
        if path and path != self.settings_vm.last_portfolio_path:
            self.settings_vm.last_portfolio_path = path
            self._persist_settings()

    # ==================================================================
    # Dialog callables handed to adapters
    # ==================================================================
    def _ask_save_path(self, initial_dir: str, initial_file: str) -> Optional[str]:
        return filedialog.asksaveasfilename(
            parent=self.win,
            defaultextension=".json",
            filetypes=PORTFOLIO_FILE_TYPES,
            initialdir=initial_dir,
            initialfile=initial_file,
            title="Save Portfolio",
        ) or None

    def _ask_open_path(self, initial_dir: str) -> Optional[str]:
        return filedialog.askopenfilename(
            parent=self.win,
            filetypes=PORTFOLIO_FILE_TYPES,
            initialdir=initial_dir,
            title="Open Portfolio",
        ) or None

    def _ask_pdf_path(self, initial_file: str) -> Optional[str]:
        initial_dir = os.path.dirname(self.session.path) if self.session.path else os.path.expanduser("~")
        if self.session.path:
            initial_file = os.path.splitext(os.path.basename(self.session.path))[0] + ".pdf"
        return filedialog.asksaveasfilename(
            parent=self.win,
            defaultextension=".pdf",
            filetypes=[("PDF", "*.pdf")],
            initialdir=initial_dir,
            initialfile=initial_file,
            title="Export PDF",
        ) or None

    def _ask_image_paths(self):
        return filedialog.askopenfilenames(parent=self.win, filetypes=list(FILE_TYPES), title="Add Images")

    # ==================================================================
    # Identity / style
    # ==================================================================
    def _show_identity_dialog(self, first_run: bool = False) -> None:
        identity = self.session.document.identity
        dialog = IdentityDialog(
            self.win,
            presets=list(PRESET_LABELS.items()),
            on_submit=self._on_identity_submitted,
            first_run=first_run,
            on_open_existing=self._on_open if first_run else None,
        )
        values = {name: getattr(identity, name) for name in ("name", "years", "statement", "instagram", "username", "email", "portfolio_label")}
        dialog.set_values(values, identity.theme_preset)

    def _on_edit_identity(self) -> None:
        self._show_identity_dialog()

    def _on_identity_submitted(self, values: Dict[str, str], preset: str) -> None:
        self.session.editor.update_identity(values, preset_key=preset)

    def _on_edit_style(self) -> None:
        self.theme_vm.open(self.session.document.identity)
        self._style_dialog = StyleDialog(
            self.win,
            presets=list(PRESET_LABELS.items()),
            targets=[(key, TARGET_LABELS[key]) for key in COLOR_TARGETS],
            font_families=FONT_FAMILIES,
            font_size_range=(FONT_SIZE_MIN, FONT_SIZE_MAX),
            on_preset=lambda key: self._style_action(self.theme_vm.set_preset, key),
            on_target=lambda target: self._style_action(self.theme_vm.set_target, target),
            on_color=lambda value: self._style_action(self.theme_vm.set_color, value),
            on_reset_target=lambda: self._style_action(self.theme_vm.reset_target),
            on_font_family=lambda value: self._style_action(self.theme_vm.set_font_family, value),
            on_font_size=lambda value: self._style_action(self.theme_vm.set_font_size, value),
            on_reset_typography=lambda: self._style_action(self.theme_vm.reset_typography),
            on_apply=self.theme_vm.commit,
            on_cancel=self.theme_vm.cancel,
        )
        self._sync_style_dialog()

    def _style_action(self, fn, *args) -> None:
        try:
            fn(*args)
        except ValueError as exc:
            self.win.show_toast(str(exc))
        self._sync_style_dialog()

    def _sync_style_dialog(self) -> None:
        dialog = self._style_dialog
        if dialog is None or not dialog.winfo_exists():
            return
        vm = self.theme_vm
        dialog.show_state(vm.preset, vm.target, vm.target_color, vm.working.font_family, vm.font_size)

    def _on_theme_preview(self, theme: ThemeStyle) -> None:
        self._preview_theme = theme if self.theme_vm.is_open else None
        self._refresh()

    def _on_theme_commit(self, preset: str, theme: ThemeStyle) -> None:
        self._preview_theme = None
        self.session.editor.apply_theme(preset, theme)
        self.win.show_toast("Style applied.")

    # ==================================================================
    # Page operations
    # ==================================================================
    def _on_add_images(self) -> None:
        try:
            added = self.session.add_images_from_dialog()
        except UseCaseError as err:
            self._toast_error(err)
            return
        if added:
            self._selected = len(self.session.document) - 1
            self.win.show_toast(f"Added {added} image page(s).")

    def _on_drop_images(self, paths: Sequence[str]) -> None:
        try:
            added = self.session.add_dropped_images(paths)
        except UseCaseError as err:
            self._toast_error(err, context="Drop")
            return
        if not added:
            self.win.show_toast("No image files in the drop.")
            return
        self._selected = len(self.session.document) - 1
        self.win.show_toast(f"Added {added} image page(s).")

    def _on_drop_image_on_page(self, index: int, paths: Sequence[str]) -> None:
        try:
            attached = self.session.attach_dropped_image(index, paths)
        except UseCaseError as err:
            self._toast_error(err, context="Drop")
            return
        except ValueError as exc:
            self._toast_error(exc, context="Image")
            return
        if attached is None:
            self.win.show_toast("No image files in the drop.")

    def _on_add_project(self) -> None:
        ProjectDialog(self.win, on_submit=self._on_project_submitted)

    def _on_project_submitted(self, title: str, year: str, desc: str, count: int) -> None:
        self._selected = self.session.editor.append_series(title, year, desc, count)
        self._refresh()
        self.page_canvas.scroll_to(self._selected)

    def _on_attach_image(self, index: int) -> None:
        path = filedialog.askopenfilename(parent=self.win, filetypes=list(FILE_TYPES), title="Choose Image")
        if not path:
            return
        try:
            image = LocalImageSource.read(path)
            self.session.editor.attach_image(index, image)
        except (OSError, ValueError) as exc:
            self._toast_error(exc, context="Image")

    def _on_edit_field(self, index: int, field: str, value: str) -> None:
        try:
            self.session.editor.edit_field(index, field, value)
        except ValueError as exc:
            self._toast_error(exc)

    def _on_select_page(self, index: int) -> None:
        if index == self._selected:
            return
        self._selected = index
        self.page_list.select(index)
        self.page_canvas.scroll_to(index)

    def _on_move_up(self, index: int) -> None:
        self._move(index, self.session.editor.move_up)

    def _on_move_down(self, index: int) -> None:
        self._move(index, self.session.editor.move_down)

    def _move(self, index: int, op) -> None:
        try:
            self._selected = op(index)
        except ValueError:
            return
        self._refresh()

    def _on_delete_page(self, index: int) -> None:
        if not messagebox.askyesno("Delete page", "Are you sure you want to delete this page?", parent=self.win):
            return
        try:
            self.session.editor.delete_page(index)
        except ValueError as exc:
            self._toast_error(exc)
            return
        self._selected = min(index, len(self.session.document) - 1) if len(self.session.document) else None
        self._refresh()

    def _on_delete_series(self, index: int) -> None:
        if not messagebox.askyesno("Delete project", "Delete this project and all of its image pages?", parent=self.win):
            return
        try:
            removed = self.session.editor.delete_series(index)
        except ValueError as exc:
            self._toast_error(exc)
            return
        self._selected = None
        self._refresh()
        self.win.show_toast(f"Deleted {removed} page(s).")

    def _on_export_pdf(self) -> None:
        cards = build_cards(self.session.document)
        try:
            path = self.session.export(cards)
        except UseCaseError as err:
            self._toast_error(err, context="Export")
            return
        if path:
            self.win.show_toast(f"Exported {os.path.basename(path)}")

    # ==================================================================
    # Rendering
    # ==================================================================
    def _refresh(self) -> None:
        document = self.session.document
        theme = self._preview_theme or document.identity.theme
        self.page_canvas.render(build_cards(document), theme, chrome_bg=self._chrome.get("bg"))
        self.page_list.set_rows(build_rows(document), selected=self._selected)

    # ==================================================================
    # Error handling helpers
    # ==================================================================
    def _on_autosave_failed(self, err: UseCaseError) -> None:
        self._toast_error(err, context="Autosave failed")

    def _toast_error(self, err: Exception, *, context: Optional[str] = None) -> None:
        message = self._format_error_message(err)
        if context:
            message = f"{context}: {message}"
        self.win.show_toast(message)

    def _format_error_message(self, err: Exception) -> str:
        if isinstance(err, UseCaseError):
            self._log.warning("UseCase error (%s): %s", err.code, err.message)
            return err.message
        if isinstance(err, (ValueError, OSError)):
            self._log.warning("%s: %s", type(err).__name__, err)
            return str(err)
        self._log.exception("Unexpected error")
        return str(err)


def main() -> None:
    app = App()
    app.win.mainloop()


if __name__ == "__main__":
    main()
