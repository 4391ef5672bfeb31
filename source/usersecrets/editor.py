import logging
import os
import sys
import time
import tkinter as tk
import tkinter.font as tkfont
from tkinter import filedialog, messagebox, ttk

from usersecrets.core import constants as app_constants
from usersecrets.core import jsonc_engine
from usersecrets.core.editor_state import EditorState
from usersecrets.core.exceptions import EXPECTED_ERRORS, SecretsSaveError
from usersecrets.services import error_overlay_service
from usersecrets.services import icon_service
from usersecrets.services import project_scanner_service
from usersecrets.services import runtime_log_service
from usersecrets.services import runtime_paths_service
from usersecrets.services import secrets_store_service
from usersecrets.services import settings_service
from usersecrets.services import theme_service
from usersecrets.services import ui_build_service
from usersecrets.services import validation_feedback_service

_LOG = logging.getLogger(__name__)


class SecretsEditor:
    APP_NAME = app_constants.APP_NAME
    APP_VERSION = app_constants.APP_VERSION
    LIVE_FEEDBACK_DELAY_MS = app_constants.LIVE_FEEDBACK_DELAY_MS_DEFAULT

    def __init__(self, root, folder=None):
        self.root = root
        self.root.title(f"{self.APP_NAME} - v{self.APP_VERSION}")
        self.state = EditorState()
        self.error_overlay = None
        self._icon_photo = None
        self._visible_projects = []
        self._validation_error = None
        self._last_logged_error = None
        self._validation_job = None
        self._suppress_modified = False
        self._runtime_dir = runtime_paths_service.runtime_data_dir(create=True)
        self._settings_path = settings_service.settings_path(self._runtime_dir)
        settings = settings_service.load_user_settings(self._settings_path)
        self._font_size = settings["font_size"]
        self._app_theme = settings["app_theme"]
        self._last_folder = settings["last_folder"]

        ui_build_service.build_ui(self, tk, ttk)
        runtime_log_service.purge_old_diag_logs(self._runtime_dir)
        self._update_tab_availability()
        self._set_validation_status("", True)

        start_folder = folder or self._last_folder
        if start_folder and os.path.isdir(start_folder):
            self.scan_folder(start_folder)

    # -- theme / chrome -------------------------------------------------

    def _palette(self):
        return theme_service.theme_palette_for_variant(self._app_theme)

    def _apply_theme(self):
        palette = self._palette()
        style = ttk.Style(self.root)
        try:
            style.theme_use("clam")
        except tk.TclError as exc:
            _LOG.debug("expected_error", exc_info=exc)
        self.root.configure(bg=palette["bg"])
        style.configure(".", background=palette["bg"], foreground=palette["fg"])
        style.configure("TFrame", background=palette["bg"])
        style.configure("TLabel", background=palette["bg"], foreground=palette["fg"])
        style.configure("Muted.TLabel", background=palette["bg"], foreground=palette["muted_fg"])
        style.configure(
            "Title.TLabel",
            background=palette["bg"],
            foreground=palette["fg"],
            font=(self._preferred_ui_family(), self._font_size + 2, "bold"),
        )
        style.configure("TButton", background=palette["accent"], foreground=palette["fg"])
        style.map(
            "TButton",
            background=[("pressed", palette["button_pressed"]), ("active", palette["button_active"])],
        )
        style.configure("TNotebook", background=palette["bg"])
        style.configure("TNotebook.Tab", background=palette["accent"], foreground=palette["fg"])
        style.map("TNotebook.Tab", background=[("selected", palette["select_bg"])])

    def _set_window_icon(self):
        self._icon_photo = icon_service.build_icon_photo(64, self._app_theme)
        if self._icon_photo is None:
            return
        try:
            self.root.iconphoto(True, self._icon_photo)
        except tk.TclError as exc:
            _LOG.debug("expected_error", exc_info=exc)

    def _preferred_mono_family(self):
        available = set(tkfont.families(self.root))
        for family in ("Cascadia Mono", "Consolas", "Menlo", "DejaVu Sans Mono", "Courier New"):
            if family in available:
                return family
        return "Courier"

    def _preferred_ui_family(self):
        available = set(tkfont.families(self.root))
        for family in ("Segoe UI", "SF Pro Text", "Helvetica Neue", "DejaVu Sans"):
            if family in available:
                return family
        return "Helvetica"

    def _style_text_widget(self):
        palette = self._palette()
        errors = theme_service.error_palette(self._app_theme)
        self.text.configure(
            bg=palette["editor_bg"],
            fg=palette["editor_fg"],
            insertbackground=palette["insert"],
            selectbackground=palette["select_bg"],
            selectforeground=palette["select_fg"],
            font=(self._preferred_mono_family(), self._font_size),
            borderwidth=0,
            highlightthickness=0,
        )
        self.text.tag_configure("json_error_line", background=errors["line_bg"])
        self.project_list.configure(
            bg=palette["panel"],
            fg=palette["fg"],
            selectbackground=palette["select_bg"],
            selectforeground=palette["select_fg"],
            borderwidth=0,
            highlightthickness=0,
        )

    def adjust_font_size(self, delta):
        size = min(max(self._font_size + int(delta), app_constants.FONT_SIZE_MIN), app_constants.FONT_SIZE_MAX)
        if size == self._font_size:
            return
        self._font_size = size
        self.text.configure(font=(self._preferred_mono_family(), self._font_size))
        self._save_settings()

    def toggle_theme(self):
        self._app_theme = "LIGHT" if self._app_theme == "DARK" else "DARK"
        self._apply_theme()
        self._style_text_widget()
        self._set_window_icon()
        if self.state.active_session() is not None:
            self._run_live_validation()
        else:
            self._set_validation_status("", True)
        if self.error_overlay is not None:
            error_overlay_service.show_error_popup(self, self._validation_error)
        self._save_settings()

    def set_status(self, text):
        try:
            self.status_label.configure(text=str(text or ""))
        except tk.TclError as exc:
            _LOG.debug("expected_error", exc_info=exc)

    # -- projects -------------------------------------------------------

    def open_folder(self):
        if not self._confirm_discard_changes():
            return
        initial = self.state.folder or self._last_folder or os.path.expanduser("~")
        folder = filedialog.askdirectory(
            parent=self.root,
            title="Select folder to scan for .NET projects",
            initialdir=initial if os.path.isdir(initial) else None,
        )
        if folder:
            self.scan_folder(folder)

    def scan_folder(self, folder):
        self.set_status("Scanning...")
        self.root.update_idletasks()
        projects = project_scanner_service.scan_directory(folder)
        self.state.folder = folder
        self.state.projects = projects
        self.state.select_project(None)
        self._last_folder = folder
        self._save_settings()
        self.folder_label.configure(text=folder)
        self._refresh_project_list()
        self._clear_editor()
        if projects:
            self.set_status(f"Found {len(projects)} project(s)")
        else:
            self.set_status(app_constants.STATUS_NO_PROJECTS)

    def _refresh_project_list(self):
        term = self.filter_var.get() if getattr(self, "filter_var", None) is not None else ""
        self._visible_projects = project_scanner_service.filter_projects(
            self.state.projects, term, self.state.folder
        )
        self.project_list.delete(0, "end")
        for project in self._visible_projects:
            rel = project_scanner_service.relative_project_path(project.project_path, self.state.folder)
            self.project_list.insert("end", f"{project.name}   ({rel})")
        current = self.state.project
        if current is not None and current in self._visible_projects:
            idx = self._visible_projects.index(current)
            self.project_list.selection_set(idx)
            self.project_list.see(idx)

    def _on_project_select(self, _event=None):
        selection = self.project_list.curselection()
        if not selection:
            return
        project = self._visible_projects[int(selection[0])]
        if project is self.state.project:
            return
        if not self._confirm_discard_changes():
            self._refresh_project_list()
            return
        self.load_project(project)

    def load_project(self, project):
        self.state.select_project(project)
        self.project_title.configure(text=project.name)
        self.secrets_id_label.configure(text=project.user_secrets_id)

        loaded = secrets_store_service.load_secrets(project.secrets_file_path)
        self.state.open_session(app_constants.TAB_SECRETS, loaded.path, loaded.content)
        if loaded.error:
            self._log_text_error(loaded.content, 1, loaded.error, note="load_failed", path=loaded.path)
        if project.local_settings_path:
            local_text = secrets_store_service.load_text_file(project.local_settings_path)
            self.state.open_session(app_constants.TAB_LOCAL_SETTINGS, project.local_settings_path, local_text)
        self.app_settings_picker.configure(
            values=[os.path.basename(path) for path in project.app_settings_files]
        )
        if project.app_settings_files:
            self.app_settings_var.set(os.path.basename(project.app_settings_files[0]))
            self._open_app_settings(project.app_settings_files[0])
        else:
            self.app_settings_var.set("")
        self._update_tab_availability()
        self.tabs.select(self._tab_frames[app_constants.TAB_SECRETS])
        self._show_active_session()
        status = app_constants.STATUS_LOADED if loaded.exists else "New secrets file (not saved yet)"
        self.set_status(status)

    def _open_app_settings(self, path):
        text = secrets_store_service.load_text_file(path)
        self.state.open_session(app_constants.TAB_APP_SETTINGS, path, text, read_only=True)

    def _on_app_settings_selected(self, _event=None):
        project = self.state.project
        if project is None:
            return
        name = self.app_settings_var.get()
        for path in project.app_settings_files:
            if os.path.basename(path) == name:
                self._open_app_settings(path)
                break
        if self.state.active_tab == app_constants.TAB_APP_SETTINGS:
            self._show_active_session()

    # -- tabs / editor --------------------------------------------------

    def _update_tab_availability(self):
        project = self.state.project
        local_state = "normal" if project is not None and project.local_settings_path else "disabled"
        app_state = "normal" if project is not None and project.app_settings_files else "disabled"
        self.tabs.tab(self._tab_frames[app_constants.TAB_LOCAL_SETTINGS], state=local_state)
        self.tabs.tab(self._tab_frames[app_constants.TAB_APP_SETTINGS], state=app_state)

    def _tab_for_frame(self, frame_name):
        for tab, frame in self._tab_frames.items():
            if str(frame) == str(frame_name):
                return tab
        return app_constants.TAB_SECRETS

    def _on_tab_changed(self, _event=None):
        tab = self._tab_for_frame(self.tabs.select())
        if not self.state.set_active_tab(tab):
            return
        if tab == app_constants.TAB_APP_SETTINGS:
            self.app_settings_picker.pack(fill="x", pady=(4, 0), before=self._editor_host)
        else:
            self.app_settings_picker.pack_forget()
        self._show_active_session()

    def _clear_editor(self):
        self.project_title.configure(text="")
        self.secrets_id_label.configure(text="")
        self._set_editor_text("", read_only=True)
        self._update_tab_availability()
        self._update_save_button()
        self._set_validation_status("", True)

    def _set_editor_text(self, text, read_only=False):
        self._suppress_modified = True
        self.text.configure(state="normal")
        self.text.delete("1.0", "end")
        self.text.insert("1.0", text)
        self.text.edit_reset()
        self.text.edit_modified(False)
        if read_only:
            self.text.configure(state="disabled")
        self._suppress_modified = False

    def _editor_text(self):
        return self.text.get("1.0", "end-1c")

    def _show_active_session(self):
        session = self.state.active_session()
        if session is None:
            self._set_editor_text("", read_only=True)
            self._set_validation_status("", True)
            self._update_save_button()
            return
        self._set_editor_text(session.text, read_only=session.read_only)
        self._update_save_button()
        self._run_live_validation()

    def _on_text_modified(self, _event=None):
        if not self.text.edit_modified():
            return
        self.text.edit_modified(False)
        if self._suppress_modified:
            return
        session = self.state.active_session()
        if session is None or session.read_only:
            return
        session.record_edit(self._editor_text())
        self._update_save_button()
        self._schedule_live_validation()

    def _schedule_live_validation(self):
        if self._validation_job is not None:
            try:
                self.root.after_cancel(self._validation_job)
            except tk.TclError as exc:
                _LOG.debug("expected_error", exc_info=exc)
        self._validation_job = self.root.after(self.LIVE_FEEDBACK_DELAY_MS, self._run_live_validation)

    def _run_live_validation(self):
        self._validation_job = None
        report = jsonc_engine.validate(self._editor_text())
        validation_feedback_service.handle_live_validation(self, report)
        return report

    def _update_save_button(self):
        session = self.state.active_session()
        enabled = session is not None and session.is_dirty and not session.read_only
        self.save_button.configure(state="normal" if enabled else "disabled")
        dirty_mark = " *" if self.state.has_unsaved_changes() else ""
        self.root.title(f"{self.APP_NAME} - v{self.APP_VERSION}{dirty_mark}")

    # -- validation feedback hooks -------------------------------------

    def _set_validation_status(self, text, ok):
        palette = theme_service.validation_chip_palette(self._app_theme, ok)
        if not text:
            palette = {"bg": self._palette()["bg"], "fg": self._palette()["fg"]}
        self.validation_chip.configure(text=text, bg=palette["bg"], fg=palette["fg"])

    def _apply_error_highlight(self, report):
        self.text.tag_remove("json_error_line", "1.0", "end")
        last_line = int(self.text.index("end-1c").split(".")[0])
        line = validation_feedback_service.highlight_line(report, last_line)
        if line is None:
            return
        self.text.tag_add("json_error_line", f"{line}.0", f"{line}.0 lineend+1c")

    def _on_validation_chip_click(self, _event=None):
        error_overlay_service.toggle_error_popup(self)

    def _show_error_popup(self, message):
        error_overlay_service.show_error_popup(self, message)

    def _hide_error_popup(self):
        error_overlay_service.hide_error_popup(self)

    def _diag_log_path(self):
        return runtime_log_service.diag_log_path(self._runtime_dir)

    def _log_text_error(self, text, line, message, *, column=None, note="", path=""):
        entry = runtime_log_service.build_diag_entry(
            text,
            line,
            message,
            column=column,
            note=note,
            path=path,
            action=self.state.active_tab,
        )
        runtime_log_service.append_diag_entry(self._diag_log_path(), entry)

    def _log_validation_error(self, report, note="live_validation"):
        session = self.state.active_session()
        self._log_text_error(
            self._editor_text(),
            report.line,
            report.message,
            column=report.column,
            note=note,
            path=session.path if session is not None else "",
        )

    # -- commands -------------------------------------------------------

    def save_current(self):
        session = self.state.active_session()
        if session is None or session.read_only or not session.is_dirty:
            return False
        content = self._editor_text()
        try:
            modified = secrets_store_service.save_document(session.path, content)
        except SecretsSaveError as exc:
            report = self._run_live_validation()
            if not report.valid:
                self._log_validation_error(report, note="save_blocked")
                messagebox.showerror(
                    "Invalid JSON",
                    f"{app_constants.SAVE_BLOCKED_MESSAGE}\n\n{report.message}",
                    parent=self.root,
                )
            else:
                messagebox.showerror("Save failed", str(exc), parent=self.root)
            return False
        session.mark_saved(content)
        self._update_save_button()
        stamp = time.strftime("%H:%M:%S", time.localtime(modified))
        self.set_status(f"{app_constants.STATUS_SAVED} {os.path.basename(session.path)} at {stamp}")
        return True

    def format_current(self):
        session = self.state.active_session()
        if session is None or session.read_only:
            return False
        original = self._editor_text()
        formatted = jsonc_engine.format_document(original)
        if formatted == original:
            if not jsonc_engine.validate(original).valid:
                self.set_status("Cannot format invalid JSON")
            return False
        insert_at = self.text.index("insert")
        self.text.edit_separator()
        self.text.delete("1.0", "end")
        self.text.insert("1.0", formatted)
        self.text.edit_separator()
        try:
            self.text.mark_set("insert", insert_at)
        except tk.TclError as exc:
            _LOG.debug("expected_error", exc_info=exc)
        self.set_status(app_constants.STATUS_FORMATTED)
        return True

    def show_last_diagnostic(self):
        text = runtime_log_service.read_text_file_tail(self._diag_log_path(), 20000)
        block = runtime_log_service.read_latest_block(text, 4000)
        messagebox.showinfo("Last diagnostic", block or "No diagnostics logged today.", parent=self.root)

    def _confirm_discard_changes(self):
        if not self.state.has_unsaved_changes():
            return True
        return messagebox.askyesno(
            "Unsaved changes",
            "You have unsaved changes. Discard them?",
            icon="warning",
            parent=self.root,
        )

    def _save_settings(self):
        settings_service.save_user_settings(
            self._settings_path,
            {
                "font_size": self._font_size,
                "app_theme": self._app_theme,
                "last_folder": self._last_folder,
            },
        )

    def on_close(self):
        if not self._confirm_discard_changes():
            return
        try:
            self._save_settings()
        except EXPECTED_ERRORS as exc:
            _LOG.debug("expected_error", exc_info=exc)
        self.root.destroy()


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    folder = args[0] if args else None
    root = tk.Tk()
    root.geometry("1200x800")
    root.minsize(800, 600)
    SecretsEditor(root, folder)
    root.mainloop()


if __name__ == "__main__":
    main()
