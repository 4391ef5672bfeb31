"""Structured runtime state for open documents and the active tab."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from usersecrets.core import constants as app_constants
from usersecrets.core.project_models import ProjectInfo

CLEAN = "clean"
DIRTY = "dirty"


@dataclass(slots=True)
class DocumentSession:
    """One editable document: Clean until edited, Clean again only after a save."""

    path: str
    text: str = ""
    status: str = CLEAN
    read_only: bool = False

    @property
    def is_dirty(self) -> bool:
        return self.status == DIRTY

    def load(self, text: str) -> None:
        self.text = str(text or "")
        self.status = CLEAN

    def record_edit(self, text: str) -> None:
        if self.read_only:
            return
        self.text = str(text or "")
        self.status = DIRTY

    def mark_saved(self, text: Optional[str] = None) -> None:
        if text is not None:
            self.text = str(text)
        self.status = CLEAN


@dataclass(slots=True)
class EditorState:
    """Top-level state container so flags do not scatter across the window."""

    folder: str = ""
    projects: list[ProjectInfo] = field(default_factory=list)
    project: Optional[ProjectInfo] = None
    sessions: dict[str, DocumentSession] = field(default_factory=dict)
    active_tab: str = app_constants.TAB_SECRETS

    def select_project(self, project: Optional[ProjectInfo]) -> None:
        self.project = project
        self.sessions.clear()
        self.active_tab = app_constants.TAB_SECRETS

    def open_session(self, tab: str, path: str, text: str, *, read_only: bool = False) -> DocumentSession:
        # Only secrets.json and local.settings.json are ever written back.
        read_only = read_only or tab not in app_constants.EDITABLE_TABS
        session = DocumentSession(path=str(path or ""), read_only=read_only)
        session.load(text)
        self.sessions[tab] = session
        return session

    def set_active_tab(self, tab: str) -> bool:
        match tab:
            case app_constants.TAB_SECRETS | app_constants.TAB_APP_SETTINGS:
                self.active_tab = tab
                return True
            case app_constants.TAB_LOCAL_SETTINGS:
                if self.project is None or not self.project.local_settings_path:
                    return False
                self.active_tab = tab
                return True
            case _:
                return False

    def active_session(self) -> Optional[DocumentSession]:
        return self.sessions.get(self.active_tab)

    def dirty_tabs(self) -> list[str]:
        return [tab for tab, session in self.sessions.items() if session.is_dirty]

    def has_unsaved_changes(self) -> bool:
        return bool(self.dirty_tabs())
