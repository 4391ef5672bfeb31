"""Project and document records shared by the scanner, store and editor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class ProjectInfo:
    """A project file that declares a user-secrets id."""

    name: str
    project_path: str
    user_secrets_id: str
    secrets_file_path: str
    app_settings_files: list[str] = field(default_factory=list)
    is_azure_functions: bool = False
    local_settings_path: Optional[str] = None

    @property
    def project_dir(self) -> str:
        return os.path.dirname(self.project_path)

    @property
    def secrets_file_exists(self) -> bool:
        return os.path.isfile(self.secrets_file_path)


@dataclass(slots=True)
class LoadedDocument:
    """Text read from disk plus what the editor needs to show about it."""

    path: str
    content: str
    exists: bool = True
    last_modified: Optional[float] = None
    is_valid_json: bool = True
    validation_error: Optional[str] = None
    error: Optional[str] = None
