"""Project discovery: find project files that declare a user-secrets id."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterable, Mapping, Optional

from usersecrets.core import constants as app_constants
from usersecrets.core.exceptions import EXPECTED_ERRORS
from usersecrets.core.project_models import ProjectInfo
from usersecrets.services import runtime_paths_service

_LOG = logging.getLogger(__name__)


def _local_tag(tag: str) -> str:
    # Old-style project files carry the MSBuild namespace on every element.
    return str(tag).rsplit("}", 1)[-1]


def extract_user_secrets_id(content: str) -> Optional[str]:
    """Return the first non-blank `UserSecretsId` in a project file, if any."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        _LOG.debug("project_scanner.parse_failed", exc_info=exc)
        return None
    for element in root.iter():
        if _local_tag(element.tag) != "UserSecretsId":
            continue
        value = (element.text or "").strip()
        if value:
            return value
    return None


def find_app_settings_files(project_dir: str) -> list[str]:
    """List `appsettings*.json` beside a project, `appsettings.json` first."""
    try:
        names = os.listdir(project_dir)
    except EXPECTED_ERRORS as exc:
        _LOG.debug("expected_error", exc_info=exc)
        return []
    matches = [
        name
        for name in names
        if name.startswith(app_constants.APP_SETTINGS_PREFIX) and name.endswith(".json")
    ]
    matches.sort(key=lambda name: (name != app_constants.APP_SETTINGS_BASE_FILENAME, name.lower()))
    return [os.path.join(project_dir, name) for name in matches]


def is_azure_functions_project(project_dir: str, project_content: str) -> bool:
    text = str(project_content or "")
    if any(marker in text for marker in app_constants.AZURE_FUNCTIONS_SDK_MARKERS):
        return True
    return os.path.isfile(os.path.join(project_dir, app_constants.AZURE_FUNCTIONS_HOST_FILENAME))


def parse_project(
    project_path: str,
    platform_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Optional[ProjectInfo]:
    """Build a `ProjectInfo` for a project file, or None when it has no secrets id."""
    try:
        with open(project_path, "r", encoding="utf-8-sig") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        _LOG.debug(
            "project_scanner.read_failed",
            extra={"path": project_path, "error_type": type(exc).__name__},
            exc_info=exc,
        )
        return None
    user_secrets_id = extract_user_secrets_id(content)
    if not user_secrets_id:
        return None
    project_dir = os.path.dirname(os.path.abspath(project_path))
    name = os.path.splitext(os.path.basename(project_path))[0]
    local_settings = os.path.join(project_dir, app_constants.LOCAL_SETTINGS_FILENAME)
    return ProjectInfo(
        name=name,
        project_path=os.path.abspath(project_path),
        user_secrets_id=user_secrets_id,
        secrets_file_path=runtime_paths_service.secrets_file_path(
            user_secrets_id, platform_name=platform_name, env=env
        ),
        app_settings_files=find_app_settings_files(project_dir),
        is_azure_functions=is_azure_functions_project(project_dir, content),
        local_settings_path=local_settings if os.path.isfile(local_settings) else None,
    )


def iter_project_files(root_dir: str) -> Iterable[str]:
    def _on_walk_error(exc: OSError) -> None:
        _LOG.debug("project_scanner.walk_error", extra={"path": getattr(exc, "filename", "")})

    for current, dirs, files in os.walk(root_dir, onerror=_on_walk_error):
        dirs[:] = sorted(d for d in dirs if d not in app_constants.SCAN_SKIP_DIRS)
        for name in sorted(files):
            if name.endswith(app_constants.PROJECT_FILE_SUFFIX):
                yield os.path.join(current, name)


def scan_directory(
    root_dir: str,
    platform_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> list[ProjectInfo]:
    """Recursively collect projects, one per secrets id, sorted by name."""
    if not root_dir or not os.path.isdir(root_dir):
        return []
    projects: list[ProjectInfo] = []
    seen_ids: set[str] = set()
    for project_path in iter_project_files(root_dir):
        project = parse_project(project_path, platform_name=platform_name, env=env)
        # Several projects may share one secrets store; the first one wins.
        if project is None or project.user_secrets_id in seen_ids:
            continue
        seen_ids.add(project.user_secrets_id)
        projects.append(project)
    projects.sort(key=lambda item: (item.name.lower(), item.name))
    _LOG.info("project_scanner.scan_done", extra={"root": root_dir, "count": len(projects)})
    return projects


def relative_project_path(full_path: str, base_path: str) -> str:
    full = str(full_path or "").replace("\\", "/")
    base = str(base_path or "").replace("\\", "/").rstrip("/")
    if base and (full == base or full.startswith(base + "/")):
        return full[len(base) :].lstrip("/") or "."
    return str(full_path or "")


def filter_projects(projects: Iterable[ProjectInfo], term: str, base_path: str = "") -> list[ProjectInfo]:
    needle = str(term or "").strip().lower()
    items = list(projects)
    if not needle:
        return items
    return [
        project
        for project in items
        if needle in project.name.lower()
        or needle in relative_project_path(project.project_path, base_path).lower()
    ]
