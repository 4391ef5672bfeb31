"""User settings persistence (font size, theme, last scanned folder)."""

import json
import logging
import os
from typing import Any, Optional

from usersecrets.core import constants as app_constants
from usersecrets.core.exceptions import EXPECTED_ERRORS
from usersecrets.services import runtime_paths_service
from usersecrets.services import secrets_store_service

_LOG = logging.getLogger(__name__)


def default_settings() -> dict[str, Any]:
    return {
        "font_size": app_constants.FONT_SIZE_DEFAULT,
        "app_theme": app_constants.APP_THEME_DEFAULT,
        "last_folder": "",
    }


def settings_path(runtime_dir: Optional[str] = None) -> str:
    base = runtime_dir or runtime_paths_service.runtime_data_dir(create=True)
    return os.path.join(base, app_constants.SETTINGS_FILENAME)


def normalize_settings(data: Any) -> dict[str, Any]:
    """Keep known keys with sane values; anything else falls back to defaults."""
    settings = default_settings()
    if not isinstance(data, dict):
        return settings
    font_size = data.get("font_size")
    if isinstance(font_size, int) and not isinstance(font_size, bool):
        if app_constants.FONT_SIZE_MIN <= font_size <= app_constants.FONT_SIZE_MAX:
            settings["font_size"] = font_size
    theme = str(data.get("app_theme", "")).upper()
    if theme in app_constants.APP_THEMES:
        settings["app_theme"] = theme
    last_folder = data.get("last_folder")
    if isinstance(last_folder, str):
        settings["last_folder"] = last_folder
    return settings


def load_user_settings(path: str) -> dict[str, Any]:
    if not os.path.isfile(path):
        return default_settings()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        _LOG.debug("settings.load_failed", extra={"path": path}, exc_info=exc)
        return default_settings()
    return normalize_settings(data)


def save_user_settings(path: str, settings: dict[str, Any]) -> bool:
    payload = json.dumps(normalize_settings(settings), ensure_ascii=False, indent=2)
    try:
        secrets_store_service.write_text_file_atomic(path, payload, encoding="utf-8")
    except EXPECTED_ERRORS as exc:
        _LOG.debug("settings.save_failed", extra={"path": path}, exc_info=exc)
        return False
    return True
