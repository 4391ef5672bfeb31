"""Runtime data and user-secrets path resolution helpers."""

import os
import sys
from typing import Any, Mapping, Optional

from usersecrets.core import constants as app_constants
from usersecrets.core.exceptions import EXPECTED_ERRORS


def _normalized_home() -> str:
    try:
        return os.path.abspath(os.path.expanduser("~"))
    except EXPECTED_ERRORS:
        return os.path.abspath(os.getcwd())


def _safe_windows_base(base: Any) -> str:
    # Keep env-derived bases rooted under the user's home; anything pointing
    # elsewhere falls back to home.
    home = _normalized_home()
    try:
        candidate = os.path.abspath(str(base or "").strip())
    except EXPECTED_ERRORS:
        return home
    if not str(base or "").strip():
        return home
    try:
        if os.path.commonpath([home, candidate]) == home:
            return candidate
    except EXPECTED_ERRORS:
        return home
    return home


def runtime_data_dir(
    create: bool = False,
    platform_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    runtime_dir_name: str = app_constants.RUNTIME_DIR_NAME,
) -> str:
    """Resolve the per-user directory for settings and diagnostics logs."""
    platform_name = str(platform_name or sys.platform)
    env = os.environ if env is None else env
    match platform_name:
        case "win32":
            env_base = str(env.get("LOCALAPPDATA", "")).strip() or str(env.get("APPDATA", "")).strip()
            base = _safe_windows_base(env_base)
        case _:
            base = os.path.join(_normalized_home(), ".local", "state")
    target = os.path.join(base, runtime_dir_name)
    if create:
        try:
            os.makedirs(target, exist_ok=True)
        except EXPECTED_ERRORS:
            return os.getcwd()
    return target


def user_secrets_base_dir(
    platform_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the root folder `dotnet user-secrets` stores secrets under."""
    platform_name = str(platform_name or sys.platform)
    env = os.environ if env is None else env
    match platform_name:
        case "win32":
            app_data = str(env.get("APPDATA", "")).strip()
            if not app_data:
                app_data = os.path.join(_normalized_home(), "AppData", "Roaming")
            return os.path.join(app_data, *app_constants.USER_SECRETS_WINDOWS_PARTS)
        case _:
            return os.path.join(_normalized_home(), *app_constants.USER_SECRETS_UNIX_PARTS)


def secrets_file_path(
    user_secrets_id: str,
    platform_name: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    base = user_secrets_base_dir(platform_name=platform_name, env=env)
    return os.path.join(base, str(user_secrets_id).strip(), app_constants.SECRETS_FILENAME)
