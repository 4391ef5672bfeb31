import os

import pytest

from usersecrets.core import constants as app_constants
from usersecrets.services import runtime_paths_service


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def test_runtime_data_dir_on_posix(home):
    path = runtime_paths_service.runtime_data_dir(platform_name="linux", env={})

    assert path == os.path.join(str(home), ".local", "state", app_constants.RUNTIME_DIR_NAME)


def test_runtime_data_dir_create(home):
    path = runtime_paths_service.runtime_data_dir(create=True, platform_name="linux", env={})

    assert os.path.isdir(path)


def test_runtime_data_dir_on_windows_uses_local_app_data(home):
    local = os.path.join(str(home), "AppData", "Local")

    path = runtime_paths_service.runtime_data_dir(platform_name="win32", env={"LOCALAPPDATA": local})

    assert path == os.path.join(local, app_constants.RUNTIME_DIR_NAME)


def test_runtime_data_dir_on_windows_rejects_base_outside_home(home):
    path = runtime_paths_service.runtime_data_dir(platform_name="win32", env={"LOCALAPPDATA": "/elsewhere"})

    assert path == os.path.join(str(home), app_constants.RUNTIME_DIR_NAME)


def test_user_secrets_base_dir_on_posix(home):
    assert runtime_paths_service.user_secrets_base_dir(platform_name="linux", env={}) == os.path.join(
        str(home), ".microsoft", "usersecrets"
    )


def test_user_secrets_base_dir_on_windows():
    appdata = "C:\\Users\\dev\\AppData\\Roaming"

    base = runtime_paths_service.user_secrets_base_dir(platform_name="win32", env={"APPDATA": appdata})

    assert base == os.path.join(appdata, "Microsoft", "UserSecrets")


def test_user_secrets_base_dir_on_windows_without_appdata(home):
    base = runtime_paths_service.user_secrets_base_dir(platform_name="win32", env={})

    assert base == os.path.join(str(home), "AppData", "Roaming", "Microsoft", "UserSecrets")


def test_secrets_file_path(home):
    path = runtime_paths_service.secrets_file_path(" abc-123 ", platform_name="linux", env={})

    assert path == os.path.join(str(home), ".microsoft", "usersecrets", "abc-123", "secrets.json")
