import json

from usersecrets.core import constants as app_constants
from usersecrets.services import settings_service


def test_missing_settings_file_gives_defaults(tmp_path):
    settings = settings_service.load_user_settings(str(tmp_path / "nope.json"))

    assert settings == settings_service.default_settings()


def test_settings_round_trip(tmp_path):
    path = settings_service.settings_path(str(tmp_path))

    assert settings_service.save_user_settings(
        path, {"font_size": 14, "app_theme": "light", "last_folder": "/src", "junk": 1}
    )
    loaded = settings_service.load_user_settings(path)

    assert path.endswith(app_constants.SETTINGS_FILENAME)
    assert loaded == {"font_size": 14, "app_theme": "LIGHT", "last_folder": "/src"}


def test_corrupt_settings_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert settings_service.load_user_settings(str(path)) == settings_service.default_settings()


def test_normalize_settings_rejects_bad_values():
    settings = settings_service.normalize_settings(
        {"font_size": 100, "app_theme": "neon", "last_folder": 5}
    )

    assert settings == settings_service.default_settings()
    assert settings_service.normalize_settings({"font_size": True})["font_size"] == app_constants.FONT_SIZE_DEFAULT
    assert settings_service.normalize_settings(["not", "a", "dict"]) == settings_service.default_settings()


def test_saved_settings_are_plain_json(tmp_path):
    path = str(tmp_path / "settings.json")

    settings_service.save_user_settings(path, settings_service.default_settings())

    with open(path, "r", encoding="utf-8") as fh:
        assert json.load(fh)["app_theme"] == app_constants.APP_THEME_DEFAULT
