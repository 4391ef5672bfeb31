from types import SimpleNamespace

from usersecrets.core import constants as app_constants
from usersecrets.core import jsonc_engine
from usersecrets.services import validation_feedback_service


def _owner():
    calls = {"status": [], "highlight": [], "hidden": 0, "logged": []}

    def _hide():
        calls["hidden"] += 1

    owner = SimpleNamespace(
        _validation_error=None,
        _last_logged_error=None,
        _set_validation_status=lambda text, ok: calls["status"].append((text, ok)),
        _apply_error_highlight=lambda report: calls["highlight"].append(report),
        _hide_error_popup=_hide,
        _log_validation_error=lambda report, note="": calls["logged"].append((report.message, note)),
    )
    return owner, calls


def test_status_for_report():
    assert validation_feedback_service.status_for_report(jsonc_engine.validate("{}")) == (
        app_constants.STATUS_VALID,
        True,
    )
    assert validation_feedback_service.status_for_report(jsonc_engine.validate("{")) == (
        app_constants.STATUS_INVALID,
        False,
    )


def test_highlight_line_is_clamped():
    report = jsonc_engine.ValidationReport(False, line=40, column=1, message="x")

    assert validation_feedback_service.highlight_line(report, 3) == 3
    assert validation_feedback_service.highlight_line(jsonc_engine.ValidationReport(True), 3) is None


def test_invalid_report_updates_owner_and_logs_once():
    owner, calls = _owner()
    report = jsonc_engine.validate('{\n  "x": 1\n  "y": 2\n}')

    validation_feedback_service.handle_live_validation(owner, report)
    validation_feedback_service.handle_live_validation(owner, report)

    assert calls["status"] == [(app_constants.STATUS_INVALID, False)] * 2
    assert owner._validation_error == report.message
    assert calls["logged"] == [(report.message, "live_validation")]
    assert calls["hidden"] == 0


def test_valid_report_hides_popup_and_resets_log_signature():
    owner, calls = _owner()
    broken = jsonc_engine.validate("{'a': 1}")

    validation_feedback_service.handle_live_validation(owner, broken)
    validation_feedback_service.handle_live_validation(owner, jsonc_engine.validate('{"a": 1}'))
    validation_feedback_service.handle_live_validation(owner, broken, note="save_blocked")

    assert calls["hidden"] == 1
    assert owner._validation_error == broken.message
    assert [note for _message, note in calls["logged"]] == ["live_validation", "save_blocked"]


def test_owner_hook_failures_are_contained():
    owner, calls = _owner()

    def _broken_status(text, ok):
        raise RuntimeError("widget gone")

    owner._set_validation_status = _broken_status

    validation_feedback_service.handle_live_validation(owner, jsonc_engine.validate("{"))

    assert len(calls["highlight"]) == 1
    assert len(calls["logged"]) == 1


def test_open_popup_follows_a_changed_error():
    owner, calls = _owner()
    shown = []
    owner._show_error_popup = shown.append
    owner.error_overlay = object()

    first = jsonc_engine.validate("{'a': 1}")
    validation_feedback_service.handle_live_validation(owner, first)
    validation_feedback_service.handle_live_validation(owner, first)
    second = jsonc_engine.validate('{"a": 1')
    validation_feedback_service.handle_live_validation(owner, second)

    assert shown == [first.message, second.message]


def test_closed_popup_stays_closed_on_new_error():
    owner, calls = _owner()
    shown = []
    owner._show_error_popup = shown.append
    owner.error_overlay = None

    validation_feedback_service.handle_live_validation(owner, jsonc_engine.validate("{'a': 1}"))

    assert shown == []
