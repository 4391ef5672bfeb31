import os
from datetime import datetime, timedelta

from usersecrets.core import constants as app_constants
from usersecrets.services import runtime_log_service

NOW = datetime(2026, 3, 14, 9, 30, 0)


def test_diag_log_path_is_dated(tmp_path):
    path = runtime_log_service.diag_log_path(str(tmp_path), now=NOW)

    assert path == os.path.join(str(tmp_path), "secrets_json_diagnostics-2026-03-14.log")


def test_diag_system_from_note():
    assert runtime_log_service.diag_system_from_note("save_blocked") == "save_gate"
    assert runtime_log_service.diag_system_from_note("load_failed") == "document_load"
    assert runtime_log_service.diag_system_from_note("format_refused") == "formatter"
    assert runtime_log_service.diag_system_from_note(None) == "live_validation"


def test_build_diag_entry_includes_context():
    text = "{\n  \"a\": 1\n  \"b\": 2\n  \"c\": 3\n}\n"

    entry = runtime_log_service.build_diag_entry(
        text,
        3,
        "Line 2: Missing comma.",
        column=9,
        note="save_blocked",
        path="/tmp/secrets.json",
        action="secrets",
        now=NOW,
    )

    assert entry.startswith(app_constants.DIAG_LOG_ENTRY_MARKER)
    assert "time=2026-03-14 09:30:00 action=secrets" in entry
    assert "msg=Line 2: Missing comma. line=3 col=9 note=save_blocked" in entry
    assert "system=save_gate" in entry
    assert "path=/tmp/secrets.json" in entry
    assert '1: {' in entry
    assert '5: }' in entry


def test_build_diag_entry_with_bad_line():
    entry = runtime_log_service.build_diag_entry("{}", "x", "boom", now=NOW)

    assert "line=1" in entry
    assert "path=-" in entry


def test_append_and_read_latest_block(tmp_path):
    log_path = runtime_log_service.diag_log_path(str(tmp_path / "logs"), now=NOW)
    first = runtime_log_service.build_diag_entry("{}", 1, "first error", now=NOW)
    second = runtime_log_service.build_diag_entry("{}", 1, "second error", now=NOW)

    assert runtime_log_service.append_diag_entry(log_path, first)
    assert runtime_log_service.append_diag_entry(log_path, second)

    text = runtime_log_service.read_text_file_tail(log_path, 10000)
    block = runtime_log_service.read_latest_block(text, 10000)
    assert "second error" in block
    assert "first error" not in block
    assert runtime_log_service.read_latest_block("", 100) == ""


def test_append_trims_oversized_log(tmp_path):
    log_path = str(tmp_path / "diag.log")
    with open(log_path, "w", encoding="utf-8") as fh:
        fh.write("x" * 2000)

    runtime_log_service.append_diag_entry(log_path, "\n---\nnew", max_bytes=1000, keep_bytes=100)

    with open(log_path, "r", encoding="utf-8") as fh:
        content = fh.read()
    assert content.startswith("\n--- log truncated ---\n")
    assert content.endswith("\n---\nnew")
    assert content.count("x") == 100


def test_read_text_file_tail_limits_size(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text("abcdef", encoding="utf-8")

    assert runtime_log_service.read_text_file_tail(str(path), 3) == "def"
    assert runtime_log_service.read_text_file_tail(str(tmp_path / "missing"), 3) == ""


def test_purge_old_diag_logs(tmp_path):
    names = {
        "today": runtime_log_service.diag_log_path(str(tmp_path), now=NOW),
        "yesterday": runtime_log_service.diag_log_path(str(tmp_path), now=NOW - timedelta(days=1)),
        "old": runtime_log_service.diag_log_path(str(tmp_path), now=NOW - timedelta(days=5)),
        "unrelated": str(tmp_path / "other.log"),
        "odd": str(tmp_path / "secrets_json_diagnostics-garbage.log"),
    }
    for path in names.values():
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("entry")

    removed = runtime_log_service.purge_old_diag_logs(str(tmp_path), keep_days=2, now=NOW)

    assert removed == [names["old"]]
    assert sorted(os.listdir(tmp_path)) == sorted(
        os.path.basename(names[key]) for key in ("today", "yesterday", "unrelated", "odd")
    )


def test_purge_missing_dir(tmp_path):
    assert runtime_log_service.purge_old_diag_logs(str(tmp_path / "nope")) == []
