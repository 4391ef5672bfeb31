"""Validation diagnostics log: dated files, bounded size, `---`-separated entries."""

import logging
import os
import re
from datetime import datetime, timedelta
from typing import Any, Optional

from usersecrets.core import constants as app_constants
from usersecrets.core.exceptions import EXPECTED_ERRORS
from usersecrets.core.json_position import line_text

_LOG = logging.getLogger(__name__)
_STAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def diag_log_path(runtime_dir: str, now: Optional[datetime] = None) -> str:
    base, ext = os.path.splitext(app_constants.DIAG_LOG_FILENAME)
    stamp = (now or datetime.now()).strftime("%Y-%m-%d")
    return os.path.join(runtime_dir, f"{base}-{stamp}{ext}")


def diag_system_from_note(note: Any) -> str:
    """Map a diagnostic note to a stable log bucket."""
    note_text = str(note or "").strip().lower()
    if note_text.startswith("save_"):
        return "save_gate"
    if note_text.startswith("load_"):
        return "document_load"
    if note_text.startswith("format_"):
        return "formatter"
    return "live_validation"


def build_diag_entry(
    text: str,
    line: Any,
    message: str,
    *,
    column: Any = None,
    note: str = "",
    path: str = "",
    action: str = "",
    now: Optional[datetime] = None,
) -> str:
    try:
        target_line = max(1, int(line))
    except (TypeError, ValueError):
        target_line = 1
    context = []
    radius = app_constants.DIAG_LOG_CONTEXT_LINES
    for ln in range(max(target_line - radius, 1), target_line + radius + 1):
        context.append(f"{ln}: {line_text(text, ln)}")
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    return (
        app_constants.DIAG_LOG_ENTRY_MARKER
        + f"time={stamp} action={action or '-'}\n"
        + f"msg={message} line={target_line} col={column} note={note}\n"
        + f"system={diag_system_from_note(note)}\n"
        + f"path={path or '-'}\n"
        + "\n".join(context).rstrip()
        + "\n"
    )


def trim_text_file_for_append(path: str, max_bytes: int, keep_bytes: int) -> None:
    if not os.path.isfile(path):
        return
    if max_bytes <= 0 or keep_bytes <= 0:
        return
    size = os.path.getsize(path)
    if size <= max_bytes:
        return
    keep_bytes = min(int(keep_bytes), int(size))
    with open(path, "rb") as src:
        src.seek(size - keep_bytes)
        tail = src.read()
    with open(path, "wb") as dst:
        dst.write(b"\n--- log truncated ---\n")
        dst.write(tail)


def append_diag_entry(
    log_path: str,
    entry: str,
    max_bytes: int = app_constants.DIAG_LOG_MAX_BYTES,
    keep_bytes: int = app_constants.DIAG_LOG_KEEP_BYTES,
) -> bool:
    try:
        log_dir = os.path.dirname(str(log_path or ""))
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        trim_text_file_for_append(log_path, max_bytes, keep_bytes)
        with open(log_path, "a", encoding="utf-8") as handle:
            handle.write(entry)
    except EXPECTED_ERRORS as exc:
        _LOG.debug("runtime_log.append_failed", extra={"path": log_path}, exc_info=exc)
        return False
    return True


def purge_old_diag_logs(
    runtime_dir: str,
    keep_days: int = app_constants.DIAG_LOG_KEEP_DAYS,
    now: Optional[datetime] = None,
) -> list[str]:
    """Delete dated diagnostics files older than `keep_days`; returns removed paths."""
    base, ext = os.path.splitext(app_constants.DIAG_LOG_FILENAME)
    prefix = f"{base}-"
    today = now or datetime.now()
    keep_stamps = {
        (today - timedelta(days=offset)).strftime("%Y-%m-%d") for offset in range(max(1, int(keep_days)))
    }
    try:
        entries = list(os.scandir(runtime_dir))
    except OSError as exc:
        _LOG.debug("expected_error", exc_info=exc)
        return []
    removed = []
    for entry in entries:
        name = str(entry.name)
        if not entry.is_file() or not name.startswith(prefix) or not name.endswith(ext):
            continue
        stamp = name[len(prefix) : len(name) - len(ext)]
        if not _STAMP_RE.fullmatch(stamp) or stamp in keep_stamps:
            continue
        try:
            os.remove(entry.path)
        except OSError as exc:
            _LOG.debug("expected_error", exc_info=exc)
            continue
        removed.append(entry.path)
    return removed


def read_text_file_tail(path: Any, max_chars: Any) -> str:
    if not os.path.isfile(path):
        return ""
    limit = max(0, int(max_chars))
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            text = fh.read()
    except OSError as exc:
        _LOG.debug("expected_error", exc_info=exc)
        return ""
    if limit <= 0 or len(text) <= limit:
        return text
    return text[-limit:]


def read_latest_block(text: Any, max_chars: Any, marker: str = app_constants.DIAG_LOG_ENTRY_MARKER) -> str:
    source = str(text or "")
    if not source.strip():
        return ""
    idx = source.rfind(marker)
    block = source[idx + len(marker) :] if idx >= 0 else source
    block = block.strip()
    if not block:
        return ""
    limit = max(0, int(max_chars))
    if limit > 0 and len(block) > limit:
        return block[-limit:]
    return block
