"""Shared validation feedback helpers for live-edit, load and save flows."""

from __future__ import annotations

import logging
from typing import Any, Optional

from usersecrets.core import constants as app_constants
from usersecrets.core.exceptions import EXPECTED_ERRORS
from usersecrets.core.jsonc_engine import ValidationReport

_LOG = logging.getLogger(__name__)


def status_for_report(report: ValidationReport) -> tuple[str, bool]:
    """Return (chip text, is_valid) for the validation status chip."""
    if report.valid:
        return app_constants.STATUS_VALID, True
    return app_constants.STATUS_INVALID, False


def popup_text(report: ValidationReport) -> str:
    if report.valid:
        return ""
    return str(report.message or "")


def highlight_line(report: ValidationReport, last_line: int) -> Optional[int]:
    """Return the editor line to mark, clamped to the document, or None."""
    if report.valid or report.line is None:
        return None
    return min(max(int(report.line), 1), max(int(last_line), 1))


def _log_dispatch_error(stage: str, exc: Exception) -> None:
    _LOG.debug(
        "validation_feedback.dispatch_expected_error",
        extra={"stage": stage, "error_type": type(exc).__name__},
        exc_info=exc,
    )


def handle_live_validation(owner: Any, report: ValidationReport, note: str = "live_validation") -> None:
    """Push a report into the owner's status chip, highlight and diagnostics log.

    The log entry is written only when the error differs from the last one, so
    typing inside a broken line does not flood the file.
    """
    text, ok = status_for_report(report)
    previous_error = getattr(owner, "_validation_error", None)
    owner._validation_error = popup_text(report) or None
    try:
        owner._set_validation_status(text, ok)
    except EXPECTED_ERRORS as exc:
        _log_dispatch_error("status", exc)
    try:
        owner._apply_error_highlight(report)
    except EXPECTED_ERRORS as exc:
        _log_dispatch_error("highlight", exc)
    if ok:
        owner._last_logged_error = None
        try:
            owner._hide_error_popup()
        except EXPECTED_ERRORS as exc:
            _log_dispatch_error("popup_hide", exc)
        return
    if getattr(owner, "error_overlay", None) is not None and owner._validation_error != previous_error:
        # An open popup follows the error as it changes.
        try:
            owner._show_error_popup(owner._validation_error)
        except EXPECTED_ERRORS as exc:
            _log_dispatch_error("popup_show", exc)
    signature = (report.line, report.message)
    if signature == getattr(owner, "_last_logged_error", None):
        return
    owner._last_logged_error = signature
    try:
        owner._log_validation_error(report, note=note)
    except EXPECTED_ERRORS as exc:
        _log_dispatch_error("diag_log", exc)
