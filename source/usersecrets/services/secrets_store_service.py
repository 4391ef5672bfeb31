"""Document I/O helpers for secrets.json, local.settings.json and appsettings files."""

import logging
import os
import sys
import tempfile
import time
from typing import Any, Callable, Optional

from usersecrets.core import constants as app_constants
from usersecrets.core import jsonc_engine
from usersecrets.core.exceptions import SecretsSaveError
from usersecrets.core.project_models import LoadedDocument

_LOG = logging.getLogger(__name__)


def load_secrets(path: Any) -> LoadedDocument:
    """Load a secrets store; a missing file yields the empty-object template."""
    use_path = str(path or "")
    if not os.path.isfile(use_path):
        return LoadedDocument(path=use_path, content=app_constants.NEW_SECRETS_TEMPLATE, exists=False)
    try:
        with open(use_path, "r", encoding="utf-8-sig") as handle:
            content = handle.read()
        modified = os.path.getmtime(use_path)
    except (OSError, UnicodeDecodeError) as exc:
        _LOG.warning("secrets_store.load_failed", extra={"path": use_path}, exc_info=exc)
        reason = str(exc)
        return LoadedDocument(
            path=use_path,
            content=f"{app_constants.LOAD_ERROR_PREFIX}{reason}",
            is_valid_json=False,
            validation_error=reason,
            error=reason,
        )
    report = jsonc_engine.validate(content)
    return LoadedDocument(
        path=use_path,
        content=content,
        last_modified=modified,
        is_valid_json=report.valid,
        validation_error=report.message,
    )


def load_text_file(path: Any, fallback: str = app_constants.APP_SETTINGS_FALLBACK) -> str:
    """Read a file for display, returning `fallback` when it cannot be read."""
    use_path = str(path or "")
    try:
        with open(use_path, "r", encoding="utf-8-sig") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        _LOG.debug("secrets_store.read_fallback", extra={"path": use_path}, exc_info=exc)
        return fallback


def is_retryable_file_write_error(exc: BaseException, platform_name: Optional[str] = None) -> bool:
    if isinstance(exc, PermissionError):
        return True
    if not isinstance(exc, OSError):
        return False
    platform_name = str(platform_name or sys.platform)
    if platform_name == "win32":
        return getattr(exc, "winerror", None) in (5, 32, 33)
    return getattr(exc, "errno", None) in (13,)


def write_text_file_atomic(
    path: Any,
    text: str,
    encoding: str = "utf-8",
    retries: int = 5,
    base_delay: float = 0.08,
    is_retryable_fn: Optional[Callable[[BaseException], bool]] = None,
    sleep_fn: Optional[Callable[[float], None]] = None,
) -> None:
    # Temp file + os.replace so readers never see partial content.
    target_path = os.path.abspath(str(path))
    target_dir = os.path.dirname(target_path) or os.getcwd()
    os.makedirs(target_dir, exist_ok=True)
    retries = max(1, int(retries))
    retryable = is_retryable_fn if callable(is_retryable_fn) else is_retryable_file_write_error
    sleeper = sleep_fn if callable(sleep_fn) else time.sleep
    for attempt in range(retries):
        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(prefix=".usersecrets_tmp_", suffix=".tmp", dir=target_dir)
            with os.fdopen(fd, "w", encoding=encoding, newline="") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(temp_path, target_path)
            return
        except (OSError, ValueError) as exc:
            # ValueError covers text the codec cannot encode (lone surrogates).
            if temp_path and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as cleanup_exc:
                    _LOG.debug("expected_error", exc_info=cleanup_exc)
            if isinstance(exc, OSError) and attempt + 1 < retries and retryable(exc):
                sleeper(base_delay * (attempt + 1))
                continue
            raise


def save_document(path: Any, content: str, write_fn: Optional[Callable[..., None]] = None) -> float:
    """Validate and write a document; returns the new modification time.

    Invalid content is refused with `SecretsSaveError` and nothing is written.
    """
    use_path = str(path or "")
    if not use_path:
        raise SecretsSaveError("Save destination path is required.")
    report = jsonc_engine.validate(content)
    if not report.valid:
        raise SecretsSaveError(
            f"Cannot save invalid JSON: {report.message}",
            path=use_path,
            line=report.line,
        )
    writer = write_fn if callable(write_fn) else write_text_file_atomic
    try:
        writer(use_path, str(content))
    except (OSError, UnicodeError) as exc:
        raise SecretsSaveError(f"Could not write {use_path}: {exc}", path=use_path) from exc
    _LOG.info("secrets_store.saved", extra={"path": use_path, "chars": len(content)})
    try:
        return os.path.getmtime(use_path)
    except OSError:
        return time.time()
