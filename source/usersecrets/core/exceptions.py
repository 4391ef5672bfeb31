"""Shared exception classes and expected-error tuple for services/core."""

from __future__ import annotations

from typing import TypeAlias


class AppError(Exception):
    """Base class for expected application-layer failures."""


class AppRuntimeError(RuntimeError, AppError):
    """Raised for runtime operation failures with user-facing context."""


class SecretsSaveError(AppRuntimeError):
    """Raised when a document is refused or cannot be written to disk."""

    def __init__(self, message: str, *, path: str = "", line: int | None = None) -> None:
        super().__init__(message)
        self.path = str(path or "")
        self.line = line


EXPECTED_ERRORS: TypeAlias = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    AttributeError,
    KeyError,
    IndexError,
    ImportError,
)
