"""JSONC validation and formatting surface used by the editor and the CLI.

Flow: raw text -> comment-blanked text -> strict `json` parse -> offset ->
line/column -> classified message. Nothing here touches files or widgets,
and nothing is cached between calls.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from usersecrets.core import json_diagnostics
from usersecrets.core.json_position import clamp_offset, line_column_at, line_text
from usersecrets.core.jsonc_strip import strip_comments

EMPTY_CONTENT_MESSAGE = "Content is empty."


@dataclass(frozen=True, slots=True)
class Diagnostic:
    line: int
    column: int
    message: str


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    """Strict-parse result: valid, or the parser message plus its offset."""

    valid: bool
    raw_message: str = ""
    offset: int = 0


@dataclass(frozen=True, slots=True)
class ValidationReport:
    valid: bool
    line: Optional[int] = None
    column: Optional[int] = None
    message: Optional[str] = None
    rule: str = ""

    @property
    def diagnostic(self) -> Optional[Diagnostic]:
        if self.valid:
            return None
        return Diagnostic(int(self.line or 1), int(self.column or 1), str(self.message or ""))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"valid": self.valid}
        if not self.valid:
            payload["line"] = self.line
            payload["column"] = self.column
            payload["message"] = self.message
        return payload


def strip(text: str) -> str:
    return strip_comments(text)


def parse_strict(stripped_text: str) -> ParseOutcome:
    """Parse already-stripped text with the standard-library parser."""
    source = str(stripped_text or "")
    try:
        json.loads(source)
    except json.JSONDecodeError as exc:
        return ParseOutcome(False, str(exc.msg), clamp_offset(source, exc.pos))
    except (ValueError, RecursionError) as exc:
        # No offset on these; anchor at the start of the document.
        return ParseOutcome(False, str(exc), 0)
    return ParseOutcome(True)


def validate(text: str) -> ValidationReport:
    """Validate JSONC text and explain the first syntax error, if any."""
    source = str(text or "")
    stripped = strip_comments(source)
    if not stripped.strip():
        return ValidationReport(False, 1, 1, EMPTY_CONTENT_MESSAGE, rule="empty")
    outcome = parse_strict(stripped)
    if outcome.valid:
        return ValidationReport(True)
    line, column = line_column_at(source, outcome.offset)
    # Context comes from the stripped text: same lines, minus comment noise.
    found = json_diagnostics.classify_error(
        outcome.raw_message,
        line,
        line_text(stripped, line),
        line_text(stripped, line - 1) if line > 1 else "",
        column=column,
        at_end=outcome.offset >= len(stripped.rstrip()),
    )
    return ValidationReport(
        False,
        line=found.line,
        column=found.column if found.column is not None else column,
        message=found.message,
        rule=found.rule,
    )


def trailing_comment_block(text: str, stripped_text: Optional[str] = None) -> str:
    """Return the comments that follow the last structural character, trimmed."""
    source = str(text or "")
    stripped = strip_comments(source) if stripped_text is None else stripped_text
    # Blanked comments are whitespace in the stripped text, so rstrip stops
    # at the last real token.
    return source[len(stripped.rstrip()) :].strip()


def format_document(text: str) -> str:
    """Pretty-print JSONC with 2-space indent, keeping a trailing comment block.

    Comments inside the body are not preserved. Invalid input comes back
    unchanged.
    """
    source = str(text or "")
    stripped = strip_comments(source)
    try:
        value = json.loads(stripped)
        formatted = json.dumps(value, indent=2, ensure_ascii=False)
    except (ValueError, RecursionError):
        return source
    try:
        formatted.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates from `\ud800`-style escapes stay escaped.
        formatted = json.dumps(value, indent=2)
    tail = trailing_comment_block(source, stripped)
    if tail:
        return f"{formatted}\n{tail}"
    return formatted
