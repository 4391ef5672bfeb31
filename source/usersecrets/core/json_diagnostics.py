import re
from typing import Callable, NamedTuple, Optional, Tuple


# Pure, line-oriented decisions: the editor, the CLI checker and tests all
# share one rule chain with no Tk or file access.

_EXPECTATION_WORDS = ("expected", "unexpected", "expecting")
_UNEXPECTED_TOKEN_WORDS = ("unexpected token", "unexpected character", "expecting value")
_COLON_WORDS = ("':'", "colon")
_UNTERMINATED_WORDS = ("unterminated string", "bad string")
_END_OF_INPUT_WORDS = ("unexpected end", "end of json", "end of input", "end of data")
_CLOSERS = ("}", "]")

_NOISE_PATTERNS = (
    re.compile(r"^\s*(?:json\.decoder\.)?JSONDecodeError:\s*", re.IGNORECASE),
    re.compile(r"\s*\(?\s*at position \d+(?:\s*\(line \d+ column \d+\))?\s*\)?", re.IGNORECASE),
    re.compile(r":?\s*line \d+ column \d+(?: \(char \d+\))?", re.IGNORECASE),
    re.compile(r"\s*in JSON\b", re.IGNORECASE),
)
_UNEXPECTED_TOKEN_RE = re.compile(r"unexpected token", re.IGNORECASE)

MISSING_CLOSER_MESSAGE = (
    "Missing closing bracket or brace. Check that all braces/brackets are properly matched."
)


class ErrorContext(NamedTuple):
    raw_message: str
    lowered: str
    line: int
    column: Optional[int]
    error_line: str
    previous_line: str
    at_end: bool

    @property
    def error_trimmed(self) -> str:
        return self.error_line.strip()

    @property
    def previous_trimmed(self) -> str:
        return self.previous_line.strip()


class Classification(NamedTuple):
    rule: str
    line: int
    column: Optional[int]
    message: str


def _mentions(lowered: str, words: Tuple[str, ...]) -> bool:
    return any(word in lowered for word in words)


def _starts_with_closer(trimmed: str) -> bool:
    return trimmed.startswith(_CLOSERS)


def _error_index(ctx: ErrorContext) -> Optional[int]:
    if ctx.column is None:
        return None
    return max(int(ctx.column) - 1, 0)


def trailing_comma_col(line_text: str) -> int:
    """Return the 1-based column of the last comma on a line, else line end."""
    idx = str(line_text or "").rstrip().rfind(",")
    if idx < 0:
        return len(str(line_text or "").rstrip()) + 1
    return idx + 1


def same_line_trailing_comma_col(line_text: str, column: Optional[int]) -> Optional[int]:
    """Return the comma column when the parser stopped on `,}` / `,]` on one line.

    Parsers disagree on where they point: some report the closer, CPython 3.13+
    reports the comma itself. Both shapes are accepted.
    """
    if column is None:
        return None
    raw = str(line_text or "")
    idx = max(int(column) - 1, 0)
    if idx >= len(raw):
        return None
    ch = raw[idx]
    if ch in _CLOSERS:
        before = raw[:idx].rstrip()
        if before.endswith(","):
            return len(before)
        return None
    if ch == ",":
        after = raw[idx + 1 :].lstrip()
        if after.startswith(_CLOSERS):
            return idx + 1
    return None


def _control_char_is_line_break(ctx: ErrorContext) -> bool:
    if "invalid control character" not in ctx.lowered:
        return False
    idx = _error_index(ctx)
    return idx is not None and idx >= len(ctx.error_line.rstrip("\r"))


def clean_raw_message(raw_message: str) -> str:
    """Drop positional and parser-name noise from a parser message."""
    text = str(raw_message or "")
    for pattern in _NOISE_PATTERNS:
        text = pattern.sub("", text)
    text = _UNEXPECTED_TOKEN_RE.sub("Syntax error", text)
    text = " ".join(text.split()).strip().rstrip(":").strip()
    return text or "Syntax error"


def _rule_previous_line_trailing_comma(ctx: ErrorContext) -> Optional[Classification]:
    if ctx.previous_trimmed.endswith(",") and _starts_with_closer(ctx.error_trimmed):
        prev = ctx.line - 1
        return Classification(
            "trailing_comma",
            prev,
            trailing_comma_col(ctx.previous_line),
            f"Line {prev}: Trailing comma before closing bracket. "
            f"Remove the comma at the end of line {prev}.",
        )
    return None


def _rule_same_line_trailing_comma(ctx: ErrorContext) -> Optional[Classification]:
    comma_col = same_line_trailing_comma_col(ctx.error_line, ctx.column)
    if comma_col is not None:
        return Classification(
            "trailing_comma_same_line",
            ctx.line,
            comma_col,
            f"Line {ctx.line}: Trailing comma before closing bracket. "
            f"Remove the comma before the closing bracket on line {ctx.line}.",
        )
    if "trailing comma" in ctx.lowered:
        return Classification(
            "trailing_comma",
            ctx.line,
            trailing_comma_col(ctx.error_line),
            f"Line {ctx.line}: Trailing comma before closing bracket. "
            f"Remove the comma at the end of line {ctx.line}.",
        )
    return None


def _rule_missing_comma(ctx: ErrorContext) -> Optional[Classification]:
    prev = ctx.previous_trimmed
    cur = ctx.error_trimmed
    if not prev or prev.endswith((",", "{", "[", ":")):
        return None
    if not cur or _starts_with_closer(cur):
        return None
    if not _mentions(ctx.lowered, _EXPECTATION_WORDS):
        return None
    line = ctx.line - 1
    return Classification(
        "missing_comma",
        line,
        len(ctx.previous_line.rstrip()) + 1,
        f"Line {line}: Missing comma. Add a comma at the end of line {line}.",
    )


def _rule_unexpected_closer(ctx: ErrorContext) -> Optional[Classification]:
    if _mentions(ctx.lowered, _UNEXPECTED_TOKEN_WORDS) and _starts_with_closer(ctx.error_trimmed):
        return Classification(
            "unexpected_closer",
            ctx.line,
            ctx.column,
            f"Line {ctx.line}: Unexpected closing bracket. "
            "Check for a trailing comma on the previous line.",
        )
    return None


def _rule_missing_colon(ctx: ErrorContext) -> Optional[Classification]:
    stray_key = "unexpected" in ctx.lowered and '"' in ctx.error_line and ":" not in ctx.error_line
    if _mentions(ctx.lowered, _COLON_WORDS) or stray_key:
        return Classification(
            "missing_colon",
            ctx.line,
            ctx.column,
            f"Line {ctx.line}: Missing colon after property name.",
        )
    return None


def _rule_unterminated_string(ctx: ErrorContext) -> Optional[Classification]:
    if _mentions(ctx.lowered, _UNTERMINATED_WORDS) or _control_char_is_line_break(ctx):
        return Classification(
            "unterminated_string",
            ctx.line,
            ctx.column,
            f"Line {ctx.line}: Unterminated string. Check for missing closing quote.",
        )
    return None


def _rule_end_of_input(ctx: ErrorContext) -> Optional[Classification]:
    if ctx.at_end or _mentions(ctx.lowered, _END_OF_INPUT_WORDS):
        return Classification("missing_closer", ctx.line, ctx.column, MISSING_CLOSER_MESSAGE)
    return None


def _rule_single_quotes(ctx: ErrorContext) -> Optional[Classification]:
    if "'" in ctx.error_line:
        return Classification(
            "single_quotes",
            ctx.line,
            ctx.column,
            f"Line {ctx.line}: JSON requires double quotes, not single quotes.",
        )
    return None


def _rule_generic_syntax(ctx: ErrorContext) -> Optional[Classification]:
    if _mentions(ctx.lowered, _UNEXPECTED_TOKEN_WORDS):
        return Classification(
            "syntax_error",
            ctx.line,
            ctx.column,
            f"Line {ctx.line}: Syntax error. Common causes: missing comma on previous line, "
            "trailing comma, or unquoted string.",
        )
    return None


RULES: Tuple[Callable[[ErrorContext], Optional[Classification]], ...] = (
    _rule_previous_line_trailing_comma,
    _rule_same_line_trailing_comma,
    _rule_missing_comma,
    _rule_unexpected_closer,
    _rule_missing_colon,
    _rule_unterminated_string,
    _rule_end_of_input,
    _rule_single_quotes,
    _rule_generic_syntax,
)


def classify_error(
    raw_message: str,
    line: int,
    error_line_text: str,
    previous_line_text: str,
    *,
    column: Optional[int] = None,
    at_end: bool = False,
) -> Classification:
    """Run the ordered rule chain; the first rule that fires wins."""
    try:
        line = max(int(line), 1)
    except (TypeError, ValueError):
        line = 1
    raw = str(raw_message or "")
    ctx = ErrorContext(
        raw_message=raw,
        lowered=raw.lower(),
        line=line,
        column=column,
        error_line=str(error_line_text or ""),
        previous_line=str(previous_line_text or ""),
        at_end=bool(at_end),
    )
    for rule in RULES:
        found = rule(ctx)
        if found is not None:
            return found
    return Classification("fallback", line, column, f"Line {line}: {clean_raw_message(raw)}")


def classify(
    raw_message: str,
    line: int,
    error_line_text: str,
    previous_line_text: str,
    *,
    column: Optional[int] = None,
    at_end: bool = False,
) -> str:
    return classify_error(
        raw_message,
        line,
        error_line_text,
        previous_line_text,
        column=column,
        at_end=at_end,
    ).message
