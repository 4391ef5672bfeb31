"""Offset to line/column mapping shared by validation and highlighting."""

from typing import Any, Tuple


def clamp_offset(text: str, offset: Any) -> int:
    try:
        pos = int(offset)
    except (TypeError, ValueError):
        pos = 0
    return max(0, min(pos, len(text)))


def line_column_at(text: str, offset: Any) -> Tuple[int, int]:
    """Return the 1-based (line, column) of `offset` within `text`."""
    source = str(text or "")
    pos = clamp_offset(source, offset)
    line = source.count("\n", 0, pos) + 1
    # rfind returns -1 on the first line, which keeps offset 0 at column 1.
    column = pos - source.rfind("\n", 0, pos)
    return line, column


def line_text(text: str, line: Any) -> str:
    """Return the 1-based `line` of `text` without its line terminator."""
    try:
        index = int(line) - 1
    except (TypeError, ValueError):
        return ""
    if index < 0:
        return ""
    lines = str(text or "").split("\n")
    if index >= len(lines):
        return ""
    return lines[index].rstrip("\r")
