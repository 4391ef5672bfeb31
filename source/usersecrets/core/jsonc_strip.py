"""Comment stripping for JSON-with-comments text.

Comments are blanked, not deleted: every character keeps its offset and every
line break survives, so parser offsets taken from the stripped text can be
reported against the text the user typed.
"""


def _blank(ch: str) -> str:
    return ch if ch in "\r\n" else " "


def strip_comments(text: str) -> str:
    """Return `text` with `//` and `/* */` comments replaced by blanks."""
    source = str(text or "")
    out: list[str] = []
    state = "normal"
    quote = ""
    escaped = False
    i = 0
    size = len(source)
    while i < size:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < size else ""
        match state:
            case "string":
                out.append(ch)
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == quote:
                    state = "normal"
                    quote = ""
                i += 1
            case "line_comment":
                # The newline ends the comment but stays in the output.
                if ch == "\n":
                    state = "normal"
                out.append(_blank(ch))
                i += 1
            case "block_comment":
                if ch == "*" and nxt == "/":
                    out.append("  ")
                    state = "normal"
                    i += 2
                    continue
                out.append(_blank(ch))
                i += 1
            case _:
                if ch == '"' or ch == "'":
                    state = "string"
                    quote = ch
                    out.append(ch)
                    i += 1
                elif ch == "/" and nxt == "/":
                    state = "line_comment"
                    out.append("  ")
                    i += 2
                elif ch == "/" and nxt == "*":
                    state = "block_comment"
                    out.append("  ")
                    i += 2
                else:
                    out.append(ch)
                    i += 1
    return "".join(out)
