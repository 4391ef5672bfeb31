#!/usr/bin/env python3
"""Validate (and optionally format) JSON-with-comments files from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys

from usersecrets.core import jsonc_engine
from usersecrets.core.exceptions import SecretsSaveError
from usersecrets.services import secrets_store_service

_LOG = logging.getLogger(__name__)


def _read_text(path: pathlib.Path) -> str:
    with path.open("r", encoding="utf-8-sig") as fh:
        return fh.read()


def check_file(path: pathlib.Path, *, fmt: bool = False, write: bool = False) -> dict:
    """Validate one file; returns a result row for text or JSON output."""
    try:
        text = _read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        return {"path": str(path), "valid": False, "line": 1, "column": 1, "message": f"Cannot read file: {exc}"}
    report = jsonc_engine.validate(text)
    row = {"path": str(path), **report.to_dict()}
    if not report.valid or not fmt:
        return row
    formatted = jsonc_engine.format_document(text)
    row["changed"] = formatted != text
    if not write:
        row["formatted"] = formatted
    elif row["changed"]:
        try:
            secrets_store_service.save_document(str(path), formatted)
        except SecretsSaveError as exc:
            row["valid"] = False
            row["line"], row["column"] = 1, 1
            row["message"] = str(exc)
    return row


def _format_row(row: dict) -> str:
    if row["valid"] and "formatted" in row:
        return row["formatted"]
    if row["valid"]:
        suffix = " (reformatted)" if row.get("changed") else ""
        return f"{row['path']}: ok{suffix}"
    return f"{row['path']}:{row['line']}:{row['column']}: {row['message']}"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", nargs="+", help="JSON or JSONC files to check.")
    parser.add_argument(
        "--format",
        dest="fmt",
        action="store_true",
        help="Print the 2-space formatted text of each valid file.",
    )
    parser.add_argument(
        "--write",
        action="store_true",
        help="With --format, rewrite files in place.",
    )
    parser.add_argument("--json", action="store_true", help="Emit one JSON report per run.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rows = [check_file(pathlib.Path(name), fmt=args.fmt, write=args.write) for name in args.files]
    if args.json:
        print(json.dumps(rows, indent=2, ensure_ascii=False))
    else:
        for row in rows:
            print(_format_row(row))
    failed = [row for row in rows if not row["valid"]]
    _LOG.debug("check_jsonc.done", extra={"files": len(rows), "failed": len(failed)})
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
