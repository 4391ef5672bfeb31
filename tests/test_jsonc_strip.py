import json

from usersecrets.core.jsonc_strip import strip_comments


def test_line_comment_is_blanked_in_place():
    text = '{"a": 1} // note'

    stripped = strip_comments(text)

    assert len(stripped) == len(text)
    assert stripped.rstrip() == '{"a": 1}'


def test_block_comment_keeps_line_breaks():
    text = '{/* a\nb */"k": 1}'

    stripped = strip_comments(text)

    assert stripped == "{    \n    \"k\": 1}"
    assert json.loads(stripped) == {"k": 1}


def test_comment_markers_inside_strings_survive():
    text = '{"url": "http://example.com/*x*/", "b": 2}'

    stripped = strip_comments(text)

    assert stripped == text
    assert json.loads(stripped)["url"] == "http://example.com/*x*/"


def test_escaped_quote_does_not_end_string():
    text = '{"a": "x\\"//y"} // tail'

    stripped = strip_comments(text)

    assert json.loads(stripped) == {"a": 'x"//y'}


def test_unclosed_block_comment_runs_to_end():
    text = '{"a": 1} /* open\nstill comment'

    stripped = strip_comments(text)

    assert stripped.rstrip() == '{"a": 1}'
    assert stripped.count("\n") == 1


def test_crlf_line_endings_are_preserved():
    text = '{\r\n  // c\r\n  "a": 1\r\n}'

    stripped = strip_comments(text)

    assert stripped.count("\r\n") == 3
    assert json.loads(stripped) == {"a": 1}


def test_stripping_is_idempotent():
    samples = [
        "",
        '{"a": 1}',
        '// only a comment',
        '{\n  // c\n  "a": [1, /* two */ 2]\n}\n/* tail */',
        '{"s": "no // comment here"}',
    ]
    for text in samples:
        once = strip_comments(text)
        assert strip_comments(once) == once


def test_line_count_is_preserved():
    samples = [
        "/*\n\n\n*/",
        "// a\n// b\n",
        '{\n  "a": "x\\ny", // c\n  /* multi\n  line */ "b": 2\n}',
    ]
    for text in samples:
        assert strip_comments(text).count("\n") == text.count("\n")


def test_none_is_treated_as_empty():
    assert strip_comments(None) == ""
