from usersecrets.core.json_position import clamp_offset, line_column_at, line_text


def test_line_column_at_first_character():
    assert line_column_at("ab\ncd", 0) == (1, 1)


def test_line_column_at_start_of_second_line():
    assert line_column_at("ab\ncd", 3) == (2, 1)
    assert line_column_at("ab\ncd", 4) == (2, 2)


def test_line_column_at_clamps_out_of_range_offsets():
    assert line_column_at("ab\ncd", 99) == (2, 3)
    assert line_column_at("ab\ncd", -5) == (1, 1)
    assert line_column_at("ab", "bogus") == (1, 1)


def test_clamp_offset():
    assert clamp_offset("abc", 10) == 3
    assert clamp_offset("abc", -1) == 0
    assert clamp_offset("abc", None) == 0


def test_line_text_strips_carriage_return():
    text = "first\r\nsecond\r\n"

    assert line_text(text, 1) == "first"
    assert line_text(text, 2) == "second"
    assert line_text(text, 3) == ""


def test_line_text_out_of_range():
    assert line_text("only", 0) == ""
    assert line_text("only", 2) == ""
    assert line_text("only", None) == ""
