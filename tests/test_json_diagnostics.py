from usersecrets.core import json_diagnostics
from usersecrets.core.json_diagnostics import (
    MISSING_CLOSER_MESSAGE,
    classify,
    classify_error,
    clean_raw_message,
    same_line_trailing_comma_col,
    trailing_comma_col,
)


def test_previous_line_trailing_comma():
    found = classify_error("Unexpected token } in JSON at position 12", 3, "}", '  "a": 1,')

    assert found.rule == "trailing_comma"
    assert found.line == 2
    assert found.column == 9
    assert found.message == (
        "Line 2: Trailing comma before closing bracket. Remove the comma at the end of line 2."
    )


def test_same_line_trailing_comma_when_parser_points_at_closer():
    found = classify_error(
        "Expecting property name enclosed in double quotes", 1, '{"a": 1,}', "", column=9
    )

    assert found.rule == "trailing_comma_same_line"
    assert found.column == 8
    assert "Trailing comma" in found.message


def test_same_line_trailing_comma_when_parser_points_at_comma():
    found = classify_error("Illegal trailing comma before end of array", 1, "[1, 2,]", "", column=6)

    assert found.rule == "trailing_comma_same_line"
    assert found.column == 6


def test_missing_comma_points_at_previous_line():
    message = classify("Expecting ',' delimiter", 3, '  "y": 2', '  "x": 1', column=3)

    assert message == "Line 2: Missing comma. Add a comma at the end of line 2."


def test_missing_comma_not_reported_after_opening_brace():
    found = classify_error("Expecting ',' delimiter", 2, '  "y" 2', "{", column=7)

    assert found.rule != "missing_comma"


def test_unexpected_closer():
    found = classify_error("Expecting value", 3, "}", '  "a":', column=1)

    assert found.rule == "unexpected_closer"
    assert found.message == (
        "Line 3: Unexpected closing bracket. Check for a trailing comma on the previous line."
    )


def test_missing_colon_from_parser_wording():
    assert classify("Expecting ':' delimiter", 1, '{"a" 1}', "", column=6) == (
        "Line 1: Missing colon after property name."
    )


def test_missing_colon_from_stray_key():
    assert classify("Unexpected string in JSON", 2, '  "b"', '  "a": 1,') == (
        "Line 2: Missing colon after property name."
    )


def test_unterminated_string():
    message = classify("Unterminated string starting at", 1, '{"a": "abc}', "", column=7)

    assert message == "Line 1: Unterminated string. Check for missing closing quote."


def test_control_character_at_line_break_is_unterminated():
    found = classify_error("Invalid control character at", 2, '  "a": "abc', "{", column=12)

    assert found.rule == "unterminated_string"


def test_end_of_input():
    assert classify("Unexpected end of JSON input", 1, '{"a": 1', "") == MISSING_CLOSER_MESSAGE
    assert classify("Expecting ',' delimiter", 1, '{"a": 1', "", column=8, at_end=True) == (
        MISSING_CLOSER_MESSAGE
    )


def test_single_quotes():
    message = classify("Expecting property name enclosed in double quotes", 1, "{'a': 1}", "", column=2)

    assert message == "Line 1: JSON requires double quotes, not single quotes."


def test_generic_syntax_error():
    message = classify("Expecting value", 1, '{"a": abc}', "", column=7)

    assert message.startswith("Line 1: Syntax error. Common causes:")


def test_fallback_uses_cleaned_message():
    found = classify_error("Something odd at position 5", 1, "x", "")

    assert found.rule == "fallback"
    assert found.message == "Line 1: Something odd"


def test_rule_order_prefers_trailing_comma_over_single_quotes():
    found = classify_error("Unexpected token }", 3, "}", "  'a': 1,")

    assert found.rule == "trailing_comma"


def test_invalid_line_is_coerced_to_one():
    found = classify_error("Something odd", None, "", "")

    assert found.line == 1


def test_clean_raw_message():
    assert clean_raw_message("JSONDecodeError: Extra data: line 1 column 10 (char 9)") == "Extra data"
    assert clean_raw_message("") == "Syntax error"
    assert clean_raw_message("Unexpected token x in JSON at position 4") == "Syntax error x"


def test_trailing_comma_col():
    assert trailing_comma_col('  "a": 1,') == 9
    assert trailing_comma_col("  1") == 4


def test_same_line_trailing_comma_col_rejects_other_shapes():
    assert same_line_trailing_comma_col('{"a": 1}', 8) is None
    assert same_line_trailing_comma_col("[1, 2]", 3) is None
    assert same_line_trailing_comma_col("[1,]", None) is None
    assert same_line_trailing_comma_col("[1,]", 40) is None


def test_rule_chain_order():
    names = [rule.__name__ for rule in json_diagnostics.RULES]

    assert names.index("_rule_previous_line_trailing_comma") < names.index("_rule_missing_comma")
    assert names.index("_rule_missing_comma") < names.index("_rule_unexpected_closer")
    assert names[-1] == "_rule_generic_syntax"
