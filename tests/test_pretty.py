import io

import pytest

from jsonbento.pretty import pretty_format, pretty_print


def test_null():
    assert pretty_format(None) == "null"


def test_booleans():
    assert [pretty_format(True), pretty_format(False)] == ["true", "false"]


def test_string_is_written_raw():
    assert pretty_format("Alice Smith") == "Alice Smith"


def test_nested_example():
    value = {"a": [1, "x"], "b": None}
    expected = "{\n  a : [\n    1,\n    x\n  ],\n  b : null\n}"
    assert pretty_format(value) == expected


def test_indent_size_scales_leading_spaces():
    value = {"outer": {"inner": [1, [2, 3]]}}
    narrow = pretty_format(value, 2).splitlines()
    wide = pretty_format(value, 4).splitlines()
    assert len(narrow) == len(wide)
    for small, large in zip(narrow, wide):
        small_lead = len(small) - len(small.lstrip(" "))
        large_lead = len(large) - len(large.lstrip(" "))
        assert large_lead == 2 * small_lead
        assert small.strip() == large.strip()


def test_container_brackets_balance():
    text = pretty_format([{"k": [1, 2]}, [3]])
    assert text.startswith("[\n") and text.endswith("]")
    assert text.count("[") == text.count("]")
    assert text.count("{") == text.count("}")


def test_pretty_print_matches_format_with_newline():
    value = {"k": [True, 2.5]}
    stream = io.StringIO()
    pretty_print(value, stream)
    assert stream.getvalue() == pretty_format(value) + "\n"


def test_pretty_print_without_newline():
    value = [1, 2]
    stream = io.StringIO()
    pretty_print(value, stream, indent_size=3, print_newline=False)
    assert stream.getvalue() == pretty_format(value, 3)


def test_pretty_print_defaults_to_stdout(capsys):
    pretty_print(None)
    assert capsys.readouterr().out == "null\n"


def test_unsupported_type_rejected():
    with pytest.raises(TypeError):
        pretty_format(object())


def test_negative_indent_rejected():
    with pytest.raises(ValueError):
        pretty_format([1], -1)