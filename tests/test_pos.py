import itertools

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pyparsnip.Pos import ErrorStyle, SourcePos, format_error, position_of, sort_expected


def test_position_at_start():
    assert position_of("", 0) == SourcePos(0, 1, 1)
    assert position_of("abc", 0) == SourcePos(0, 1, 1)


def test_position_after_newline():
    assert position_of("ab\ncd", 2) == SourcePos(2, 1, 3)
    assert position_of("ab\ncd", 3) == SourcePos(3, 2, 1)
    assert position_of("ab\ncd", 5) == SourcePos(5, 2, 3)


def test_position_out_of_range():
    with pytest.raises(ValueError):
        position_of("abc", 4)
    with pytest.raises(ValueError):
        position_of("abc", -1)


@given(st.text(), st.data())
def test_position_matches_line_counting(text, data):
    offset = data.draw(st.integers(min_value=0, max_value=len(text)))
    pos = position_of(text, offset)
    before = text[:offset]
    assert pos.offset == offset
    assert pos.line == before.count("\n") + 1
    assert pos.column == offset - (before.rfind("\n") + 1) + 1


def test_str():
    assert str(SourcePos(7, 2, 4)) == "line 2, column 4"


def test_sort_expected_is_case_insensitive_and_deduplicated():
    assert sort_expected(["b", "A", "c", "b"]) == ["A", "b", "c"]
    assert sort_expected(["a", "A"]) == ["A", "a"]


def test_format_single_expectation():
    msg = format_error("abc", SourcePos(0, 1, 1), ["'x'"])
    assert msg == "expected 'x' at line 1 column 1, got 'abc'"


def test_format_several_expectations():
    msg = format_error("abc", SourcePos(0, 1, 1), ["b", "A", "c"])
    assert msg == "expected one of A, b, c at line 1 column 1, got 'abc'"


def test_format_end_of_input():
    msg = format_error("ab", SourcePos(2, 1, 3), ["'c'"])
    assert msg == "expected 'c', got the end of the input"


def test_format_snippet_ellipses():
    text = "xxxxx" + "abcdefghijklmnop"
    msg = format_error(text, position_of(text, 5), ["'z'"])
    assert msg == "expected 'z' at line 1 column 6, got '...abcdefghijkl...'"


def test_format_snippet_exactly_context_long():
    msg = format_error("abcdefghijkl", SourcePos(0, 1, 1), ["'z'"])
    assert msg.endswith("got 'abcdefghijkl'")


def test_format_custom_style():
    text = "0123456789"
    msg = format_error(text, position_of(text, 2), ["'z'"], ErrorStyle(context=3, ellipsis="~"))
    assert msg == "expected 'z' at line 1 column 3, got '~234~'"


def test_format_is_deterministic():
    expected = ["'b'", "'A'", "end of input"]
    messages = {
        format_error("q", SourcePos(0, 1, 1), list(order))
        for order in itertools.permutations(expected)
    }
    assert messages == {"expected one of 'A', 'b', end of input at line 1 column 1, got 'q'"}
