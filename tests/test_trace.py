import logging

from pyparsnip.Char import string
from pyparsnip.Combinators import parser_trace, parser_traced
from pyparsnip.Parsec import Success


def test_parser_trace_logs_upcoming_input(caplog):
    p = parser_trace("start") > string("ab")
    with caplog.at_level(logging.DEBUG, logger="pyparsnip.Combinators"):
        assert p.parse("ab") == Success("ab")
    assert 'start: "ab" at line 1, column 1' in caplog.messages


def test_parser_trace_truncates_long_input(caplog):
    text = "x" * 40
    p = parser_trace("long") > string(text)
    with caplog.at_level(logging.DEBUG, logger="pyparsnip.Combinators"):
        p.parse(text)
    assert caplog.messages == [f'long: "{"x" * 30}..." at line 1, column 1']


def test_parser_traced_logs_backtracking(caplog):
    p = parser_traced("item", string("x")) | string("y")
    with caplog.at_level(logging.DEBUG, logger="pyparsnip.Combinators"):
        assert p.parse("y") == Success("y")
    assert caplog.messages == [
        'item: "y" at line 1, column 1',
        'item backtracked: "y" at line 1, column 1',
    ]


def test_tracing_is_silent_above_debug(caplog):
    p = parser_traced("quiet", string("x"))
    with caplog.at_level(logging.INFO):
        p.parse("x")
    assert caplog.records == []


def test_failed_parse_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="pyparsnip.Parsec"):
        string("a").parse("b")
    assert "parse failed at line 1, column 1, expected [\"'a'\"]" in caplog.text
