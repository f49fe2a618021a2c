# tests/test_backtracking.py
from pyparsnip.Char import string
from pyparsnip.Parsec import Failure, Success
from pyparsnip.Pos import SourcePos
from pyparsnip.Prim import alt, seq


def test_choice_backtracks_after_consumption():
    """
    (string('a') > string('b')) | string('a')
    Input: 'ac'

    1. First parser matches 'a', then fails on 'c' (expected 'b').
    2. The alternative is retried from offset 0 and matches 'a'.
    3. The leftover 'c' fails the end-of-input check at the same offset
       where 'b' was expected, so both expectations are reported.
    """
    parser = (string("a") > string("b")) | string("a")

    assert parser.parse("a") == Success("a")
    assert parser.parse("ab") == Success("b")
    assert parser.parse("ac") == Failure(SourcePos(1, 1, 2), ["'b'", "end of input"])


def test_abandoned_branch_failure_is_not_lost():
    """
    The first alternative reaches offset 3 before failing. Even though the
    second alternative succeeds, the deeper failure is what gets reported
    when the rest of the input does not parse.
    """
    keyword = seq(string("fun"), string("("), string(")"))
    ident = string("f")
    parser = alt(keyword, ident)

    assert parser.parse("fun()") == Success(["fun", "(", ")"])
    assert parser.parse("fun(") == Failure(SourcePos(4, 1, 5), ["')'"])
    assert parser.parse("fx") == Failure(SourcePos(1, 1, 2), ["end of input"])


def test_reply_of_successful_alternative_carries_context():
    parser = alt(seq(string("a"), string("b")), string("a"))
    reply = parser("ac", 0)
    assert reply.status
    assert reply.index == 1
    assert reply.furthest == 1
    assert reply.expected == {"'b'"}


def test_same_parser_runs_independently():
    # no state is kept between parses of the same parser
    parser = alt(string("x"), string("y")).many()
    assert parser.parse("xyx") == Success(["x", "y", "x"])
    assert parser.parse("q") == Failure(SourcePos(0, 1, 1), ["'x'", "'y'", "end of input"])
    assert parser.parse("yy") == Success(["y", "y"])
