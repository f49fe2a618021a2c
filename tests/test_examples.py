import importlib.util
from pathlib import Path

import pytest

from pyparsnip.Parsec import Success
from pyparsnip.Pos import SourcePos
from pyparsnip.Prim import Ref

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def load_example(name):
    spec = importlib.util.spec_from_file_location(name, EXAMPLES / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def lisp():
    return load_example("lisp_reader")


@pytest.fixture(scope="module")
def json_example():
    return load_example("json_parser")


@pytest.fixture(scope="module")
def arithmetic():
    return load_example("simple_arithmetic_solver")


def test_lisp_program(lisp):
    res = lisp.program.parse("  (define (sq x) (* x x))\n(sq -3) 'a")
    assert res == Success([
        ["define", ["sq", "x"], ["*", "x", "x"]],
        ["sq", -3],
        ["quote", "a"],
    ])


def test_lisp_error_points_at_furthest_failure(lisp):
    source = "(define x\n  (+ 1 2)"
    res = lisp.program.parse(source)
    assert res.index == SourcePos(len(source), 2, 10)
    assert res.format(source).endswith("got the end of the input")
    assert "')'" in res.expected


def test_json_document(json_example):
    text = (EXAMPLES / "json_example.json").read_text()
    res = json_example.parser.parse(text)
    assert res.value == {
        "name": "pyparsnip",
        "tags": ["parser", "combinator"],
        "version": 1.5,
        "stable": False,
        "extra": None,
    }


def test_json_nesting_reuses_one_value_parser(json_example):
    value_parser = json_example.json_value
    assert isinstance(value_parser, Ref)
    assert value_parser.bound
    depth = 30
    res = json_example.parser.parse("[" * depth + "{\"k\": 1}" + "]" * depth)
    nested = res.value
    for _ in range(depth):
        assert len(nested) == 1
        nested = nested[0]
    assert nested == {"k": 1}


def test_json_error(json_example):
    res = json_example.parser.parse('{"a": [1, 2,]}')
    assert not res.status
    assert res.index.offset == 12


@pytest.mark.parametrize("expr_str, expected", [
    ("2 + 3", 5),
    ("2 + 3 * 4", 14),
    ("(2 + 3) * 4", 20),
    ("-2 + 3", 1),
    ("10 / 2 + 3", 8.0),
    ("8 - 3 - 2", 3),
])
def test_arithmetic(arithmetic, expr_str, expected):
    assert arithmetic.parser.parse(expr_str) == Success(expected)


def test_arithmetic_division_by_zero(arithmetic):
    with pytest.raises(ValueError):
        arithmetic.parser.parse("10 / (2 - 2)")
