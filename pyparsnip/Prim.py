import logging
from typing import Any, Callable, List, Optional, Tuple

from .Parsec import (
    Parsec, ParsecBase, Reply, ParseError, RefError, T,
    pure, fail, eof, position, index,
)

logger = logging.getLogger(__name__)


def rest() -> Parsec[str]:
    """Consume and return everything that remains of the input."""
    return Parsec(lambda input_str, i: Reply.ok(len(input_str), input_str[i:]))


def seq(*parsers: Parsec[Any]) -> Parsec[List[Any]]:
    """Run `parsers` one after another, yielding the list of their values."""
    def parse(input_str: str, index: int) -> Reply[List[Any]]:
        values: List[Any] = []
        context: Optional[Reply[Any]] = None
        i = index
        for p in parsers:
            reply = p(input_str, i).merge(context)
            if not reply.status:
                return reply
            values.append(reply.value)
            i = reply.index
            context = reply
        return Reply.ok(i, values).merge(context)
    return Parsec(parse)


def seq_map(*args: Any) -> Parsec[Any]:
    """seq_map(p1, ..., pn, fn): run the parsers in sequence and call fn(v1, ..., vn)."""
    if not args or not callable(args[-1]) or isinstance(args[-1], ParsecBase):
        raise TypeError("seq_map expects parsers followed by a mapping function")
    *parsers, fn = args
    return seq(*parsers).map(lambda values: fn(*values))


def alt(*parsers: Parsec[Any]) -> Parsec[Any]:
    """
    Try each parser from the same offset and return the first success.

    When every alternative fails, the reply reports the furthest failure
    reached by any of them.
    """
    if not parsers:
        return fail("no alternatives")

    def parse(input_str: str, index: int) -> Reply[Any]:
        reply: Optional[Reply[Any]] = None
        for p in parsers:
            reply = p(input_str, index).merge(reply)
            if reply.status:
                return reply
        return reply
    return Parsec(parse)


def lazy(builder: Callable[[], Parsec[T]], description: Optional[str] = None) -> Parsec[T]:
    """
    Defer building a parser until it is first run.

    The built parser's action replaces the lazy one, so `builder` is called once.
    """
    def parse(input_str: str, index: int) -> Reply[T]:
        target = builder()
        parser.parse_fn = target.parse_fn
        return parser(input_str, index)
    parser: Parsec[T] = Parsec(parse)
    if description is not None:
        return parser.label(description)
    return parser


class Ref(ParsecBase[T]):
    """
    A forward-declared parser, bound with `set` before parsing begins.

    Until it is bound a Ref fails with a distinct expectation. Once a parse
    has gone through it, rebinding raises RefError.
    """
    UNBOUND = "actual parser, not a reference"

    def __init__(self):
        super().__init__(self._unbound)
        self._target: Optional[Parsec[T]] = None
        self._dispatched = False

    def _unbound(self, input_str: str, index: int) -> Reply[Any]:
        logger.warning("reference used before assignment at offset %d", index)
        return Reply.error(index, self.UNBOUND)

    def _dispatch(self, input_str: str, index: int) -> Reply[T]:
        self._dispatched = True
        return self._target(input_str, index)

    @property
    def bound(self) -> bool:
        return self._target is not None

    def set(self, parser: Parsec[T]) -> 'Ref[T]':
        if parser is self:
            raise RefError("a reference cannot be bound to itself")
        if self._dispatched:
            raise RefError("reference has already been used by a parse and cannot be rebound")
        if self._target is not None:
            logger.warning("reference bound more than once")
        self._target = parser
        self.parse_fn = self._dispatch
        return self


def make_ref() -> Ref[Any]:
    return Ref()


def run_parser(parser: Parsec[T], input_str: str) -> Tuple[Optional[T], Optional[ParseError]]:
    """Parse the whole input, returning (value, None) or (None, error)."""
    result = parser.parse(input_str)
    if result.status:
        return result.value, None
    return None, result.to_error(input_str)


def parse_test(parser: Parsec[T], input_str: str) -> None:
    """Test a parser and print the result."""
    value, err = run_parser(parser, input_str)
    if err:
        print(err)
    else:
        print(value)
