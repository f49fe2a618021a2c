import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, ClassVar, FrozenSet, Generic, List, Optional, Tuple, TypeVar, Union

from .Pos import DEFAULT_STYLE, ErrorStyle, SourcePos, format_error, position_of, sort_expected

logger = logging.getLogger(__name__)

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


class ParsnipError(Exception):
    """Base class for exceptions raised by pyparsnip."""


class ParseError(ParsnipError):
    """A failed parse, raised only by Parsec.parse_or_raise and returned by run_parser."""

    def __init__(self, input_str: str, pos: SourcePos, expected: List[str],
                 style: ErrorStyle = DEFAULT_STYLE):
        self.input = input_str
        self.pos = pos
        self.expected = expected
        self.style = style
        super().__init__(str(self))

    def __str__(self) -> str:
        return format_error(self.input, self.pos, self.expected, self.style)


class RefError(ParsnipError):
    """A Ref was rebound after a parse had already dispatched through it."""


class InfiniteLoopError(ParsnipError):
    """An unbounded repetition was applied to a parser that consumed no input."""


@dataclass(frozen=True)
class Reply(Generic[T]):
    """
    The outcome of running a parser action at one offset.

    `index` and `value` are meaningful only when `status` is True. `furthest`
    is the highest offset at which any attempt has failed so far (-1 if none)
    and `expected` describes what was expected there.
    """
    status: bool
    index: int
    value: Optional[T]
    furthest: int
    expected: FrozenSet[str]

    @staticmethod
    def ok(index: int, value: T) -> 'Reply[T]':
        return Reply(True, index, value, -1, frozenset())

    @staticmethod
    def error(index: int, expected: str) -> 'Reply[Any]':
        return Reply(False, -1, None, index, frozenset([expected]))

    def merge(self, context: Optional['Reply[Any]']) -> 'Reply[T]':
        return merge_replies(self, context)

    def expected_list(self) -> List[str]:
        return sort_expected(self.expected)


def merge_replies(newer: Reply[T], context: Optional[Reply[Any]]) -> Reply[T]:
    """
    Combine `newer` with an older `context` reply.

    The status, index and value always come from `newer`. The furthest failure
    wins; when both failed at the same offset their expectations are unioned.
    """
    if context is None:
        return newer
    if newer.furthest > context.furthest:
        return newer
    if newer.furthest == context.furthest:
        expected = newer.expected | context.expected
    else:
        expected = context.expected
    return Reply(newer.status, newer.index, newer.value, context.furthest, expected)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    status: ClassVar[bool] = True


@dataclass(frozen=True)
class Failure:
    index: SourcePos
    expected: List[str]
    status: ClassVar[bool] = False

    def format(self, input_str: str, style: ErrorStyle = DEFAULT_STYLE) -> str:
        return format_error(input_str, self.index, self.expected, style)

    def to_error(self, input_str: str, style: ErrorStyle = DEFAULT_STYLE) -> ParseError:
        return ParseError(input_str, self.index, self.expected, style)


ParseResult = Union[Success[T], Failure]


@dataclass(frozen=True)
class Mark(Generic[T]):
    """A parsed value together with the positions it started and ended at."""
    start: SourcePos
    value: T
    end: SourcePos


Action = Callable[[str, int], Reply[T]]


class ParsecBase(Generic[T]):
    """
    Combinator methods and operators shared by every parser handle.

    Parsec and Ref are siblings under this class. Neither may subclass the
    other: Python would then route `p > ref` to `ref.__lt__(p)`.
    """
    def __init__(self, parse_fn: Action):
        self.parse_fn = parse_fn

    def __call__(self, input_str: str, index: int) -> Reply[T]:
        return self.parse_fn(input_str, index)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        """Run `self`, then the parser `f` builds from its value."""
        def parse(input_str: str, index: int) -> Reply[U]:
            reply = self(input_str, index)
            if not reply.status:
                return reply
            next_parser = f(reply.value)
            return next_parser(input_str, reply.index).merge(reply)
        return Parsec(parse)

    chain = bind

    def map(self, fn: Callable[[T], U]) -> 'Parsec[U]':
        def parse(input_str: str, index: int) -> Reply[U]:
            reply = self(input_str, index)
            if not reply.status:
                return reply
            return Reply.ok(reply.index, fn(reply.value)).merge(reply)
        return Parsec(parse)

    def result(self, value: U) -> 'Parsec[U]':
        """Replace a successful value with a constant."""
        return self.map(lambda _: value)

    # Sequence (*>)
    def then(self, other: 'Parsec[U]') -> 'Parsec[U]':
        def parse(input_str: str, index: int) -> Reply[U]:
            first = self(input_str, index)
            if not first.status:
                return first
            return other(input_str, first.index).merge(first)
        return Parsec(parse)

    # Sequence (<*)
    def skip(self, other: 'Parsec[Any]') -> 'Parsec[T]':
        def parse(input_str: str, index: int) -> Reply[T]:
            first = self(input_str, index)
            if not first.status:
                return first
            second = other(input_str, first.index).merge(first)
            if not second.status:
                return second
            return Reply.ok(second.index, first.value).merge(second)
        return Parsec(parse)

    # Alternative (<|>)
    def or_else(self, other: 'Parsec[U]') -> 'Parsec[Union[T, U]]':
        def parse(input_str: str, index: int) -> Reply[Union[T, U]]:
            reply = self(input_str, index)
            if reply.status:
                return reply
            # Both branches start from the same offset
            return other(input_str, index).merge(reply)
        return Parsec(parse)

    def times(self, min_count: int, max_count: Optional[float] = None) -> 'Parsec[List[T]]':
        """
        Apply the parser between `min_count` and `max_count` times (exactly
        `min_count` times when `max_count` is omitted). `max_count` may be
        math.inf.
        """
        if max_count is None:
            max_count = min_count
        if min_count < 0 or max_count < min_count:
            raise ValueError(f"invalid repetition bounds: {min_count}..{max_count}")
        unbounded = math.isinf(max_count)

        def parse(input_str: str, index: int) -> Reply[List[T]]:
            values: List[T] = []
            context: Optional[Reply[Any]] = None
            i = index

            while len(values) < min_count:
                reply = self(input_str, i)
                context = reply.merge(context)
                if not reply.status:
                    return context
                values.append(reply.value)
                i = reply.index

            while len(values) < max_count:
                reply = self(input_str, i)
                context = reply.merge(context)
                if not reply.status:
                    break
                if unbounded and reply.index == i:
                    raise InfiniteLoopError(
                        f"repeated parser succeeded without consuming input at offset {i}")
                values.append(reply.value)
                i = reply.index

            return Reply.ok(i, values).merge(context)
        return Parsec(parse)

    def many(self) -> 'Parsec[List[T]]':
        """Zero or more occurrences."""
        return self.times(0, math.inf)

    def at_most(self, n: int) -> 'Parsec[List[T]]':
        return self.times(0, n)

    def at_least(self, n: int) -> 'Parsec[List[T]]':
        rest = self.many()
        return self.times(n).bind(lambda init: rest.map(lambda tail: init + tail))

    def sep_by1(self, sep: 'Parsec[Any]') -> 'Parsec[List[T]]':
        """One or more occurrences separated by `sep`."""
        tail = sep.then(self).many()
        return self.bind(lambda first: tail.map(lambda rest: [first] + rest))

    def sep_by(self, sep: 'Parsec[Any]') -> 'Parsec[List[T]]':
        """Zero or more occurrences separated by `sep`."""
        return self.sep_by1(sep) | pure([])

    def mark(self) -> 'Parsec[Mark[T]]':
        """Wrap the value with the SourcePos it started and ended at."""
        return position().bind(
            lambda start: self.bind(
                lambda value: position().map(lambda end: Mark(start, value, end))))

    # Label (<?>)
    def label(self, description: str) -> 'Parsec[T]':
        """On failure, report `description` as the only expectation."""
        def parse(input_str: str, index: int) -> Reply[T]:
            reply = self(input_str, index)
            if reply.status:
                return reply
            return replace(reply, expected=frozenset([description]))
        return Parsec(parse)

    desc = label

    def optional(self) -> 'Parsec[Optional[T]]':
        """Never fails; yields None when the parser does not match."""
        return self | pure(None)

    def with_default(self, default_fn: Callable[[], U]) -> 'Parsec[Union[T, U]]':
        """Replace a successful None value with `default_fn()`."""
        def parse(input_str: str, index: int) -> Reply[Union[T, U]]:
            reply = self(input_str, index)
            if reply.status and reply.value is None:
                return Reply.ok(reply.index, default_fn()).merge(reply)
            return reply
        return Parsec(parse)

    def ap(self, arg: 'Parsec[Any]') -> 'Parsec[Any]':
        """`self` yields a one-argument function which is applied to the value of `arg`."""
        return self.bind(lambda fn: arg.map(fn))

    def parse(self, input_str: str) -> ParseResult:
        """Parse the whole of `input_str`."""
        reply = self.skip(eof())(input_str, 0)
        if reply.status:
            return Success(reply.value)
        failure = Failure(position_of(input_str, reply.furthest), reply.expected_list())
        logger.debug("parse failed at %s, expected %s", failure.index, failure.expected)
        return failure

    def parse_or_raise(self, input_str: str) -> T:
        result = self.parse(input_str)
        if not result.status:
            raise result.to_error(input_str)
        return result.value

    def __or__(self, other: 'Parsec[U]') -> 'Parsec[Union[T, U]]':
        return self.or_else(other)

    # Sequence (&)
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        return self.bind(lambda a: other.map(lambda b: (a, b)))

    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        return self.then(other)

    def __lt__(self, other: 'Parsec[Any]') -> 'Parsec[T]':
        return self.skip(other)

    def __rshift__(self, other: Union['Parsec[U]', Callable[[T], 'Parsec[U]']]) -> 'Parsec[U]':
        # p >> q sequences, p >> f binds
        if isinstance(other, ParsecBase):
            return self.then(other)
        return self.bind(other)


class Parsec(ParsecBase[T]):
    """A parser: wraps an action taking (input, offset) and producing a Reply."""


def pure(value: T) -> Parsec[T]:
    """Succeed with `value` without consuming input."""
    return Parsec(lambda input_str, index: Reply.ok(index, value))


def fail(expected: str) -> Parsec[Any]:
    """Fail without consuming input, expecting `expected`."""
    return Parsec(lambda input_str, index: Reply.error(index, expected))


def eof() -> Parsec[None]:
    """Succeed only at the end of the input."""
    def parse(input_str: str, index: int) -> Reply[None]:
        if index < len(input_str):
            return Reply.error(index, "end of input")
        return Reply.ok(index, None)
    return Parsec(parse)


def position() -> Parsec[SourcePos]:
    """Yield the current SourcePos without consuming input."""
    return Parsec(lambda input_str, index: Reply.ok(index, position_of(input_str, index)))


def index() -> Parsec[int]:
    """Yield the current offset without consuming input."""
    return Parsec(lambda input_str, i: Reply.ok(i, i))
