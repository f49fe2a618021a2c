import logging
from typing import Any, Callable, List, Optional

from .Parsec import Parsec, Reply, InfiniteLoopError, T, pure
from .Pos import position_of
from .Prim import alt, seq, seq_map

logger = logging.getLogger(__name__)

OpFuncType = Callable[[T, T], T]


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: List[Parsec[T]]) -> Parsec[T]:
    """
    Applies a list of parsers in order until one succeeds.
    Fails with the furthest failure of all of them if none succeed.
    """
    return alt(*parsers)


# 2. count: Parses n occurrences of a parser
def count(n: int, p: Parsec[T]) -> Parsec[List[T]]:
    return p.times(max(n, 0))


# 3. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parsec[Any], close: Parsec[Any], p: Parsec[T]) -> Parsec[T]:
    """
    Parses 'open', then 'p', then 'close', returning the result of 'p'.
    """
    return open.then(p).skip(close)


# 4. option: Tries a parser, returning a default value on failure
def option(x: T, p: Parsec[T]) -> Parsec[T]:
    return p | pure(x)


# 5. optionMaybe: Tries a parser, returning Optional[T]
def option_maybe(p: Parsec[T]) -> Parsec[Optional[T]]:
    return p.optional()


# 6. many1: Applies a parser one or more times
def many1(p: Parsec[T]) -> Parsec[List[T]]:
    return p.at_least(1)


# 7. skipMany: Applies a parser zero or more times, discarding results
def skip_many(p: Parsec[Any]) -> Parsec[None]:
    return p.many().result(None)


# 8. sepBy: Parses zero or more occurrences separated by a separator
def sep_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    """
    Parses zero or more occurrences of p separated by sep, returning a list of p's results.
    """
    return p.sep_by(sep)


# 9. sepBy1: Parses one or more occurrences separated by a separator
def sep_by1(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return p.sep_by1(sep)


# 10. endBy: Parses zero or more occurrences each ended by a separator
def end_by(p: Parsec[T], sep: Parsec[Any]) -> Parsec[List[T]]:
    return p.skip(sep).many()


# 11. chainl1: Left-associative operator chain
def chainl1(p: Parsec[T], op: Parsec[OpFuncType]) -> Parsec[T]:
    """
    Parses one or more p separated by op, applying op left-associatively.
    """
    def fold(first: T, pairs: List[List[Any]]) -> T:
        acc = first
        for func_op, operand in pairs:
            acc = func_op(acc, operand)
        return acc

    return seq_map(p, seq(op, p).many(), fold)


# 12. chainr1: Right-associative operator chain
def chainr1(p: Parsec[T], op: Parsec[OpFuncType]) -> Parsec[T]:
    """
    Parses one or more p separated by op, applying op right-associatively.
    """
    def fold(first: T, pairs: List[List[Any]]) -> T:
        if not pairs:
            return first
        ops = [func_op for func_op, _ in pairs]
        terms = [first] + [operand for _, operand in pairs]
        acc = terms[-1]
        for func_op, term in zip(reversed(ops), reversed(terms[:-1])):
            acc = func_op(term, acc)
        return acc

    return seq_map(p, seq(op, p).many(), fold)


# 13. lookAhead: Parses without consuming input
def look_ahead(p: Parsec[T]) -> Parsec[T]:
    def parse(input_str: str, index: int) -> Reply[T]:
        reply = p(input_str, index)
        if not reply.status:
            return reply
        return Reply(True, index, reply.value, reply.furthest, reply.expected)
    return Parsec(parse)


# 14. notFollowedBy: Succeeds only where p fails, consuming nothing
def not_followed_by(p: Parsec[Any], description: Optional[str] = None) -> Parsec[None]:
    """
    Succeeds without consuming input when p fails here. Otherwise expects
    "not <description>", or "not '<text p matched>'" when no description is given.
    """
    def parse(input_str: str, index: int) -> Reply[None]:
        reply = p(input_str, index)
        if not reply.status:
            return Reply.ok(index, None)
        if description is not None:
            return Reply.error(index, f"not {description}")
        matched = input_str[index:reply.index]
        if matched:
            return Reply.error(index, f"not '{matched}'")
        return Reply.error(index, "not followed by an empty match")
    return Parsec(parse)


# 15. manyTill: Parses p zero or more times until end succeeds
def many_till(p: Parsec[T], end: Parsec[Any]) -> Parsec[List[T]]:
    """
    Applies p zero or more times until end succeeds, returning a list of p's results.
    """
    def parse(input_str: str, index: int) -> Reply[List[T]]:
        values: List[T] = []
        context: Optional[Reply[Any]] = None
        i = index
        while True:
            stop = end(input_str, i).merge(context)
            if stop.status:
                return Reply.ok(stop.index, values).merge(stop)
            reply = p(input_str, i).merge(stop)
            if not reply.status:
                return reply
            if reply.index == i:
                raise InfiniteLoopError(f"many_till: parser succeeded without consuming input at offset {i}")
            values.append(reply.value)
            i = reply.index
            context = reply
    return Parsec(parse)


def _trace(label_str: str, input_str: str, index: int) -> None:
    upcoming = input_str[index:index + 30]
    more = "..." if len(input_str) - index > 30 else ""
    logger.debug('%s: "%s%s" at %s', label_str, upcoming, more, position_of(input_str, index))


# 16. parserTrace: Debugging parser that logs the upcoming input
def parser_trace(label_str: str) -> Parsec[None]:
    def parse(input_str: str, index: int) -> Reply[None]:
        if logger.isEnabledFor(logging.DEBUG):
            _trace(label_str, input_str, index)
        return Reply.ok(index, None)
    return Parsec(parse)


# 17. parserTraced: Debugging parser that traces execution and backtracking
def parser_traced(label_str: str, p: Parsec[T]) -> Parsec[T]:
    def parse(input_str: str, index: int) -> Reply[T]:
        tracing = logger.isEnabledFor(logging.DEBUG)
        if tracing:
            _trace(label_str, input_str, index)
        reply = p(input_str, index)
        if tracing and not reply.status:
            _trace(f"{label_str} backtracked", input_str, index)
        return reply
    return Parsec(parse)
