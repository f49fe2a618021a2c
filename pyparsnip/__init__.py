import logging

# Core
from .Pos import SourcePos, ErrorStyle, DEFAULT_STYLE, position_of, format_error
from .Parsec import (
    Parsec, ParsecBase, Reply, merge_replies, Success, Failure, Mark,
    ParsnipError, ParseError, RefError, InfiniteLoopError,
)
from .Prim import (
    pure, fail, eof, position, index, rest,
    seq, seq_map, alt, lazy, Ref, make_ref, run_parser, parse_test,
)

# Characters
from .Char import (
    string, regex, satisfy, take_while, any_char,
    char, one_of, none_of,
    letter, letters, digit, digits, whitespace, optional_whitespace,
    newline, crlf, end_of_line, space, upper, lower, alpha_num, hex_digit, oct_digit,
)

# Combinators
from .Combinators import (
    choice, count, between, option, option_maybe, many1, skip_many,
    sep_by, sep_by1, end_by, chainl1, chainr1,
    look_ahead, not_followed_by, many_till,
    parser_trace, parser_traced,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())
