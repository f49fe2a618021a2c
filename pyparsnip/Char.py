import re
from typing import Callable, Union

from .Parsec import Parsec, Reply

_FLAG_LETTERS = ((re.IGNORECASE, "i"), (re.MULTILINE, "m"), (re.DOTALL, "s"), (re.VERBOSE, "x"))


# Core function: Parses an exact string
def string(s: str) -> Parsec[str]:
    """Parses the exact string s and returns it."""
    expected = f"'{s}'"
    length = len(s)

    def parse(input_str: str, index: int) -> Reply[str]:
        if input_str[index:index + length] == s:
            return Reply.ok(index + length, s)
        return Reply.error(index, expected)
    return Parsec(parse)


def _describe_pattern(compiled: re.Pattern) -> str:
    flags = "".join(letter for flag, letter in _FLAG_LETTERS if compiled.flags & flag)
    return f"/{compiled.pattern}/{flags}"


# Core function: Matches a regular expression anchored at the current offset
def regex(pattern: Union[str, re.Pattern], group: Union[int, str] = 0, flags: int = 0) -> Parsec[str]:
    """
    Match `pattern` starting exactly at the current offset and return `group`
    of the match. The whole match is consumed whichever group is returned.

    The pattern runs against the whole input, so look-behind sees the text
    already consumed and `^` (without re.MULTILINE) matches only at offset 0.
    """
    compiled = re.compile(pattern, flags)
    if isinstance(group, int):
        if not 0 <= group <= compiled.groups:
            raise ValueError(f"{_describe_pattern(compiled)} has no group {group}")
    elif group not in compiled.groupindex:
        raise ValueError(f"{_describe_pattern(compiled)} has no group named {group!r}")
    expected = _describe_pattern(compiled)

    def parse(input_str: str, index: int) -> Reply[str]:
        match = compiled.match(input_str, index)
        if match:
            return Reply.ok(match.end(), match.group(group))
        return Reply.error(index, expected)
    return Parsec(parse)


# Core function: Succeeds if the character satisfies a predicate
def satisfy(f: Callable[[str], bool]) -> Parsec[str]:
    """Succeeds for any character where f returns True. Returns the parsed character."""
    expected = f"a character matching {getattr(f, '__name__', repr(f))}"

    def parse(input_str: str, index: int) -> Reply[str]:
        if index < len(input_str) and f(input_str[index]):
            return Reply.ok(index + 1, input_str[index])
        return Reply.error(index, expected)
    return Parsec(parse)


def take_while(f: Callable[[str], bool]) -> Parsec[str]:
    """Consumes the longest (possibly empty) run of characters satisfying f."""
    def parse(input_str: str, index: int) -> Reply[str]:
        end = index
        while end < len(input_str) and f(input_str[end]):
            end += 1
        return Reply.ok(end, input_str[index:end])
    return Parsec(parse)


def any_char() -> Parsec[str]:
    """Parses any character and returns it."""
    def parse(input_str: str, index: int) -> Reply[str]:
        if index >= len(input_str):
            return Reply.error(index, "any character")
        return Reply.ok(index + 1, input_str[index])
    return Parsec(parse)


def char(c: str) -> Parsec[str]:
    """Parses a single character c and returns it."""
    return satisfy(lambda x: x == c).label(f"'{c}'")


# 1. oneOf: Parses any character in the provided string
def one_of(cs: str) -> Parsec[str]:
    """Succeeds if the current character is in cs. Returns the parsed character."""
    return satisfy(lambda c: c in cs).label(f"a character in '{cs}'")


# 2. noneOf: Parses any character not in the provided string
def none_of(cs: str) -> Parsec[str]:
    """Succeeds if the current character is not in cs. Returns the parsed character."""
    return satisfy(lambda c: c not in cs).label(f"a character not in '{cs}'")


# 3. letter / letters: ASCII letters, case-insensitive
def letter() -> Parsec[str]:
    return regex(r"[a-z]", flags=re.IGNORECASE).label("a letter")


def letters() -> Parsec[str]:
    """Zero or more letters."""
    return regex(r"[a-z]*", flags=re.IGNORECASE)


# 4. digit / digits: ASCII digits
def digit() -> Parsec[str]:
    return regex(r"[0-9]").label("a digit")


def digits() -> Parsec[str]:
    """Zero or more digits."""
    return regex(r"[0-9]*").label("optional digits")


# 5. whitespace / optional_whitespace
def whitespace() -> Parsec[str]:
    """One or more whitespace characters."""
    return regex(r"\s+").label("whitespace")


def optional_whitespace() -> Parsec[str]:
    return regex(r"\s*").label("optional whitespace")


# 6. newline: Parses a newline character
def newline() -> Parsec[str]:
    """Parses a newline character ('\\n') and returns it."""
    return char('\n').label("lf new-line")


# 7. crlf: Parses a carriage return followed by a newline
def crlf() -> Parsec[str]:
    """Parses '\\r\\n' and returns '\\n'."""
    return string("\r\n").result("\n").label("crlf new-line")


# 8. endOfLine: Parses either a newline or a crlf
def end_of_line() -> Parsec[str]:
    """Parses a CRLF or LF end-of-line and returns '\\n'."""
    return (newline() | crlf()).label("new-line")


# 9. Character classes
def space() -> Parsec[str]:
    return satisfy(str.isspace).label("space")


def upper() -> Parsec[str]:
    return satisfy(str.isupper).label("uppercase letter")


def lower() -> Parsec[str]:
    return satisfy(str.islower).label("lowercase letter")


def alpha_num() -> Parsec[str]:
    return satisfy(str.isalnum).label("letter or digit")


def hex_digit() -> Parsec[str]:
    """Parses a hexadecimal digit (0-9, a-f, A-F) and returns it."""
    return one_of("0123456789abcdefABCDEF").label("hexadecimal digit")


def oct_digit() -> Parsec[str]:
    return one_of("01234567").label("octal digit")
