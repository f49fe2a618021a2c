from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class SourcePos:
    """A 1-based line/column position derived from a character offset."""
    offset: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


def position_of(input_str: str, offset: int) -> SourcePos:
    """Compute the SourcePos of `offset` within `input_str`."""
    if offset < 0 or offset > len(input_str):
        raise ValueError(f"offset {offset} is outside the input (length {len(input_str)})")
    lines = input_str[:offset].split("\n")
    return SourcePos(offset, len(lines), len(lines[-1]) + 1)


def sort_expected(expected: Iterable[str]) -> List[str]:
    """Deduplicate and sort descriptions case-insensitively."""
    # The raw string breaks ties so 'A' and 'a' always come out in the same order
    return sorted(set(expected), key=lambda e: (e.lower(), e))


@dataclass(frozen=True)
class ErrorStyle:
    """Rendering options for format_error."""
    context: int = 12  # characters of input shown after the failure offset
    ellipsis: str = "..."


DEFAULT_STYLE = ErrorStyle()


def format_expected(expected: List[str]) -> str:
    if len(expected) == 1:
        return expected[0]
    return "one of " + ", ".join(sort_expected(expected))


def format_got(input_str: str, pos: SourcePos, style: ErrorStyle = DEFAULT_STYLE) -> str:
    i = pos.offset
    if i == len(input_str):
        return ", got the end of the input"
    prefix = style.ellipsis if i > 0 else ""
    suffix = style.ellipsis if len(input_str) - i > style.context else ""
    snippet = input_str[i:i + style.context]
    return f" at line {pos.line} column {pos.column}, got '{prefix}{snippet}{suffix}'"


def format_error(input_str: str,
                 pos: SourcePos,
                 expected: List[str],
                 style: ErrorStyle = DEFAULT_STYLE) -> str:
    """
    Render a human-readable message for a failure at `pos`.

    The same (input, pos, expected) triple always renders the same message.
    """
    return "expected " + format_expected(expected) + format_got(input_str, pos, style)
