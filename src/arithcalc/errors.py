"""Error kinds and the evaluation error with formatted source context."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    INVALID_CHARACTER = "invalid character"
    UNEXPECTED_TOKEN = "expected a number or '('"
    UNMATCHED_PARENTHESIS = "unmatched '('"
    DIVISION_BY_ZERO = "division by zero"
    INVALID_EXPONENTIATION = "result of '**' is not a finite real number"
    TRAILING_INPUT = "unexpected input after expression"
    ARITHMETIC_OVERFLOW = "arithmetic overflow"
    NESTING_TOO_DEEP = "expression nested too deeply"

    @property
    def description(self) -> str:
        return self.value


def locate(source: str, position: int) -> tuple[int, int]:
    """Convert a 1-based character offset into a 1-based (line, column)."""
    offset = max(0, min(position - 1, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


class CalcError(Exception):
    """Raised at the first lexing or evaluation error.

    ``position`` is the 1-based character offset into ``source``. The parser
    raises it internally; :func:`arithcalc.parser.evaluate` turns it into an
    :class:`arithcalc.outcome.Error` so callers never see the exception.
    """

    def __init__(self, kind: ErrorKind, position: int, source: str) -> None:
        self.kind = kind
        self.position = position
        self.source = source
        super().__init__(self.format())

    @property
    def message(self) -> str:
        return self.kind.description

    def format(self, filename: str = "input.txt") -> str:
        line, col = locate(self.source, self.position)
        lines = self.source.splitlines(keepends=True)
        line_idx = line - 1

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)
        line_num = str(line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )
