"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    NUMBER = auto()  # 12, 3.5, .5, 1e3

    # Operators
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    POW = auto()  # **

    # Grouping
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    END = auto()
    INVALID = auto()  # any character outside the grammar


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token.

    ``start_pos`` is the 1-based character offset of the token's first
    character in the buffer that was lexed. ``value`` is only meaningful for
    NUMBER tokens.
    """

    type: TokenType
    value: float
    raw: str
    start_pos: int

    @property
    def end_pos(self) -> int:
        """1-based offset one past the token's last character."""
        return self.start_pos + len(self.raw)


# Single-character operators and grouping symbols
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

_WHITESPACE = frozenset(" \t\n\r")
_NUMBER_START = frozenset("0123456789.")
_DIGITS = frozenset("0123456789")


def is_whitespace(ch: str) -> bool:
    """Return True if ch is skipped between tokens."""
    return ch in _WHITESPACE


def starts_number(ch: str) -> bool:
    """Return True if ch can begin a numeric literal."""
    return ch in _NUMBER_START


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in _DIGITS
