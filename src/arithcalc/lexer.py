"""Arithmetic lexer: produces tokens on demand from a text buffer."""

from __future__ import annotations

import math

from arithcalc.tokens import (
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
    is_digit,
    is_whitespace,
    starts_number,
)


class Lexer:
    """Pull-based tokenizer over a source buffer.

    The only state is the 0-based cursor ``offset``; each call to
    :meth:`next_token` skips whitespace, scans one token and advances past it.
    Once the end of the buffer is reached every further call returns END.
    """

    def __init__(self, source: str, offset: int = 0) -> None:
        self._source = source
        self._pos = offset

    @property
    def offset(self) -> int:
        return self._pos

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _emit(self, tt: TokenType, start: int, value: float = 0.0) -> Token:
        return Token(tt, value, self._source[start : self._pos], start + 1)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Scan and return the next token, advancing the cursor past it."""
        while self._pos < len(self._source) and is_whitespace(self._source[self._pos]):
            self._pos += 1

        start = self._pos
        ch = self._peek()

        if ch == "":
            return self._emit(TokenType.END, start)

        if starts_number(ch):
            return self._lex_number()

        if ch == "*":
            self._pos += 1
            if self._peek() == "*":
                self._pos += 1
                return self._emit(TokenType.POW, start)
            return self._emit(TokenType.STAR, start)

        tt = SINGLE_CHAR_TOKENS.get(ch)
        self._pos += 1
        if tt is None:
            return self._emit(TokenType.INVALID, start)
        return self._emit(tt, start)

    def _skip_digits(self) -> None:
        while is_digit(self._peek()):
            self._pos += 1

    def _lex_number(self) -> Token:
        """Scan the longest decimal literal: ``digits [. digits] [e [+-] digits]``."""
        start = self._pos
        self._skip_digits()
        mantissa_digits = self._pos - start
        if self._peek() == ".":
            self._pos += 1
            before = self._pos
            self._skip_digits()
            mantissa_digits += self._pos - before

        if mantissa_digits == 0:
            # A lone '.' is not a literal; consume just that character
            self._pos = start + 1
            return self._emit(TokenType.INVALID, start)

        # The exponent only belongs to the literal when digits follow it
        if self._peek() in ("e", "E"):
            mark = self._pos
            self._pos += 1
            if self._peek() in ("+", "-"):
                self._pos += 1
            if is_digit(self._peek()):
                self._skip_digits()
            else:
                self._pos = mark

        value = float(self._source[start : self._pos])
        if math.isinf(value):
            return self._emit(TokenType.INVALID, start)
        return self._emit(TokenType.NUMBER, start, value)


def scan(source: str, offset: int = 0) -> tuple[Token, int]:
    """Scan one token at ``offset``; return it with the cursor after it."""
    lexer = Lexer(source, offset)
    token = lexer.next_token()
    return token, lexer.offset


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text up to and including END."""
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.END:
            return tokens
