"""Arithmetic parser: evaluates a token stream by recursive descent.

Grammar, lowest precedence first::

    expression := term { ('+' | '-') term }
    term       := factor { ('*' | '/') factor }
    factor     := ('+' | '-') factor | power
    power      := primary [ '**' power ]
    primary    := NUMBER | '(' expression ')'

Values are computed while parsing; no tree is built. The first error raises
:class:`CalcError`, which :func:`evaluate` turns into an ``Error`` outcome.
"""

from __future__ import annotations

import math

from arithcalc.errors import CalcError, ErrorKind
from arithcalc.lexer import Lexer
from arithcalc.outcome import Error, Outcome, Value
from arithcalc.tokens import Token, TokenType

DEFAULT_MAX_DEPTH = 100


class Parser:
    """Recursive descent evaluator holding one token of look-ahead."""

    def __init__(self, source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self._source = source
        self._lexer = Lexer(source)
        self._max_depth = max_depth
        self._depth = 0
        self._current = self._lexer.next_token()

    @property
    def position(self) -> int:
        """Start position of the current look-ahead token."""
        return self._current.start_pos

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _at(self, *types: TokenType) -> bool:
        return self._current.type in types

    def _advance(self) -> Token:
        tok = self._current
        self._current = self._lexer.next_token()
        return tok

    def _error(self, kind: ErrorKind, position: int) -> CalcError:
        return CalcError(kind, position, self._source)

    def _descend(self, opener: Token) -> None:
        """Enter one nesting level opened by ``opener``."""
        self._depth += 1
        if self._depth > self._max_depth:
            raise self._error(ErrorKind.NESTING_TOO_DEEP, opener.start_pos)

    def _ascend(self) -> None:
        self._depth -= 1

    def _checked(self, value: float, op: Token) -> float:
        if not math.isfinite(value):
            raise self._error(ErrorKind.ARITHMETIC_OVERFLOW, op.start_pos)
        return value

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> float:
        """Evaluate the whole buffer; anything left after the expression is an error."""
        value = self._expression()
        if not self._at(TokenType.END):
            tok = self._current
            if tok.type == TokenType.INVALID:
                raise self._error(ErrorKind.INVALID_CHARACTER, tok.start_pos)
            raise self._error(ErrorKind.TRAILING_INPUT, tok.start_pos)
        return value

    def _expression(self) -> float:
        value = self._term()
        while self._at(TokenType.PLUS, TokenType.MINUS):
            op = self._advance()
            rhs = self._term()
            if op.type == TokenType.PLUS:
                value = self._checked(value + rhs, op)
            else:
                value = self._checked(value - rhs, op)
        return value

    def _term(self) -> float:
        value = self._factor()
        while self._at(TokenType.STAR, TokenType.SLASH):
            op = self._advance()
            rhs = self._factor()
            if op.type == TokenType.STAR:
                value = self._checked(value * rhs, op)
            elif rhs == 0.0:
                raise self._error(ErrorKind.DIVISION_BY_ZERO, op.start_pos)
            else:
                value = self._checked(value / rhs, op)
        return value

    def _factor(self) -> float:
        if not self._at(TokenType.PLUS, TokenType.MINUS):
            return self._power()

        op = self._advance()
        self._descend(op)
        operand = self._factor()
        self._ascend()
        return operand if op.type == TokenType.PLUS else -operand

    def _power(self) -> float:
        base = self._primary()
        if not self._at(TokenType.POW):
            return base

        op = self._advance()
        self._descend(op)
        exponent = self._power()  # right-associative
        self._ascend()

        try:
            result = math.pow(base, exponent)
        except (ValueError, OverflowError):
            raise self._error(ErrorKind.INVALID_EXPONENTIATION, op.start_pos) from None
        if not math.isfinite(result):
            raise self._error(ErrorKind.INVALID_EXPONENTIATION, op.start_pos)
        return result

    def _primary(self) -> float:
        tok = self._current

        if tok.type == TokenType.NUMBER:
            self._advance()
            return tok.value

        if tok.type == TokenType.LPAREN:
            self._advance()
            self._descend(tok)
            value = self._expression()
            # An unclosed group is blamed on its opening parenthesis
            if not self._at(TokenType.RPAREN):
                raise self._error(ErrorKind.UNMATCHED_PARENTHESIS, tok.start_pos)
            self._advance()
            self._ascend()
            return value

        if tok.type == TokenType.INVALID:
            raise self._error(ErrorKind.INVALID_CHARACTER, tok.start_pos)
        raise self._error(ErrorKind.UNEXPECTED_TOKEN, tok.start_pos)


def evaluate(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Outcome:
    """Evaluate one expression buffer, returning ``Value`` or ``Error``.

    Expression errors never escape as exceptions. A ``max_depth`` below 1 is a
    caller mistake and raises ``ValueError`` before anything is evaluated.
    """
    parser = Parser(source, max_depth)
    try:
        value = parser.parse()
    except CalcError as exc:
        return Error(exc.position, exc.kind)
    except RecursionError:
        # The interpreter stack ran out before max_depth was reached
        return Error(parser.position, ErrorKind.NESTING_TOO_DEEP)
    return Value(value)
