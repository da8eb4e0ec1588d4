"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from arithcalc.errors import ErrorKind
from arithcalc.lexer import tokenize
from arithcalc.outcome import Error, Value
from arithcalc.parser import evaluate
from arithcalc.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding END)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing END for convenience
        return [t for t in tokens if t.type != TokenType.END]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_positions(tokens: list[Token], expected: list[int]) -> None:
    """Assert that the token start positions match the expected list."""
    actual = [t.start_pos for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_value(source: str, expected: float) -> None:
    """Assert that source evaluates to expected."""
    outcome = evaluate(source)
    assert isinstance(outcome, Value), f"Expected a value for {source!r}, got {outcome}"
    assert outcome.value == pytest.approx(expected), f"{source!r}: {outcome.value} != {expected}"


def assert_error(source: str, position: int, kind: ErrorKind | None = None) -> None:
    """Assert that source fails at position (and with kind, when given)."""
    outcome = evaluate(source)
    assert isinstance(outcome, Error), f"Expected an error for {source!r}, got {outcome}"
    assert outcome.position == position, (
        f"{source!r}: expected error at {position}, got {outcome.position} ({outcome.kind})"
    )
    if kind is not None:
        assert outcome.kind == kind, f"{source!r}: expected {kind}, got {outcome.kind}"
