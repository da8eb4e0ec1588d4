"""Arithmetic expression evaluator with position-accurate error reporting."""

from __future__ import annotations

__version__ = "0.1.0"


def calculate(source: str, max_depth: int | None = None) -> str:
    """Strip comments, evaluate, and render one expression file's contents."""
    from arithcalc.comments import strip_comments
    from arithcalc.outcome import render
    from arithcalc.parser import DEFAULT_MAX_DEPTH, evaluate

    stripped = strip_comments(source)
    if max_depth is None:
        max_depth = DEFAULT_MAX_DEPTH
    outcome = evaluate(stripped.text, max_depth)
    return render(outcome)
