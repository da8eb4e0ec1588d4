"""Evaluation outcomes and their text rendering."""

from __future__ import annotations

from dataclasses import dataclass

from arithcalc.errors import ErrorKind

# Results this close to an integer are printed without a fractional part
INTEGER_TOLERANCE = 1e-12


@dataclass(frozen=True, slots=True)
class Value:
    """Successful evaluation; ``value`` is always finite."""

    value: float


@dataclass(frozen=True, slots=True)
class Error:
    """Failed evaluation, blamed on the 1-based ``position`` of the first error."""

    position: int
    kind: ErrorKind


Outcome = Value | Error


def format_value(value: float) -> str:
    """Render a result as an integer when it is one, else with 15 significant digits."""
    nearest = round(value)
    if abs(value - nearest) < INTEGER_TOLERANCE:
        return str(int(nearest))
    return f"{value:.15g}"


def render(outcome: Outcome) -> str:
    """Return the output line for an outcome: ``ERROR:<pos>`` or the value."""
    if isinstance(outcome, Error):
        return f"ERROR:{outcome.position}\n"
    return f"{format_value(outcome.value)}\n"
