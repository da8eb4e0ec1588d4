"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from arithcalc.lexer import tokenize
from arithcalc.tokens import TokenType


def dump_tokens(source: str, *, file: TextIO = sys.stderr) -> None:
    """Print one line per token of *source* to *file*."""
    tokens = tokenize(source)
    width = len(str(tokens[-1].start_pos))
    for tok in tokens:
        line = f"{tok.start_pos:>{width}}  {tok.type.name:<8}"
        if tok.type == TokenType.NUMBER:
            line += f" {tok.raw!r} = {tok.value!r}"
        elif tok.raw:
            line += f" {tok.raw!r}"
        file.write(line.rstrip() + "\n")
