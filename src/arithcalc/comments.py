"""Comment-line stripping for expression files."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StrippedSource:
    """Expression text with comment lines removed.

    ``segments`` holds one ``(stripped_offset, original_offset)`` pair (both
    0-based) for every kept line, in order, so a position in ``text`` can be
    traced back to the raw file.
    """

    text: str
    original: str
    segments: tuple[tuple[int, int], ...]

    def original_position(self, position: int) -> int:
        """Map a 1-based position in ``text`` to a 1-based position in ``original``."""
        starts = [s for s, _ in self.segments if s < len(self.text)]
        if not starts:
            # Nothing survived stripping; point past the end of the file
            return len(self.original) + 1
        if position > len(self.text):
            # End of input stays on the last kept line, never on a dropped comment below it
            stripped_start, original_start = self.segments[len(starts) - 1]
            end = original_start + len(self.text) - stripped_start
            return end if end < len(self.original) else end + 1
        idx = bisect_right(starts, position - 1) - 1
        stripped_start, original_start = self.segments[max(idx, 0)]
        return original_start + (position - 1 - stripped_start) + 1


def is_comment_line(line: str) -> bool:
    """Return True if the first non-whitespace character of line is '#'."""
    return line.lstrip().startswith("#")


def strip_comments(source: str) -> StrippedSource:
    """Remove whole lines whose first non-whitespace character is '#'.

    Lines are split on raw ``\\n``; every other line is kept verbatim,
    including its line terminator.
    """
    kept: list[str] = []
    segments: list[tuple[int, int]] = []
    stripped_offset = 0
    original_offset = 0

    for line in source.split("\n"):
        # Every piece but the last was followed by a newline
        length = len(line) + 1 if original_offset + len(line) < len(source) else len(line)
        if not is_comment_line(line):
            segments.append((stripped_offset, original_offset))
            kept.append(source[original_offset : original_offset + length])
            stripped_offset += length
        original_offset += length

    return StrippedSource("".join(kept), source, tuple(segments))
