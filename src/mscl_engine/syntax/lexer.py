"""Lexical span scanner for MSCL comments and string literals.

The scanner sweeps the buffer line by line and produces tagged ranges. The
only state carried between lines is whether a string literal is still open,
which happens when a line ends inside a string with a backslash continuation.
``SpanIndex`` keeps the per-line results as a side table that can be
refreshed after edits without rescanning the whole buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Sequence, Tuple

SpanKind = Literal["comment", "string"]

COMMENT_CHAR = "#"
QUOTE_CHAR = '"'
CONTINUATION_CHAR = "\\"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open column range ``[start, end)`` of non-code text on one line."""

    start: int
    end: int
    kind: SpanKind

    def contains(self, column: int) -> bool:
        return self.start <= column < self.end


LineSpans = Tuple[Span, ...]


def _continues(text: str) -> bool:
    return text.rstrip().endswith(CONTINUATION_CHAR)


def scan_line(text: str, *, in_string: bool = False) -> Tuple[LineSpans, bool]:
    """Scan one line and return its spans plus the state for the next line.

    ``in_string`` is True when the previous line left a string open. The
    returned flag is True only when this line ends inside a string and the
    line is continued with a trailing backslash.
    """

    spans: List[Span] = []
    column = 0
    length = len(text)

    if in_string:
        close = text.find(QUOTE_CHAR)
        if close == -1:
            if length:
                spans.append(Span(0, length, "string"))
            return tuple(spans), _continues(text)
        spans.append(Span(0, close + 1, "string"))
        column = close + 1

    while column < length:
        char = text[column]
        if char == COMMENT_CHAR:
            spans.append(Span(column, length, "comment"))
            return tuple(spans), False
        if char == QUOTE_CHAR:
            close = text.find(QUOTE_CHAR, column + 1)
            if close == -1:
                spans.append(Span(column, length, "string"))
                return tuple(spans), _continues(text)
            spans.append(Span(column, close + 1, "string"))
            column = close + 1
            continue
        column += 1

    return tuple(spans), False


class SpanIndex:
    """Per-line comment/string spans for a buffer snapshot."""

    def __init__(self) -> None:
        self._spans: List[LineSpans] = []
        self._entry: List[bool] = []

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "SpanIndex":
        index = cls()
        index.replace_lines(lines, 0, 0, len(lines))
        return index

    @property
    def line_count(self) -> int:
        return len(self._spans)

    def spans_for(self, row: int) -> LineSpans:
        if 0 <= row < len(self._spans):
            return self._spans[row]
        return ()

    def starts_in_string(self, row: int) -> bool:
        """True when a string left open on the row above covers column 0."""

        return 0 <= row < len(self._entry) and self._entry[row]

    def is_comment_or_string(self, row: int, column: int) -> bool:
        # Positions the index knows nothing about are treated as code.
        return any(span.contains(column) for span in self.spans_for(row))

    def comment_start(self, row: int) -> int | None:
        for span in self.spans_for(row):
            if span.kind == "comment":
                return span.start
        return None

    def update_line(self, lines: Sequence[str], row: int) -> None:
        """Refresh the table after ``lines[row]`` was edited in place."""

        self.replace_lines(lines, row, row + 1, 1)

    def insert_lines(self, lines: Sequence[str], start: int, count: int) -> None:
        """Refresh the table after ``count`` rows were inserted at ``start``."""

        self.replace_lines(lines, start, start, count)

    def delete_lines(self, lines: Sequence[str], start: int, end: int) -> None:
        """Refresh the table after rows ``[start, end)`` were removed."""

        self.replace_lines(lines, start, end, 0)

    def replace_lines(
        self, lines: Sequence[str], start: int, end: int, count: int
    ) -> None:
        """Replace table rows ``[start, end)`` with ``count`` rescanned rows.

        ``lines`` is the buffer after the edit. Rows following the edited
        block are rescanned only while the carried string state differs from
        what was recorded for them.
        """

        start = max(0, min(start, len(self._spans)))
        end = max(start, min(end, len(self._spans)))
        self._spans[start:end] = [()] * count
        self._entry[start:end] = [False] * count

        state = False
        if start:
            _, state = scan_line(lines[start - 1], in_string=self._entry[start - 1])

        row = start
        stop = start + count
        while row < len(lines):
            if row >= stop and row < len(self._entry) and self._entry[row] == state:
                break
            spans, next_state = scan_line(lines[row], in_string=state)
            if row < len(self._spans):
                self._spans[row] = spans
                self._entry[row] = state
            else:
                self._spans.append(spans)
                self._entry.append(state)
            state = next_state
            row += 1


def scan_spans(lines: Sequence[str]) -> SpanIndex:
    return SpanIndex.from_lines(lines)


__all__ = [
    "COMMENT_CHAR",
    "CONTINUATION_CHAR",
    "QUOTE_CHAR",
    "LineSpans",
    "Span",
    "SpanIndex",
    "SpanKind",
    "scan_line",
    "scan_spans",
]
