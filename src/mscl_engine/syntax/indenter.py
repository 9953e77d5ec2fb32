"""Indent decision engine.

The indent of a line is derived from the nearest preceding code line: its
indentation is the base, and one offset is added or removed depending on
block keywords and backslash continuations found at the boundary between the
two lines. Nothing is cached between calls, so the result only depends on
the buffer content and the configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from mscl_engine.config import DEFAULT_CONFIG, IndentConfig

from .classifier import (
    DECREASE_INDENT_BOL,
    INCREASE_INDENT_BOL,
    INCREASE_INDENT_EOL,
    code_part,
    first_token,
    is_continued,
    is_label_line,
    last_token,
    matches_keyword_set,
    statement_segments,
)
from .lexer import SpanIndex, scan_spans
from .scanner import previous_code_line


@dataclass(frozen=True, slots=True)
class IndentDecision:
    """How ``calculate_indent`` arrived at a column."""

    row: int
    column: int
    previous_row: Optional[int] = None
    base: int = 0
    increase: bool = False
    decrease: bool = False
    label: bool = False


def indent_column(line: str) -> int:
    return len(line) - len(line.lstrip())


def reindent(line: str, column: int) -> str:
    return " " * max(0, column) + line.lstrip()


def _statement_tail(
    lines: Sequence[str], spans: SpanIndex, head: int, row: int
) -> int:
    """Last row above ``row`` belonging to the statement starting at ``head``.

    A continued line that leaves a string open pulls the next row into the
    same statement; the backward scan skips such rows when they hold only
    string text.
    """

    tail = head
    while (
        tail + 1 < row
        and is_continued(lines, spans, tail)
        and spans.starts_in_string(tail + 1)
    ):
        tail += 1
    return tail


def _opens_continuation(
    lines: Sequence[str], spans: SpanIndex, head: int, tail: int
) -> bool:
    return is_continued(lines, spans, tail) and not is_continued(lines, spans, head - 1)


def _closes_continuation(
    lines: Sequence[str], spans: SpanIndex, head: int, tail: int
) -> bool:
    return not is_continued(lines, spans, tail) and is_continued(lines, spans, head - 1)


def _increases_after(
    lines: Sequence[str], spans: SpanIndex, head: int, tail: int
) -> bool:
    ends_block_opener = matches_keyword_set(
        last_token(code_part(lines, spans, tail)), INCREASE_INDENT_EOL
    )
    if ends_block_opener or _opens_continuation(lines, spans, head, tail):
        return True
    if spans.starts_in_string(head):
        return False
    return matches_keyword_set(first_token(lines[head]), INCREASE_INDENT_BOL)


def _closes_block_inline(lines: Sequence[str], spans: SpanIndex, row: int) -> bool:
    # Only statements after a separator count; the first one is the line's
    # own leading token and was already accounted for when it was indented.
    segments = statement_segments(lines, spans, row)[1:]
    return any(
        matches_keyword_set(first_token(segment), DECREASE_INDENT_BOL)
        for segment in segments
    )


def explain_indent(
    lines: Sequence[str],
    row: int,
    config: Optional[IndentConfig] = None,
    spans: Optional[SpanIndex] = None,
) -> IndentDecision:
    if not 0 <= row < len(lines):
        return IndentDecision(row=row, column=0)
    config = config or DEFAULT_CONFIG
    if spans is None:
        spans = scan_spans(lines)

    text = lines[row]
    if is_label_line(text):
        return IndentDecision(row=row, column=0, label=True)

    previous = previous_code_line(lines, row, spans)
    starts_with_closer = matches_keyword_set(first_token(text), DECREASE_INDENT_BOL)
    if previous is None:
        return IndentDecision(row=row, column=0, decrease=starts_with_closer)

    tail = _statement_tail(lines, spans, previous, row)
    base = indent_column(lines[previous])
    increase = _increases_after(lines, spans, previous, tail)
    decrease = (
        starts_with_closer
        or _closes_block_inline(lines, spans, previous)
        or _closes_continuation(lines, spans, previous, tail)
    )
    offset = config.indent_offset
    column = base + (offset if increase else 0) - (offset if decrease else 0)
    return IndentDecision(
        row=row,
        column=max(0, column),
        previous_row=previous,
        base=base,
        increase=increase,
        decrease=decrease,
    )


def calculate_indent(
    lines: Sequence[str],
    row: int,
    config: Optional[IndentConfig] = None,
    spans: Optional[SpanIndex] = None,
) -> int:
    """Return the indentation column ``lines[row]`` should have."""

    return explain_indent(lines, row, config, spans).column


__all__ = [
    "IndentDecision",
    "calculate_indent",
    "explain_indent",
    "indent_column",
    "reindent",
]
