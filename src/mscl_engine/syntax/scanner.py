"""Backward scan for the statement a line's indentation is inherited from."""

from __future__ import annotations

from typing import Optional, Sequence

from .classifier import LineKind, classify_line
from .lexer import SpanIndex, scan_spans


def previous_code_line(
    lines: Sequence[str], row: int, spans: Optional[SpanIndex] = None
) -> Optional[int]:
    """Return the row of the nearest code line above ``row``.

    Blank lines, labels and lines made only of comments or string
    continuations are skipped. ``None`` means the scan reached the start of
    the buffer.
    """

    if spans is None:
        spans = scan_spans(lines)
    candidate = min(row, len(lines)) - 1
    while candidate >= 0:
        if classify_line(lines, spans, candidate) is LineKind.CODE:
            return candidate
        candidate -= 1
    return None


__all__ = ["previous_code_line"]
