"""Re-indentation and whitespace trimming over lines, regions and buffers.

Rows are processed top to bottom on a working copy whose span table is
refreshed after every edit, so each indent decision sees the already
reformatted lines above it. Buffer-bound entry points replay the edits on
the buffer one line at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence

from mscl_engine.buffer import Buffer, Cursor, Transaction
from mscl_engine.config import DEFAULT_CONFIG, IndentConfig
from mscl_engine.runtime import telemetry

from .indenter import calculate_indent, reindent
from .lexer import SpanIndex


@dataclass(frozen=True, slots=True)
class LineEdit:
    row: int
    before: str
    after: str


@dataclass(frozen=True, slots=True)
class FormatReport:
    rows: tuple[int, ...] = ()
    removed: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.rows) or self.removed > 0


def region_rows(start: Cursor, end: Cursor, line_count: int) -> range:
    """Rows covered by the region between two cursors.

    A region ending at column 0 of a later row does not include that row.
    """

    if end < start:
        start, end = end, start
    first = max(0, start[0])
    last = end[0]
    if end[1] == 0 and last > first:
        last -= 1
    return range(first, max(first, min(last + 1, line_count)))


class LineFormatter:
    """Working copy of a buffer's lines plus their span table."""

    def __init__(
        self, lines: Iterable[str], config: Optional[IndentConfig] = None
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.lines: List[str] = list(lines) or [""]
        self.spans = SpanIndex.from_lines(self.lines)

    def reformat_row(
        self, row: int, *, indent_blank: bool = False, trim: Optional[bool] = None
    ) -> Optional[LineEdit]:
        if trim is None:
            trim = self.config.delete_trailing_whitespace
        before = self.lines[row]
        if self.spans.starts_in_string(row):
            # Leading blanks here belong to the string literal.
            return None
        if not before.strip() and not indent_blank:
            after = "" if trim else before
        else:
            column = calculate_indent(self.lines, row, self.config, self.spans)
            after = reindent(before, column)
            if trim:
                after = after.rstrip()
        if after == before:
            return None
        self._set_line(row, after)
        return LineEdit(row=row, before=before, after=after)

    def iter_edits(
        self, rows: Iterable[int], *, trim: Optional[bool] = None
    ) -> Iterator[LineEdit]:
        for row in rows:
            edit = self.reformat_row(row, trim=trim)
            if edit is not None:
                yield edit

    def trim_trailing_blank_lines(self) -> tuple[Optional[LineEdit], range]:
        """Drop blank lines at the end, keeping one empty terminator line.

        Returns the edit emptying the kept terminator (if it held
        whitespace) and the range of rows that were removed.
        """

        end = len(self.lines)
        keep = end
        while keep > 0 and not self.lines[keep - 1].strip():
            keep -= 1
        if keep == end:
            return None, range(end, end)

        edit = None
        if self.lines[keep]:
            edit = LineEdit(row=keep, before=self.lines[keep], after="")
            self._set_line(keep, "")
        removed = range(keep + 1, end)
        if removed:
            del self.lines[removed.start :]
            self.spans.delete_lines(self.lines, removed.start, removed.stop)
        return edit, removed

    def _set_line(self, row: int, text: str) -> None:
        self.lines[row] = text
        self.spans.update_line(self.lines, row)


def format_lines(
    lines: Sequence[str],
    config: Optional[IndentConfig] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> List[str]:
    """Return ``lines`` formatted; rows ``[start, end)`` or all of them."""

    formatter = LineFormatter(lines, config)
    whole = start is None and end is None
    first = 0 if start is None else max(0, start)
    stop = len(formatter.lines) if end is None else min(end, len(formatter.lines))
    for _ in formatter.iter_edits(range(first, stop)):
        pass
    if whole and formatter.config.delete_trailing_blank_lines:
        formatter.trim_trailing_blank_lines()
    return formatter.lines


def format_text(text: str, config: Optional[IndentConfig] = None) -> str:
    return "\n".join(format_lines(text.split("\n"), config))


def _apply(tx: Transaction, edits: Iterable[LineEdit]) -> None:
    for edit in edits:
        tx.replace_line(edit.row, edit.after)


def indent_line(
    buffer: Buffer, row: int, config: Optional[IndentConfig] = None
) -> int:
    """Re-indent one buffer line, blank or not, and return its new column."""

    formatter = LineFormatter(buffer.lines(), config)
    if not 0 <= row < len(formatter.lines):
        return 0
    edit = formatter.reformat_row(row, indent_blank=True, trim=False)
    if edit is not None:
        buffer.replace_line(row, edit.after, label="indent_line")
    line = formatter.lines[row]
    return len(line) - len(line.lstrip())


def _format_rows(
    buffer: Buffer,
    rows: range,
    config: Optional[IndentConfig],
    *,
    label: str,
    trim: Optional[bool] = None,
    whole: bool = False,
) -> FormatReport:
    formatter = LineFormatter(buffer.lines(), config)
    with telemetry.span(
        f"format::{label}",
        component="formatter",
        metadata={"buffer": buffer.name, "first": rows.start, "rows": len(rows)},
    ) as handle:
        with buffer.transaction(label) as tx:
            _apply(tx, formatter.iter_edits(rows, trim=trim))
            if whole and formatter.config.delete_trailing_blank_lines:
                edit, dropped = formatter.trim_trailing_blank_lines()
                if edit is not None:
                    _apply(tx, [edit])
                if dropped:
                    tx.delete_lines(dropped.start, dropped.stop)
        delta = tx.delta()
        handle.add_metadata("changed", len(delta.rows))
        handle.add_metadata("removed", delta.removed)
    return FormatReport(rows=delta.rows, removed=delta.removed)


def indent_region(
    buffer: Buffer,
    start: Cursor,
    end: Cursor,
    config: Optional[IndentConfig] = None,
) -> FormatReport:
    """Re-indent the region's non-blank lines without trimming anything."""

    rows = region_rows(start, end, buffer.document.line_count)
    return _format_rows(buffer, rows, config, label="indent_region", trim=False)


def format_region(
    buffer: Buffer,
    start: Cursor,
    end: Cursor,
    config: Optional[IndentConfig] = None,
) -> FormatReport:
    rows = region_rows(start, end, buffer.document.line_count)
    return _format_rows(buffer, rows, config, label="format_region")


def format_buffer(
    buffer: Buffer, config: Optional[IndentConfig] = None
) -> FormatReport:
    rows = range(buffer.document.line_count)
    return _format_rows(buffer, rows, config, label="format_buffer", whole=True)


__all__ = [
    "FormatReport",
    "LineEdit",
    "LineFormatter",
    "format_buffer",
    "format_lines",
    "format_region",
    "format_text",
    "indent_line",
    "indent_region",
    "region_rows",
]
