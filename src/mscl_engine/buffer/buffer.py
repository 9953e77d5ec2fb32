"""High-level buffer façade combining document, cursor state and history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, List, Optional

from mscl_engine.runtime import telemetry

from .document import BufferDocument
from .history import JumpList
from .state import BufferState, Cursor
from .sync import BufferMirror
from .validation import clamp_cursor, ensure_cursor


@dataclass(slots=True)
class BufferDelta:
    version: int
    label: str
    rows: tuple[int, ...]
    removed: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.rows) or self.removed > 0


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        history: Optional[JumpList] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.history = history or JumpList()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=BufferDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    def lines(self) -> tuple[str, ...]:
        return tuple(self.document.snapshot())

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
            attributes=dict(attributes or {}),
        )

    def load_text(self, text: str) -> None:
        """Replace the whole content, keeping the cursor inside the new text."""

        version = self.document.version + 1
        self.document = BufferDocument.from_text(text)
        self.document.version = version
        self.state.last_change_tick = version
        self.state.set_cursor(*clamp_cursor(self.document, self.state.cursor))
        self.state.clear_selection()

    def move_cursor(self, cursor: Cursor) -> Cursor:
        row, col = ensure_cursor(self.document, cursor)
        self.state.set_cursor(row, col)
        return self.state.cursor

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def replace_line(self, row: int, text: str, *, label: str = "replace_line") -> None:
        with Transaction(self, label) as tx:
            tx.replace_line(row, text)


class Transaction(AbstractContextManager["Transaction"]):
    """Groups line edits under one telemetry span.

    Every edit goes through ``BufferDocument.update_lines`` so each applied
    line is a complete document version on its own.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._rows: List[int] = []
        self._removed = 0

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def replace_line(self, row: int, text: str) -> None:
        document = self.buffer.document
        if not 0 <= row < document.line_count:
            raise IndexError(f"row {row} outside buffer of {document.line_count} lines")
        if document.get_line(row) == text:
            return
        self._commit(document.update_lines(row, row + 1, [text]))
        self._rows.append(row)

    def delete_lines(self, start: int, end: int) -> None:
        document = self.buffer.document
        start = max(0, start)
        end = min(end, document.line_count)
        if start >= end:
            return
        self._commit(document.update_lines(start, end, []))
        self._removed += end - start

    def _commit(self, document: BufferDocument) -> None:
        self.buffer.document = document
        self.buffer.state.last_change_tick = document.version
        row, col = self.buffer.state.cursor
        if row >= document.line_count or col > len(document.get_line(row)):
            last = min(row, document.line_count - 1)
            self.buffer.state.set_cursor(
                last, min(col, len(document.get_line(last)))
            )

    def delta(self) -> BufferDelta:
        return BufferDelta(
            version=self.buffer.document.version,
            label=self.label,
            rows=tuple(sorted(set(self._rows))),
            removed=self._removed,
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._handle is not None and exc_type is None:
            self._handle.note(
                "commit", rows=len(set(self._rows)), removed=self._removed
            )
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "BufferDelta", "Transaction"]
