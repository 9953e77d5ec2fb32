"""Where the cursor is and what is selected in an MSCL buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # zero-based (row, column)
Selection = Tuple[Cursor, Cursor]  # (anchor, head), in either order


@dataclass(slots=True)
class BufferState:
    cursor: Cursor = (0, 0)
    selection: Optional[Selection] = None
    # Document version of the last edit that touched this buffer.
    last_change_tick: int = 0

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def set_selection(self, anchor: Cursor, head: Cursor) -> None:
        self.selection = (anchor, head)

    def clear_selection(self) -> None:
        self.selection = None

    def selection_range(self) -> Optional[Selection]:
        """Selected region as ``(first, last)``; ``None`` when nothing is selected.

        Indent and format commands act on this region instead of the cursor
        line or the whole buffer.
        """

        if self.selection is None or self.selection[0] == self.selection[1]:
            return None
        return tuple(sorted(self.selection))  # type: ignore[return-value]


__all__ = ["BufferState", "Cursor", "Selection"]
