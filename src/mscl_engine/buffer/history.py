"""Navigation history used to return from definition jumps."""

from __future__ import annotations

from typing import List, Optional

from .state import Cursor

DEFAULT_HISTORY_DEPTH = 100


class JumpList:
    """Bounded stack of locations the cursor jumped away from."""

    def __init__(self, *, max_depth: int = DEFAULT_HISTORY_DEPTH) -> None:
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")
        self._entries: List[Cursor] = []
        self._max_depth = max_depth

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, location: Cursor) -> None:
        if self._entries and self._entries[-1] == location:
            return
        self._entries.append(location)
        if len(self._entries) > self._max_depth:
            del self._entries[0]

    def back(self) -> Optional[Cursor]:
        if not self._entries:
            return None
        return self._entries.pop()
