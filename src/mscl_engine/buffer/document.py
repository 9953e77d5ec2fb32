"""List-of-lines document storage shared by the engine and host adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


@dataclass(slots=True)
class BufferDocument:
    """Text stored as a list of lines without line terminators.

    Text ending in a newline is stored with a final empty line, so
    ``from_text(doc.text)`` round-trips. Edits return a new document with a
    bumped ``version``.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        lines = text.split("\n")
        return cls(_lines=[line.rstrip("\r") for line in lines], version=0)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``new_lines``."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        if not lines:
            lines = [""]
        return BufferDocument(_lines=lines, version=self.version + 1, dirty=True)


__all__ = ["BufferDocument"]
