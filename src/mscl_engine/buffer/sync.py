"""Types exchanged between an MSCL buffer and the editor widget showing it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Cursor, Selection


@dataclass(slots=True)
class BufferMirror:
    """Script text, cursor and selection as the host editor holds them."""

    text: str
    cursor: Cursor
    selection: Optional[Selection]
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """Two-way exchange the indent and lookup commands run between.

    Before a command the host's typing is pushed into the buffer; after it
    the re-indented script and the moved cursor are pulled back.
    """

    def pull_buffer(self) -> BufferMirror: ...

    def push_host_edit(self, mirror: BufferMirror) -> None: ...


class BufferValidationError(RuntimeError):
    """A cursor move or line edit named a position outside the script."""

    def __init__(self, message: str, *, cursor: Optional[Cursor] = None) -> None:
        super().__init__(message)
        self.cursor = cursor


__all__ = ["BufferMirror", "BufferSync", "BufferValidationError"]
