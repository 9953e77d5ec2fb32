"""Buffer abstractions shared by the engine and host adapters."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import BufferDocument
from .history import JumpList
from .state import BufferState, Cursor, Selection
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Selection",
    "JumpList",
    "Buffer",
    "BufferDelta",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "clamp_cursor",
    "ensure_cursor",
]
