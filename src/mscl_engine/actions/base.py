"""Context and result types shared by every command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from mscl_engine.buffer import Buffer
from mscl_engine.config import DEFAULT_CONFIG, IndentConfig


@dataclass(slots=True)
class CommandResult:
    """Outcome reported back to the host after a command ran."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class CommandBus:
    """Minimal event bus commands use to notify host adapters."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    """Services a command can reach: the buffer, its options and the bus."""

    buffer: Buffer
    config: IndentConfig = DEFAULT_CONFIG
    bus: CommandBus = field(default_factory=CommandBus)


CommandHandler = Callable[[CommandContext], CommandResult]

__all__ = ["CommandBus", "CommandContext", "CommandHandler", "CommandResult"]
