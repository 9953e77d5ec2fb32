"""Named command table exposed to host editors."""

from __future__ import annotations

from typing import Dict

from mscl_engine.runtime import telemetry

from .base import CommandContext, CommandHandler, CommandResult
from .editing import format_selection_or_buffer, indent_line_or_selection
from .navigation import find_definition, go_back


def run_command(context: CommandContext, name: str) -> CommandResult:
    command = name.strip().lower()
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, command)
    context.bus.emit("command.run", command)
    with telemetry.span(
        f"command::{command}",
        component="commands",
        metadata={"buffer": context.buffer.name},
    ) as handle:
        result = handler(context)
        handle.add_metadata("status", result.status)
    return result


def command_names() -> tuple[str, ...]:
    return tuple(sorted(_COMMAND_HANDLERS))


def _unknown_command(context: CommandContext, command: str) -> CommandResult:
    context.bus.emit("command.error", command)
    telemetry.record_event("command.unknown", level="warning", data={"name": command})
    return CommandResult(consumed=False, status="command_error", message=command)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "indent": indent_line_or_selection,
    "format": format_selection_or_buffer,
    "find-definition": find_definition,
    "go-back": go_back,
}


__all__ = ["command_names", "run_command"]
