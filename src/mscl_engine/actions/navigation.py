"""Definition lookup and jump-back commands."""

from __future__ import annotations

from mscl_engine.buffer import clamp_cursor
from mscl_engine.runtime import telemetry
from mscl_engine.syntax.locator import find_definitions, identifier_bounds

from .base import CommandContext, CommandResult


def find_definition(context: CommandContext) -> CommandResult:
    buffer = context.buffer
    lines = buffer.lines()
    cursor = buffer.state.cursor
    bounds = identifier_bounds(lines, cursor)
    if bounds is None:
        context.bus.emit("definition.missing", None)
        return CommandResult(consumed=True, status="definition_missing")
    name = lines[cursor[0]][bounds[0] : bounds[1]]

    with telemetry.span(
        "navigation::find_definition",
        component="navigation",
        metadata={"buffer": buffer.name, "name": name},
    ) as handle:
        definitions = find_definitions(lines, name)
        handle.add_metadata("matches", len(definitions))

    if not definitions:
        context.bus.emit("definition.missing", name)
        return CommandResult(consumed=True, status="definition_missing", message=name)

    # Repeating the lookup from a definition site moves on to the next one.
    positions = [definition.position for definition in definitions]
    symbol_start = (cursor[0], bounds[0])
    target = definitions[0]
    if symbol_start in positions:
        index = positions.index(symbol_start)
        target = definitions[(index + 1) % len(definitions)]

    buffer.history.push(cursor)
    buffer.state.clear_selection()
    buffer.move_cursor(target.position)
    context.bus.emit("definition.found", {"name": name, "definitions": definitions})
    return CommandResult(
        consumed=True, status="definition_found", message=f"{target.role}:{name}"
    )


def go_back(context: CommandContext) -> CommandResult:
    buffer = context.buffer
    location = buffer.history.back()
    if location is None:
        return CommandResult(consumed=True, status="history_empty")
    location = clamp_cursor(buffer.document, location)
    buffer.state.clear_selection()
    buffer.move_cursor(location)
    context.bus.emit("history.back", location)
    return CommandResult(consumed=True, status="history_back")


__all__ = ["find_definition", "go_back"]
