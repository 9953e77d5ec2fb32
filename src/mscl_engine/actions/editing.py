"""Indent and format commands."""

from __future__ import annotations

from mscl_engine.syntax.formatter import (
    format_buffer,
    format_region,
    indent_line,
    indent_region,
)
from mscl_engine.syntax.indenter import indent_column

from .base import CommandContext, CommandResult


def _reposition(column: int, old_indent: int, new_indent: int) -> int:
    if column < old_indent:
        return new_indent
    return max(new_indent, column + new_indent - old_indent)


def indent_line_or_selection(context: CommandContext) -> CommandResult:
    buffer = context.buffer
    selection = buffer.state.selection_range()
    if selection is not None:
        report = indent_region(buffer, *selection, context.config)
        context.bus.emit("indent.region", {"rows": report.rows})
        return CommandResult(
            consumed=True, status="indent_region", message=f"{len(report.rows)}"
        )

    row, column = buffer.state.cursor
    old_indent = indent_column(buffer.document.get_line(row))
    new_indent = indent_line(buffer, row, context.config)
    buffer.state.set_cursor(row, _reposition(column, old_indent, new_indent))
    context.bus.emit("indent.line", {"row": row, "column": new_indent})
    return CommandResult(consumed=True, status="indent_line", message=f"{new_indent}")


def format_selection_or_buffer(context: CommandContext) -> CommandResult:
    buffer = context.buffer
    selection = buffer.state.selection_range()
    if selection is not None:
        report = format_region(buffer, *selection, context.config)
        status = "format_region"
    else:
        report = format_buffer(buffer, context.config)
        status = "format_buffer"
    context.bus.emit(
        "format.done", {"rows": report.rows, "removed": report.removed}
    )
    return CommandResult(consumed=True, status=status, message=f"{len(report.rows)}")


__all__ = ["format_selection_or_buffer", "indent_line_or_selection"]
