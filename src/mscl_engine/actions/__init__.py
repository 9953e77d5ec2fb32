"""Host-facing commands built on the indentation engine."""

from .base import CommandBus, CommandContext, CommandHandler, CommandResult
from .command import command_names, run_command
from .editing import format_selection_or_buffer, indent_line_or_selection
from .navigation import find_definition, go_back

__all__ = [
    "CommandBus",
    "CommandContext",
    "CommandHandler",
    "CommandResult",
    "command_names",
    "run_command",
    "format_selection_or_buffer",
    "indent_line_or_selection",
    "find_definition",
    "go_back",
]
