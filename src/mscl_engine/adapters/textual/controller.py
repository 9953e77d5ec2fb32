"""Textual-facing adapter translating host editor state to engine commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from mscl_engine.actions import CommandContext, CommandResult, run_command
from mscl_engine.buffer import BufferMirror, clamp_cursor


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


_FORWARDED_EVENTS = (
    "command.run",
    "command.error",
    "indent.line",
    "indent.region",
    "format.done",
    "definition.found",
    "definition.missing",
    "history.back",
)


class TextualMsclAdapter:
    """Bridges a host text widget and the engine's command table."""

    def __init__(self, context: CommandContext, hooks: TextualUIHooks) -> None:
        self.context = context
        self.hooks = hooks
        for event in _FORWARDED_EVENTS:
            context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        self._refresh_buffer()

    def pull_buffer(self) -> BufferMirror:
        return self.context.buffer.mirror()

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Adopt the host widget's text, cursor and selection."""

        buffer = self.context.buffer
        if mirror.text != buffer.text:
            buffer.load_text(mirror.text)
        document = buffer.document
        buffer.state.set_cursor(*clamp_cursor(document, mirror.cursor))
        if mirror.selection is None:
            buffer.state.clear_selection()
        else:
            start, end = mirror.selection
            buffer.state.set_selection(
                clamp_cursor(document, start), clamp_cursor(document, end)
            )

    def run(self, command: str, *, mirror: Optional[BufferMirror] = None) -> CommandResult:
        if mirror is not None:
            self.push_host_edit(mirror)
        self._log_state("command ->", command=command)
        result = run_command(self.context, command)
        status = result.status
        if result.message:
            status = f"{status} {result.message}"
        self.hooks.update_status(status)
        if result.status != "command_error":
            self._refresh_buffer()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.context.buffer
        return {
            "cursor": buffer.state.cursor,
            "selection": buffer.state.selection,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualMsclAdapter", "TextualUIHooks"]
