from __future__ import annotations

from typing import List

from mscl_engine.actions import CommandContext
from mscl_engine.adapters.textual import TextualMsclAdapter, TextualUIHooks
from mscl_engine.buffer import Buffer, BufferMirror


def make_context(text: str = "") -> CommandContext:
    return CommandContext(buffer=Buffer.from_text(text, name="script.mscl"))


def test_adapter_pushes_initial_buffer() -> None:
    updates: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: updates.append(mirror.text))

    TextualMsclAdapter(make_context("if x\ny"), hooks)

    assert updates == ["if x\ny"]


def test_adapter_runs_command_against_host_state() -> None:
    updates: List[BufferMirror] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualMsclAdapter(make_context(), hooks)

    result = adapter.run(
        "indent", mirror=BufferMirror(text="while a\nb", cursor=(1, 1), selection=None)
    )

    assert result.status == "indent_line"
    assert updates[-1].text == "while a\n    b"
    assert updates[-1].cursor == (1, 5)
    assert statuses == ["indent_line 4"]


def test_adapter_formats_host_selection() -> None:
    updates: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: updates.append(mirror.text))
    adapter = TextualMsclAdapter(make_context(), hooks)
    mirror = BufferMirror(
        text="if a\nb\nc", cursor=(2, 1), selection=((2, 1), (1, 0))
    )

    result = adapter.run("format", mirror=mirror)

    assert result.status == "format_region"
    assert updates[-1] == "if a\n    b\n    c"


def test_push_host_edit_clamps_cursor_and_selection() -> None:
    context = make_context()
    adapter = TextualMsclAdapter(context, TextualUIHooks(update_buffer=lambda _: None))

    adapter.push_host_edit(
        BufferMirror(text="ab\nc", cursor=(7, 7), selection=((0, 0), (9, 9)))
    )

    assert context.buffer.text == "ab\nc"
    assert context.buffer.state.cursor == (1, 1)
    assert context.buffer.state.selection == ((0, 0), (1, 1))
    assert adapter.pull_buffer().cursor == (1, 1)


def test_adapter_relays_definition_events() -> None:
    events: List[tuple[str, object | None]] = []
    hooks = TextualUIHooks(
        update_buffer=lambda _: None,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = TextualMsclAdapter(make_context(), hooks)

    adapter.run(
        "find-definition",
        mirror=BufferMirror(text="x = y", cursor=(0, 4), selection=None),
    )

    assert ("command.run", "find-definition") in events
    assert ("definition.missing", "y") in events


def test_adapter_reports_unknown_commands() -> None:
    updates: List[str] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: updates.append(mirror.text),
        update_status=lambda status: statuses.append(status),
    )
    adapter = TextualMsclAdapter(make_context("x"), hooks)

    result = adapter.run("bogus")

    assert result.consumed is False
    assert statuses == ["command_error bogus"]
    assert updates == ["x"]


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda _: None, log=logs.append)
    adapter = TextualMsclAdapter(make_context("if x\ny"), hooks)

    adapter.run("go-back")

    assert any(line.startswith("command ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
    assert any("buffer='script.mscl'" in line for line in logs)
