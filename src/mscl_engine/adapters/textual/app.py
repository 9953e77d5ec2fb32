"""Executable Textual editor hosting the MSCL indentation engine."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use mscl_engine.adapters.textual.app"
    ) from exc

from mscl_engine.actions import CommandContext
from mscl_engine.buffer import Buffer, BufferMirror
from mscl_engine.config import IndentConfig
from mscl_engine.runtime import telemetry

from .controller import TextualMsclAdapter, TextualUIHooks


class MsclEditorApp(App[None]):
    """Single-file editor with indent, format and definition commands."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #editor {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-1;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+t", "run('indent')", "Indent", priority=True),
        Binding("ctrl+r", "run('format')", "Format", priority=True),
        Binding("f12", "run('find-definition')", "Definition", priority=True),
        Binding("ctrl+b", "run('go-back')", "Back", priority=True),
        Binding("ctrl+s", "save", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self, path: Optional[Path] = None, *, config: Optional[IndentConfig] = None
    ) -> None:
        super().__init__()
        self.path = path
        text = path.read_text(encoding="utf-8") if path and path.exists() else ""
        buffer = Buffer.from_text(text, name=str(path or "untitled"))
        self.context = CommandContext(buffer=buffer, config=config or IndentConfig())
        self.adapter: TextualMsclAdapter | None = None
        self._logger = telemetry.get_logger("mscl_engine.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header()
        yield TextArea(self.context.buffer.text, id="editor")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._logger.debug,
        )
        self.adapter = TextualMsclAdapter(self.context, hooks)
        self.query_one("#editor", TextArea).focus()

    def action_run(self, command: str) -> None:
        if self.adapter is None:
            return
        self.adapter.run(command, mirror=self._host_mirror())

    def action_save(self) -> None:
        if self.path is None:
            self._update_status("no file name")
            return
        self.path.write_text(self.query_one("#editor", TextArea).text, encoding="utf-8")
        self._update_status(f"wrote {self.path}")

    def _host_mirror(self) -> BufferMirror:
        editor = self.query_one("#editor", TextArea)
        selection = editor.selection
        host_selection = None
        if selection.start != selection.end:
            host_selection = (tuple(selection.start), tuple(selection.end))
        return BufferMirror(
            text=editor.text,
            cursor=tuple(editor.cursor_location),
            selection=host_selection,
        )

    def _update_buffer(self, mirror: BufferMirror) -> None:
        editor = self.query_one("#editor", TextArea)
        if editor.text != mirror.text:
            editor.load_text(mirror.text)
        if mirror.selection is not None:
            editor.selection = Selection(*mirror.selection)
        else:
            editor.selection = Selection.cursor(mirror.cursor)

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "definition.missing":
            self._update_status(f"no definition for {payload or 'symbol'}")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit an MSCL file in the terminal.")
    parser.add_argument("path", nargs="?", type=Path, help="File to open")
    parser.add_argument(
        "--indent-offset",
        type=int,
        default=None,
        help="Columns per nesting level (default: 4 or MSCL_ENGINE_INDENT_OFFSET)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = IndentConfig.from_env()
    if args.indent_offset is not None:
        config = config.with_overrides(indent_offset=args.indent_offset)
    MsclEditorApp(args.path, config=config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
