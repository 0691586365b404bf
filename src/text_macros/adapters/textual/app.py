"""Executable Textual app that hosts the macro commands on a scratch buffer."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use text_macros.adapters.textual.app"
    ) from exc

from text_macros.buffer import Buffer, BufferMirror
from text_macros.commands import (
    CommandContext,
    CommandRegistry,
    ScriptedPrompter,
    load_default_commands,
)
from text_macros.runtime import MacroSettings, telemetry

from .controller import TextualMacroAdapter, TextualUIHooks

CURSOR_MARK = "│"


def create_default_adapter(
    hooks: TextualUIHooks,
    *,
    text: str = "",
    file_path: Optional[str] = None,
    settings: Optional[MacroSettings] = None,
) -> TextualMacroAdapter:
    """Build a registry with the default commands around a fresh buffer."""

    registry = CommandRegistry(logger_name="text_macros.commands")
    load_default_commands(registry)
    buffer = Buffer.from_text(text, name=file_path or "scratch", file_path=file_path)
    context = CommandContext(
        buffer=buffer,
        prompter=ScriptedPrompter(),
        settings=settings or MacroSettings.from_env(),
    )
    return TextualMacroAdapter(registry, context, hooks)


def render_mirror(mirror: BufferMirror) -> str:
    text = mirror.text
    return text[: mirror.cursor] + CURSOR_MARK + text[mirror.cursor :]


class TextMacrosApp(App[None]):
    """Scratch editor: type text, press bound keys, or run ``:command args``."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("escape", "focus_buffer", "Buffer"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        file_path: Optional[str] = None,
        settings: Optional[MacroSettings] = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._file_path = file_path
        self._settings = settings
        self.adapter: TextualMacroAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_input: Input | None = None
        self.logger = telemetry.get_logger("text_macros.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._buffer_widget = Static("", id="buffer-view", markup=False)
        yield self._buffer_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        self._command_input = Input(placeholder=":command args", id="command-line")
        yield self._command_input
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self.logger.debug,
        )
        self.adapter = create_default_adapter(
            hooks,
            text=self._initial_text,
            file_path=self._file_path,
            settings=self._settings,
        )
        self.set_focus(None)

    def action_focus_buffer(self) -> None:
        self.set_focus(None)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or self.focused is self._command_input:
            return
        if event.character == ":" and self._command_input is not None:
            self._command_input.focus()
            event.stop()
            return
        text = event.character if event.is_printable else None
        key = event.character if event.is_printable and event.character else event.key
        self.adapter.handle_textual_key(key, text=text)
        event.stop()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter:
            self.adapter.run_command_line(event.value.lstrip(":"))
        event.input.value = ""
        self.set_focus(None)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: object | None) -> None:
        if name == "command.error" and isinstance(payload, dict):
            self._update_status(f"error: {payload.get('message')}")


def positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {parsed}")
    return parsed


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the text_macros Textual demo.")
    parser.add_argument(
        "--file",
        default=None,
        help="File to load; its path backs the insert-buffer-file-* commands",
    )
    parser.add_argument(
        "--width",
        type=positive_int,
        default=None,
        help="Width of cut-here delimiter lines (default: TEXT_MACROS_DELIMITER_WIDTH or 76)",
    )
    parser.add_argument(
        "--placeholder",
        default=None,
        help="Marker inserted by snip-region",
    )
    parser.add_argument(
        "--log-preset",
        choices=sorted(telemetry.PRESETS),
        default="tui",
        help="Telemetry preset; the default keeps log records off the screen",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    settings = MacroSettings.from_env()
    if args.width is not None:
        settings = settings.with_overrides(delimiter_width=args.width)
    if args.placeholder is not None:
        settings = settings.with_overrides(placeholder=args.placeholder)
    text = ""
    file_path = None
    if args.file:
        path = Path(args.file)
        file_path = str(path.resolve())
        if path.exists():
            text = path.read_text(encoding="utf-8")
    app = TextMacrosApp(text=text, file_path=file_path, settings=settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
