from __future__ import annotations

from typing import List

import pytest

from text_macros.adapters.textual import TextualMacroAdapter, TextualUIHooks
from text_macros.buffer import Buffer, Region
from text_macros.commands import (
    CommandContext,
    CommandRef,
    CommandRegistry,
    ScriptedPrompter,
    load_default_commands,
)
from text_macros.runtime import MacroSettings


def make_adapter(
    text: str = "",
    *,
    cursor: int = 0,
    updates: List[str] | None = None,
    statuses: List[str] | None = None,
    logs: List[str] | None = None,
    events: List[tuple[str, object | None]] | None = None,
    settings: MacroSettings | None = None,
) -> TextualMacroAdapter:
    registry = CommandRegistry()
    load_default_commands(registry)
    context = CommandContext(
        buffer=Buffer.from_text(text, cursor=cursor),
        prompter=ScriptedPrompter(),
        settings=settings or MacroSettings(),
    )
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: (updates if updates is not None else []).append(
            mirror.text
        ),
        update_status=lambda status: (
            statuses if statuses is not None else []
        ).append(status),
        handle_event=lambda name, payload: (
            events if events is not None else []
        ).append((name, payload)),
        log=lambda line: (logs if logs is not None else []).append(line),
    )
    return TextualMacroAdapter(registry, context, hooks)


def test_printable_keys_insert_text() -> None:
    updates: List[str] = []
    adapter = make_adapter(updates=updates)

    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("enter")

    assert adapter.buffer.text == "hi\n"
    assert updates[-1] == "hi\n"


def test_prefix_sequence_runs_command() -> None:
    statuses: List[str] = []
    adapter = make_adapter("(a)", cursor=1, statuses=statuses)

    pending = adapter.handle_textual_key("o", modifiers=("CTRL",))
    result = adapter.handle_textual_key("q", text="q")

    assert pending.status == "pending"
    assert result.command == "quote-expression"
    assert adapter.buffer.text == "`(a)'"
    assert "ctrl+o" in statuses


def test_unbound_key_after_prefix_is_not_inserted() -> None:
    adapter = make_adapter("abc")

    adapter.handle_textual_key("ctrl+o")
    result = adapter.handle_textual_key("!", text="!")

    assert result.status == "miss"
    assert adapter.buffer.text == "abc"


def test_shift_arrows_select_then_command_line_tags() -> None:
    adapter = make_adapter("hello world")

    for _ in range(5):
        adapter.handle_textual_key("shift+right")
    assert adapter.buffer.get_selection() == Region(0, 5)

    result = adapter.run_command_line("tag-region b")

    assert result.status == "ok"
    assert adapter.buffer.text == "<b>hello</b> world"


def test_cursor_moves_and_backspace() -> None:
    adapter = make_adapter("abc", cursor=3)

    adapter.handle_textual_key("left")
    adapter.handle_textual_key("backspace")
    adapter.handle_textual_key("end")

    assert adapter.buffer.text == "ac"
    assert adapter.buffer.get_cursor_position() == 2


def test_command_line_errors_are_reported() -> None:
    statuses: List[str] = []
    events: List[tuple[str, object | None]] = []
    adapter = make_adapter("plain", statuses=statuses, events=events)

    unknown = adapter.run_command_line("frobnicate")
    failed = adapter.run_command_line("quote-expression")
    empty = adapter.run_command_line("   ")

    assert unknown.status == "unknown_command"
    assert failed.status == "no_expression"
    assert empty.status == "command_empty"
    assert any(name == "command.error" for name, _ in events)
    assert statuses[-1] == "command_empty"


def test_leftover_arguments_do_not_leak_into_next_command() -> None:
    adapter = make_adapter("")

    adapter.run_command_line("insert-file-name /tmp/a.txt extra")
    result = adapter.run_command_line("insert-file-name")

    assert adapter.buffer.text == "a.txt"
    assert result.status == "cancelled"


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(logs=logs)

    adapter.handle_textual_key("x", text="x")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)


def test_bad_delimiter_width_is_reported_not_raised() -> None:
    statuses: List[str] = []
    adapter = make_adapter(
        "text", cursor=4, statuses=statuses, settings=MacroSettings(delimiter_width=0)
    )

    result = adapter.run_command_line("cut-here")

    assert result.status == "invalid_argument"
    assert adapter.buffer.text == "text"
    assert statuses[-1] == "width must be positive"


def test_key_error_inside_command_is_not_reported_as_unknown() -> None:
    adapter = make_adapter()

    def broken(context: CommandContext) -> None:
        raise KeyError("missing-setting")

    adapter.registry.register_command(CommandRef("broken", broken))

    with pytest.raises(KeyError, match="missing-setting"):
        adapter.run_command_line("broken")


@pytest.mark.parametrize("width", ["0", "-4", "wide"])
def test_demo_rejects_non_positive_width(width: str) -> None:
    pytest.importorskip("textual")
    from text_macros.adapters.textual.app import _parse_args

    with pytest.raises(SystemExit):
        _parse_args(["--width", width])


def test_demo_width_defaults_to_settings() -> None:
    pytest.importorskip("textual")
    from text_macros.adapters.textual.app import _parse_args

    args = _parse_args([])

    assert args.width is None
    assert args.log_preset == "tui"
    assert _parse_args(["--width", "12"]).width == 12
