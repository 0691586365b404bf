"""Textual-free adapter that wires the command registry into UI callbacks."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from text_macros.buffer import Buffer, BufferMirror, Region
from text_macros.commands import (
    CommandContext,
    CommandRegistry,
    CommandResult,
    ScriptedPrompter,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualMacroAdapter:
    """Routes keys and typed command lines to a :class:`CommandRegistry`.

    Unbound printable keys are inserted as text so the demo host behaves like
    a plain editor; ``shift+left`` / ``shift+right`` grow the selection that
    region commands act on.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        context: CommandContext,
        hooks: TextualUIHooks,
    ) -> None:
        if not isinstance(context.buffer, Buffer):
            raise TypeError("TextualMacroAdapter needs a text_macros Buffer")
        if not isinstance(context.prompter, ScriptedPrompter):
            context.prompter = ScriptedPrompter()
        self.registry = registry
        self.context = context
        self.hooks = hooks
        self.buffer: Buffer = context.buffer
        self.prompter: ScriptedPrompter = context.prompter
        self._pending: List[str] = []
        self._anchor: Optional[int] = None
        self._subscribe_events()
        self._refresh_buffer()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> CommandResult:
        """Dispatch one key press; ``key`` may already carry ``ctrl+`` style prefixes."""

        token = _token(key, modifiers)
        self._log_state("key ->", token=token, text=text)
        self._pending.append(token)
        result = self.registry.run_keys(self._pending, self.context)
        if result.status == "pending":
            self.hooks.update_status(" ".join(self._pending))
            return result

        handled_prefix = len(self._pending) > 1
        self._pending.clear()
        if result.status == "miss" and not handled_prefix:
            result = self._edit(token, text)
        return self._finish(result)

    def run_command_line(self, line: str) -> CommandResult:
        """Run ``name arg ...``; arguments answer the command's prompts in order."""

        try:
            parts = shlex.split(line)
        except ValueError as exc:
            return self._finish(
                CommandResult(consumed=False, status="invalid_argument", message=str(exc))
            )
        if not parts:
            return self._finish(CommandResult(consumed=False, status="command_empty"))
        name, args = parts[0], parts[1:]
        try:
            self.registry.get_command(name)
        except KeyError:
            return self._finish(
                CommandResult(
                    consumed=False, status="unknown_command", message=name, command=name
                )
            )
        self.prompter.clear()
        self.prompter.feed(*args)
        try:
            result = self.registry.run(name, self.context)
        finally:
            self.prompter.clear()
        return self._finish(result)

    def _edit(self, token: str, text: Optional[str]) -> CommandResult:
        buffer = self.buffer
        cursor = buffer.get_cursor_position()
        length = len(buffer.text)
        if token in {"shift+left", "shift+right"}:
            if self._anchor is None or buffer.get_selection() is None:
                self._anchor = cursor
            step = -1 if token == "shift+left" else 1
            target = max(0, min(length, cursor + step))
            buffer.select(self._anchor, target)
            return CommandResult(consumed=True, status="select", cursor=target)

        self._anchor = None
        buffer.state.clear_selection()
        moves = {"left": cursor - 1, "right": cursor + 1, "home": 0, "end": length}
        if token in moves:
            target = max(0, min(length, moves[token]))
            buffer.set_cursor_position(target)
            return CommandResult(consumed=True, status="move", cursor=target)
        if token == "backspace" and cursor > 0:
            buffer.delete_region(Region(cursor - 1, cursor))
            return CommandResult(consumed=True, status="edit", cursor=cursor - 1)
        if token == "enter":
            text = "\n"
        if text and len(text) == 1 and (text.isprintable() or text == "\n"):
            buffer.insert_text(cursor, text)
            return CommandResult(consumed=True, status="edit", cursor=cursor + 1)
        return CommandResult(consumed=False, status="miss", message=token)

    def _finish(self, result: CommandResult) -> CommandResult:
        self._after_result(result)
        return result

    def _after_result(self, result: CommandResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._log_state(
            "result <-",
            status=result.status,
            message=result.message,
            command=result.command,
        )

    def _subscribe_events(self) -> None:
        for event in ("command.run", "command.error"):
            self.context.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "buffer": self.buffer.name,
            "cursor": self.buffer.get_cursor_position(),
            "selection": self.buffer.get_selection(),
            "pending": " ".join(self._pending),
            "version": self.buffer.document.version,
        }


def _token(key: str, modifiers: Iterable[str]) -> str:
    mods = [str(mod).lower() for mod in modifiers]
    if not mods:
        return key
    return "+".join(mods + [key])


__all__ = ["TextualMacroAdapter", "TextualUIHooks"]
