"""Shared services every command handler receives."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Protocol

from text_macros.buffer.state import Position
from text_macros.buffer.sync import BufferHost
from text_macros.runtime.config import MacroSettings
from text_macros.transform.errors import MacroError


class PromptCancelled(MacroError):
    code = "cancelled"

    def __init__(self, label: str) -> None:
        super().__init__(f"No answer for prompt {label.strip()!r}")
        self.label = label


class Prompter(Protocol):
    """Host hook that gathers command parameters from the user."""

    def prompt_for_string(self, label: str, default: Optional[str] = None) -> str: ...

    def prompt_for_file_path(self, label: str) -> str: ...


class ScriptedPrompter:
    """Answers prompts from a queue; hosts with a one-line command input use it too."""

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers: deque[str] = deque(answers)
        self.asked: list[str] = []

    def feed(self, *answers: str) -> None:
        self._answers.extend(answers)

    def clear(self) -> None:
        self._answers.clear()

    def prompt_for_string(self, label: str, default: Optional[str] = None) -> str:
        self.asked.append(label)
        if self._answers:
            answer = self._answers.popleft()
            if answer or default is None:
                return answer
            return default
        if default is not None:
            return default
        raise PromptCancelled(label)

    def prompt_for_file_path(self, label: str) -> str:
        path = self.prompt_for_string(label)
        if not path:
            raise PromptCancelled(label)
        return path


@dataclass(slots=True)
class CommandResult:
    """Result returned from every command invocation."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    command: Optional[str] = None
    cursor: Optional[Position] = None


class EventBus:
    """Minimal event bus letting commands notify host adapters."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class CommandContext:
    buffer: BufferHost
    prompter: Prompter = field(default_factory=ScriptedPrompter)
    bus: EventBus = field(default_factory=EventBus)
    settings: MacroSettings = field(default_factory=MacroSettings)
    extras: Dict[str, object] = field(default_factory=dict)


__all__ = [
    "CommandContext",
    "CommandResult",
    "EventBus",
    "PromptCancelled",
    "Prompter",
    "ScriptedPrompter",
]
