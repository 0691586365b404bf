"""Command registry: named handlers plus the key sequences bound to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Iterator, Mapping, Optional, Sequence

from text_macros.runtime.telemetry import get_logger, span
from text_macros.transform.errors import MacroError

from .context import CommandContext, CommandResult

CommandHandler = Callable[[CommandContext], Optional[CommandResult]]
KeyTokens = tuple[str, ...]


def normalize_keys(keys: Iterable[str]) -> KeyTokens:
    tokens = tuple(key.strip() for key in keys if key and key.strip())
    if not tokens:
        raise ValueError("key sequence requires at least one token")
    return tokens


@dataclass(frozen=True, slots=True)
class CommandRef:
    """Callable metadata used during command execution."""

    id: str
    handler: CommandHandler
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, context: CommandContext) -> Optional[CommandResult]:
        return self.handler(context)


@dataclass(frozen=True, slots=True)
class KeyBinding:
    keys: KeyTokens
    command_id: str

    @property
    def signature(self) -> str:
        return " ".join(self.keys)


@dataclass(slots=True)
class RegistryStats:
    command_count: int
    binding_count: int


class CommandConflictError(RuntimeError):
    """Raised when a key sequence collides with existing bindings."""

    def __init__(self, binding: KeyBinding, conflicts: Iterable[KeyBinding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Keys '{binding.signature}' conflict with "
            f"{[c.signature for c in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class CommandRegistry:
    """Owns command references and their key bindings."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, CommandRef] = {}
        self._bindings: Dict[KeyTokens, KeyBinding] = {}
        self._logger_name = logger_name
        self.logger = get_logger(logger_name)

    def register_command(
        self, command: CommandRef, *, replace: bool = False
    ) -> CommandRef:
        if not replace and command.id in self._commands:
            raise ValueError(f"Command '{command.id}' already registered")
        self._commands[command.id] = command
        return command

    def get_command(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def iter_commands(self) -> Iterator[CommandRef]:
        yield from self._commands.values()

    def bind(
        self, keys: Sequence[str], command_id: str, *, replace: bool = False
    ) -> KeyBinding:
        if command_id not in self._commands:
            raise KeyError(f"Keys bound to unknown command '{command_id}'")
        binding = KeyBinding(keys=normalize_keys(keys), command_id=command_id)
        conflicts = self.detect_conflicts(binding)
        if conflicts and not replace:
            raise CommandConflictError(binding, conflicts)
        for conflict in conflicts:
            self._bindings.pop(conflict.keys, None)
        self._bindings[binding.keys] = binding
        return binding

    def unbind(self, keys: Sequence[str]) -> Optional[KeyBinding]:
        return self._bindings.pop(normalize_keys(keys), None)

    def binding_for(self, keys: Sequence[str]) -> Optional[KeyBinding]:
        return self._bindings.get(normalize_keys(keys))

    def keys_for(self, command_id: str) -> tuple[KeyTokens, ...]:
        return tuple(
            binding.keys
            for binding in self._bindings.values()
            if binding.command_id == command_id
        )

    def iter_bindings(self) -> Iterator[KeyBinding]:
        yield from self._bindings.values()

    def detect_conflicts(self, binding: KeyBinding) -> list[KeyBinding]:
        """Same sequence, or one sequence being a prefix of the other."""

        conflicts: list[KeyBinding] = []
        for keys, existing in self._bindings.items():
            shorter = min(len(keys), len(binding.keys))
            if keys[:shorter] == binding.keys[:shorter]:
                conflicts.append(existing)
        return conflicts

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
        )

    def run(self, command_id: str, context: CommandContext) -> CommandResult:
        command = self.get_command(command_id)
        with span(
            "commands::run",
            logger_name=self._logger_name,
            metadata={"command": command_id},
        ):
            try:
                outcome = command(context)
            except (MacroError, ValueError) as exc:
                code = exc.code if isinstance(exc, MacroError) else "invalid_argument"
                self.logger.warning(f"{command_id}: {exc}")
                context.bus.emit(
                    "command.error",
                    {"command": command_id, "code": code, "message": str(exc)},
                )
                return CommandResult(
                    consumed=True,
                    status=code,
                    message=str(exc),
                    command=command_id,
                )

            result = outcome if isinstance(outcome, CommandResult) else CommandResult(
                consumed=True
            )
            result.command = command_id

        context.bus.emit("command.run", {"command": command_id, "status": result.status})
        return result

    def run_keys(self, keys: Sequence[str], context: CommandContext) -> CommandResult:
        tokens = normalize_keys(keys)
        binding = self._bindings.get(tokens)
        if binding is not None:
            return self.run(binding.command_id, context)
        if any(existing[: len(tokens)] == tokens for existing in self._bindings):
            return CommandResult(consumed=True, status="pending")
        return CommandResult(consumed=False, status="miss")


__all__ = [
    "CommandConflictError",
    "CommandHandler",
    "CommandRef",
    "CommandRegistry",
    "KeyBinding",
    "RegistryStats",
    "normalize_keys",
]
