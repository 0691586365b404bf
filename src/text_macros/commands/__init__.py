"""Command-entry layer: prompts, registry, and the built-in command table."""

from .context import (
    CommandContext,
    CommandResult,
    EventBus,
    PromptCancelled,
    Prompter,
    ScriptedPrompter,
)
from .defaults import DEFAULT_COMMANDS, DEFAULT_KEYS, load_default_commands
from .registry import (
    CommandConflictError,
    CommandRef,
    CommandRegistry,
    KeyBinding,
    RegistryStats,
)

__all__ = [
    "CommandConflictError",
    "CommandContext",
    "CommandRef",
    "CommandRegistry",
    "CommandResult",
    "DEFAULT_COMMANDS",
    "DEFAULT_KEYS",
    "EventBus",
    "KeyBinding",
    "PromptCancelled",
    "Prompter",
    "RegistryStats",
    "ScriptedPrompter",
    "load_default_commands",
]
