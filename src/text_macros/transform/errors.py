"""User-facing failures raised by transformer operations.

Each is raised before the buffer is touched, so catching one never leaves a
half-applied edit behind.
"""

from __future__ import annotations

from typing import Iterable

from text_macros.buffer.state import Position


class MacroError(RuntimeError):
    """Base class for recoverable macro failures surfaced as messages."""

    code = "macro_error"

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


class NoExpressionFound(MacroError):
    code = "no_expression"

    def __init__(self, position: Position) -> None:
        super().__init__(f"No balanced expression at position {position}", position=position)


class NoFileAssociated(MacroError):
    code = "no_file"

    def __init__(self, buffer_name: str | None = None) -> None:
        label = f"Buffer '{buffer_name}'" if buffer_name else "Buffer"
        super().__init__(f"{label} is not visiting a file")
        self.buffer_name = buffer_name


class UnparsableIdentifier(MacroError):
    code = "unparsable_identifier"

    def __init__(self, raw: str, *, kind: str = "video") -> None:
        super().__init__(f"Cannot extract a {kind} id from {raw!r}")
        self.raw = raw
        self.kind = kind


class UnknownTemplate(MacroError):
    code = "unknown_template"

    def __init__(self, name: str, available: Iterable[str] = ()) -> None:
        choices = ", ".join(sorted(available))
        super().__init__(f"Unknown template '{name}' (available: {choices})")
        self.name = name


class MissingTemplateField(MacroError):
    code = "missing_field"

    def __init__(self, template: str, field: str) -> None:
        super().__init__(f"Template '{template}' needs a value for '{field}'")
        self.template = template
        self.field = field


__all__ = [
    "MacroError",
    "NoExpressionFound",
    "NoFileAssociated",
    "UnparsableIdentifier",
    "UnknownTemplate",
    "MissingTemplateField",
]
