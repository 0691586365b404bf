"""Adapter boundary types: the host contract and host-friendly snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple, runtime_checkable

from .state import ExpressionBounds, Position, Region


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Position
    row_col: Tuple[int, int]
    selection: Optional[Region]
    attributes: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class BufferHost(Protocol):
    """Everything the transformer needs from the surrounding editor.

    Regions are half-open. Implementations must validate offsets before
    mutating so a failed call leaves the text untouched.
    """

    def get_cursor_position(self) -> Position: ...

    def set_cursor_position(self, position: Position) -> None: ...

    def get_selection(self) -> Optional[Region]: ...

    def get_text(self, region: Region) -> str: ...

    def insert_text(self, position: Position, text: str) -> None: ...

    def delete_region(self, region: Region) -> None: ...

    def replace_region(self, region: Region, text: str) -> None: ...

    def find_enclosing_expression(
        self, position: Position
    ) -> Optional[ExpressionBounds]: ...

    def get_associated_file_path(self) -> Optional[str]: ...


class BufferValidationError(RuntimeError):
    """Raised when adapters or buffers provide out-of-bounds offsets."""

    def __init__(
        self,
        message: str,
        *,
        position: Position | None = None,
        region: Region | None = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.region = region
