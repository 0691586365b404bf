"""Positions, regions, and cursor/selection state for buffers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

Position = int


@dataclass(frozen=True, slots=True)
class Region:
    """Half-open ``[start, end)`` span of buffer offsets."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Region start {self.start} exceeds end {self.end}")

    @classmethod
    def of(cls, a: Position, b: Position) -> "Region":
        """Build a region from two offsets given in any order."""

        return cls(a, b) if a <= b else cls(b, a)

    @classmethod
    def point(cls, position: Position) -> "Region":
        return cls(position, position)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def empty(self) -> bool:
        return self.start == self.end

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end

    def __iter__(self) -> Iterator[Position]:
        yield self.start
        yield self.end


ExpressionBounds = Region


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection info tied to a BufferDocument version."""

    cursor: Position = 0
    selection: Optional[Region] = None
    file_path: Optional[str] = None
    last_change_tick: int = 0

    def set_cursor(self, position: Position) -> None:
        self.cursor = position

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, anchor: Position, point: Position) -> None:
        self.selection = Region.of(anchor, point)
