"""Text storage backing the reference buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True, slots=True)
class BufferDocument:
    """Immutable flat-string document.

    Every edit returns a new document with a bumped version, so an undo entry
    can hold onto the previous text without copying.
    """

    text: str = ""
    version: int = 0
    dirty: bool = False

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(text=text, version=0, dirty=False)

    @property
    def length(self) -> int:
        return len(self.text)

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def splice(self, start: int, end: int, replacement: str) -> "BufferDocument":
        """Return a document with ``[start:end]`` replaced by ``replacement``."""

        updated = self.text[:start] + replacement + self.text[end:]
        return BufferDocument(text=updated, version=self.version + 1, dirty=True)

    def restore(self, text: str) -> "BufferDocument":
        return BufferDocument(text=text, version=self.version + 1, dirty=True)

    def lines(self) -> Sequence[str]:
        return tuple(self.text.split("\n"))

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    def row_col(self, offset: int) -> Tuple[int, int]:
        """Translate a flat offset into a ``(row, column)`` pair."""

        head = self.text[:offset]
        row = head.count("\n")
        col = offset - (head.rfind("\n") + 1)
        return (row, col)

    def offset_for(self, row: int, col: int) -> int:
        lines = self.lines()
        row = max(0, min(row, len(lines) - 1))
        offset = sum(len(line) + 1 for line in lines[:row])
        return offset + max(0, min(col, len(lines[row])))
