"""Reference buffer implementing the host contract with undo and telemetry."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from text_macros.runtime import telemetry

from .document import BufferDocument
from .expression import ExpressionLocator
from .state import BufferState, ExpressionBounds, Position, Region
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_position, ensure_region


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    cursor: Position
    selection: Optional[Region]


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    cursor: Position
    label: str


class Buffer:
    """In-memory buffer satisfying :class:`~text_macros.buffer.BufferHost`."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
        locator: Optional[ExpressionLocator] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo_timeline = undo or UndoTimeline()
        self.locator = locator or ExpressionLocator()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        file_path: Optional[str] = None,
        cursor: Position = 0,
    ) -> "Buffer":
        buffer = cls(
            name=name,
            document=BufferDocument.from_text(text),
            state=BufferState(file_path=file_path),
        )
        buffer.set_cursor_position(cursor)
        return buffer

    @property
    def text(self) -> str:
        return self.document.text

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            row_col=self.document.row_col(self.state.cursor),
            selection=self.state.selection,
            attributes=dict(attributes or {}),
        )

    # -- host contract -------------------------------------------------

    def get_cursor_position(self) -> Position:
        return self.state.cursor

    def set_cursor_position(self, position: Position) -> None:
        self.state.set_cursor(ensure_position(self.document, position))

    def get_selection(self) -> Optional[Region]:
        return self.state.selection

    def select(self, anchor: Position, point: Position) -> Region:
        ensure_position(self.document, anchor)
        ensure_position(self.document, point)
        self.state.set_selection(anchor, point)
        self.state.set_cursor(point)
        assert self.state.selection is not None
        return self.state.selection

    def get_text(self, region: Region) -> str:
        region = ensure_region(self.document, region)
        return self.document.slice(region.start, region.end)

    def insert_text(self, position: Position, text: str) -> None:
        position = ensure_position(self.document, position)
        self._splice(Region.point(position), text, label="insert_text")

    def delete_region(self, region: Region) -> None:
        self._splice(region, "", label="delete_region")

    def replace_region(self, region: Region, text: str) -> None:
        self._splice(region, text, label="replace_region")

    def find_enclosing_expression(
        self, position: Position
    ) -> Optional[ExpressionBounds]:
        position = ensure_position(self.document, position)
        return self.locator.find(self.document.text, position)

    def get_associated_file_path(self) -> Optional[str]:
        return self.state.file_path

    def set_file_path(self, path: Optional[str]) -> None:
        self.state.file_path = path

    # -- history -------------------------------------------------------

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.cursor_before)
        telemetry.record_event(
            "buffer.undo", level="debug", data={"buffer": self.name, "label": entry.label}
        )
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.cursor_after)
        telemetry.record_event(
            "buffer.redo", level="debug", data={"buffer": self.name, "label": entry.label}
        )
        return True

    # -- internals -----------------------------------------------------

    def _splice(self, region: Region, text: str, *, label: str) -> BufferDelta:
        region = ensure_region(self.document, region)
        with Transaction(self, label) as tx:
            before_text = self.document.text
            cursor_before = self.state.cursor
            self.document = self.document.splice(region.start, region.end, text)
            self.state.set_cursor(region.start + len(text))
            self.state.clear_selection()
            self.state.last_change_tick = self.document.version
            tx.commit(before_text, self.document.text, cursor_before, self.state.cursor)

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            label=label,
        )

    def _restore(self, text: str, cursor: Position) -> None:
        self.document = self.document.restore(text)
        self.state.set_cursor(min(cursor, self.document.length))
        self.state.clear_selection()
        self.state.last_change_tick = self.document.version


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        cursor_before: Position,
        cursor_after: Position,
    ) -> None:
        entry = UndoEntry(
            label=self.label,
            before_text=before_text,
            after_text=after_text,
            cursor_before=cursor_before,
            cursor_after=cursor_after,
        )
        self.buffer.undo_timeline.push(entry)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
