"""Buffer abstractions: host contract, reference buffer, and undo history."""

from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import BufferDocument
from .expression import ExpressionLocator
from .state import BufferState, ExpressionBounds, Position, Region
from .sync import BufferHost, BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_position, ensure_region

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferDocument",
    "BufferHost",
    "BufferMirror",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "ExpressionBounds",
    "ExpressionLocator",
    "Position",
    "Region",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_position",
    "ensure_region",
]
