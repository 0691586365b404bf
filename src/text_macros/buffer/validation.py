"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .state import Position, Region
from .sync import BufferValidationError


def ensure_position(document: BufferDocument, position: Position) -> Position:
    if not isinstance(position, int) or isinstance(position, bool):
        raise BufferValidationError("Position must be an integer", position=position)
    if position < 0 or position > document.length:
        raise BufferValidationError("Position out of range", position=position)
    return position


def ensure_region(document: BufferDocument, region: Region) -> Region:
    if region.start < 0 or region.end > document.length:
        raise BufferValidationError("Region out of range", region=region)
    return region
