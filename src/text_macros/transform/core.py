"""Region/point transformations shared by every macro.

All functions take the buffer as a :class:`~text_macros.buffer.BufferHost`
and never touch host globals. Regions are half-open ``[start, end)``.
Validation always happens before the first write.
"""

from __future__ import annotations

import os
from typing import Optional

from text_macros.buffer.state import Position, Region
from text_macros.buffer.sync import BufferHost, BufferValidationError
from text_macros.runtime import telemetry

from .errors import NoExpressionFound, NoFileAssociated

_SEPARATORS = os.sep + (os.altsep or "")


def wrap_expression_at_point(
    buffer: BufferHost, position: Position, open_mark: str, close_mark: str
) -> Position:
    """Surround the expression containing ``position`` with quote marks.

    Returns the position just past ``close_mark``.
    """

    with telemetry.span(
        "transform::wrap_expression",
        metadata={"position": position},
    ) as handle:
        bounds = buffer.find_enclosing_expression(position)
        if bounds is None:
            raise NoExpressionFound(position)
        if bounds.start < 0:
            raise BufferValidationError(
                "Expression bounds start before the buffer", region=bounds
            )
        handle.add_metadata("bounds", (bounds.start, bounds.end))
        # Higher offset first keeps ``bounds.start`` valid.
        buffer.insert_text(bounds.end, close_mark)
        buffer.insert_text(bounds.start, open_mark)
        return bounds.end + len(open_mark) + len(close_mark)


def replace_region_with_placeholder(
    buffer: BufferHost, region: Region, placeholder: str
) -> Position:
    """Swap ``region`` for ``placeholder``; the result sits before its last char."""

    with telemetry.span(
        "transform::placeholder",
        metadata={"start": region.start, "end": region.end},
    ):
        buffer.replace_region(region, placeholder)
        if not placeholder:
            return region.start
        return region.start + len(placeholder) - 1


def markup(text: str, tag_name: str) -> str:
    if not tag_name or any(char.isspace() or char in "<>/" for char in tag_name):
        raise ValueError(f"Invalid tag name {tag_name!r}")
    return f"<{tag_name}>{text}</{tag_name}>"


def wrap_region_with_markup(buffer: BufferHost, region: Region, tag_name: str) -> None:
    with telemetry.span(
        "transform::markup",
        metadata={"tag": tag_name, "start": region.start, "end": region.end},
    ):
        buffer.replace_region(region, markup(buffer.get_text(region), tag_name))


def delimiter_line(width: int, label: Optional[str] = None, char: str = "-") -> str:
    if width < 1:
        raise ValueError("width must be positive")
    if len(char) != 1:
        raise ValueError("delimiter must be a single character")
    if not label:
        return char * width
    fill = width - len(label) - 1
    if fill < 1:
        return label
    return f"{label} {char * fill}"


def insert_delimiter_block(
    buffer: BufferHost,
    position: Position,
    width: int,
    label: Optional[str] = None,
    char: str = "-",
) -> None:
    """Insert two identical "cut here" lines, each ending in a newline."""

    line = delimiter_line(width, label, char)
    with telemetry.span(
        "transform::delimiter",
        metadata={"position": position, "width": width},
    ):
        buffer.insert_text(position, f"{line}\n{line}\n")


def insert_file_path(
    buffer: BufferHost,
    position: Position,
    path: Optional[str] = None,
    name_only: bool = False,
) -> str:
    """Insert ``path`` (or the buffer's own file) and return the inserted text."""

    target = path if path is not None else buffer.get_associated_file_path()
    if not target:
        raise NoFileAssociated(getattr(buffer, "name", None))
    text = os.path.basename(target.rstrip(_SEPARATORS)) if name_only else target
    with telemetry.span(
        "transform::file_path",
        metadata={"name_only": name_only},
    ):
        buffer.insert_text(position, text)
    return text


__all__ = [
    "wrap_expression_at_point",
    "replace_region_with_placeholder",
    "wrap_region_with_markup",
    "insert_delimiter_block",
    "insert_file_path",
    "markup",
    "delimiter_line",
]
