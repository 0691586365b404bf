"""Small text formatters applied to a region in one substitution."""

from __future__ import annotations

import re
from typing import Callable, Dict

from text_macros.buffer.state import Region
from text_macros.buffer.sync import BufferHost
from text_macros.runtime import telemetry

Formatter = Callable[[str], str]

_RUNS_OF_BLANKS = re.compile(r"[ \t]+")


def squeeze(text: str) -> str:
    """Collapse runs of spaces/tabs inside each line, keeping indentation."""

    lines = []
    for line in text.split("\n"):
        body = line.lstrip(" \t")
        indent = line[: len(line) - len(body)]
        lines.append(indent + _RUNS_OF_BLANKS.sub(" ", body))
    return "\n".join(lines)


def strip_trailing(text: str) -> str:
    return "\n".join(line.rstrip(" \t") for line in text.split("\n"))


FORMATTERS: Dict[str, Formatter] = {
    "upcase": str.upper,
    "downcase": str.lower,
    "capitalize": lambda text: text[:1].upper() + text[1:],
    "title": str.title,
    "squeeze": squeeze,
    "strip-trailing": strip_trailing,
}


def format_region(buffer: BufferHost, region: Region, style: str) -> str:
    """Rewrite ``region`` with formatter ``style`` and return the new text."""

    formatter = FORMATTERS.get(style)
    if formatter is None:
        raise ValueError(f"Unknown format style '{style}'")
    with telemetry.span(
        "transform::format",
        metadata={"style": style, "start": region.start, "end": region.end},
    ):
        text = formatter(buffer.get_text(region))
        buffer.replace_region(region, text)
    return text


__all__ = ["FORMATTERS", "format_region", "squeeze", "strip_trailing"]
