"""Built-in commands and the key sequences that trigger them."""

from __future__ import annotations

from typing import Mapping, Sequence

from . import builtin
from .registry import CommandRef, CommandRegistry, KeyTokens

DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef(
        id="insert-file-name",
        handler=builtin.insert_file_name,
        description="Prompt for a file and insert its name",
    ),
    CommandRef(
        id="insert-file-path",
        handler=builtin.insert_file_path_prompted,
        description="Prompt for a file and insert its full path",
    ),
    CommandRef(
        id="insert-buffer-file-name",
        handler=builtin.insert_buffer_file_name,
        description="Insert the name of the file this buffer visits",
    ),
    CommandRef(
        id="insert-buffer-file-path",
        handler=builtin.insert_buffer_file_path,
        description="Insert the full path of the file this buffer visits",
    ),
    CommandRef(
        id="quote-expression",
        handler=builtin.quote_expression,
        description="Wrap the expression at point in quote marks",
    ),
    CommandRef(
        id="snip-region",
        handler=builtin.snip_region,
        description="Replace the region with a placeholder",
    ),
    CommandRef(
        id="tag-region",
        handler=builtin.tag_region,
        description="Wrap the region in a markup tag",
    ),
    CommandRef(
        id="cut-here",
        handler=builtin.cut_here,
        description="Insert labelled cut-here delimiter lines",
    ),
    CommandRef(
        id="insert-rule",
        handler=builtin.insert_rule,
        description="Insert plain delimiter lines",
    ),
    CommandRef(
        id="insert-badge",
        handler=builtin.insert_badge,
        description="Insert a README badge",
    ),
    CommandRef(
        id="insert-template",
        handler=builtin.insert_template,
        description="Insert a named boilerplate snippet",
    ),
    CommandRef(
        id="insert-video-embed",
        handler=builtin.insert_video,
        description="Insert an iframe embed for a video URL",
    ),
    CommandRef(
        id="upcase-region",
        handler=builtin.upcase_region,
        description="Upper-case the region",
    ),
    CommandRef(
        id="downcase-region",
        handler=builtin.downcase_region,
        description="Lower-case the region",
    ),
    CommandRef(
        id="capitalize-region",
        handler=builtin.capitalize_region,
        description="Capitalize the first letter of the region",
    ),
    CommandRef(
        id="squeeze-region",
        handler=builtin.squeeze_region,
        description="Collapse runs of blanks in the region",
    ),
    CommandRef(
        id="undo",
        handler=builtin.undo,
        description="Undo the last buffer change",
    ),
)

DEFAULT_KEYS: Mapping[str, KeyTokens] = {
    "insert-file-name": ("ctrl+o", "i"),
    "insert-buffer-file-name": ("ctrl+o", "f"),
    "insert-buffer-file-path": ("ctrl+o", "F"),
    "quote-expression": ("ctrl+o", "q"),
    "snip-region": ("ctrl+o", "s"),
    "tag-region": ("ctrl+o", "t"),
    "cut-here": ("ctrl+o", "-"),
    "insert-badge": ("ctrl+o", "b"),
    "insert-video-embed": ("ctrl+o", "v"),
    "upcase-region": ("ctrl+o", "u"),
    "downcase-region": ("ctrl+o", "l"),
    "undo": ("ctrl+o", "z"),
}


def load_default_commands(
    registry: CommandRegistry,
    *,
    replace: bool = False,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    key_overrides: Mapping[str, Sequence[str]] | None = None,
) -> None:
    """Register built-in commands and bind their default keys."""

    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    keys = dict(DEFAULT_KEYS)
    keys.update({name: tuple(seq) for name, seq in (key_overrides or {}).items()})

    for command in DEFAULT_COMMANDS:
        if include_set is not None and command.id not in include_set:
            continue
        if command.id in exclude_set:
            continue
        registry.register_command(command, replace=replace)
        sequence = keys.get(command.id)
        if sequence:
            registry.bind(sequence, command.id, replace=replace)


__all__ = ["DEFAULT_COMMANDS", "DEFAULT_KEYS", "load_default_commands"]
