"""Command-entry wrappers: gather parameters, call the transformer, place the cursor."""

from __future__ import annotations

from functools import partial
from typing import Optional

from text_macros.buffer.state import Region
from text_macros.transform import (
    badge_names,
    delimiter_line,
    format_region,
    insert_boilerplate,
    insert_delimiter_block,
    insert_file_path,
    insert_video_embed,
    replace_region_with_placeholder,
    wrap_expression_at_point,
    wrap_region_with_markup,
)
from text_macros.transform.boilerplate import BOILERPLATE, get_boilerplate

from .context import CommandContext, CommandResult


def _selection(context: CommandContext) -> Optional[Region]:
    return context.buffer.get_selection()


def _no_selection() -> CommandResult:
    return CommandResult(consumed=False, status="no_selection", message="No region selected")


def _placed(context: CommandContext, cursor: int, message: str) -> CommandResult:
    context.buffer.set_cursor_position(cursor)
    return CommandResult(consumed=True, message=message, cursor=cursor)


def insert_buffer_file_name(context: CommandContext, *, name_only: bool = True) -> CommandResult:
    position = context.buffer.get_cursor_position()
    text = insert_file_path(context.buffer, position, name_only=name_only)
    return _placed(context, position + len(text), text)


def insert_file_name(context: CommandContext, *, name_only: bool = True) -> CommandResult:
    path = context.prompter.prompt_for_file_path("Insert file name: ")
    position = context.buffer.get_cursor_position()
    text = insert_file_path(context.buffer, position, path, name_only=name_only)
    return _placed(context, position + len(text), text)


def quote_expression(context: CommandContext) -> CommandResult:
    settings = context.settings
    cursor = wrap_expression_at_point(
        context.buffer,
        context.buffer.get_cursor_position(),
        settings.open_quote,
        settings.close_quote,
    )
    return _placed(context, cursor, "quoted")


def snip_region(context: CommandContext) -> CommandResult:
    region = _selection(context)
    if region is None:
        return _no_selection()
    cursor = replace_region_with_placeholder(
        context.buffer, region, context.settings.placeholder
    )
    return _placed(context, cursor, "snipped")


def tag_region(context: CommandContext) -> CommandResult:
    region = _selection(context)
    if region is None:
        return _no_selection()
    tag = context.prompter.prompt_for_string("Tag: ", context.settings.default_tag).strip()
    text = context.buffer.get_text(region)
    wrap_region_with_markup(context.buffer, region, tag)
    end = region.start + len(text) + 2 * len(tag) + 5
    return _placed(context, end, tag)


def cut_here(context: CommandContext, *, labelled: bool = True) -> CommandResult:
    settings = context.settings
    position = context.buffer.get_cursor_position()
    label = settings.cut_label if labelled else None
    insert_delimiter_block(
        context.buffer,
        position,
        settings.delimiter_width,
        label,
        settings.delimiter_char,
    )
    line = delimiter_line(settings.delimiter_width, label, settings.delimiter_char)
    return _placed(context, position + 2 * (len(line) + 1), "cut_here")


def _fill_fields(context: CommandContext, name: str) -> dict[str, str]:
    entry = get_boilerplate(name)
    return {
        field: context.prompter.prompt_for_string(f"{field}: ")
        for field in entry.fields
    }


def insert_template(context: CommandContext, *, default: Optional[str] = None) -> CommandResult:
    name = context.prompter.prompt_for_string("Template: ", default).strip()
    fields = _fill_fields(context, name)
    position = context.buffer.get_cursor_position()
    text = insert_boilerplate(context.buffer, position, name, **fields)
    return _placed(context, position + len(text), name)


def insert_badge(context: CommandContext) -> CommandResult:
    name = context.prompter.prompt_for_string("Badge: ", badge_names()[0]).strip()
    if not name.startswith("badge-") and f"badge-{name}" in BOILERPLATE:
        name = f"badge-{name}"
    fields = _fill_fields(context, name)
    position = context.buffer.get_cursor_position()
    text = insert_boilerplate(context.buffer, position, name, **fields)
    return _placed(context, position + len(text), name)


def insert_video(context: CommandContext) -> CommandResult:
    url = context.prompter.prompt_for_string("Video URL: ")
    position = context.buffer.get_cursor_position()
    text = insert_video_embed(context.buffer, position, url)
    return _placed(context, position + len(text), "video_embed")


def format_selection(context: CommandContext, *, style: str) -> CommandResult:
    region = _selection(context)
    if region is None:
        return _no_selection()
    text = format_region(context.buffer, region, style)
    return _placed(context, region.start + len(text), style)


def undo(context: CommandContext) -> CommandResult:
    undo_fn = getattr(context.buffer, "undo", None)
    if undo_fn is None:
        return CommandResult(consumed=False, status="unsupported", message="undo")
    if not undo_fn():
        return CommandResult(consumed=True, status="nothing_to_undo")
    return CommandResult(consumed=True, message="undo")


insert_buffer_file_path = partial(insert_buffer_file_name, name_only=False)
insert_file_path_prompted = partial(insert_file_name, name_only=False)
insert_rule = partial(cut_here, labelled=False)
upcase_region = partial(format_selection, style="upcase")
downcase_region = partial(format_selection, style="downcase")
capitalize_region = partial(format_selection, style="capitalize")
squeeze_region = partial(format_selection, style="squeeze")


__all__ = [
    "capitalize_region",
    "cut_here",
    "downcase_region",
    "format_selection",
    "insert_badge",
    "insert_buffer_file_name",
    "insert_buffer_file_path",
    "insert_file_name",
    "insert_file_path_prompted",
    "insert_rule",
    "insert_template",
    "insert_video",
    "quote_expression",
    "snip_region",
    "squeeze_region",
    "tag_region",
    "undo",
    "upcase_region",
]
