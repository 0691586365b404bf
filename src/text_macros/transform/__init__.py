"""Stateless text transformations operating through the buffer host contract."""

from .boilerplate import (
    BOILERPLATE,
    Boilerplate,
    badge_names,
    insert_boilerplate,
    render_boilerplate,
)
from .core import (
    delimiter_line,
    insert_delimiter_block,
    insert_file_path,
    markup,
    replace_region_with_placeholder,
    wrap_expression_at_point,
    wrap_region_with_markup,
)
from .errors import (
    MacroError,
    MissingTemplateField,
    NoExpressionFound,
    NoFileAssociated,
    UnknownTemplate,
    UnparsableIdentifier,
)
from .formatting import FORMATTERS, format_region
from .video import embed_markup, extract_video_id, insert_video_embed

__all__ = [
    "BOILERPLATE",
    "Boilerplate",
    "FORMATTERS",
    "MacroError",
    "MissingTemplateField",
    "NoExpressionFound",
    "NoFileAssociated",
    "UnknownTemplate",
    "UnparsableIdentifier",
    "badge_names",
    "delimiter_line",
    "embed_markup",
    "extract_video_id",
    "format_region",
    "insert_boilerplate",
    "insert_delimiter_block",
    "insert_file_path",
    "insert_video_embed",
    "markup",
    "render_boilerplate",
    "replace_region_with_placeholder",
    "wrap_expression_at_point",
    "wrap_region_with_markup",
]
