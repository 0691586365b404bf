"""Textual host adapter; ``app`` needs the optional ``textual`` UI stack."""

from .controller import TextualMacroAdapter, TextualUIHooks

__all__ = ["TextualMacroAdapter", "TextualUIHooks"]
