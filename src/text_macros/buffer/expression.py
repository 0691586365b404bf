"""Locate balanced bracketed expressions around a cursor position."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .state import ExpressionBounds, Position, Region

DEFAULT_PAIRS: Mapping[str, str] = {"(": ")", "[": "]", "{": "}"}


class ExpressionLocator:
    """Single-pass bracket matcher.

    Brackets inside string literals are ignored and closers that do not match
    the innermost open bracket are skipped, so one stray character never hides
    the surrounding expression.
    """

    def __init__(
        self,
        pairs: Mapping[str, str] | None = None,
        *,
        string_quotes: Iterable[str] = ('"',),
        escape: str = "\\",
    ) -> None:
        self.pairs = dict(pairs or DEFAULT_PAIRS)
        self.closers = {close: open_ for open_, close in self.pairs.items()}
        self.string_quotes = frozenset(string_quotes)
        self.escape = escape

    def spans(self, text: str) -> List[ExpressionBounds]:
        """Every balanced expression in ``text``, in order of closing bracket."""

        stack: list[tuple[str, int]] = []
        found: List[ExpressionBounds] = []
        quote: Optional[str] = None
        escaped = False
        for index, char in enumerate(text):
            if quote is not None:
                if escaped:
                    escaped = False
                elif char == self.escape:
                    escaped = True
                elif char == quote:
                    quote = None
                continue
            if char in self.string_quotes:
                quote = char
            elif char in self.pairs:
                stack.append((char, index))
            elif char in self.closers:
                if stack and stack[-1][0] == self.closers[char]:
                    _, start = stack.pop()
                    found.append(Region(start, index + 1))
        return found

    def find(self, text: str, position: Position) -> Optional[ExpressionBounds]:
        """Innermost expression whose bounds touch ``position``.

        A cursor sitting on the opening bracket or just past the closing one
        counts as inside. Between two adjacent expressions the following one
        wins.
        """

        candidates = [span for span in self.spans(text) if span.contains(position)]
        if not candidates:
            return None
        # an expression opening at the cursor beats one closing there
        return min(
            candidates,
            key=lambda span: (span.start != position, span.length, -span.start),
        )


__all__ = ["ExpressionLocator", "DEFAULT_PAIRS"]
