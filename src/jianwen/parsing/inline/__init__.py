"""Inline parsing subsystem for Jianwen.

Provides mixins for parsing inline content:
- Escapes and disabled spans (\\, {})
- Code spans and frame highlights (`)
- Marker highlights (=)
- Style delimiters (*, /, _, -, ~, ^, ^^)
- Bracket expressions: footnote refs, comments, links, attribute scopes

Architecture:
A single scan with first-character dispatch. Every construct that fails
to close degrades to literal text and records a warning; the inline
parser never raises for malformed input.

"""

from __future__ import annotations

from jianwen.parsing.inline.brackets import BracketInlineMixin
from jianwen.parsing.inline.core import InlineParsingCoreMixin
from jianwen.parsing.inline.emphasis import StyleInlineMixin
from jianwen.parsing.inline.links import LinkInlineMixin
from jianwen.parsing.inline.special import SpecialInlineMixin


class InlineParsingMixin(
    InlineParsingCoreMixin,
    SpecialInlineMixin,
    StyleInlineMixin,
    BracketInlineMixin,
    LinkInlineMixin,
):
    """Combined inline parsing mixin.

    Combines all inline parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _errors: list[ParseError]

    """

    pass


__all__ = [
    "BracketInlineMixin",
    "InlineParsingCoreMixin",
    "InlineParsingMixin",
    "LinkInlineMixin",
    "SpecialInlineMixin",
    "StyleInlineMixin",
]
