"""Parsing subsystem for Jianwen.

Provides mixin classes for modular parsing functionality:
- `BlockParsingMixin`: Line-based block structure (quotes, lists, tables)
- `InlineParsingMixin`: Inline content (styles, highlights, links, attributes)

Architecture:
The parser uses a mixin-based design for separation of concerns. Each
mixin handles one aspect of the grammar and documents the host
attributes and methods it relies on.

Example:
    >>> from jianwen.parsing import BlockParsingMixin, InlineParsingMixin
    >>> class Parser(InlineParsingMixin, BlockParsingMixin):
    ...     pass

"""

from jianwen.parsing.blocks import BlockParsingMixin
from jianwen.parsing.inline import InlineParsingMixin
from jianwen.parsing.protocols import BlockRuleHost, InlineParsingHost

__all__ = [
    "BlockParsingMixin",
    "BlockRuleHost",
    "InlineParsingHost",
    "InlineParsingMixin",
]
