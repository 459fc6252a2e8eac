"""Pure line classifiers for block syntax.

Each classifier takes one line (layout tabs already removed, and trimmed
where noted) and returns a small NamedTuple describing the match, or None.
They hold no state, so the block parser can call them both to start a
block and to decide where a paragraph or list run ends.
"""

from jianwen.lexer.classifiers.attributes import (
    is_attribute_only_line,
    is_footnotes_line,
    match_footnote_def,
)
from jianwen.lexer.classifiers.fence import (
    FenceMatch,
    is_code_fence_end,
    match_any_code_fence,
    match_attributed_code_fence,
    match_code_fence_start,
)
from jianwen.lexer.classifiers.heading import HeadingMatch, match_heading
from jianwen.lexer.classifiers.include import IncludeMatch, match_include
from jianwen.lexer.classifiers.list import ListItemMatch, match_list_item
from jianwen.lexer.classifiers.media import ImageMatch, match_html_reference, match_image
from jianwen.lexer.classifiers.quote import (
    QuoteMatch,
    match_content_title,
    match_quote,
    normalize_quote_line,
)
from jianwen.lexer.classifiers.table import (
    has_closing_border,
    is_alignment_row,
    is_table_row,
    parse_alignment_row,
    split_cells,
)
from jianwen.lexer.classifiers.thematic import RuleMatch, match_horizontal_rule

__all__ = [
    "FenceMatch",
    "HeadingMatch",
    "ImageMatch",
    "IncludeMatch",
    "ListItemMatch",
    "QuoteMatch",
    "RuleMatch",
    "has_closing_border",
    "is_alignment_row",
    "is_attribute_only_line",
    "is_code_fence_end",
    "is_footnotes_line",
    "is_table_row",
    "match_any_code_fence",
    "match_attributed_code_fence",
    "match_code_fence_start",
    "match_content_title",
    "match_footnote_def",
    "match_heading",
    "match_horizontal_rule",
    "match_html_reference",
    "match_image",
    "match_include",
    "match_list_item",
    "match_quote",
    "normalize_quote_line",
    "parse_alignment_row",
    "split_cells",
]
