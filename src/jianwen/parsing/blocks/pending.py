"""Pending block state built up by attribute-only lines.

An attribute-only line such as ``[c,->] [tag=intro]`` emits no block. It
configures the next block instead. The accumulated configuration is a
frozen PendingBlockContext that the block loop replaces as lines are read
and resets after every committed block.

Attribute-line tokens (comma separated, in any ``[...]`` group):

    c / r / l               align center / right / left
    ->                      shift one column right, same line as previous
    <-                      truncate right
    <->                     both
    fold                    fold the next block
    sheet                   read the next ``|`` rows as a table
    html                    mark the next code fence HTML-like
    comment                 wrap the next block in a CommentBlock
    disable / d             keep the next block as raw text
    tag=x / t=x / f=x       name the next block
    2 / 1.5, bold, !blue, red   styling, as in inline attribute expressions

"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from jianwen.diagnostics import LAYOUT_MULTI_ARROW, ParseError, report_warning
from jianwen.lexer.lines import position_from_tabs, shift_position_right
from jianwen.nodes import Align, BlockAttributes, InlineAttributes, Position
from jianwen.parsing.attributes import (
    ARROW_TOKENS,
    normalize_font_style,
    parse_inline_attributes,
    parse_number,
    split_attribute_parts,
)

# More "->" than this on one line is layout misuse
MAX_LINE_ARROWS = 2

_GROUP_RE = re.compile(r"\[([^\]]*)\]")
_COLOR_WORD_RE = re.compile(r"^(?:#[0-9A-Fa-f]{3,8}|[A-Za-z]+)$")

_ALIGN_KEYWORDS: dict[str, Align] = {
    "c": "center",
    "r": "right",
    "l": "left",
}

_FLAG_FIELDS: dict[str, str] = {
    "fold": "fold_next",
    "sheet": "is_sheet",
    "html": "is_html",
    "comment": "is_comment",
    "disable": "is_disabled",
    "d": "is_disabled",
}

_TAG_PREFIXES = ("tag=", "t=", "f=")


@dataclass(frozen=True, slots=True)
class PendingBlockContext:
    """Configuration waiting for the next block.

    Attributes:
        attrs: Block attributes from attribute lines, if any
        fold_next: Fold the next block (``[fold]`` or a foldable heading)
        tag_name: Wrap the next block in a TaggedBlock with this name
        is_comment: Wrap the next block in a CommentBlock
        is_disabled: Keep the next block as a DisabledBlock
        is_sheet: Read table rows
        is_html: Mark the next code block HTML-like

    """

    attrs: BlockAttributes | None = None
    fold_next: bool = False
    tag_name: str | None = None
    is_comment: bool = False
    is_disabled: bool = False
    is_sheet: bool = False
    is_html: bool = False

    def is_empty(self) -> bool:
        return self == EMPTY_PENDING

    def reset(self) -> PendingBlockContext:
        """Return a fresh, empty context."""
        return EMPTY_PENDING


EMPTY_PENDING = PendingBlockContext()


def _tag_from_part(part: str) -> str | None:
    for prefix in _TAG_PREFIXES:
        if part.startswith(prefix):
            return part[len(prefix) :].strip() or None
    return None


def _styling_from_part(
    part: str, errors: list[ParseError], line: int
) -> InlineAttributes | None:
    """Styling tokens on attribute lines; unknown words are ignored."""
    token = part[1:] if part.startswith("!") else part
    if (
        parse_number(part) is None
        and normalize_font_style(part) is None
        and _COLOR_WORD_RE.match(token) is None
    ):
        return None
    return parse_inline_attributes(part, errors, line, where="block attributes")


def apply_attribute_line(
    text: str,
    line: int,
    errors: list[ParseError],
    pending: PendingBlockContext,
    last_position: Position | None,
    tab_count: int,
) -> PendingBlockContext:
    """Fold one attribute-only line into the pending context.

    Args:
        text: The trimmed line
        line: Line number, for diagnostics
        errors: Diagnostics list (multi-arrow warnings, invalid font sizes)
        pending: Context built from earlier attribute lines
        last_position: Position of the previously committed block
        tab_count: Layout tabs on this line

    Returns:
        The updated context.

    Example:
        >>> pending = apply_attribute_line("[->][->]", 1, [], EMPTY_PENDING, "L", 0)
        >>> pending.attrs.position, pending.attrs.same_line
        ('R', True)

    """
    attrs = pending.attrs
    changes: dict[str, object] = {}
    arrow_count = 0

    for group in _GROUP_RE.finditer(text):
        for part in split_attribute_parts(group.group(1)):
            align = _ALIGN_KEYWORDS.get(part)
            if align is not None:
                attrs = replace(attrs or BlockAttributes(), align=align)
                continue

            if part in ARROW_TOKENS:
                arrow_count += 1
                if part == "->" and arrow_count > MAX_LINE_ARROWS:
                    report_warning(
                        errors,
                        "More than two [->] attributes in a row; "
                        "extra [->] will be treated as plain text.",
                        line,
                        code=LAYOUT_MULTI_ARROW,
                    )
                    continue
                attrs = attrs or BlockAttributes()
                if part in ("->", "<->"):
                    base = attrs.position or last_position or position_from_tabs(tab_count)
                    attrs = replace(attrs, position=shift_position_right(base), same_line=True)
                if part in ("<-", "<->"):
                    attrs = replace(attrs, truncate_right=True)
                continue

            flag = _FLAG_FIELDS.get(part)
            if flag is not None:
                changes[flag] = True
                continue

            if part.startswith(_TAG_PREFIXES):
                tag = _tag_from_part(part)
                if tag is not None:
                    changes["tag_name"] = tag
                continue

            styling = _styling_from_part(part, errors, line)
            if styling is not None:
                attrs = (attrs or BlockAttributes()).merge(styling)

    return replace(pending, attrs=attrs, **changes)  # type: ignore[arg-type]


def build_block_attrs(pending: PendingBlockContext, tab_count: int) -> BlockAttributes:
    """Attributes for the block being committed.

    Pending attributes, plus the tab-derived position when none was set,
    plus ``fold`` when the previous line asked for it.
    """
    attrs = pending.attrs or BlockAttributes()
    if attrs.position is None:
        attrs = replace(attrs, position=position_from_tabs(tab_count))
    if pending.fold_next:
        attrs = replace(attrs, fold=True)
    return attrs


__all__ = [
    "EMPTY_PENDING",
    "MAX_LINE_ARROWS",
    "PendingBlockContext",
    "apply_attribute_line",
    "build_block_attrs",
]
