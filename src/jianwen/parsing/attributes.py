"""Attribute expression algebra shared by the block and inline parsers.

An attribute expression is the comma-separated content of a ``[...]``
group. Each token is one of:

- a font size: a number from 0.5 to 5 in steps of 0.5 (``[2]``, ``[1.5]``)
- a font style keyword: italic, bold, heavy, slim, serif, mono, or the
  aliases ``i`` (italic), ``b`` (bold), ``bb`` (heavy)
- a secondary color: ``!`` followed by a color (``[!yellow]``)
- a color: ``#`` hex (``[#A14A00]``) or any other word (``[red]``)

Layout arrows (``->``, ``<-``, ``<->``) are block-only; a group holding an
arrow is never an inline attribute expression.

"""

from __future__ import annotations

import re

from jianwen.diagnostics import INVALID_FONT_SIZE, ParseError, report_warning
from jianwen.nodes import FONT_STYLES, ColorAttribute, FontStyle, InlineAttributes

ARROW_TOKENS = frozenset({"->", "<-", "<->"})

FONT_STYLE_ALIASES: dict[str, FontStyle] = {
    "i": "italic",
    "b": "bold",
    "bb": "heavy",
}

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


def split_attribute_parts(inside: str) -> list[str]:
    """Split on commas, trim, and drop empty tokens."""
    return [part.strip() for part in inside.split(",") if part.strip()]


def normalize_font_style(part: str) -> FontStyle | None:
    """Resolve a style keyword or alias."""
    alias = FONT_STYLE_ALIASES.get(part)
    if alias is not None:
        return alias
    if part in FONT_STYLES:
        return part  # type: ignore[return-value]
    return None


def parse_number(part: str) -> float | None:
    """Parse a numeric token; None when the token is not a number."""
    if _NUMBER_RE.match(part) is None:
        return None
    return float(part)


def is_valid_font_size(size: float) -> bool:
    return 0.5 <= size <= 5 and abs(size * 2 - round(size * 2)) < 1e-6


def is_inline_attribute_expression(inside: str) -> bool:
    """Decide whether ``[inside]`` reads as an inline attribute expression.

    Used both when merging adjacent groups and when deciding that a new
    group ends the current attribute scope, so the two decisions always
    agree.

    Example:
        >>> is_inline_attribute_expression("red, bold")
        True
        >>> is_inline_attribute_expression("10")
        False
        >>> is_inline_attribute_expression("->")
        False

    """
    parts = split_attribute_parts(inside)
    if not parts:
        return False
    if any(part in ARROW_TOKENS for part in parts):
        return False

    for part in parts:
        number = parse_number(part)
        if number is not None:
            if is_valid_font_size(number):
                continue
            return False
        if normalize_font_style(part) is not None:
            continue
        if part.startswith("!"):
            if ColorAttribute.from_token(part[1:]) is not None:
                continue
            return False
        if ColorAttribute.from_token(part) is None:
            return False
    return True


def parse_inline_attributes(
    inside: str,
    errors: list[ParseError],
    line: int,
    column: int | None = None,
    *,
    where: str = "inline attributes",
) -> InlineAttributes | None:
    """Parse an attribute expression.

    Out-of-range font sizes are reported and ignored. Returns None when no
    token produced an attribute.
    """
    color: ColorAttribute | None = None
    secondary: ColorAttribute | None = None
    font_size: float | None = None
    styles: list[FontStyle] = []

    for part in split_attribute_parts(inside):
        if part in ARROW_TOKENS:
            continue

        number = parse_number(part)
        if number is not None:
            if is_valid_font_size(number):
                font_size = number
            else:
                report_warning(
                    errors,
                    f"Invalid fontSize {part} in {where}",
                    line,
                    column,
                    code=INVALID_FONT_SIZE,
                )
            continue

        style = normalize_font_style(part)
        if style is not None:
            if style not in styles:
                styles.append(style)
            continue

        if part.startswith("!"):
            secondary = ColorAttribute.from_token(part[1:]) or secondary
            continue

        color = ColorAttribute.from_token(part) or color

    attrs = InlineAttributes(
        color=color,
        secondary_color=secondary,
        font_size=font_size,
        font_style=tuple(styles),
    )
    if attrs.is_empty():
        return None
    return attrs


__all__ = [
    "ARROW_TOKENS",
    "FONT_STYLE_ALIASES",
    "is_inline_attribute_expression",
    "is_valid_font_size",
    "normalize_font_style",
    "parse_inline_attributes",
    "parse_number",
    "split_attribute_parts",
]
