"""Horizontal rule classifier.

Three or more repetitions of one character, optionally preceded by a
``[color]`` group:

    ---      solid
    ***      dashed
    ===      bold
    ~~~      wavy
    [#FF0000]-----
"""

from __future__ import annotations

from typing import Literal, NamedTuple, TypeAlias

from jianwen.nodes import ColorAttribute

RuleStyle: TypeAlias = Literal["solid", "dashed", "bold", "wavy"]

_RULE_STYLES: dict[str, RuleStyle] = {
    "-": "solid",
    "*": "dashed",
    "=": "bold",
    "~": "wavy",
}


class RuleMatch(NamedTuple):
    style: RuleStyle
    color: ColorAttribute | None = None


def match_horizontal_rule(trimmed: str) -> RuleMatch | None:
    """Try to classify a trimmed line as a horizontal rule."""
    rest = trimmed
    color: ColorAttribute | None = None

    if rest.startswith("["):
        end = rest.find("]")
        if end != -1:
            parsed = ColorAttribute.from_token(rest[1:end])
            if parsed is not None:
                color = parsed
                rest = rest[end + 1 :].strip()

    if len(rest) < 3:
        return None
    style = _RULE_STYLES.get(rest[0])
    if style is None or rest.strip(rest[0]):
        return None
    return RuleMatch(style, color)
