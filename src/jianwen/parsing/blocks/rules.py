"""Delegated single-line block rules.

Rules are tried in order after code fences and attribute lines, and
before the in-loop matchers (content title, quote, table, image, html,
list, paragraph). Each rule returns True when it consumed the line.

    [@](path) / [@=name]    include
    # .. #####, #+          heading (the foldable form folds the next block)
    ---  ***  ===  ~~~      horizontal rule, optionally ``[color]---``

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from jianwen.lexer.classifiers import match_heading, match_horizontal_rule, match_include
from jianwen.nodes import Heading, HorizontalRule, Include, Text

if TYPE_CHECKING:
    from jianwen.lexer.lines import LineInfo
    from jianwen.parsing.protocols import BlockRuleHost

BlockRule: TypeAlias = "Callable[[BlockRuleHost, LineInfo, str], bool]"


def parse_include_rule(host: BlockRuleHost, info: LineInfo, trimmed: str) -> bool:
    match = match_include(info.content)
    if match is None:
        return False
    host._emit(
        info,
        info.raw,
        lambda attrs, location: Include(
            mode=match.mode,
            target=match.target,
            block_attrs=attrs,
            location=location,
        ),
    )
    host._pos += 1
    return True


def parse_heading_rule(host: BlockRuleHost, info: LineInfo, trimmed: str) -> bool:
    match = match_heading(info.content)
    if match is None:
        return False
    host._emit(
        info,
        info.raw,
        lambda attrs, location: Heading(
            level=match.level,
            children=(Text(content=match.text, location=location),),
            foldable=match.foldable,
            block_attrs=attrs,
            location=location,
        ),
        fold_next=match.foldable,
    )
    host._pos += 1
    return True


def parse_horizontal_rule(host: BlockRuleHost, info: LineInfo, trimmed: str) -> bool:
    match = match_horizontal_rule(trimmed)
    if match is None:
        return False
    host._emit(
        info,
        info.raw,
        lambda attrs, location: HorizontalRule(
            style=match.style,
            color=match.color,
            block_attrs=attrs,
            location=location,
        ),
    )
    host._pos += 1
    return True


BLOCK_RULES: tuple[BlockRule, ...] = (
    parse_include_rule,
    parse_heading_rule,
    parse_horizontal_rule,
)


def try_block_rules(host: BlockRuleHost, info: LineInfo, trimmed: str) -> bool:
    """Run the rules in order; True when one consumed the line."""
    return any(rule(host, info, trimmed) for rule in BLOCK_RULES)


__all__ = [
    "BLOCK_RULES",
    "BlockRule",
    "parse_heading_rule",
    "parse_horizontal_rule",
    "parse_include_rule",
    "try_block_rules",
]
