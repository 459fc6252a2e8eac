"""Line splitting and layout-tab classification.

Leading tabs are the only indentation that means anything in Jianwen:
up to two of them select the column a block starts in (none: L, one: C,
two or more: R). Spaces carry no layout meaning.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from jianwen.nodes import Position

MAX_LAYOUT_TABS = 2

_LINE_BREAK_RE = re.compile(r"\r?\n")


class LineInfo(NamedTuple):
    """A source line with its layout tabs separated out.

    Attributes:
        raw: The line exactly as written
        content: The line with up to two leading tabs removed
        tab_count: Number of leading tabs removed

    """

    raw: str
    content: str
    tab_count: int


def split_lines(source: str) -> list[str]:
    """Split source on ``\\n`` or ``\\r\\n``."""
    return _LINE_BREAK_RE.split(source)


def get_line_info(raw: str, max_tabs: int = MAX_LAYOUT_TABS) -> LineInfo:
    """Strip up to ``max_tabs`` leading tabs from a line.

    Example:
        >>> get_line_info("\\t\\t\\tcode")
        LineInfo(raw='\\t\\t\\tcode', content='\\tcode', tab_count=2)

    """
    tab_count = 0
    while tab_count < len(raw) and tab_count < max_tabs and raw[tab_count] == "\t":
        tab_count += 1
    return LineInfo(raw, raw[tab_count:], tab_count)


def position_from_tabs(tab_count: int) -> Position:
    """Map a tab count to a layout position."""
    if tab_count <= 0:
        return "L"
    if tab_count == 1:
        return "C"
    return "R"


def shift_position_right(position: Position | None) -> Position:
    """Move one column to the right; R stays R, unknown becomes C."""
    if position == "L":
        return "C"
    if position in ("C", "R"):
        return "R"
    return "C"
