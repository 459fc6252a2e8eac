"""Table row classifiers.

Rows are ``| a | b |`` lines. An alignment row uses ``:-`` (left),
``-:`` (right) or ``:-:`` (center) in every cell.
"""

from __future__ import annotations

import re

from jianwen.nodes import Align

_ALIGN_SEGMENT_RE = re.compile(r"^:?-+:?$")


def is_table_row(content: str) -> bool:
    """A row starts with ``|`` and contains at least one more ``|``."""
    trimmed = content.strip()
    return trimmed.startswith("|") and trimmed.find("|", 1) != -1


def has_closing_border(content: str) -> bool:
    return content.strip().endswith("|")


def split_cells(trimmed: str) -> list[str]:
    """Split a row into raw cell texts.

    A row missing its closing ``|`` keeps its last cell.
    """
    parts = trimmed.split("|")
    if trimmed.endswith("|"):
        return parts[1:-1]
    return parts[1:]


def is_alignment_row(trimmed: str) -> bool:
    if not is_table_row(trimmed):
        return False
    segments = trimmed.split("|")[1:-1]
    if not segments:
        return False
    return all(_ALIGN_SEGMENT_RE.match(seg.strip()) for seg in segments)


def parse_alignment_row(trimmed: str) -> tuple[Align, ...]:
    result: list[Align] = []
    for seg in trimmed.split("|")[1:-1]:
        t = seg.strip()
        left, right = t.startswith(":"), t.endswith(":")
        if left and right:
            result.append("center")
        elif right:
            result.append("right")
        else:
            result.append("left")
    return tuple(result)
