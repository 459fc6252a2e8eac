"""Attribute-line and footnote-section classifiers."""

from __future__ import annotations

import re

from jianwen.lexer.classifiers.include import match_include

_FOOTNOTE_DEF_RE = re.compile(r"^\[fn=([^\]]+)\]\s*$")


def is_attribute_only_line(text: str) -> bool:
    """True when a line holds only ``[...]`` groups and whitespace.

    Include lines (``[@=name]``) are excluded even though they match the
    shape.

    Example:
        >>> is_attribute_only_line("[c,->] [fold]")
        True
        >>> is_attribute_only_line("[img](a.png)")
        False

    """
    if not text or match_include(text.strip()) is not None:
        return False

    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "[":
            end = text.find("]", i + 1)
            if end == -1:
                return False
            i = end + 1
        elif ch in " \t":
            i += 1
        else:
            return False
    return True


def is_footnotes_line(trimmed: str) -> bool:
    return trimmed == "[footnotes]"


def match_footnote_def(trimmed: str) -> str | None:
    """Return the id of a ``[fn=id]`` line."""
    m = _FOOTNOTE_DEF_RE.match(trimmed)
    if m is None:
        return None
    return m.group(1).strip() or None
