"""Code fence classifier.

Two opening forms are recognized:

- plain: ```` ```lang ````
- attributed: one or more bracket groups before the fence, e.g.
  ```` [html]``` ````; an ``[html]`` group marks the block HTML-like

The closing line is ```` ``` ```` alone.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_FENCE_START_RE = re.compile(r"^```([^\s`]*)\s*$")
_ATTRIBUTED_FENCE_RE = re.compile(r"^(\[.+\])*\s*```([^\s`]*)\s*$")
_FENCE_END_RE = re.compile(r"^```\s*$")
_HTML_FLAG_RE = re.compile(r"\[html\]", re.IGNORECASE)


class FenceMatch(NamedTuple):
    """Opening fence: language (if any) and whether ``[html]`` prefixed it."""

    language: str | None
    is_html: bool = False


def match_code_fence_start(trimmed: str) -> FenceMatch | None:
    """Match a plain opening fence."""
    if not trimmed.startswith("```"):
        return None
    m = _FENCE_START_RE.match(trimmed)
    if m is None:
        return None
    return FenceMatch(m.group(1) or None)


def match_attributed_code_fence(trimmed: str) -> FenceMatch | None:
    """Match an opening fence with optional leading bracket groups."""
    m = _ATTRIBUTED_FENCE_RE.match(trimmed)
    if m is None:
        return None
    attr_part = m.group(1) or ""
    return FenceMatch(m.group(2) or None, bool(_HTML_FLAG_RE.search(attr_part)))


def match_any_code_fence(trimmed: str) -> FenceMatch | None:
    """Plain form first, then the attributed form."""
    return match_code_fence_start(trimmed) or match_attributed_code_fence(trimmed)


def is_code_fence_end(trimmed: str) -> bool:
    return _FENCE_END_RE.match(trimmed) is not None
