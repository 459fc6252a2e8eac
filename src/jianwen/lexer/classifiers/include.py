"""Include classifier.

    [@](chapter.jw)    file mode, target is a path
    [@=intro]          tag mode, target is a block tag name
"""

from __future__ import annotations

import re
from typing import Literal, NamedTuple

_FILE_INCLUDE_RE = re.compile(r"^\[@\]\(([^)]+)\)\s*$")
_TAG_INCLUDE_RE = re.compile(r"^\[@=([^\]]+)\]\s*$")


class IncludeMatch(NamedTuple):
    mode: Literal["file", "tag"]
    target: str


def match_include(content: str) -> IncludeMatch | None:
    """Try to classify a line as an include; blank targets never match."""
    trimmed = content.strip()

    m = _FILE_INCLUDE_RE.match(trimmed)
    if m is not None:
        target = m.group(1).strip()
        return IncludeMatch("file", target) if target else None

    m = _TAG_INCLUDE_RE.match(trimmed)
    if m is not None:
        target = m.group(1).strip()
        return IncludeMatch("tag", target) if target else None

    return None
