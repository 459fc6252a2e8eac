"""Heading classifier.

``#`` to ``#####`` followed by whitespace and text. A ``+`` directly after
the hashes (``##+ Title``) makes the heading foldable.
"""

from __future__ import annotations

import re
from typing import Literal, NamedTuple

_FOLDABLE_HEADING_RE = re.compile(r"^(#{1,5})\+\s+(.+)$")
_HEADING_RE = re.compile(r"^(#{1,5})\s+(.+)$")


class HeadingMatch(NamedTuple):
    level: Literal[1, 2, 3, 4, 5]
    text: str
    foldable: bool = False


def match_heading(content: str) -> HeadingMatch | None:
    """Try to classify a line (layout tabs removed) as a heading."""
    m = _FOLDABLE_HEADING_RE.match(content)
    if m is not None:
        return HeadingMatch(len(m.group(1)), m.group(2).rstrip(), foldable=True)  # type: ignore[arg-type]
    m = _HEADING_RE.match(content)
    if m is None:
        return None
    return HeadingMatch(len(m.group(1)), m.group(2).rstrip())  # type: ignore[arg-type]
