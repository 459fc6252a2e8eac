"""Single-line image and HTML reference classifiers.

    [img](photo.png)
    [img,rounded](photo.png)     rounded corners, default radius
    [img,rounded=2](photo.png)   rounded corners, radius 2
    [html](snippet.html)
"""

from __future__ import annotations

import re
from typing import Literal, NamedTuple

_IMAGE_RE = re.compile(r"^\[([^\]]+)\]\(([^)]+)\)\s*$")
_ROUNDED_RADIUS_RE = re.compile(r"^rounded=([0-9.]+)$")
_HTML_REFERENCE_RE = re.compile(r"^\[html\]\(([^)]+)\)\s*$")


class ImageMatch(NamedTuple):
    url: str
    shape: Literal["square", "rounded"] | None = None
    rounded_radius: float | None = None


def match_image(trimmed: str) -> ImageMatch | None:
    """Match ``[...](url)`` where the bracket parts include ``img``."""
    m = _IMAGE_RE.match(trimmed)
    if m is None:
        return None
    url = m.group(2).strip()
    if not url:
        return None
    parts = [part.strip() for part in m.group(1).split(",") if part.strip()]
    if "img" not in parts:
        return None

    shape: Literal["square", "rounded"] | None = None
    radius: float | None = None
    for part in parts:
        if part == "rounded":
            shape = "rounded"
        elif part == "square":
            shape = "square"
        elif (rounded := _ROUNDED_RADIUS_RE.match(part)) is not None:
            try:
                value = float(rounded.group(1))
            except ValueError:
                continue
            if value > 0:
                shape = "rounded"
                radius = value
    return ImageMatch(url, shape, radius)


def match_html_reference(trimmed: str) -> str | None:
    """Return the referenced path of an ``[html](path)`` line."""
    m = _HTML_REFERENCE_RE.match(trimmed)
    if m is None:
        return None
    return m.group(1).strip() or None
