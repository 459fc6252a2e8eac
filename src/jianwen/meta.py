"""Document metadata from the initialization template.

The template is delimited by two lines made only of underscores::

    ______
    [title]=Notes [author]=Ada(https://example.com)
    [time]=2024-01-01
    [tag(s)]=draft, ideas
    [global_font]=serif, bold
    ______

Every ``[key]=value`` pair on the lines in between is read. The template
lines are removed from the body; if the closing boundary is missing the
whole source is body and there is no metadata.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from jianwen.lexer.lines import split_lines
from jianwen.nodes import FONT_STYLES, FontStyle, Meta

_PAIR_RE = re.compile(r"\[([^\]]+?)\]=([^\[]*)")
_AUTHOR_URL_RE = re.compile(r"^(.*)\(([^)]+)\)$")


class TemplateSplit(NamedTuple):
    """Source split into metadata and body.

    Attributes:
        meta: Parsed metadata, or None when absent or empty
        lines: Body lines
        line_numbers: Original 1-based line number of each body line

    """

    meta: Meta | None
    lines: list[str]
    line_numbers: list[int]


def is_template_boundary(line: str) -> bool:
    trimmed = line.strip()
    return bool(trimmed) and set(trimmed) == {"_"}


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def apply_meta_key(fields: dict[str, object], key: str, value: str) -> None:
    """Record one ``[key]=value`` pair; unknown keys and empty values are ignored."""
    if not value:
        return

    if key in ("title", "author_url", "time", "add_info"):
        fields[key] = value
    elif key == "author":
        # the last parenthesized group is the author's URL
        match = _AUTHOR_URL_RE.match(value)
        if match is not None:
            fields["author"] = match.group(1).strip()
            fields["author_url"] = match.group(2).strip()
        else:
            fields["author"] = value
    elif key == "tag(s)":
        tags = _split_list(value)
        if tags:
            fields["tags"] = tuple(tags)
    elif key == "global_font":
        fonts: list[FontStyle] = []
        for part in _split_list(value):
            if part in FONT_STYLES:
                fonts.append(part)  # type: ignore[arg-type]
        if fonts:
            fields["global_font"] = tuple(fonts)


def extract_meta(source: str) -> TemplateSplit:
    """Split the initialization template off ``source``.

    Example:
        >>> split = extract_meta("___\\n[title]=Hi\\n___\\nBody")
        >>> split.meta.title, split.lines, split.line_numbers
        ('Hi', ['Body'], [4])

    """
    lines = split_lines(source)
    all_numbers = list(range(1, len(lines) + 1))

    start = next((i for i, line in enumerate(lines) if is_template_boundary(line)), None)
    if start is None:
        return TemplateSplit(None, lines, all_numbers)
    end = next(
        (i for i in range(start + 1, len(lines)) if is_template_boundary(lines[i])),
        None,
    )
    if end is None:
        return TemplateSplit(None, lines, all_numbers)

    fields: dict[str, object] = {}
    for line in lines[start + 1 : end]:
        bracket = line.find("[")
        if bracket == -1:
            continue
        for match in _PAIR_RE.finditer(line, bracket):
            apply_meta_key(fields, match.group(1).strip(), match.group(2).strip())

    meta = Meta(**fields)  # type: ignore[arg-type]
    body = lines[:start] + lines[end + 1 :]
    numbers = all_numbers[:start] + all_numbers[end + 1 :]
    return TemplateSplit(None if meta.is_empty() else meta, body, numbers)


__all__ = [
    "TemplateSplit",
    "apply_meta_key",
    "extract_meta",
    "is_template_boundary",
]
