"""List item classifier.

Four shapes, tried in this order:

    -[ ] task          -[o] in progress   -[x] not done   -[v] done
    1. ordered         1.2. nested ordered (indent = number of parts)
    + foldable         ++ nested foldable (optional task marker: +[v])
    - bullet           -- nested bullet

The first matching shape wins, so ``-[v] x`` is a task, never a bullet.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from jianwen.nodes import ListKind, TaskStatus

_TASK_RE = re.compile(r"^(-+)(\[(.|..)?\])(?:\s+(.*))?$")
_ORDERED_RE = re.compile(r"^(\d+(?:\.\d+)*)\.?\s*(\[(.|..)?\])?(?:\s+(.*))?$")
_FOLDABLE_RE = re.compile(r"^(\++)(\[(.|..)?\])?(?:\s+(.*))?$")
_BULLET_RE = re.compile(r"^(-+)(?:\s+(.*))?$")

_TASK_MARKERS: dict[str, TaskStatus] = {
    "o": "in_progress",
    "x": "not_done",
    "v": "done",
}


class ListItemMatch(NamedTuple):
    """A classified list line.

    Attributes:
        kind: List shape
        indent: Syntax level (number of markers or ordinal parts)
        text: Item text after the marker
        ordinal: "1.2" style ordinal for ordered and foldable items
        task_status: Set for task items and marked ordered/foldable items

    """

    kind: ListKind
    indent: int
    text: str
    ordinal: str | None = None
    task_status: TaskStatus | None = None


def task_status_from_marker(marker: str | None) -> TaskStatus:
    """Map the character(s) inside ``[...]`` to a task status."""
    if not marker:
        return "unknown"
    return _TASK_MARKERS.get(marker, "unknown")


def ordinal_from_indent(indent: int) -> str:
    """Foldable items are numbered by depth: 1, 1.1, 1.1.1, ..."""
    if indent <= 0:
        return "1"
    return ".".join("1" for _ in range(indent))


def match_list_item(content: str) -> ListItemMatch | None:
    """Try to classify a line (layout tabs removed) as a list item."""
    m = _TASK_RE.match(content)
    if m is not None:
        return ListItemMatch(
            "task",
            len(m.group(1)),
            (m.group(4) or "").rstrip(),
            task_status=task_status_from_marker(m.group(3)),
        )

    m = _ORDERED_RE.match(content)
    if m is not None:
        ordinal = m.group(1)
        return ListItemMatch(
            "ordered",
            len(ordinal.split(".")),
            (m.group(4) or "").rstrip(),
            ordinal=ordinal,
            task_status=task_status_from_marker(m.group(3)) if m.group(2) else None,
        )

    m = _FOLDABLE_RE.match(content)
    if m is not None:
        indent = len(m.group(1))
        return ListItemMatch(
            "foldable",
            indent,
            (m.group(4) or "").rstrip(),
            ordinal=ordinal_from_indent(indent),
            task_status=task_status_from_marker(m.group(3)) if m.group(2) else None,
        )

    m = _BULLET_RE.match(content)
    if m is not None:
        return ListItemMatch("bullet", len(m.group(1)), (m.group(2) or "").rstrip())

    return None
