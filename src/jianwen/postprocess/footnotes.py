"""Footnote cross-referencing.

Every ``[fn:id]`` reference must match a ``[fn=id]`` definition somewhere
in the expanded document. Each undefined id is reported once, at its
first reference.
"""

from __future__ import annotations

from collections.abc import Sequence

from jianwen.diagnostics import FOOTNOTE_UNDEFINED, ParseError, report_warning
from jianwen.nodes import Block, FootnoteDef, FootnoteRef
from jianwen.visitor import iter_blocks, iter_inline_containers, walk_inlines


def collect_footnote_defs(blocks: Sequence[Block]) -> dict[str, list[FootnoteDef]]:
    """Group every footnote definition in the tree by id."""
    defs: dict[str, list[FootnoteDef]] = {}
    for block in iter_blocks(blocks):
        if isinstance(block, FootnoteDef):
            defs.setdefault(block.identifier, []).append(block)
    return defs


def collect_footnote_refs(blocks: Sequence[Block]) -> dict[str, FootnoteRef]:
    """First reference of each distinct id, in tree order."""
    refs: dict[str, FootnoteRef] = {}
    for owner in iter_inline_containers(blocks):
        for node in walk_inlines(owner.children):
            if isinstance(node, FootnoteRef):
                refs.setdefault(node.identifier, node)
    return refs


def check_footnotes(blocks: Sequence[Block], errors: list[ParseError]) -> None:
    """Warn once for each referenced id that has no definition."""
    defs = collect_footnote_defs(blocks)
    for identifier, ref in collect_footnote_refs(blocks).items():
        if identifier in defs:
            continue
        suffix = f' (from include "{ref.origin}")' if ref.origin else ""
        location = ref.location
        report_warning(
            errors,
            f'Footnote reference "{identifier}" has no corresponding FootnoteDefBlock{suffix}',
            location.lineno if location is not None else 1,
            location.col_offset if location is not None else None,
            code=FOOTNOTE_UNDEFINED,
        )


__all__ = ["check_footnotes", "collect_footnote_defs", "collect_footnote_refs"]
