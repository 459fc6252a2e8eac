"""Deep copies of tree nodes for include expansion.

Included content is copied rather than shared so that a tag included
twice yields two distinct subtrees. Locations are immutable and carried
over as-is; the origin is either kept or overridden for the whole copy.
"""

from __future__ import annotations

import dataclasses
from typing import TypeVar, cast

from jianwen.nodes import Block, Node


N = TypeVar("N", bound=Node)


def clone_node(node: N, *, origin: str | None = None) -> N:
    """Copy ``node`` and every node beneath it.

    Args:
        node: Root of the subtree to copy
        origin: When given, stamped on every copied node; otherwise each
            node keeps its own origin

    Returns:
        A structurally equal subtree sharing no node objects with ``node``
    """
    changes: dict[str, object] = {}
    for field in dataclasses.fields(node):
        value = getattr(node, field.name)
        if isinstance(value, Node):
            changes[field.name] = clone_node(value, origin=origin)
        elif isinstance(value, tuple) and value and isinstance(value[0], Node):
            changes[field.name] = tuple(clone_node(child, origin=origin) for child in value)
    if origin is not None:
        changes["origin"] = origin
    return dataclasses.replace(node, **changes)


def clone_block(block: Block, *, origin: str | None = None) -> Block:
    return cast(Block, clone_node(block, origin=origin))


__all__ = ["clone_block", "clone_node"]
