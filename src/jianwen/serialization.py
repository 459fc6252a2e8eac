"""Tree serialization: JSON round-trip for Jianwen nodes.

Converts typed nodes to/from JSON-compatible dicts. Useful for:
- Snapshot tests of parsed documents
- Handing a parsed tree to a renderer in another process
- Debugging and inspection

All output is deterministic (sorted keys) so snapshots are stable.

Example:
    from jianwen import parse_document
    from jianwen.serialization import to_json, from_json

    doc = parse_document("# Hello *World*")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields, is_dataclass
from typing import Any

from jianwen.location import SourceLocation
from jianwen.nodes import (
    BlockAttributes,
    CodeBlock,
    CodeSpan,
    ColorAttribute,
    CommentBlock,
    ContentTitle,
    DisabledBlock,
    Document,
    Emphasis,
    FootnoteDef,
    FootnoteRef,
    Footnotes,
    Heading,
    Highlight,
    HorizontalRule,
    Html,
    Image,
    Include,
    InlineAttributes,
    InlineAttrs,
    InlineComment,
    Link,
    List,
    ListItem,
    Meta,
    Node,
    Paragraph,
    Quote,
    RawBlock,
    Strike,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    TaggedBlock,
    Text,
    Underline,
    Wave,
)

# Registry of type names to classes for deserialization
_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Document,
        Paragraph,
        Heading,
        ContentTitle,
        Quote,
        List,
        ListItem,
        CodeBlock,
        Table,
        TableRow,
        TableCell,
        HorizontalRule,
        Image,
        Html,
        Footnotes,
        FootnoteDef,
        CommentBlock,
        DisabledBlock,
        Include,
        TaggedBlock,
        RawBlock,
        Text,
        CodeSpan,
        Emphasis,
        Strong,
        Underline,
        Strike,
        Wave,
        Superscript,
        Subscript,
        Highlight,
        Link,
        FootnoteRef,
        InlineComment,
        InlineAttrs,
        # Values carried by nodes
        SourceLocation,
        ColorAttribute,
        InlineAttributes,
        BlockAttributes,
        Meta,
    )
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and attribute values.

    Args:
        node: Any Jianwen node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    return _serialize_dataclass(node)


def _serialize_dataclass(value: Any) -> dict[str, Any]:
    result: dict[str, Any] = {"_type": type(value).__name__}
    for f in fields(value):
        result[f.name] = _serialize_value(getattr(value, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if is_dataclass(value) and not isinstance(value, type):
        return _serialize_dataclass(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown, or names a value
            type rather than a node.

    """
    value = _deserialize_dataclass(data)
    if not isinstance(value, Node):
        msg = f"Expected a node, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def _deserialize_dataclass(data: dict[str, Any]) -> Any:
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    cls = _TYPES.get(type_name)
    if cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        return _deserialize_dataclass(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys) for snapshot stability.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Document node.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
