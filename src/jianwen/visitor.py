"""Tree visitor, transformer and traversal helpers for Jianwen.

Provides a base visitor class with match-based dispatch, an immutable
transform function for rewriting frozen trees, and the generators the
post-processing passes walk the tree with.

Example, collect all footnote references:

    class RefCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.ids: list[str] = []

        def visit_footnote_ref(self, node: FootnoteRef) -> None:
            self.ids.append(node.identifier)

    collector = RefCollector()
    collector.visit(doc)

Example, demote headings:

    def demote(node: Node) -> Node:
        if isinstance(node, Heading):
            return dataclasses.replace(node, level=min(node.level + 1, 5))
        return node

    new_doc = transform(doc, demote)

Traversal order:
    Every walker here is pre-order and follows source order, so results
    line up with the order diagnostics were produced in.

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    and the iter_* generators are pure.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, TypeAlias, TypeVar

from jianwen.nodes import (
    INLINE_CONTAINER_TYPES,
    Block,
    CodeBlock,
    CodeSpan,
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
    Inline,
    InlineAttrs,
    InlineComment,
    Link,
    List,
    ListItem,
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

# Nodes whose ``children`` field holds inline content parsed from text
InlineOwner: TypeAlias = Paragraph | Heading | ContentTitle | TableCell


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        for child in child_nodes(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_content_title(self, node: ContentTitle) -> T:
        return self.visit_default(node)

    def visit_quote(self, node: Quote) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_table_cell(self, node: TableCell) -> T:
        return self.visit_default(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_html(self, node: Html) -> T:
        return self.visit_default(node)

    def visit_footnotes(self, node: Footnotes) -> T:
        return self.visit_default(node)

    def visit_footnote_def(self, node: FootnoteDef) -> T:
        return self.visit_default(node)

    def visit_comment_block(self, node: CommentBlock) -> T:
        return self.visit_default(node)

    def visit_disabled_block(self, node: DisabledBlock) -> T:
        return self.visit_default(node)

    def visit_include(self, node: Include) -> T:
        return self.visit_default(node)

    def visit_tagged_block(self, node: TaggedBlock) -> T:
        return self.visit_default(node)

    def visit_raw_block(self, node: RawBlock) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_code_span(self, node: CodeSpan) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_underline(self, node: Underline) -> T:
        return self.visit_default(node)

    def visit_strike(self, node: Strike) -> T:
        return self.visit_default(node)

    def visit_wave(self, node: Wave) -> T:
        return self.visit_default(node)

    def visit_superscript(self, node: Superscript) -> T:
        return self.visit_default(node)

    def visit_subscript(self, node: Subscript) -> T:
        return self.visit_default(node)

    def visit_highlight(self, node: Highlight) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_footnote_ref(self, node: FootnoteRef) -> T:
        return self.visit_default(node)

    def visit_inline_comment(self, node: InlineComment) -> T:
        return self.visit_default(node)

    def visit_inline_attrs(self, node: InlineAttrs) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case Heading():
                return self.visit_heading(node)
            case ContentTitle():
                return self.visit_content_title(node)
            case Quote():
                return self.visit_quote(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case Table():
                return self.visit_table(node)
            case TableRow():
                return self.visit_table_row(node)
            case TableCell():
                return self.visit_table_cell(node)
            case HorizontalRule():
                return self.visit_horizontal_rule(node)
            case Image():
                return self.visit_image(node)
            case Html():
                return self.visit_html(node)
            case Footnotes():
                return self.visit_footnotes(node)
            case FootnoteDef():
                return self.visit_footnote_def(node)
            case CommentBlock():
                return self.visit_comment_block(node)
            case DisabledBlock():
                return self.visit_disabled_block(node)
            case Include():
                return self.visit_include(node)
            case TaggedBlock():
                return self.visit_tagged_block(node)
            case RawBlock():
                return self.visit_raw_block(node)
            case Text():
                return self.visit_text(node)
            case CodeSpan():
                return self.visit_code_span(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strong():
                return self.visit_strong(node)
            case Underline():
                return self.visit_underline(node)
            case Strike():
                return self.visit_strike(node)
            case Wave():
                return self.visit_wave(node)
            case Superscript():
                return self.visit_superscript(node)
            case Subscript():
                return self.visit_subscript(node)
            case Highlight():
                return self.visit_highlight(node)
            case Link():
                return self.visit_link(node)
            case FootnoteRef():
                return self.visit_footnote_ref(node)
            case InlineComment():
                return self.visit_inline_comment(node)
            case InlineAttrs():
                return self.visit_inline_attrs(node)
            case _:
                return self.visit_default(node)


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Direct children of ``node`` in source order; () for leaves."""
    match node:
        case List(items=items):
            return items
        case Table(rows=rows):
            return rows
        case TableRow(cells=cells):
            return cells
        case TaggedBlock(child=child):
            return (child,)
        case _:
            return getattr(node, "children", ())


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children. This ensures ``fn``
    always receives nodes with already-transformed children.

    Return ``None`` from ``fn`` to remove a node from the tree. The root
    Document cannot be removed; returning None for it raises TypeError.
    Removing the only child of a TaggedBlock removes the TaggedBlock.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    if transformed is None:
        return None
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Produce a new node with children transformed; filter out None (removed) nodes."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    match node:
        case TaggedBlock(child=child):
            new_child = _transform_node(child, fn)
            if new_child is None:
                return None
            if new_child is not child:
                return dataclasses.replace(node, child=new_child)
        case List(items=items):
            new_items = _filtered(items)
            if new_items != items:
                return dataclasses.replace(node, items=new_items)
        case Table(rows=rows):
            new_rows = _filtered(rows)
            if new_rows != rows:
                return dataclasses.replace(node, rows=new_rows)
        case TableRow(cells=cells):
            new_cells = _filtered(cells)
            if new_cells != cells:
                return dataclasses.replace(node, cells=new_cells)
        case _:
            children = getattr(node, "children", None)
            if children:
                new_children = _filtered(children)
                if new_children != children:
                    return dataclasses.replace(node, children=new_children)  # type: ignore[call-arg]
    return node


def iter_blocks(blocks: Iterable[Block]) -> Iterator[Block]:
    """Yield every block in pre-order, descending into nested block content.

    Descends through tagged blocks, quotes, lists and their items, footnote
    sections and definitions, and comment blocks.

    Example:
        >>> [type(b).__name__ for b in iter_blocks(parse_document("@ a").children)]
        ['Quote', 'Paragraph']

    """
    for block in blocks:
        yield block
        match block:
            case TaggedBlock(child=child):
                yield from iter_blocks((child,))
            case List(items=items):
                yield from iter_blocks(items)
            case Quote(children=children) | ListItem(children=children) | CommentBlock(
                children=children
            ) | FootnoteDef(children=children) | Footnotes(children=children):
                yield from iter_blocks(children)


def iter_inline_containers(blocks: Iterable[Block]) -> Iterator[InlineOwner]:
    """Yield every node that owns parsed inline content, in tree order.

    Owners are paragraphs, headings, content titles and table cells.
    """
    for block in iter_blocks(blocks):
        match block:
            case Paragraph() | Heading() | ContentTitle():
                yield block
            case Table(rows=rows):
                for row in rows:
                    yield from row.cells


def walk_inlines(nodes: Iterable[Inline]) -> Iterator[Inline]:
    """Yield inline nodes in pre-order, descending into styled spans."""
    for node in nodes:
        yield node
        if isinstance(node, INLINE_CONTAINER_TYPES):
            yield from walk_inlines(node.children)  # type: ignore[attr-defined]


__all__ = [
    "BaseVisitor",
    "InlineOwner",
    "child_nodes",
    "iter_blocks",
    "iter_inline_containers",
    "transform",
    "walk_inlines",
]
