"""Tests for the visitor, transform and traversal helpers."""

import dataclasses

import pytest

from jianwen import parse_document
from jianwen.nodes import (
    FootnoteRef,
    Heading,
    Node,
    Paragraph,
    Strong,
    TableCell,
    TaggedBlock,
    Text,
)
from jianwen.visitor import (
    BaseVisitor,
    child_nodes,
    iter_blocks,
    iter_inline_containers,
    transform,
    walk_inlines,
)

SOURCE = """# Title *one*

- item [fn:a]
-- nested

@ quoted
@@ deeper

[tag=t]
Tagged *text*

[sheet]
| cell [fn:b] |
"""


class NodeCounter(BaseVisitor[None]):
    def __init__(self) -> None:
        self.names: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.names.append(type(node).__name__)


class RefCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.ids: list[str] = []

    def visit_footnote_ref(self, node: FootnoteRef) -> None:
        self.ids.append(node.identifier)


class TestBaseVisitor:
    """Dispatch and automatic child walking."""

    def test_specific_method(self) -> None:
        collector = RefCollector()
        collector.visit(parse_document(SOURCE))
        assert collector.ids == ["a", "b"]

    def test_reaches_every_container(self) -> None:
        counter = NodeCounter()
        counter.visit(parse_document(SOURCE))
        names = counter.names
        assert names[0] == "Document"
        for name in ("List", "ListItem", "Quote", "TaggedBlock", "Table", "TableRow", "TableCell"):
            assert name in names
        assert names.count("Strong") == 2

    def test_return_value(self) -> None:
        class LevelVisitor(BaseVisitor[int]):
            def visit_heading(self, node: Heading) -> int:
                return node.level

        doc = parse_document("## Two")
        assert LevelVisitor().visit(doc.children[0]) == 2


class TestChildNodes:
    """Children per node shape."""

    def test_shapes(self) -> None:
        doc = parse_document(SOURCE)
        heading, bullets, quote, tagged, table = doc.children
        assert child_nodes(bullets) == bullets.items
        assert child_nodes(tagged) == (tagged.child,)
        assert child_nodes(table) == table.rows
        assert child_nodes(table.rows[0]) == table.rows[0].cells
        assert child_nodes(heading) == heading.children
        assert child_nodes(Text(content="leaf")) == ()


class TestTransform:
    """Immutable bottom-up rewriting."""

    def test_demote_headings(self) -> None:
        doc = parse_document("# A\n\n## B")

        def demote(node: Node) -> Node:
            if isinstance(node, Heading):
                return dataclasses.replace(node, level=min(node.level + 1, 5))
            return node

        result = transform(doc, demote)
        assert [block.level for block in result.children] == [2, 3]
        assert [block.level for block in doc.children] == [1, 2]

    def test_remove_nodes(self) -> None:
        doc = parse_document("Keep *drop* this")
        result = transform(doc, lambda node: None if isinstance(node, Strong) else node)
        (paragraph,) = result.children
        assert [child.content for child in paragraph.children] == ["Keep ", " this"]

    def test_removing_tagged_child_removes_tag(self) -> None:
        doc = parse_document("[tag=t]\nGone\n\nStays")
        result = transform(
            doc,
            lambda node: None
            if isinstance(node, Paragraph) and node.children[0].content == "Gone"
            else node,
        )
        (paragraph,) = result.children
        assert not isinstance(paragraph, TaggedBlock)
        assert paragraph.children[0].content == "Stays"

    def test_identity_keeps_tree(self) -> None:
        doc = parse_document(SOURCE)
        assert transform(doc, lambda node: node) == doc

    def test_cannot_remove_root(self) -> None:
        with pytest.raises(TypeError):
            transform(parse_document("x"), lambda node: None)


class TestTraversal:
    """Pre-order generators."""

    def test_iter_blocks_order(self) -> None:
        doc = parse_document("@ a\n@@ b\n\n- x\n-- y")
        names = [type(block).__name__ for block in iter_blocks(doc.children)]
        assert names == [
            "Quote",
            "Paragraph",
            "Quote",
            "Paragraph",
            "List",
            "ListItem",
            "Paragraph",
            "List",
            "ListItem",
            "Paragraph",
        ]

    def test_inline_containers(self) -> None:
        doc = parse_document(SOURCE)
        owners = list(iter_inline_containers(doc.children))
        assert isinstance(owners[0], Heading)
        assert isinstance(owners[-1], TableCell)
        assert sum(isinstance(owner, Paragraph) for owner in owners) == 5

    def test_walk_inlines_descends(self) -> None:
        doc = parse_document("a *b /c/*")
        (paragraph,) = doc.children
        names = [type(node).__name__ for node in walk_inlines(paragraph.children)]
        assert names == ["Text", "Strong", "Text", "Emphasis", "Text"]
