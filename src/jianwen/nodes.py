"""Typed tree nodes for Jianwen.

All nodes are frozen dataclasses with slots. Every node carries two
explicit optional fields:

- ``location``: where the node starts in its source document
- ``origin``: the include target a cloned subtree came from

Node Hierarchy:
Node (base)
├── Block nodes
│   ├── Paragraph, Heading, ContentTitle, Quote
│   ├── List, ListItem
│   ├── CodeBlock, Table (TableRow, TableCell), HorizontalRule
│   ├── Image, Html, Footnotes, FootnoteDef
│   ├── CommentBlock, DisabledBlock, Include, TaggedBlock, RawBlock
│   └── Document (root)
└── Inline nodes
    ├── Text, CodeSpan, FootnoteRef
    ├── Emphasis, Strong, Underline, Strike, Wave, Superscript, Subscript
    ├── Highlight, Link
    └── InlineComment, InlineAttrs

Attributes (not nodes):
ColorAttribute, InlineAttributes, BlockAttributes, Meta

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.
Rewrites go through ``dataclasses.replace`` and produce new nodes.

"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, TypeAlias

from jianwen.location import SourceLocation

FontStyle: TypeAlias = Literal["italic", "bold", "heavy", "slim", "serif", "mono"]
Position: TypeAlias = Literal["L", "C", "R"]
Align: TypeAlias = Literal["left", "right", "center"]
ListKind: TypeAlias = Literal["bullet", "ordered", "task", "foldable"]
TaskStatus: TypeAlias = Literal["unknown", "in_progress", "not_done", "done"]

FONT_STYLES: tuple[FontStyle, ...] = ("italic", "bold", "heavy", "slim", "serif", "mono")


# =============================================================================
# Attributes
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorAttribute:
    """A color reference.

    ``kind`` is "hex" for tokens starting with ``#`` and "preset" otherwise.

    """

    kind: Literal["preset", "hex"]
    value: str

    @classmethod
    def from_token(cls, token: str) -> ColorAttribute | None:
        """Parse a color token; returns None for an empty token."""
        value = token.strip()
        if not value:
            return None
        if value.startswith("#"):
            return cls(kind="hex", value=value)
        return cls(kind="preset", value=value)


@dataclass(frozen=True, slots=True, kw_only=True)
class InlineAttributes:
    """Styling carried by ``[...]`` attribute expressions.

    Attributes:
        color: Text color, ``[red]`` or ``[#A14A00]``
        secondary_color: ``[!color]``; highlight fill or link underline
        font_size: 0.5 to 5 in steps of 0.5
        font_style: Ordered, duplicate-free style keywords

    """

    color: ColorAttribute | None = None
    secondary_color: ColorAttribute | None = None
    font_size: float | None = None
    font_style: tuple[FontStyle, ...] = ()

    def is_empty(self) -> bool:
        return (
            self.color is None
            and self.secondary_color is None
            and self.font_size is None
            and not self.font_style
        )

    def merge(self, other: InlineAttributes) -> InlineAttributes:
        """Overlay ``other`` on this one.

        Later fields win; font styles are unioned keeping first-seen order.
        """
        styles = list(self.font_style)
        for style in other.font_style:
            if style not in styles:
                styles.append(style)
        return replace(
            self,
            color=other.color or self.color,
            secondary_color=other.secondary_color or self.secondary_color,
            font_size=other.font_size or self.font_size,
            font_style=tuple(styles),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class BlockAttributes(InlineAttributes):
    """Layout attributes applied to a block by preceding attribute lines.

    Attributes:
        align: Content alignment within the block
        position: Starting column L/C/R
        truncate_left: Truncate on the left side of the current column
        truncate_right: Truncate on the right side of the current column
        fold: Collapsed by default
        same_line: Rendered beside the previous block (``[->]``)

    """

    align: Align | None = None
    position: Position | None = None
    truncate_left: bool = False
    truncate_right: bool = False
    fold: bool = False
    same_line: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class Meta:
    """Document metadata from the underscore-delimited template."""

    title: str | None = None
    author: str | None = None
    author_url: str | None = None
    time: str | None = None
    add_info: str | None = None
    tags: tuple[str, ...] = ()
    global_font: tuple[FontStyle, ...] = ()

    def is_empty(self) -> bool:
        return not (
            self.title
            or self.author
            or self.author_url
            or self.time
            or self.add_info
            or self.tags
            or self.global_font
        )


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all tree nodes.

    All nodes track their source location and, when cloned from an included
    file, the include target they originate from.

    """

    location: SourceLocation | None = None
    origin: str | None = None


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Text(Node):
    """Plain text content."""

    content: str


@dataclass(frozen=True, slots=True, kw_only=True)
class CodeSpan(Node):
    """Inline code: `code`. Content is not re-parsed."""

    code: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Emphasis(Node):
    """Italic text: /text/"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Strong(Node):
    """Bold text: *text*"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Underline(Node):
    """Underlined text: _text_"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Strike(Node):
    """Struck-through text: -text-"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Wave(Node):
    """Wavy-underlined text: ~text~"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Superscript(Node):
    """Superscript: ^text^"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Subscript(Node):
    """Subscript: ^^text^^"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Highlight(Node):
    """Highlighted text.

    mode "frame": ``text`` (two or more backticks)
    mode "marker": =text=

    ``color`` and ``fill_color`` come from an attribute expression placed
    directly before the highlight: ``[red,!yellow]=text=``.

    """

    mode: Literal["frame", "marker"]
    children: tuple[Inline, ...]
    color: ColorAttribute | None = None
    fill_color: ColorAttribute | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Link(Node):
    """Hyperlink: [link][color,!underline]text(url) or [color]text(url)"""

    href: str
    children: tuple[Inline, ...]
    color: ColorAttribute | None = None
    underline_color: ColorAttribute | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FootnoteRef(Node):
    """Footnote reference: [fn:id]"""

    identifier: str


@dataclass(frozen=True, slots=True, kw_only=True)
class InlineComment(Node):
    """Inline comment: [comment]text[/]"""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class InlineAttrs(Node):
    """Content scoped by an attribute expression: [red,bold]text[/]"""

    attrs: InlineAttributes
    children: tuple[Inline, ...]


# PEP 695 type alias for inline elements
Inline: TypeAlias = (
    Text
    | CodeSpan
    | Emphasis
    | Strong
    | Underline
    | Strike
    | Wave
    | Superscript
    | Subscript
    | Highlight
    | Link
    | FootnoteRef
    | InlineComment
    | InlineAttrs
)

# Inline nodes whose ``children`` hold further inline nodes
INLINE_CONTAINER_TYPES: tuple[type, ...] = (
    Emphasis,
    Strong,
    Underline,
    Strike,
    Wave,
    Superscript,
    Subscript,
    Highlight,
    Link,
    InlineComment,
    InlineAttrs,
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Paragraph(Node):
    """A run of text lines."""

    children: tuple[Inline, ...]
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Heading(Node):
    """Heading: ``# H1`` to ``##### H5``; ``#+ H1`` is foldable.

    A foldable heading folds the block that follows it.

    """

    level: Literal[1, 2, 3, 4, 5]
    children: tuple[Inline, ...]
    foldable: bool = False
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ContentTitle(Node):
    """Standalone content title: ``> text``"""

    children: tuple[Inline, ...]
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Quote(Node):
    """Quote: ``@ text``; ``@@`` nests one level deeper."""

    level: int
    children: tuple[Block, ...]
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ListItem(Node):
    """List item.

    ``indent`` is the syntax level (``-`` is 1, ``--`` is 2, ``1.2.`` is 2).
    ``ordinal`` is set for ordered and foldable items.

    """

    kind: ListKind
    indent: int
    children: tuple[Block, ...]
    ordinal: str | None = None
    task_status: TaskStatus | None = None
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class List(Node):
    """List of items of one kind."""

    kind: ListKind
    items: tuple[ListItem, ...]
    ordered_style: Literal["decimal"] | None = None
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CodeBlock(Node):
    """Fenced code block.

    ``html_like`` is set for ``[html]`` fences, whose content is raw HTML.

    """

    code: str
    language: str | None = None
    html_like: bool = False
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TableCell(Node):
    """Table cell."""

    children: tuple[Inline, ...]
    align: Align | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TableRow(Node):
    """Table row."""

    cells: tuple[TableCell, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class Table(Node):
    """Table introduced by a ``[sheet]`` attribute line."""

    rows: tuple[TableRow, ...]
    align: tuple[Align, ...] | None = None
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class HorizontalRule(Node):
    """Horizontal rule: ``---`` solid, ``***`` dashed, ``===`` bold, ``~~~`` wavy."""

    style: Literal["solid", "dashed", "bold", "wavy"]
    color: ColorAttribute | None = None
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Image(Node):
    """Image: ``[img,rounded](url)``; a following ``> text`` sets the title."""

    url: str
    title: str | None = None
    shape: Literal["square", "rounded"] | None = None
    rounded_radius: float | None = None
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Html(Node):
    """HTML reference: ``[html](path)``"""

    source: str | None = None
    value: str | None = None
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FootnoteDef(Node):
    """Footnote definition: ``[fn=id]`` followed by content lines."""

    identifier: str
    children: tuple[Block, ...]
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Footnotes(Node):
    """Footnote section opened by ``[footnotes]``."""

    children: tuple[FootnoteDef, ...]
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CommentBlock(Node):
    """Block wrapped by a ``[comment]`` attribute line."""

    children: tuple[Block, ...]
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DisabledBlock(Node):
    """Block preceded by ``[disable]``; raw text, no parsing."""

    raw: str
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Include(Node):
    """Include: ``[@](path)`` (mode "file") or ``[@=name]`` (mode "tag")."""

    mode: Literal["file", "tag"]
    target: str
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class TaggedBlock(Node):
    """Block named by ``[tag=name]`` / ``[t=name]`` / ``[f=name]``."""

    name: str
    child: Block
    block_attrs: BlockAttributes | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RawBlock(Node):
    """Single unrecognized line starting with ``[``, kept verbatim."""

    value: str
    block_attrs: BlockAttributes | None = None


# PEP 695 type alias for block elements
Block: TypeAlias = (
    Paragraph
    | Heading
    | ContentTitle
    | Quote
    | List
    | ListItem
    | CodeBlock
    | Table
    | HorizontalRule
    | Image
    | Html
    | Footnotes
    | FootnoteDef
    | CommentBlock
    | DisabledBlock
    | Include
    | TaggedBlock
    | RawBlock
)


@dataclass(frozen=True, slots=True, kw_only=True)
class Document(Node):
    """Root node.

    Attributes:
        children: Top-level blocks in document order
        meta: Metadata from the initialization template, if any
        source: Original input text

    """

    children: tuple[Block, ...]
    meta: Meta | None = None
    source: str = ""


def block_attributes_of(node: Node) -> BlockAttributes | None:
    """Return a block's attributes, or None for nodes without them."""
    return getattr(node, "block_attrs", None)
