"""
Jianwen: parser for the Jianwen lightweight markup language

Turns Jianwen source into an immutable typed tree plus a list of
diagnostics. Malformed markup never raises: every problem degrades to
literal text or an unexpanded node and is reported as a ParseError.

Quick Start:
    >>> from jianwen import parse
    >>> result = parse("# Hello\\n\\nSay [red,bold]hi[/] to *all*")
    >>> result.document.children[0].level
    1
    >>> result.errors
    ()

Includes:
    >>> files = {"intro.jw": "Intro text"}
    >>> result = parse(
    ...     "[@](intro.jw)",
    ...     expand_include=True,
    ...     load_file=lambda path, stack: files.get(path),
    ... )
    >>> result.document.children[0].origin
    'intro.jw'

Pipeline:
    template metadata -> block structure -> inline content
    -> include expansion (when enabled) -> footnote check

Installation:
    pip install jianwen              # Core parser (zero deps)
"""

from dataclasses import replace

from jianwen.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from jianwen.diagnostics import ParseError, Severity
from jianwen.errors import ConfigError, JianwenError, ParseFailedError
from jianwen.location import SourceLocation
from jianwen.nodes import (
    Block,
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
    Inline,
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
from jianwen.parser import Parser, ParseResult, parse_source
from jianwen.postprocess import check_footnotes, expand_includes
from jianwen.serialization import from_dict, from_json, to_dict, to_json
from jianwen.utils.logger import get_logger
from jianwen.visitor import BaseVisitor, iter_blocks, iter_inline_containers, transform

__version__ = "0.1.0"

logger = get_logger(__name__)


def _resolve_config(config: ParseConfig | None, overrides: dict[str, object]) -> ParseConfig:
    base = config if config is not None else get_parse_config()
    if not overrides:
        return base
    valid_fields = {f for f in ParseConfig.__dataclass_fields__}
    for key in overrides:
        if key not in valid_fields:
            raise ConfigError(key, "unknown option")
    return replace(base, **overrides)  # type: ignore[arg-type]


def parse(
    source: str,
    config: ParseConfig | None = None,
    *,
    source_file: str | None = None,
    **overrides: object,
) -> ParseResult:
    """Parse Jianwen source into a document tree and diagnostics.

    Args:
        source: Jianwen source text
        config: Parse configuration; defaults to the active context config
        source_file: Optional source file path recorded in locations
        **overrides: ParseConfig fields replacing those of ``config``
            (``expand_include``, ``include_max_depth``, ``load_file``)

    Returns:
        ParseResult with the document and every diagnostic in the order
        it was produced

    Raises:
        ConfigError: If an override names an unknown option or holds an
            invalid value. Malformed source never raises.

    Example:
        >>> result = parse("Text [fn:x].")
        >>> [e.code for e in result.errors]
        ['footnote-undefined']

    """
    active = _resolve_config(config, overrides)
    errors: list[ParseError] = []
    document = parse_source(source, errors, source_file=source_file)

    if active.expand_include:
        document = expand_includes(
            document,
            errors,
            max_depth=active.include_max_depth,
            load_file=active.load_file,
        )
    check_footnotes(document.children, errors)

    logger.debug(
        "Parse finished: %d top-level blocks, %d diagnostics",
        len(document.children),
        len(errors),
    )
    return ParseResult(document=document, errors=tuple(errors))


def parse_document(
    source: str,
    config: ParseConfig | None = None,
    *,
    source_file: str | None = None,
    **overrides: object,
) -> Document:
    """Parse Jianwen source and return only the document tree.

    Diagnostics are discarded; use :func:`parse` to inspect them.
    """
    return parse(source, config, source_file=source_file, **overrides).document


__all__ = [
    "BaseVisitor",
    "Block",
    "BlockAttributes",
    "CodeBlock",
    "CodeSpan",
    "ColorAttribute",
    "CommentBlock",
    "ConfigError",
    "ContentTitle",
    "DisabledBlock",
    "Document",
    "Emphasis",
    "FootnoteDef",
    "FootnoteRef",
    "Footnotes",
    "Heading",
    "Highlight",
    "HorizontalRule",
    "Html",
    "Image",
    "Include",
    "Inline",
    "InlineAttributes",
    "InlineAttrs",
    "InlineComment",
    "JianwenError",
    "Link",
    "List",
    "ListItem",
    "Meta",
    "Node",
    "Paragraph",
    "ParseConfig",
    "ParseError",
    "ParseFailedError",
    "ParseResult",
    "Parser",
    "Quote",
    "RawBlock",
    "Severity",
    "SourceLocation",
    "Strike",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "TaggedBlock",
    "Text",
    "Underline",
    "Wave",
    "__version__",
    "from_dict",
    "from_json",
    "get_parse_config",
    "iter_blocks",
    "iter_inline_containers",
    "parse",
    "parse_config_context",
    "parse_document",
    "reset_parse_config",
    "set_parse_config",
    "to_dict",
    "to_json",
    "transform",
]
