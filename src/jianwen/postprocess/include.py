"""Include expansion.

Replaces include blocks with the content they reference:

- ``[@=name]`` (tag mode) copies the child of the first block tagged
  ``name``. Lookup uses the first-definition-wins index of top-level
  tagged blocks, then a search of the whole tree.
- ``[@](path)`` (file mode) loads ``path`` through the configured loader,
  parses it as a document of its own and splices in copies of its blocks,
  each stamped with ``origin=path``.

File includes are guarded by a depth limit and a stack of in-flight
targets. Every unresolved include stays in the tree unchanged and leaves
one warning at its own location.

Within one top-level parse each file target is parsed once; later
occurrences reuse the cached result and re-emit its diagnostics, prefixed
with ``[include:path]``, so every occurrence reports what it pulled in.

Thread Safety:
    IncludeContext is per top-level parse; do not share one between threads.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from jianwen.config import FileLoader
from jianwen.diagnostics import (
    INCLUDE_CYCLE,
    INCLUDE_LOAD_FAILED,
    INCLUDE_MAX_DEPTH,
    INCLUDE_NO_LOADER,
    INCLUDE_TAG_NOT_FOUND,
    ParseError,
    prefix_include_error,
    report_warning,
)
from jianwen.nodes import (
    Block,
    CommentBlock,
    Document,
    FootnoteDef,
    Footnotes,
    Include,
    List,
    ListItem,
    Quote,
    TaggedBlock,
)
from jianwen.parser import parse_source
from jianwen.postprocess.clone import clone_block
from jianwen.utils.logger import get_logger
from jianwen.visitor import iter_blocks

logger = get_logger(__name__)


def build_tag_index(blocks: Sequence[Block]) -> dict[str, TaggedBlock]:
    """Index top-level tagged blocks by name; the first definition wins."""
    index: dict[str, TaggedBlock] = {}
    for block in blocks:
        if isinstance(block, TaggedBlock):
            index.setdefault(block.name, block)
    return index


def find_tagged_block(blocks: Sequence[Block], name: str) -> TaggedBlock | None:
    """First tagged block named ``name`` anywhere in ``blocks``, in tree order."""
    for block in iter_blocks(blocks):
        if isinstance(block, TaggedBlock) and block.name == name:
            return block
    return None


@dataclass(slots=True)
class IncludeContext:
    """State shared by every expansion within one top-level parse.

    Attributes:
        max_depth: Maximum number of nested file includes
        load_file: Loader for file-mode targets, if any
        stack: File targets currently being expanded, outermost first
        cache: Parsed documents and their raw diagnostics, by target
        errors: Diagnostics list of the top-level parse

    """

    max_depth: int
    load_file: FileLoader | None
    errors: list[ParseError]
    stack: list[str] = field(default_factory=list)
    cache: dict[str, tuple[Document, tuple[ParseError, ...]]] = field(default_factory=dict)


class IncludeExpander:
    """Expands the includes of one document.

    Each expanded file gets its own expander (its own tag index and
    document) over the shared :class:`IncludeContext`.
    """

    __slots__ = ("_context", "_document", "_tag_index")

    def __init__(self, document: Document, context: IncludeContext) -> None:
        self._document = document
        self._context = context
        self._tag_index = build_tag_index(document.children)

    def expand(self) -> Document:
        return replace(self._document, children=self.expand_blocks(self._document.children))

    def expand_blocks(self, blocks: Sequence[Block]) -> tuple[Block, ...]:
        result: list[Block] = []
        for block in blocks:
            match block:
                case Include():
                    result.extend(self._expand_include(block))
                case Quote(children=children) | ListItem(children=children) | FootnoteDef(
                    children=children
                ) | CommentBlock(children=children):
                    result.append(replace(block, children=self.expand_blocks(children)))
                case List(items=items):
                    result.append(replace(block, items=self.expand_blocks(items)))
                case Footnotes(children=defs):
                    result.append(replace(block, children=self.expand_blocks(defs)))
                case _:
                    result.append(block)
        return tuple(result)

    def _warn(self, include: Include, message: str, code: str) -> tuple[Block, ...]:
        location = include.location
        report_warning(
            self._context.errors,
            message,
            location.lineno if location is not None else 1,
            location.col_offset if location is not None else None,
            code=code,
        )
        logger.debug("Include %s left unexpanded: %s", include.target, message)
        return (include,)

    def _expand_include(self, include: Include) -> tuple[Block, ...]:
        if include.mode == "tag":
            return self._expand_tag(include)
        return self._expand_file(include)

    def _expand_tag(self, include: Include) -> tuple[Block, ...]:
        tagged = self._tag_index.get(include.target) or find_tagged_block(
            self._document.children, include.target
        )
        if tagged is None:
            return self._warn(
                include,
                f'Include tag target "{include.target}" not found',
                INCLUDE_TAG_NOT_FOUND,
            )
        return (clone_block(tagged.child),)

    def _expand_file(self, include: Include) -> tuple[Block, ...]:
        context = self._context
        target = include.target
        if len(context.stack) >= context.max_depth:
            return self._warn(
                include,
                f'Include max depth {context.max_depth} exceeded for target "{target}"',
                INCLUDE_MAX_DEPTH,
            )
        if target in context.stack:
            return self._warn(
                include,
                f'Include cycle detected for target "{target}"',
                INCLUDE_CYCLE,
            )
        if context.load_file is None:
            return self._warn(
                include,
                f'IncludeBlock with mode "file" requires loadFile option to expand target "{target}"',
                INCLUDE_NO_LOADER,
            )

        cached = context.cache.get(target)
        if cached is None:
            cached = self._load(include, context.load_file)
            if cached is None:
                return self._warn(
                    include,
                    f'Include target "{target}" could not be loaded',
                    INCLUDE_LOAD_FAILED,
                )
            context.cache[target] = cached
        else:
            logger.debug("Include cache hit for %s", target)

        document, child_errors = cached
        context.errors.extend(prefix_include_error(error, target) for error in child_errors)
        return tuple(clone_block(block, origin=target) for block in document.children)

    def _load(
        self, include: Include, load_file: FileLoader
    ) -> tuple[Document, tuple[ParseError, ...]] | None:
        """Load, parse and expand a file target; None when the loader has nothing."""
        context = self._context
        target = include.target
        stack = (*context.stack, target)
        source = load_file(target, stack)
        if source is None:
            return None

        logger.debug("Loaded include %s (%d chars, depth %d)", target, len(source), len(stack))
        child_errors: list[ParseError] = []
        document = parse_source(source, child_errors, source_file=target)

        # nested includes report into the child's diagnostics
        child_context = IncludeContext(
            max_depth=context.max_depth,
            load_file=load_file,
            errors=child_errors,
            stack=context.stack,
            cache=context.cache,
        )
        context.stack.append(target)
        try:
            document = IncludeExpander(document, child_context).expand()
        finally:
            context.stack.pop()
        return document, tuple(child_errors)


def expand_includes(
    document: Document,
    errors: list[ParseError],
    *,
    max_depth: int,
    load_file: FileLoader | None,
) -> Document:
    """Expand every include in ``document``.

    Args:
        document: Parsed document
        errors: Diagnostics list to append warnings to
        max_depth: Maximum number of nested file includes
        load_file: Loader called as ``load_file(path, active_stack)``

    Returns:
        New document with resolved includes replaced
    """
    context = IncludeContext(max_depth=max_depth, load_file=load_file, errors=errors)
    return IncludeExpander(document, context).expand()


__all__ = [
    "IncludeContext",
    "IncludeExpander",
    "build_tag_index",
    "expand_includes",
    "find_tagged_block",
]
