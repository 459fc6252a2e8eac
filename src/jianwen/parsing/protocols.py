"""Protocols defining the parser mixin contracts.

Each mixin documents "Required Host Attributes/Methods" in its docstring;
this module turns the contract the block rules rely on into a
type-checkable Protocol.

Usage:
    Rule functions annotate their host parameter with the protocol::

        def parse_heading_rule(host: BlockRuleHost, info: LineInfo, trimmed: str) -> bool:
            ...

Thread Safety:
    Protocols are purely structural, with no runtime overhead.
"""

from collections.abc import Callable
from typing import Protocol, TypeAlias, runtime_checkable

from jianwen.diagnostics import ParseError
from jianwen.lexer.lines import LineInfo
from jianwen.location import SourceLocation
from jianwen.nodes import Block, BlockAttributes, Inline
from jianwen.parsing.blocks.pending import PendingBlockContext

BlockBuilder: TypeAlias = Callable[[BlockAttributes, SourceLocation], Block]


@runtime_checkable
class BlockRuleHost(Protocol):
    """Contract for delegated block rules.

    Provided by: BlockParsingCoreMixin
    Required by: the rules in :mod:`jianwen.parsing.blocks.rules`
    """

    _pos: int
    _errors: list[ParseError]
    _pending: PendingBlockContext

    def _emit(
        self,
        info: LineInfo,
        raw: str,
        build: BlockBuilder,
        *,
        fold_next: bool = False,
    ) -> None: ...


@runtime_checkable
class InlineParsingHost(Protocol):
    """Contract for inline content parsing.

    Provided by: InlineParsingMixin
    Required by: the inline enrichment pass of Parser
    """

    def parse_inlines(
        self, text: str, base_line: int = 1, base_column: int = 1
    ) -> tuple[Inline, ...]: ...


__all__ = [
    "BlockBuilder",
    "BlockRuleHost",
    "InlineParsingHost",
]
