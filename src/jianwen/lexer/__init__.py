"""Character and line primitives for Jianwen.

- :class:`CharScanner`: character cursor used by the inline parser
- :func:`get_line_info`: layout-tab classification used by the block parser
- :mod:`jianwen.lexer.classifiers`: pure line matchers for block syntax

"""

from jianwen.lexer.lines import (
    LineInfo,
    get_line_info,
    position_from_tabs,
    shift_position_right,
    split_lines,
)
from jianwen.lexer.scanner import CharScanner, ScannerMark

__all__ = [
    "CharScanner",
    "LineInfo",
    "ScannerMark",
    "get_line_info",
    "position_from_tabs",
    "shift_position_right",
    "split_lines",
]
