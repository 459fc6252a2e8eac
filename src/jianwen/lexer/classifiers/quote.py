"""Quote and content-title classifiers.

    @ text       quote, level 1
    @@ text      quote, level 2
    > text       content title (or the title of the image above it)
"""

from __future__ import annotations

import re
from typing import NamedTuple

_QUOTE_RE = re.compile(r"^(@+)\s+(.+)$")
_CONTENT_TITLE_RE = re.compile(r"^>\s+(.+)$")


class QuoteMatch(NamedTuple):
    level: int
    text: str


def match_quote(content: str) -> QuoteMatch | None:
    m = _QUOTE_RE.match(content)
    if m is None:
        return None
    return QuoteMatch(len(m.group(1)), m.group(2).rstrip())


def normalize_quote_line(match: QuoteMatch, base_level: int) -> str | None:
    """Rewrite a quote line relative to the quote that opened the run.

    Lines at the opening level lose their marker; deeper lines keep one
    ``@`` per extra level so the recursive parse sees a nested quote.
    Shallower lines return None and end the run.

    Example:
        >>> normalize_quote_line(QuoteMatch(3, "deep"), 1)
        '@@ deep'

    """
    if match.level < base_level:
        return None
    relative = match.level - base_level
    if relative == 0:
        return match.text
    return f"{'@' * relative} {match.text}"


def match_content_title(content: str) -> str | None:
    """Return the title text of a ``> text`` line."""
    m = _CONTENT_TITLE_RE.match(content)
    if m is None:
        return None
    return m.group(1).rstrip()
