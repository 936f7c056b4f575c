"""Greedy subsequence matching with highlighting."""

from __future__ import annotations

import re
from dataclasses import dataclass

from rich.text import Text

from cmdpal.config.constants import HIGHLIGHT_CLOSE, HIGHLIGHT_OPEN, HIGHLIGHT_STYLE

_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True)
class FuzzyMatch:
    """Result of matching a query against a command name."""

    name: str
    is_match: bool
    positions: tuple[int, ...] = ()  # Indexes of matched characters in ``name``

    def __bool__(self) -> bool:
        return self.is_match

    @property
    def highlighted(self) -> str:
        """Name with every matched character wrapped in highlight markers."""
        return self.highlight()

    def highlight(self, open_tag: str = HIGHLIGHT_OPEN, close_tag: str = HIGHLIGHT_CLOSE) -> str:
        matched = set(self.positions)
        return "".join(
            f"{open_tag}{char}{close_tag}" if i in matched else char
            for i, char in enumerate(self.name)
        )

    def to_text(self, style: str = HIGHLIGHT_STYLE) -> Text:
        """Rich Text of the name with matched characters styled."""
        text = Text(self.name)
        for i in self.positions:
            text.stylize(style, i, i + 1)
        return text


def clean_query(query: str) -> str:
    """Strip all whitespace and lower-case the query."""
    return _WHITESPACE.sub("", query).lower()


def fuzzy_match(name: str, query: str) -> FuzzyMatch:
    """Check whether the query is a subsequence of ``name``.

    Single left-to-right pass: each name character that equals the next
    pending query character (case-insensitively) consumes it. There is no
    backtracking, so the first available occurrence is always taken. The
    whole query matches iff every character was consumed.
    """
    q = clean_query(query)
    positions: list[int] = []
    pos = 0
    for i, char in enumerate(name):
        if pos < len(q) and char.lower() == q[pos]:
            positions.append(i)
            pos += 1

    if pos != len(q):
        return FuzzyMatch(name=name, is_match=False)
    return FuzzyMatch(name=name, is_match=True, positions=tuple(positions))
