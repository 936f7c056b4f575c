"""
Query orchestration: the single entry point from typed text to results.

Steps, in order:
    1. pull a ``#type`` filter token out of the text
    2. drop commands outside the requested types
    3. drop hidden (and optionally disabled) commands
    4. empty text -> usage-ordered startup view
       otherwise  -> fuzzy filter, then rank
    5. cap the list at the display limit

Nothing raises out of ``search``/``query``; failures log and return [].
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from cmdpal.commands.command import Command
from cmdpal.commands.types import CommandType
from cmdpal.config.constants import MAX_RESULTS, TYPE_FILTER_PREFIX
from cmdpal.config.user_prefs import UserPreferences

from .fuzzy import FuzzyMatch, fuzzy_match
from .personalization import PersonalizationIndex
from .ranking import rank_by_usage, rank_scored

logger = logging.getLogger(__name__)

# A type token is a whole whitespace-delimited word such as "#tool"
_TYPE_TOKEN = re.compile(rf"(?<!\S){re.escape(TYPE_FILTER_PREFIX)}(\w+)(?!\S)")


@dataclass
class QueryFilters:
    """Caller-supplied restrictions on the candidate set."""

    types: list[CommandType] | None = None
    include_hidden: bool = False
    include_disabled: bool = True


@dataclass
class PaletteContext:
    """Everything the orchestrator reads besides the commands themselves."""

    index: PersonalizationIndex = field(default_factory=PersonalizationIndex.empty)
    prefs: UserPreferences = field(default_factory=UserPreferences)
    limit: int = MAX_RESULTS


@dataclass(frozen=True)
class ParsedQuery:
    text: str  # Query text with any recognised type token removed
    type: CommandType | None = None


@dataclass(frozen=True)
class QueryResult:
    """One ranked result."""

    command: Command
    score: float
    match: FuzzyMatch | None = None  # None for startup-view results

    @property
    def highlighted(self) -> str:
        return self.match.highlighted if self.match else self.command.name


def parse_query(text: str) -> ParsedQuery:
    """Extract the first ``#type`` token if it names a known command type.

    An unknown token is left in place and matched as literal text.
    """
    text = text.strip()
    token = _TYPE_TOKEN.search(text)
    if token is None:
        return ParsedQuery(text=text)

    command_type = CommandType.parse(token.group(1))
    if command_type is None:
        logger.debug(f"Unknown type filter {token.group(0)!r}, matching literally")
        return ParsedQuery(text=text)

    remaining = text[: token.start()] + " " + text[token.end():]
    return ParsedQuery(text=re.sub(r"\s+", " ", remaining).strip(), type=command_type)


def _candidates(
    commands: Iterable[Command],
    types: set[CommandType] | None,
    filters: QueryFilters,
    prefs: UserPreferences,
) -> list[Command]:
    candidates = list(commands)
    if types is not None:
        candidates = [c for c in candidates if c.type in types]
    if not filters.include_hidden:
        hidden = set(prefs.hidden_commands)
        candidates = [c for c in candidates if c.id not in hidden]
    if not filters.include_disabled:
        candidates = [c for c in candidates if c.enabled]
    return candidates


def startup_view(candidates: list[Command], context: PaletteContext) -> list[Command]:
    """Commands shown before anything is typed.

    The user's startup commands when any survive filtering, otherwise every
    candidate; ordered by usage only.
    """
    startup_ids = set(context.prefs.startup_commands)
    startup = [c for c in candidates if c.id in startup_ids]
    return rank_by_usage(startup or candidates, context.index)


def _search(
    text: str,
    commands: Iterable[Command],
    filters: QueryFilters,
    context: PaletteContext,
) -> list[QueryResult]:
    parsed = parse_query(text)

    types = set(filters.types) if filters.types else None
    if parsed.type is not None:
        types = {parsed.type} if types is None else types & {parsed.type}

    candidates = _candidates(commands, types, filters, context.prefs)

    if not parsed.text:
        return [
            QueryResult(command=c, score=0.0)
            for c in startup_view(candidates, context)[: context.limit]
        ]

    matches: dict[str, FuzzyMatch] = {}
    for command in candidates:
        match = fuzzy_match(command.name, parsed.text)
        if match:
            matches[command.id] = match

    matched = [c for c in candidates if c.id in matches]
    ranked = rank_scored(matched, parsed.text, context.index)
    return [
        QueryResult(command=c, score=s, match=matches[c.id])
        for s, c in ranked[: context.limit]
    ]


def search(
    text: str,
    commands: Iterable[Command],
    filters: QueryFilters | None = None,
    context: PaletteContext | None = None,
) -> list[QueryResult]:
    """Run a query and return ranked results with scores and highlights."""
    try:
        return _search(text, commands, filters or QueryFilters(), context or PaletteContext())
    except Exception as e:
        logger.exception(f"Query failed for {text!r}: {e}")
        return []


def query(
    text: str,
    commands: Iterable[Command],
    filters: QueryFilters | None = None,
    context: PaletteContext | None = None,
) -> list[Command]:
    """Run a query and return the ordered, bounded list of commands."""
    return [result.command for result in search(text, commands, filters, context)]
