"""
Ranking of fuzzy-matched commands.

The score is additive:

    chunk score   sum over query chunks and name chunks of
                  1/(j+1) for a substring hit in name chunk j,
                  +1 if the name chunk starts with the query chunk,
                  +2 if it equals the query chunk
    exact name    +5 when the whole name equals the whole query
    latch         +10 when this query most often resolved to the command
    recency       recency_rank / max(1, distinct commands in history)
    occurrence    +2.5 when the command was ever chosen

Exact and latch bonuses are large enough to act as near-overrides; the
others only nudge textual relevance.
"""

from __future__ import annotations

from collections.abc import Iterable

from cmdpal.commands.command import Command
from cmdpal.config.constants import (
    EXACT_NAME_BONUS,
    LATCH_BONUS,
    OCCURRENCE_BONUS,
    PREFIX_BONUS,
    WORD_MATCH_BONUS,
)

from .personalization import PersonalizationIndex


def split_chunks(text: str) -> list[str]:
    """Lower-cased whitespace-separated chunks."""
    return text.lower().split()


def chunk_score(query: str, name: str) -> float:
    """Weighted substring/prefix/word matches of query chunks in name chunks."""
    name_chunks = split_chunks(name)
    total = 0.0
    for query_chunk in split_chunks(query):
        for j, name_chunk in enumerate(name_chunks):
            if query_chunk not in name_chunk:
                continue
            weight = 1 / (j + 1)  # earlier chunks matter more
            if name_chunk.startswith(query_chunk):
                weight += PREFIX_BONUS
            if name_chunk == query_chunk:
                weight += WORD_MATCH_BONUS
            total += weight
    return total


def personalization_score(command: Command, query: str, index: PersonalizationIndex) -> float:
    score = 0.0
    if index.latched(query) == command.id:
        score += LATCH_BONUS
    score += index.recency(command.id)
    if index.occurrences(command.id) > 0:
        score += OCCURRENCE_BONUS
    return score


def score(command: Command, query: str, index: PersonalizationIndex | None = None) -> float:
    """Total relevance of ``command`` for ``query``; never negative."""
    index = index or PersonalizationIndex.empty()
    total = chunk_score(query, command.name)
    if command.name.lower() == query.lower():
        total += EXACT_NAME_BONUS
    return total + personalization_score(command, query, index)


def rank_scored(
    commands: Iterable[Command],
    query: str,
    index: PersonalizationIndex | None = None,
) -> list[tuple[float, Command]]:
    """Score every command once and sort by descending score.

    Python's sort is stable, so equal scores keep their input order.
    """
    index = index or PersonalizationIndex.empty()
    scored = [(score(command, query, index), command) for command in commands]
    scored.sort(key=lambda item: -item[0])
    return scored


def rank(
    commands: Iterable[Command],
    query: str,
    index: PersonalizationIndex | None = None,
) -> list[Command]:
    """Sort commands by descending score."""
    return [command for _, command in rank_scored(commands, query, index)]


def rank_by_usage(
    commands: Iterable[Command],
    index: PersonalizationIndex | None = None,
) -> list[Command]:
    """Order commands most-used first, then most recent, ignoring name text.

    With no history every key ties and registration order is kept.
    """
    index = index or PersonalizationIndex.empty()
    return sorted(
        commands,
        key=lambda c: (-index.occurrences(c.id), -index.recency_rank.get(c.id, 0)),
    )
