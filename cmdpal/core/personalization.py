"""
Personalization index derived from the interaction log.

Three lookup tables feed the ranking:

- occurrence_count: how many times each command was ever chosen
- recency_rank: standing of each command by its latest selection; with n
  distinct commands in the log the newest has rank n and the oldest rank 1
- query_latch: for each exact past query, the command picked most often
  for it (ties go to the more recent pick)

The index is a pure function of the log and is rebuilt, never patched,
after every log mutation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .history import InteractionEvent


@dataclass(frozen=True)
class PersonalizationIndex:
    occurrence_count: dict[str, int] = field(default_factory=dict)
    recency_rank: dict[str, int] = field(default_factory=dict)
    query_latch: dict[str, str] = field(default_factory=dict)

    @classmethod
    def rebuild(cls, events: Iterable[InteractionEvent]) -> PersonalizationIndex:
        """Build the index from most-recent-first events."""
        events = list(events)
        return cls(
            occurrence_count=build_occurrence_count(events),
            recency_rank=build_recency_rank(events),
            query_latch=build_query_latches(events),
        )

    @classmethod
    def empty(cls) -> PersonalizationIndex:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.occurrence_count or self.recency_rank or self.query_latch)

    def occurrences(self, command_id: str) -> int:
        return self.occurrence_count.get(command_id, 0)

    def recency(self, command_id: str) -> float:
        """Recency contribution in (0, 1], or 0 for a command never chosen."""
        rank = self.recency_rank.get(command_id, 0)
        return rank / max(1, len(self.recency_rank))

    def latched(self, query: str) -> str | None:
        return self.query_latch.get(query)


def build_occurrence_count(events: Iterable[InteractionEvent]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for event in events:
        counts[event.command_id] = counts.get(event.command_id, 0) + 1
    return counts


def build_recency_rank(events: Iterable[InteractionEvent]) -> dict[str, int]:
    # First appearance in a most-recent-first scan is the latest selection
    distinct = list(dict.fromkeys(event.command_id for event in events))
    total = len(distinct)
    return {command_id: total - position for position, command_id in enumerate(distinct)}


def build_query_latches(events: Iterable[InteractionEvent]) -> dict[str, str]:
    """Map each non-empty past query to its most frequently chosen command.

    Candidates are counted in most-recent-first scan order and only a strictly
    higher count replaces the current best, so on a tie the command picked
    more recently wins. Empty queries (picks from the startup view) never
    latch.
    """
    per_query: dict[str, dict[str, int]] = {}
    for event in events:
        if event.query == "":
            continue
        counts = per_query.setdefault(event.query, {})
        counts[event.command_id] = counts.get(event.command_id, 0) + 1

    latches: dict[str, str] = {}
    for query, counts in per_query.items():
        best_id = None
        best_count = -1
        for command_id, count in counts.items():
            if count > best_count:
                best_id, best_count = command_id, count
        if best_id is not None:
            latches[query] = best_id
    return latches
