"""
Query ranking and personalization engine.

Provides:
- fuzzy_match: greedy subsequence matching with highlighting
- score / rank: chunk scoring plus personalization bonuses
- PersonalizationIndex: occurrence, recency and latch tables
- InteractionLog / HistoryStore: the persisted selection history
- query / search: the orchestrating entry point
"""

from .fuzzy import FuzzyMatch, fuzzy_match
from .history import HistoryStore, InteractionEvent, InteractionLog
from .personalization import PersonalizationIndex
from .query import PaletteContext, QueryFilters, QueryResult, parse_query, query, search
from .ranking import rank, score

__all__ = [
    "FuzzyMatch",
    "HistoryStore",
    "InteractionEvent",
    "InteractionLog",
    "PaletteContext",
    "PersonalizationIndex",
    "QueryFilters",
    "QueryResult",
    "fuzzy_match",
    "parse_query",
    "query",
    "rank",
    "score",
    "search",
]
