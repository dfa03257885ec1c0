"""Matching engine and strategies."""

from .engine import MatchingEngine, EngineResult, match_transactions, annotate_matches
from .confidence import (
    ConfidenceBreakdown,
    calculate_match_confidence,
    score_breakdown,
)
from .similarity import string_similarity
from .strategies import (
    MatchingStrategy,
    ExactMatchStrategy,
    FuzzyMatchStrategy,
)

__all__ = [
    "MatchingEngine",
    "EngineResult",
    "match_transactions",
    "annotate_matches",
    "ConfidenceBreakdown",
    "calculate_match_confidence",
    "score_breakdown",
    "string_similarity",
    "MatchingStrategy",
    "ExactMatchStrategy",
    "FuzzyMatchStrategy",
]
