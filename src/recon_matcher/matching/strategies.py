"""
Matching strategies for transaction reconciliation.
Each strategy picks at most one book candidate for a bank transaction.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

from ..config import ReconciliationSettings
from ..models.transaction import MatchMethod, Transaction
from .confidence import calculate_match_confidence, score_breakdown

logger = logging.getLogger(__name__)


class MatchingStrategy(ABC):
    """Abstract base class for matching strategies."""

    method: MatchMethod

    @abstractmethod
    def find_match(
        self,
        bank_txn: Transaction,
        book_candidates: list[Transaction],
    ) -> Optional[tuple[int, float]]:
        """
        Find the book transaction that matches a bank transaction.

        Args:
            bank_txn: Bank transaction to match
            book_candidates: Book transactions still available for matching

        Returns:
            Tuple of (index into ``book_candidates``, confidence 0.0-1.0),
            or None when nothing qualifies
        """
        pass


class ExactMatchStrategy(MatchingStrategy):
    """
    Exact match on amount, date and reference.

    References compare strictly, so two transactions that both lack a
    reference agree on that field.
    """

    method = MatchMethod.EXACT

    def find_match(
        self,
        bank_txn: Transaction,
        book_candidates: list[Transaction],
    ) -> Optional[tuple[int, float]]:
        """First candidate, in list order, agreeing on all three fields."""
        for index, book_txn in enumerate(book_candidates):
            if (
                book_txn.amount == bank_txn.amount
                and book_txn.date == bank_txn.date
                and book_txn.reference == bank_txn.reference
            ):
                return index, 1.0
        return None


class FuzzyMatchStrategy(MatchingStrategy):
    """Best weighted-confidence candidate at or above the fuzzy threshold."""

    method = MatchMethod.FUZZY

    def __init__(self, settings: ReconciliationSettings):
        """
        Initialize with resolved settings.

        Args:
            settings: Factor switches, date tolerance and threshold
        """
        self.settings = settings
        self.threshold = settings.fuzzy_threshold

    def find_match(
        self,
        bank_txn: Transaction,
        book_candidates: list[Transaction],
    ) -> Optional[tuple[int, float]]:
        """Scan every candidate; ties keep the earliest index."""
        best: Optional[tuple[int, float]] = None

        for index, book_txn in enumerate(book_candidates):
            confidence = calculate_match_confidence(bank_txn, book_txn, self.settings)
            if confidence >= self.threshold and (best is None or confidence > best[1]):
                best = (index, confidence)

        if best is not None and logger.isEnabledFor(logging.DEBUG):
            book_txn = book_candidates[best[0]]
            breakdown = score_breakdown(bank_txn, book_txn, self.settings)
            logger.debug(f"Fuzzy candidate {bank_txn.id} -> {book_txn.id}: {breakdown.describe()}")

        return best
