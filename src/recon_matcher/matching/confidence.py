"""
Weighted confidence model for candidate bank/book transaction pairs.

Each enabled factor contributes ``weight * factor_score`` to the total and
its weight to the normaliser. Factors that are disabled, or whose optional
fields are missing on either side, are left out of both, so they shift
importance to the remaining factors instead of lowering the score.
"""

from dataclasses import dataclass, field

from ..config import ReconciliationSettings
from ..models.transaction import Transaction
from .similarity import string_similarity

AMOUNT_WEIGHT = 0.4
DATE_WEIGHT = 0.3
DESCRIPTION_WEIGHT = 0.2
REFERENCE_WEIGHT = 0.1

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class ConfidenceBreakdown:
    """Per-factor contributions to a confidence score."""

    # factor name -> weighted score actually awarded
    scores: dict[str, float] = field(default_factory=dict)

    # factor name -> weight counted in the normaliser
    weights: dict[str, float] = field(default_factory=dict)

    @property
    def total_score(self) -> float:
        return sum(self.scores.values())

    @property
    def total_weight(self) -> float:
        return sum(self.weights.values())

    @property
    def confidence(self) -> float:
        total_weight = self.total_weight
        if total_weight <= 0:
            return 0.0
        return self.total_score / total_weight

    def add(self, factor: str, weight: float, score: float) -> None:
        self.weights[factor] = weight
        self.scores[factor] = weight * score

    def describe(self) -> str:
        """Human-readable factor listing for audit logs."""
        parts = [
            f"{name}={self.scores[name]:.3f}/{self.weights[name]:.1f}"
            for name in self.weights
        ]
        return f"confidence={self.confidence:.3f} ({', '.join(parts) or 'no factors'})"


def days_between(bank_txn: Transaction, book_txn: Transaction) -> float:
    """Absolute difference between two transaction timestamps in days."""
    delta = bank_txn.date - book_txn.date
    return abs(delta.total_seconds()) / SECONDS_PER_DAY


def _date_score(days: float, tolerance: float) -> float:
    if days > tolerance:
        return 0.0
    if tolerance == 0:
        # Only identical timestamps get here
        return 1.0
    return 1.0 - days / tolerance


def score_breakdown(
    bank_txn: Transaction,
    book_txn: Transaction,
    settings: ReconciliationSettings,
) -> ConfidenceBreakdown:
    """
    Compute the weighted per-factor scores of a candidate pair.

    Args:
        bank_txn: Bank transaction
        book_txn: Candidate book transaction
        settings: Resolved reconciliation settings

    Returns:
        Breakdown holding each enabled factor's weight and awarded score
    """
    breakdown = ConfidenceBreakdown()

    # No partial credit on amount
    if settings.match_by_amount:
        breakdown.add(
            "amount",
            AMOUNT_WEIGHT,
            1.0 if bank_txn.amount == book_txn.amount else 0.0,
        )

    if settings.match_by_date:
        days = days_between(bank_txn, book_txn)
        breakdown.add("date", DATE_WEIGHT, _date_score(days, settings.date_tolerance))

    if settings.match_by_description and bank_txn.description and book_txn.description:
        breakdown.add(
            "description",
            DESCRIPTION_WEIGHT,
            string_similarity(
                bank_txn.description.lower(), book_txn.description.lower()
            ),
        )

    if settings.match_by_reference and bank_txn.reference and book_txn.reference:
        breakdown.add(
            "reference",
            REFERENCE_WEIGHT,
            string_similarity(bank_txn.reference.lower(), book_txn.reference.lower()),
        )

    return breakdown


def calculate_match_confidence(
    bank_txn: Transaction,
    book_txn: Transaction,
    settings: ReconciliationSettings,
) -> float:
    """Normalised confidence (0.0-1.0) that two transactions are the same event."""
    return score_breakdown(bank_txn, book_txn, settings).confidence
