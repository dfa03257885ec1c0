"""Reconciliation totals, discrepancy and status."""

from collections import Counter
from decimal import Decimal
from typing import Iterable, Optional

from ..models.transaction import (
    AccountInfo,
    DetailedReconciliationReport,
    MatchedTransaction,
    ReconciliationStatus,
    ReconciliationSummary,
    Transaction,
)

# Discrepancies smaller than this count as balanced
BALANCE_TOLERANCE = Decimal("0.01")

UNCATEGORIZED = "Uncategorized"


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, Decimal("0"))


def summarize(
    matched: list[MatchedTransaction],
    unmatched_bank: list[Transaction],
    unmatched_book: list[Transaction],
) -> ReconciliationSummary:
    """
    Calculate the reconciliation summary.

    The matched amount sums the bank side of each pair, even where a fuzzy
    pair's book amount differs.

    Args:
        matched: Matched pairs
        unmatched_bank: Bank transactions without a counterpart
        unmatched_book: Book transactions without a counterpart

    Returns:
        Reconciliation summary
    """
    matched_amount = _total(m.bank_transaction.amount for m in matched)
    unmatched_bank_amount = _total(t.amount for t in unmatched_bank)
    unmatched_book_amount = _total(t.amount for t in unmatched_book)

    discrepancy = unmatched_bank_amount - unmatched_book_amount

    total_count = len(matched) + len(unmatched_bank) + len(unmatched_book)
    if total_count > 0:
        match_percentage = len(matched) / total_count * 100
    else:
        match_percentage = 100.0

    status = (
        ReconciliationStatus.BALANCED
        if abs(discrepancy) < BALANCE_TOLERANCE
        else ReconciliationStatus.UNBALANCED
    )

    return ReconciliationSummary(
        matched_amount=matched_amount,
        unmatched_bank_amount=unmatched_bank_amount,
        unmatched_book_amount=unmatched_book_amount,
        discrepancy=discrepancy,
        status=status,
        match_percentage=match_percentage,
    )


def _count_categories(transactions: Iterable[Transaction]) -> dict[str, int]:
    return dict(Counter(t.category or UNCATEGORIZED for t in transactions))


def build_detailed_report(
    account: Optional[AccountInfo],
    matched: list[MatchedTransaction],
    unmatched_bank: list[Transaction],
    unmatched_book: list[Transaction],
) -> DetailedReconciliationReport:
    """Summary plus matched/unmatched counts per category."""
    return DetailedReconciliationReport(
        summary=summarize(matched, unmatched_bank, unmatched_book),
        account=account,
        # Pairs are categorised by their bank side
        matched_categories=_count_categories(m.bank_transaction for m in matched),
        unmatched_categories=_count_categories([*unmatched_bank, *unmatched_book]),
    )
