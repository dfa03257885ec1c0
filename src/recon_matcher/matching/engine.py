"""
Two-phase matching engine for transaction reconciliation.

Phase 1 pairs transactions that agree exactly on amount, date and reference.
Phase 2 pairs what is left by weighted confidence. Both phases walk the bank
transactions from the last to the first and remove each matched pair from
the working lists, so a transaction is matched at most once. Matching is
greedy: a book transaction goes to whichever bank transaction claims it
first, with no global re-optimisation.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional
import logging

from ..config import ReconciliationSettings, resolve_settings
from ..models.transaction import MatchedTransaction, MatchResults, Transaction
from .strategies import ExactMatchStrategy, FuzzyMatchStrategy, MatchingStrategy

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    """Matched pairs and the transactions left on each side."""

    matched: list[MatchedTransaction]
    unmatched_bank: list[Transaction]
    unmatched_book: list[Transaction]


class MatchingEngine:
    """
    Runs the enabled matching phases over copies of the input lists.

    The caller's lists and transactions are never modified; output
    structures reference the original transaction objects.
    """

    def __init__(self, settings: Optional[ReconciliationSettings] = None):
        """
        Initialize the matching engine.

        Args:
            settings: Resolved settings; defaults are used when omitted
        """
        self.settings = settings if settings is not None else resolve_settings()
        self.strategies = self._build_strategies()

    def _build_strategies(self) -> list[MatchingStrategy]:
        strategies: list[MatchingStrategy] = []
        if self.settings.auto_match_exact:
            strategies.append(ExactMatchStrategy())
        if self.settings.fuzzy_matching:
            strategies.append(FuzzyMatchStrategy(self.settings))
        return strategies

    def match(
        self,
        bank_transactions: list[Transaction],
        book_transactions: list[Transaction],
    ) -> EngineResult:
        """
        Match bank transactions against book transactions.

        Args:
            bank_transactions: Transactions from the bank feed
            book_transactions: Transactions from the internal books

        Returns:
            EngineResult with matched pairs and both unmatched remainders
        """
        start_time = datetime.now()
        logger.info(
            f"Starting matching: {len(bank_transactions)} bank txns, "
            f"{len(book_transactions)} book txns"
        )

        remaining_bank = list(bank_transactions)
        remaining_book = list(book_transactions)
        matched: list[MatchedTransaction] = []

        for strategy in self.strategies:
            found = self._run_phase(strategy, remaining_bank, remaining_book, matched)
            logger.debug(
                f"Phase {strategy.method.value}: {found} matches found, "
                f"{len(remaining_bank)} bank and {len(remaining_book)} book remaining"
            )

        elapsed = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Matching complete in {elapsed:.2f}s: {len(matched)} matches, "
            f"{len(remaining_bank)} bank-only, {len(remaining_book)} book-only"
        )

        return EngineResult(
            matched=matched,
            unmatched_bank=remaining_bank,
            unmatched_book=remaining_book,
        )

    def _run_phase(
        self,
        strategy: MatchingStrategy,
        remaining_bank: list[Transaction],
        remaining_book: list[Transaction],
        matched: list[MatchedTransaction],
    ) -> int:
        """
        Apply one strategy, removing matched pairs from the working lists.

        Bank transactions are visited from the end so deleting the current
        entry leaves the indices still to visit unchanged.

        Returns:
            Number of pairs matched in this phase
        """
        found = 0

        for i in range(len(remaining_bank) - 1, -1, -1):
            bank_txn = remaining_bank[i]
            hit = strategy.find_match(bank_txn, remaining_book)
            if hit is None:
                continue

            book_index, confidence = hit
            book_txn = remaining_book[book_index]
            matched.append(
                MatchedTransaction(
                    bank_transaction=bank_txn,
                    book_transaction=book_txn,
                    confidence=confidence,
                    match_method=strategy.method,
                )
            )
            del remaining_bank[i]
            del remaining_book[book_index]
            found += 1

        return found


def match_transactions(
    bank_transactions: list[Transaction],
    book_transactions: list[Transaction],
    settings: Optional[ReconciliationSettings] = None,
) -> EngineResult:
    """Convenience wrapper around :class:`MatchingEngine`."""
    return MatchingEngine(settings).match(bank_transactions, book_transactions)


def annotate_matches(
    results: MatchResults,
) -> tuple[list[Transaction], list[Transaction]]:
    """
    Produce copies of all transactions with their match state filled in.

    Matched copies get ``matched=True`` and the counterpart's id in
    ``match_id``; unmatched copies get ``matched=False``.

    Returns:
        Tuple of (bank transactions, book transactions), matched first
    """
    bank: list[Transaction] = []
    book: list[Transaction] = []

    for pair in results.matched:
        bank.append(
            replace(pair.bank_transaction, matched=True, match_id=pair.book_transaction.id)
        )
        book.append(
            replace(pair.book_transaction, matched=True, match_id=pair.bank_transaction.id)
        )

    bank.extend(replace(txn, matched=False, match_id=None) for txn in results.unmatched_bank)
    book.extend(replace(txn, matched=False, match_id=None) for txn in results.unmatched_book)

    return bank, book
