"""Data models for reconciliation transactions and results."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import ReconciliationSettings


class TransactionType(Enum):
    """Transaction direction as reported by the source. Display only."""

    CREDIT = "credit"  # Money in
    DEBIT = "debit"  # Money out


class MatchMethod(Enum):
    """How a bank/book pair was matched."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    MANUAL = "manual"  # Reserved for callers, never produced by the engine


class ReconciliationStatus(Enum):
    """Outcome of a reconciliation run."""

    BALANCED = "balanced"
    UNBALANCED = "unbalanced"


@dataclass(frozen=True)
class Transaction:
    """
    One monetary movement as reported by either the bank or the books.

    Instances are never mutated by the matcher. The ``matched`` and
    ``match_id`` fields are only populated on copies produced by
    :func:`recon_matcher.matching.annotate_matches`.
    """

    # Unique within its source list
    id: str

    date: datetime

    description: str

    # Signed amount; the sign is independent of ``type``
    amount: Decimal

    type: TransactionType

    category: Optional[str] = None

    # Reference number (check number, wire reference, invoice id)
    reference: Optional[str] = None

    matched: Optional[bool] = None
    match_id: Optional[str] = None

    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id!r}, date={self.date:%Y-%m-%d}, "
            f"amount={self.amount}, desc={self.description[:30]!r})"
        )


@dataclass
class AccountInfo:
    """Descriptive context for the reconciled account."""

    name: str
    number: str
    currency: str = "USD"
    bank: Optional[str] = None
    opening_balance: Decimal = Decimal("0")
    closing_balance: Decimal = Decimal("0")


@dataclass
class StatementPeriod:
    """Statement period covered by both ledgers."""

    start_date: Optional[date]
    end_date: Optional[date]


@dataclass
class ReconciliationData:
    """Input of a single reconciliation run."""

    account: Optional[AccountInfo]
    period: Optional[StatementPeriod]
    bank_transactions: list[Transaction]
    book_transactions: list[Transaction]
    settings: Optional[Union["ReconciliationSettings", Mapping[str, Any]]] = None


@dataclass
class MatchedTransaction:
    """A bank transaction paired with a book transaction."""

    bank_transaction: Transaction
    book_transaction: Transaction

    # 1.0 for exact matches, computed score for fuzzy matches
    confidence: float

    match_method: MatchMethod

    @property
    def amount_variance(self) -> Decimal:
        """Bank amount minus book amount."""
        return self.bank_transaction.amount - self.book_transaction.amount


@dataclass
class ReconciliationSummary:
    """Totals and status of a reconciliation run."""

    # Sum of the bank-side amounts of all matched pairs
    matched_amount: Decimal
    unmatched_bank_amount: Decimal
    unmatched_book_amount: Decimal

    # unmatched_bank_amount - unmatched_book_amount
    discrepancy: Decimal

    status: ReconciliationStatus
    match_percentage: float

    @property
    def is_balanced(self) -> bool:
        return self.status == ReconciliationStatus.BALANCED


@dataclass
class MatchResults:
    """Output of a reconciliation run."""

    matched: list[MatchedTransaction]
    unmatched_bank: list[Transaction]
    unmatched_book: list[Transaction]
    summary: ReconciliationSummary

    @property
    def exact_matches(self) -> list[MatchedTransaction]:
        return [m for m in self.matched if m.match_method == MatchMethod.EXACT]

    @property
    def fuzzy_matches(self) -> list[MatchedTransaction]:
        return [m for m in self.matched if m.match_method == MatchMethod.FUZZY]


@dataclass
class DetailedReconciliationReport:
    """Summary enriched with account context and category breakdowns."""

    summary: ReconciliationSummary
    account: Optional[AccountInfo]
    matched_categories: dict[str, int] = field(default_factory=dict)
    unmatched_categories: dict[str, int] = field(default_factory=dict)
