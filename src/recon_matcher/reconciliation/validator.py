"""
Input validation for reconciliation runs.

Validators collect human-readable error messages instead of raising, so
callers can report every problem at once before matching.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any
import logging

from ..models.transaction import ReconciliationData, Transaction, TransactionType
from ..utils.exceptions import DataValidationError

logger = logging.getLogger(__name__)

_VALID_TYPES = {t.value for t in TransactionType}


@dataclass
class ValidationResult:
    """Outcome of a validation pass."""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationResult", prefix: str = "") -> None:
        self.errors.extend(f"{prefix}{error}" for error in other.errors)

    def raise_for_errors(self) -> None:
        """Raise DataValidationError if any error was collected."""
        if self.errors:
            raise DataValidationError(self.errors)


def validate_reconciliation_data(data: ReconciliationData) -> ValidationResult:
    """
    Validate the structure of a reconciliation run's input.

    Checks account details, the statement period and that both transaction
    lists are present and non-empty. Individual transactions are checked
    by :func:`validate_transactions`.
    """
    result = ValidationResult()
    errors = result.errors

    account = data.account
    if not account:
        errors.append("Account information is required")
    else:
        if not account.name:
            errors.append("Account name is required")
        if not account.number:
            errors.append("Account number is required")
        if not account.currency:
            errors.append("Account currency is required")

    period = data.period
    if not period:
        errors.append("Statement period is required")
    else:
        if not period.start_date:
            errors.append("Start date is required")
        if not period.end_date:
            errors.append("End date is required")
        if period.start_date and period.end_date and period.end_date < period.start_date:
            errors.append("End date must be after start date")

    _check_transaction_list(data.bank_transactions, "Bank", errors)
    _check_transaction_list(data.book_transactions, "Book", errors)

    if errors:
        logger.debug(f"Reconciliation data failed validation: {len(errors)} error(s)")

    return result


def _check_transaction_list(transactions: Any, label: str, errors: list[str]) -> None:
    if not isinstance(transactions, list):
        errors.append(f"{label} transactions must be a list")
    elif not transactions:
        errors.append(f"At least one {label.lower()} transaction is required")


def validate_transaction(transaction: Transaction) -> ValidationResult:
    """Check a single transaction's required fields and type."""
    result = ValidationResult()
    errors = result.errors

    if not transaction.id:
        errors.append("Transaction ID is required")
    if not transaction.date:
        errors.append("Transaction date is required")
    if not transaction.description:
        errors.append("Transaction description is required")
    if transaction.amount is None:
        errors.append("Transaction amount is required")

    txn_type = transaction.type
    if not txn_type:
        errors.append("Transaction type is required")
    else:
        type_value = txn_type.value if isinstance(txn_type, TransactionType) else txn_type
        if type_value not in _VALID_TYPES:
            errors.append('Transaction type must be either "debit" or "credit"')

    return result


def validate_transactions(transactions: list[Transaction], source: str) -> ValidationResult:
    """
    Validate every transaction of one source list.

    Errors are prefixed with the source name and row position. Duplicate
    ids within the list are reported as well.
    """
    result = ValidationResult()

    for position, transaction in enumerate(transactions, start=1):
        label = transaction.id or f"#{position}"
        result.extend(validate_transaction(transaction), prefix=f"{source} transaction {label}: ")

    id_counts = Counter(t.id for t in transactions if t.id)
    for txn_id, count in id_counts.items():
        if count > 1:
            result.errors.append(f"{source} transaction ID {txn_id} appears {count} times")

    return result


def validate_all(data: ReconciliationData) -> ValidationResult:
    """Structural checks plus per-transaction checks for both sources."""
    result = validate_reconciliation_data(data)
    if isinstance(data.bank_transactions, list):
        result.extend(validate_transactions(data.bank_transactions, "Bank"))
    if isinstance(data.book_transactions, list):
        result.extend(validate_transactions(data.book_transactions, "Book"))
    return result
