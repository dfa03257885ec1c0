"""Reconciliation orchestration, summaries and input validation."""

from .orchestrator import reconcile
from .summary import summarize, build_detailed_report, BALANCE_TOLERANCE
from .validator import (
    ValidationResult,
    validate_reconciliation_data,
    validate_transaction,
    validate_transactions,
    validate_all,
)

__all__ = [
    "reconcile",
    "summarize",
    "build_detailed_report",
    "BALANCE_TOLERANCE",
    "ValidationResult",
    "validate_reconciliation_data",
    "validate_transaction",
    "validate_transactions",
    "validate_all",
]
