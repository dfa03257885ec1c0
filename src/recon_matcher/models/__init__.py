"""Data models for reconciliation."""

from .transaction import (
    Transaction,
    TransactionType,
    MatchMethod,
    ReconciliationStatus,
    AccountInfo,
    StatementPeriod,
    ReconciliationData,
    MatchedTransaction,
    ReconciliationSummary,
    MatchResults,
    DetailedReconciliationReport,
)

__all__ = [
    "Transaction",
    "TransactionType",
    "MatchMethod",
    "ReconciliationStatus",
    "AccountInfo",
    "StatementPeriod",
    "ReconciliationData",
    "MatchedTransaction",
    "ReconciliationSummary",
    "MatchResults",
    "DetailedReconciliationReport",
]
