"""Bank-to-book transaction reconciliation matcher."""

__version__ = "0.1.0"

from .config import ReconciliationSettings, resolve_settings
from .matching import MatchingEngine, annotate_matches, calculate_match_confidence, string_similarity
from .models import (
    AccountInfo,
    MatchedTransaction,
    MatchMethod,
    MatchResults,
    ReconciliationData,
    ReconciliationStatus,
    ReconciliationSummary,
    StatementPeriod,
    Transaction,
    TransactionType,
)
from .reconciliation import (
    build_detailed_report,
    reconcile,
    summarize,
    validate_reconciliation_data,
    validate_transaction,
)

__all__ = [
    "__version__",
    "ReconciliationSettings",
    "resolve_settings",
    "MatchingEngine",
    "annotate_matches",
    "calculate_match_confidence",
    "string_similarity",
    "AccountInfo",
    "MatchedTransaction",
    "MatchMethod",
    "MatchResults",
    "ReconciliationData",
    "ReconciliationStatus",
    "ReconciliationSummary",
    "StatementPeriod",
    "Transaction",
    "TransactionType",
    "build_detailed_report",
    "reconcile",
    "summarize",
    "validate_reconciliation_data",
    "validate_transaction",
]
