"""Top-level entry point for a reconciliation run."""

import logging

from ..config import resolve_settings
from ..matching.engine import MatchingEngine
from ..models.transaction import MatchResults, ReconciliationData
from .summary import summarize

logger = logging.getLogger(__name__)


def reconcile(data: ReconciliationData) -> MatchResults:
    """
    Match the bank and book transactions of ``data`` and summarise the result.

    Settings are shallow-merged over the defaults. ``data`` is not modified
    and is not validated; run
    :func:`recon_matcher.reconciliation.validator.validate_reconciliation_data`
    first when the input is untrusted.

    Args:
        data: Account, period, both transaction lists and optional settings

    Returns:
        Matched pairs, unmatched transactions on each side and the summary
    """
    settings = resolve_settings(data.settings)
    logger.debug(f"Resolved reconciliation settings: {settings.model_dump()}")

    engine_result = MatchingEngine(settings).match(
        data.bank_transactions, data.book_transactions
    )

    summary = summarize(
        engine_result.matched,
        engine_result.unmatched_bank,
        engine_result.unmatched_book,
    )

    account_name = data.account.name if data.account else "unknown account"
    logger.info(
        f"Reconciled {account_name}: {summary.status.value}, "
        f"{summary.match_percentage:.1f}% matched, discrepancy {summary.discrepancy}"
    )

    return MatchResults(
        matched=engine_result.matched,
        unmatched_bank=engine_result.unmatched_bank,
        unmatched_book=engine_result.unmatched_book,
        summary=summary,
    )
