"""Shared fixtures for the reconciliation tests."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from recon_matcher.models import AccountInfo, StatementPeriod, Transaction, TransactionType


def _parse_when(value: str) -> datetime:
    for fmt in ("%Y-%m-%d %H:%M", "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ValueError(f"Bad test date: {value}")


@pytest.fixture
def make_txn():
    """Factory for test transactions."""

    def _make(
        id: str,
        date: str,
        amount: str,
        desc: str = "",
        ref: Optional[str] = None,
        category: Optional[str] = None,
        type: Optional[TransactionType] = None,
    ) -> Transaction:
        amt = Decimal(amount)
        return Transaction(
            id=id,
            date=_parse_when(date),
            description=desc,
            amount=amt,
            type=type or (TransactionType.CREDIT if amt >= 0 else TransactionType.DEBIT),
            category=category,
            reference=ref,
        )

    return _make


@pytest.fixture
def account() -> AccountInfo:
    return AccountInfo(
        name="Operating Account",
        number="12345678",
        bank="First National",
        currency="USD",
        opening_balance=Decimal("10000.00"),
        closing_balance=Decimal("14650.00"),
    )


@pytest.fixture
def june_period() -> StatementPeriod:
    return StatementPeriod(
        start_date=datetime(2023, 6, 1).date(),
        end_date=datetime(2023, 6, 30).date(),
    )
