"""
CSV transaction loader.
Reads bank or book exports and converts rows to Transaction models.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional
import logging

import pandas as pd

from ..config import ReconConfig
from ..models.transaction import Transaction, TransactionType
from ..utils.exceptions import TransactionLoadError

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = {
    "id": "id",
    "date": "date",
    "description": "description",
    "amount": "amount",
    "debit": "debit",
    "credit": "credit",
    "type": "type",
    "category": "category",
    "reference": "reference",
}


class TransactionLoader:
    """
    Loader for transaction CSV files.

    Column names, encoding, delimiter and date format come from the
    ``input.csv`` section of the configuration.
    """

    def __init__(self, config: ReconConfig):
        """
        Initialize the loader with configuration.

        Args:
            config: Application configuration object
        """
        csv_config = config.input.csv
        self.encoding = csv_config.get("encoding", "utf-8")
        self.delimiter = csv_config.get("delimiter", ",")
        self.date_format = csv_config.get("date_format", "%Y-%m-%d")
        self.column_mappings = {**DEFAULT_COLUMNS, **csv_config.get("column_mappings", {})}

    def load_file(self, file_path: Path, source: str = "bank") -> list[Transaction]:
        """
        Read a CSV file and return its transactions.

        Args:
            file_path: Path to the CSV file
            source: Label used for generated ids and log messages

        Returns:
            Transactions in file order

        Raises:
            TransactionLoadError: If the file cannot be read
        """
        logger.info(f"Loading {source} transactions from: {file_path}")

        try:
            df = pd.read_csv(
                file_path,
                encoding=self.encoding,
                delimiter=self.delimiter,
                dtype=str,
                keep_default_na=False,
            )
        except Exception as e:
            logger.error(f"Failed to read CSV file: {e}")
            raise TransactionLoadError(f"Failed to read {source} file {file_path}: {e}") from e

        transactions = self.load_dataframe(df, source)
        logger.info(f"Loaded {len(transactions)} {source} transactions")

        return transactions

    def load_dataframe(self, df: pd.DataFrame, source: str = "bank") -> list[Transaction]:
        """Convert every usable DataFrame row to a Transaction."""
        if self.column_mappings["date"] not in df.columns:
            raise TransactionLoadError(
                f"{source} data has no '{self.column_mappings['date']}' column"
            )

        has_amount = self.column_mappings["amount"] in df.columns
        has_split = (
            self.column_mappings["debit"] in df.columns
            or self.column_mappings["credit"] in df.columns
        )
        if not has_amount and not has_split:
            raise TransactionLoadError(f"{source} data has no amount or debit/credit columns")

        transactions: list[Transaction] = []

        for idx, row in df.iterrows():
            txn = self._normalize_row(row, int(idx), source, has_amount)
            if txn:
                transactions.append(txn)

        return transactions

    def _normalize_row(
        self, row: pd.Series, idx: int, source: str, has_amount: bool
    ) -> Optional[Transaction]:
        """
        Convert a DataFrame row to a Transaction.

        Returns:
            Transaction, or None if the row has no usable date or amount
        """
        cols = self.column_mappings

        txn_date = self._parse_date(row.get(cols["date"]))
        if txn_date is None:
            logger.warning(f"{source} row {idx}: Invalid date, skipping")
            return None

        if has_amount:
            amount = self._parse_amount(row.get(cols["amount"]))
        else:
            debit = self._parse_amount(row.get(cols["debit"]))
            credit = self._parse_amount(row.get(cols["credit"]))
            if debit:
                amount = -abs(debit)
            elif credit is not None:
                amount = abs(credit)
            else:
                amount = debit

        if amount is None:
            logger.warning(f"{source} row {idx}: No valid amount found, skipping")
            return None

        txn_type = self._parse_type(row.get(cols["type"]), amount)

        txn_id = _text(row.get(cols["id"])) or f"{source.upper()}-{idx:05d}"

        return Transaction(
            id=txn_id,
            date=txn_date,
            description=_text(row.get(cols["description"])) or "",
            amount=amount,
            type=txn_type,
            category=_text(row.get(cols["category"])),
            reference=_text(row.get(cols["reference"])),
            metadata={"source": source, "row": idx, "raw": row.to_dict()},
        )

    def _parse_date(self, date_value: Any) -> Optional[datetime]:
        """
        Parse a date value from the CSV.

        Returns:
            Naive datetime or None
        """
        if date_value is None or pd.isna(date_value) or date_value == "":
            return None

        if isinstance(date_value, datetime):
            return _naive(date_value)
        if isinstance(date_value, date):
            return datetime(date_value.year, date_value.month, date_value.day)

        try:
            return datetime.strptime(str(date_value).strip(), self.date_format)
        except ValueError:
            # Try pandas parser as fallback
            try:
                parsed = pd.to_datetime(str(date_value).strip())
            except (ValueError, TypeError, OverflowError):
                return None
            if pd.isna(parsed):
                return None
            return _naive(parsed.to_pydatetime())

    def _parse_amount(self, amount_value: Any) -> Optional[Decimal]:
        """
        Parse an amount value from the CSV.

        Returns:
            Decimal amount or None
        """
        if amount_value is None or pd.isna(amount_value) or amount_value == "":
            return None

        try:
            if isinstance(amount_value, str):
                amount_value = amount_value.replace("$", "").replace(",", "").strip()
                # Accounting negatives: (123.45)
                if amount_value.startswith("(") and amount_value.endswith(")"):
                    amount_value = f"-{amount_value[1:-1]}"

            amount = Decimal(str(amount_value))
        except (InvalidOperation, ValueError):
            return None

        # NaN and Infinity parse as Decimals but cannot be summed or compared
        if not amount.is_finite():
            return None
        return amount

    def _parse_type(self, type_value: Any, amount: Decimal) -> TransactionType:
        text = (_text(type_value) or "").lower()
        if text in ("debit", "dr"):
            return TransactionType.DEBIT
        if text in ("credit", "cr"):
            return TransactionType.CREDIT
        return TransactionType.DEBIT if amount < 0 else TransactionType.CREDIT


def _text(value: Any) -> Optional[str]:
    """Stripped string value, or None for blanks and missing cells."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _naive(value: datetime) -> datetime:
    """Drop any UTC offset, keeping the local wall-clock time."""
    if value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)
