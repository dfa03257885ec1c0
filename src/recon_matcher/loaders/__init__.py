"""Loaders for transaction files."""

from .transaction_loader import TransactionLoader

__all__ = ["TransactionLoader"]
