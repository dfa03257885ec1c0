"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    ConfigurationError,
    TransactionLoadError,
    DataValidationError,
)
from .logging_config import setup_logging

__all__ = [
    "ReconciliationError",
    "ConfigurationError",
    "TransactionLoadError",
    "DataValidationError",
    "setup_logging",
]
