"""Custom exceptions for the reconciliation application."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class TransactionLoadError(ReconciliationError):
    """Error reading a transaction file."""

    pass


class DataValidationError(ReconciliationError):
    """Reconciliation input failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid reconciliation data")
