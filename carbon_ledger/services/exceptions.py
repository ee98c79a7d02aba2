"""
Domain errors raised by the ledger, risk and payout services.

The API layer maps each of these to an HTTP status.
"""


class LedgerError(Exception):
    """Base class for ledger engine errors."""


class InvalidAmount(LedgerError):
    """Requested payout amount is missing, non-numeric, non-finite, zero or negative."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Invalid amount: {amount!r}")


class StoreUnavailable(LedgerError):
    """The persistence store failed while serving a ledger operation."""

    def __init__(self, operation: str, original_exception: Exception | None = None):
        self.operation = operation
        self.original_exception = original_exception

        error_msg = f"Store unavailable during {operation}"
        if original_exception:
            error_msg += (
                f"\nCaused by: {type(original_exception).__name__}: "
                f"{original_exception}"
            )
        super().__init__(error_msg)


class ScoringUnavailable(LedgerError):
    """The anomaly scoring collaborator could not produce a report."""
