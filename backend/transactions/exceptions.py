# transactions/exceptions.py
"""
Domain errors raised while recording ledger transactions.

None of these are retried here; they surface to the caller of the command.
"""


class TransactionError(Exception):
    """Base exception for ledger transaction failures."""


class UnsupportedCurrencyCombination(TransactionError):
    """
    Raised when expense, collective and host currencies cannot be reconciled.

    Multi-currency expenses are only supported when the collective uses its
    host's currency, or when the expense uses the collective's currency.
    """


class InvalidArgument(TransactionError, ValueError):
    """Raised when a command precondition on its arguments fails."""


class FxRateUnavailable(TransactionError):
    """Raised when no FX rate can be obtained for a currency pair."""

    def __init__(self, from_currency: str, to_currency: str, reason: str = ""):
        self.from_currency = from_currency
        self.to_currency = to_currency
        message = f"No FX rate available for {from_currency} -> {to_currency}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
