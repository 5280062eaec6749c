"""
Typed errors raised by the exchange domain.

Callers branch on `code`, never on the message text.
"""

from enum import Enum


class ConversionErrorCode(str, Enum):
    INVALID_CURRENCY = "INVALID_CURRENCY"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    RATE_NOT_FOUND = "RATE_NOT_FOUND"


class ConversionError(Exception):
    """Raised when a conversion cannot be performed."""

    def __init__(self, message: str, code: ConversionErrorCode):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self):
        return f"ConversionError(code={self.code.value!r}, message={self.message!r})"


class InvalidExchangeRateError(ValueError):
    """Raised when an exchange rate cannot be stored because its input is invalid."""

    def __init__(self, errors: list[str], pair: str | None = None):
        self.errors = list(errors)
        self.pair = pair
        prefix = f"Invalid exchange rate ({pair})" if pair else "Invalid exchange rate"
        super().__init__(f"{prefix}: {', '.join(self.errors)}")
