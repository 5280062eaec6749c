"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_EVEN, ROUND_HALF_UP, ROUND_UP
from enum import Enum

Amount = int | float | str | Decimal


@dataclass(frozen=True)
class Currency:

    code: str
    symbol: str
    name: str

    def __post_init__(self):
        if len(self.code) != 3:
            raise ValueError(f"Currency code must be exactly 3 characters, got '{self.code}'")


class RoundingMode(str, Enum):
    """Rounding rules applied when a result is cut to its decimal places."""

    HALF_UP = "HALF_UP"
    UP = "UP"
    DOWN = "DOWN"
    HALF_EVEN = "HALF_EVEN"

    @property
    def decimal_rounding(self) -> str:
        return _DECIMAL_ROUNDING[self]


_DECIMAL_ROUNDING = {
    RoundingMode.HALF_UP: ROUND_HALF_UP,
    RoundingMode.UP: ROUND_UP,
    RoundingMode.DOWN: ROUND_DOWN,
    RoundingMode.HALF_EVEN: ROUND_HALF_EVEN,
}


@dataclass(frozen=True)
class ConversionOptions:

    decimal_places: int = 2
    rounding_mode: RoundingMode = RoundingMode.HALF_UP

    def __post_init__(self):
        if self.decimal_places < 0:
            raise ValueError(f"decimal_places must be zero or positive, got {self.decimal_places}")


@dataclass(frozen=True)
class ExchangeRateRecord:
    """A stored directed rate: 1 unit of from_currency = rate units of to_currency."""

    from_currency: str
    to_currency: str
    rate: Decimal
    last_updated: datetime


@dataclass(frozen=True)
class MoneyAmount:

    amount: Amount
    currency: str


@dataclass(frozen=True)
class ConversionResult:

    original_amount: str
    converted_amount: str
    from_currency: str
    to_currency: str
    exchange_rate: str
    rate_last_updated: datetime
    formatted_original: str
    formatted_converted: str


@dataclass(frozen=True)
class ConversionTotal:

    total_amount: str
    formatted_total: str
    target_currency: str
    conversions: list[ConversionResult] = field(default_factory=list)
