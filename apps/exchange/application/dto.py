"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from apps.exchange.domain.models import Amount


@dataclass
class ExchangeRateInputDTO:
    """Input for creating or updating an exchange rate."""
    from_currency: str
    to_currency: str
    rate: Amount


@dataclass
class ExchangeRateDTO:
    """Exchange rate with staleness metadata."""
    id: str
    from_currency: str
    to_currency: str
    rate: Decimal
    last_updated: datetime
    created_at: datetime
    updated_at: datetime
    is_stale: bool
    stale_duration_hours: Decimal


@dataclass
class ExchangeRateStatsDTO:
    """Aggregate figures over the stored exchange rates."""
    total_rates: int
    stale_rates: int
    last_update_time: datetime | None
    unique_base_currencies: int
    unique_target_currencies: int
