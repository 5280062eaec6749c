"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from datetime import datetime
from decimal import Decimal

from django.core.exceptions import ValidationError

from apps.exchange.domain.interfaces import BaseExchangeRateStore
from apps.exchange.domain.models import ExchangeRateRecord
from apps.exchange.infrastructure.persistence.models import ExchangeRate


class ExchangeRateRepository(BaseExchangeRateStore):
    """Repository for the ExchangeRate aggregate, keyed by ordered currency pair."""

    @staticmethod
    def to_record(exchange_rate: ExchangeRate) -> ExchangeRateRecord:
        return ExchangeRateRecord(
            from_currency=exchange_rate.from_currency,
            to_currency=exchange_rate.to_currency,
            rate=Decimal(exchange_rate.rate),
            last_updated=exchange_rate.last_updated,
        )

    @staticmethod
    def find_rate(from_currency: str, to_currency: str) -> ExchangeRateRecord | None:
        """Get the stored rate for an ordered pair. B->A is never used for A->B."""
        exchange_rate = ExchangeRateRepository.get(from_currency, to_currency)
        if exchange_rate is None:
            return None
        return ExchangeRateRepository.to_record(exchange_rate)

    @staticmethod
    def get(from_currency: str, to_currency: str) -> ExchangeRate | None:
        try:
            return ExchangeRate.objects.get(
                from_currency=from_currency.upper(),
                to_currency=to_currency.upper(),
            )
        except ExchangeRate.DoesNotExist:
            return None

    @staticmethod
    def get_all() -> list[ExchangeRate]:
        return list(ExchangeRate.objects.order_by("from_currency", "to_currency"))

    @staticmethod
    def get_from_currency(from_currency: str) -> list[ExchangeRate]:
        return list(
            ExchangeRate.objects
            .filter(from_currency=from_currency.upper())
            .order_by("to_currency")
        )

    @staticmethod
    def get_to_currency(to_currency: str) -> list[ExchangeRate]:
        return list(
            ExchangeRate.objects
            .filter(to_currency=to_currency.upper())
            .order_by("from_currency")
        )

    @staticmethod
    def upsert(
        from_currency: str,
        to_currency: str,
        rate: Decimal,
        last_updated: datetime,
    ) -> ExchangeRate:
        """Create the pair's rate or overwrite the existing one."""
        exchange_rate, _ = ExchangeRate.objects.update_or_create(
            from_currency=from_currency.upper(),
            to_currency=to_currency.upper(),
            defaults={
                "rate": rate,
                "last_updated": last_updated,
            },
        )
        return exchange_rate

    @staticmethod
    def delete_pair(from_currency: str, to_currency: str) -> bool:
        deleted, _ = ExchangeRate.objects.filter(
            from_currency=from_currency.upper(),
            to_currency=to_currency.upper(),
        ).delete()
        return deleted > 0

    @staticmethod
    def delete_by_id(rate_id) -> bool:
        try:
            deleted, _ = ExchangeRate.objects.filter(pk=rate_id).delete()
        except (ValidationError, ValueError):
            return False
        return deleted > 0

    @staticmethod
    def get_updated_before(cutoff: datetime) -> list[ExchangeRate]:
        """Get rates last updated before cutoff, oldest first."""
        return list(
            ExchangeRate.objects
            .filter(last_updated__lt=cutoff)
            .order_by("last_updated")
        )

    @staticmethod
    def count() -> int:
        return ExchangeRate.objects.count()

    @staticmethod
    def count_updated_before(cutoff: datetime) -> int:
        return ExchangeRate.objects.filter(last_updated__lt=cutoff).count()

    @staticmethod
    def get_latest_update() -> datetime | None:
        latest = ExchangeRate.objects.order_by("-last_updated").first()
        return latest.last_updated if latest else None

    @staticmethod
    def count_distinct_from_currencies() -> int:
        return ExchangeRate.objects.order_by().values("from_currency").distinct().count()

    @staticmethod
    def count_distinct_to_currencies() -> int:
        return ExchangeRate.objects.order_by().values("to_currency").distinct().count()
