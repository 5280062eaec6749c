"""
Domain services - Core business logic.

CurrencyConversionService converts amounts between currencies with
decimal-exact arithmetic, falling back to the inverse of a stored rate when
the direct pair is missing. ExchangeRateService manages the stored rates.
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Iterable

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.exchange.application.dto import (
    ExchangeRateDTO,
    ExchangeRateInputDTO,
    ExchangeRateStatsDTO,
)
from apps.exchange.domain.calculations import (
    add,
    divide,
    multiply,
    quantize,
    to_decimal,
    to_plain_string,
)
from apps.exchange.domain.currencies import get_currency_symbol, is_valid_currency_code
from apps.exchange.domain.exceptions import (
    ConversionError,
    ConversionErrorCode,
    InvalidExchangeRateError,
)
from apps.exchange.domain.interfaces import BaseExchangeRateStore
from apps.exchange.domain.models import (
    Amount,
    ConversionOptions,
    ConversionResult,
    ConversionTotal,
    MoneyAmount,
    RoundingMode,
)
from apps.exchange.infrastructure.persistence.models import ExchangeRate
from apps.exchange.infrastructure.persistence.repositories import ExchangeRateRepository

logger = logging.getLogger(__name__)


def format_currency(amount: Amount, currency_code: str, decimal_places: int = 2) -> str:
    """
    Format an amount with its currency symbol.

    Example:
        >>> format_currency(Decimal("-12.5"), "EUR")
        '-€12.50'
    """
    symbol = get_currency_symbol(currency_code)
    value = quantize(to_decimal(amount), decimal_places, RoundingMode.HALF_UP)
    formatted = to_plain_string(value.copy_abs())

    if value.is_signed():
        return f"-{symbol}{formatted}"
    return f"{symbol}{formatted}"


class CurrencyConversionService:
    """
    Domain service that converts amounts between currencies.

    Fallback strategy (convert_with_fallback):
    1. Use the stored rate for the pair (from, to)
    2. If it is missing, use 1 / rate of the stored inverse pair (to, from)
    3. If both are missing, fail with RATE_NOT_FOUND

    Rates are read from the store on every call; nothing is cached.
    """

    def __init__(self, rate_store: BaseExchangeRateStore | None = None):
        self.rate_store = rate_store or ExchangeRateRepository()

    @staticmethod
    def validate_amount(amount: Amount) -> Decimal:
        try:
            value = to_decimal(amount)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ConversionError("Invalid amount format", ConversionErrorCode.INVALID_AMOUNT) from exc

        if not value.is_finite():
            raise ConversionError("Amount must be a finite number", ConversionErrorCode.INVALID_AMOUNT)
        return value

    @staticmethod
    def validate_currencies(from_currency: str, to_currency: str) -> tuple[str, str]:
        """Uppercase both codes and check them against the registry, source first."""
        source = (from_currency or "").strip().upper()
        target = (to_currency or "").strip().upper()

        if not is_valid_currency_code(source):
            raise ConversionError(f"Invalid source currency: {source}", ConversionErrorCode.INVALID_CURRENCY)
        if not is_valid_currency_code(target):
            raise ConversionError(f"Invalid target currency: {target}", ConversionErrorCode.INVALID_CURRENCY)

        return source, target

    @staticmethod
    def _build_result(
        amount: Decimal,
        converted: Decimal,
        rate_display: str,
        from_currency: str,
        to_currency: str,
        rate_last_updated: datetime,
        options: ConversionOptions,
    ) -> ConversionResult:
        return ConversionResult(
            original_amount=to_plain_string(amount, strip_zeros=True),
            converted_amount=to_plain_string(converted),
            from_currency=from_currency,
            to_currency=to_currency,
            exchange_rate=rate_display,
            rate_last_updated=rate_last_updated,
            formatted_original=format_currency(amount, from_currency, options.decimal_places),
            formatted_converted=format_currency(converted, to_currency, options.decimal_places),
        )

    def convert(
        self,
        amount: Amount,
        from_currency: str,
        to_currency: str,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        """
        Convert an amount from one currency to another.

        Args:
            amount: Amount to convert (int, float, Decimal or numeric string)
            from_currency: Source currency code (case-insensitive)
            to_currency: Target currency code (case-insensitive)
            options: Decimal places and rounding mode of the result

        Raises:
            ConversionError: INVALID_CURRENCY, INVALID_AMOUNT or RATE_NOT_FOUND

        Example:
            >>> result = CurrencyConversionService().convert(100, "USD", "EUR")
            >>> result.converted_amount, result.formatted_converted
            ('92.50', '€92.50')
        """
        options = options or ConversionOptions()
        source, target = self.validate_currencies(from_currency, to_currency)
        value = self.validate_amount(amount)

        if source == target:
            converted = quantize(value, options.decimal_places, options.rounding_mode)
            return self._build_result(value, converted, "1", source, target, timezone.now(), options)

        record = self.rate_store.find_rate(source, target)
        if record is None:
            logger.info("No exchange rate stored for %s -> %s", source, target)
            raise ConversionError(
                f"Exchange rate not found for {source} to {target}",
                ConversionErrorCode.RATE_NOT_FOUND,
            )

        converted = quantize(multiply(value, record.rate), options.decimal_places, options.rounding_mode)
        result = self._build_result(
            value,
            converted,
            to_plain_string(record.rate, strip_zeros=True),
            source,
            target,
            record.last_updated,
            options,
        )
        logger.debug("Converted %s %s -> %s %s at %s", value, source, result.converted_amount, target, record.rate)
        return result

    def convert_with_fallback(
        self,
        amount: Amount,
        from_currency: str,
        to_currency: str,
        options: ConversionOptions | None = None,
    ) -> ConversionResult:
        """
        Convert an amount, using the inverse of the (to, from) rate when the
        direct rate is missing. Only RATE_NOT_FOUND triggers the fallback.
        """
        options = options or ConversionOptions()

        try:
            return self.convert(amount, from_currency, to_currency, options)
        except ConversionError as error:
            if error.code != ConversionErrorCode.RATE_NOT_FOUND:
                raise

        source, target = from_currency.strip().upper(), to_currency.strip().upper()
        inverse = self.rate_store.find_rate(target, source)
        if inverse is None:
            logger.warning("No exchange rate stored for %s -> %s in either direction", source, target)
            raise ConversionError(
                f"Exchange rate not found for {source} to {target} (also checked inverse)",
                ConversionErrorCode.RATE_NOT_FOUND,
            )

        rate = divide(Decimal(1), inverse.rate)
        value = self.validate_amount(amount)

        logger.debug("Using inverse of %s -> %s rate %s for %s -> %s", target, source, inverse.rate, source, target)
        converted = quantize(multiply(value, rate), options.decimal_places, options.rounding_mode)
        return self._build_result(
            value,
            converted,
            to_plain_string(rate, strip_zeros=True),
            source,
            target,
            inverse.last_updated,
            options,
        )

    def batch_convert(
        self,
        items: Iterable[MoneyAmount],
        target_currency: str,
        options: ConversionOptions | None = None,
    ) -> list[ConversionResult]:
        """
        Convert each item to the target currency, one after another.
        Results keep the input order; the first failure is raised.
        """
        return [
            self.convert_with_fallback(item.amount, item.currency, target_currency, options)
            for item in items
        ]

    def calculate_total(
        self,
        items: Iterable[MoneyAmount],
        target_currency: str,
        options: ConversionOptions | None = None,
    ) -> ConversionTotal:
        """Convert every item and add the converted amounts, rounding once at the end."""
        options = options or ConversionOptions()
        conversions = self.batch_convert(items, target_currency, options)

        total = Decimal(0)
        for conversion in conversions:
            total = add(total, Decimal(conversion.converted_amount))

        rounded = quantize(total, options.decimal_places, options.rounding_mode)
        target = target_currency.strip().upper()

        return ConversionTotal(
            total_amount=to_plain_string(rounded),
            formatted_total=format_currency(rounded, target, options.decimal_places),
            target_currency=target,
            conversions=conversions,
        )


class ExchangeRateService:
    """
    Manages stored exchange rates: validation, upserts, deletion and staleness.
    A rate is stale once its last update is older than
    settings.EXCHANGE_RATE_STALE_THRESHOLD_HOURS.
    """

    @staticmethod
    def validate_input(from_currency: str | None, to_currency: str | None, rate: Amount) -> list[str]:
        errors = []

        if not from_currency:
            errors.append("From currency is required")
        elif not is_valid_currency_code(from_currency):
            errors.append(f"Invalid from currency code: {from_currency}")

        if not to_currency:
            errors.append("To currency is required")
        elif not is_valid_currency_code(to_currency):
            errors.append(f"Invalid to currency code: {to_currency}")

        if from_currency and to_currency and from_currency.upper() == to_currency.upper():
            errors.append("From and to currencies must be different")

        try:
            value = to_decimal(rate)
        except (InvalidOperation, TypeError, ValueError):
            value = None

        if value is None or not value.is_finite():
            errors.append("Rate must be a valid number")
        elif value <= 0:
            errors.append("Rate must be greater than zero")
        elif value >= Decimal("1000000"):
            errors.append("Rate must be less than 1000000")
        elif quantize(value, settings.EXCHANGE_RATE_MAX_DECIMAL_PLACES) == 0:
            errors.append(
                f"Rate is too small to store with {settings.EXCHANGE_RATE_MAX_DECIMAL_PLACES} decimal places"
            )

        return errors

    @staticmethod
    def staleness(last_updated: datetime, now: datetime | None = None) -> tuple[bool, Decimal]:
        """Return (is_stale, hours since last update rounded to 2 places)."""
        now = now or timezone.now()
        seconds = Decimal(str((now - last_updated).total_seconds()))
        hours = divide(seconds, Decimal(3600))
        is_stale = hours > settings.EXCHANGE_RATE_STALE_THRESHOLD_HOURS
        return is_stale, quantize(hours, 2)

    @staticmethod
    def to_dto(exchange_rate: ExchangeRate, now: datetime | None = None) -> ExchangeRateDTO:
        is_stale, hours = ExchangeRateService.staleness(exchange_rate.last_updated, now)
        return ExchangeRateDTO(
            id=str(exchange_rate.id),
            from_currency=exchange_rate.from_currency,
            to_currency=exchange_rate.to_currency,
            rate=Decimal(exchange_rate.rate),
            last_updated=exchange_rate.last_updated,
            created_at=exchange_rate.created_at,
            updated_at=exchange_rate.updated_at,
            is_stale=is_stale,
            stale_duration_hours=hours,
        )

    @staticmethod
    def _to_dtos(rates: Iterable[ExchangeRate]) -> list[ExchangeRateDTO]:
        now = timezone.now()
        return [ExchangeRateService.to_dto(rate, now) for rate in rates]

    @staticmethod
    def list_rates() -> list[ExchangeRateDTO]:
        return ExchangeRateService._to_dtos(ExchangeRateRepository.get_all())

    @staticmethod
    def rates_from(from_currency: str) -> list[ExchangeRateDTO]:
        return ExchangeRateService._to_dtos(ExchangeRateRepository.get_from_currency(from_currency))

    @staticmethod
    def rates_to(to_currency: str) -> list[ExchangeRateDTO]:
        return ExchangeRateService._to_dtos(ExchangeRateRepository.get_to_currency(to_currency))

    @staticmethod
    def get_rate(from_currency: str, to_currency: str) -> ExchangeRateDTO | None:
        """Get the rate for a pair. The same currency on both sides is always 1."""
        source, target = from_currency.upper(), to_currency.upper()

        if source == target:
            now = timezone.now()
            return ExchangeRateDTO(
                id=f"identity-{source}",
                from_currency=source,
                to_currency=target,
                rate=Decimal(1),
                last_updated=now,
                created_at=now,
                updated_at=now,
                is_stale=False,
                stale_duration_hours=Decimal("0.00"),
            )

        exchange_rate = ExchangeRateRepository.get(source, target)
        return ExchangeRateService.to_dto(exchange_rate) if exchange_rate else None

    @staticmethod
    def _store(data: ExchangeRateInputDTO) -> ExchangeRate:
        errors = ExchangeRateService.validate_input(data.from_currency, data.to_currency, data.rate)
        if errors:
            raise InvalidExchangeRateError(errors, pair=f"{data.from_currency} -> {data.to_currency}")

        rate = quantize(to_decimal(data.rate), settings.EXCHANGE_RATE_MAX_DECIMAL_PLACES)
        exchange_rate = ExchangeRateRepository.upsert(
            data.from_currency,
            data.to_currency,
            rate,
            timezone.now(),
        )
        logger.info("Saved exchange rate %s -> %s = %s", exchange_rate.from_currency, exchange_rate.to_currency, rate)
        return exchange_rate

    @staticmethod
    def upsert_rate(data: ExchangeRateInputDTO) -> ExchangeRateDTO:
        """
        Create or update the rate for a pair.

        Raises:
            InvalidExchangeRateError: when the input does not validate
        """
        return ExchangeRateService.to_dto(ExchangeRateService._store(data))

    @staticmethod
    def upsert_rates(inputs: Iterable[ExchangeRateInputDTO]) -> list[ExchangeRateDTO]:
        """Create or update several rates. Nothing is saved if any input is invalid."""
        with transaction.atomic():
            stored = [ExchangeRateService._store(data) for data in inputs]
        return ExchangeRateService._to_dtos(stored)

    @staticmethod
    def delete_rate(from_currency: str, to_currency: str) -> bool:
        deleted = ExchangeRateRepository.delete_pair(from_currency, to_currency)
        if deleted:
            logger.info("Deleted exchange rate %s -> %s", from_currency.upper(), to_currency.upper())
        return deleted

    @staticmethod
    def delete_rate_by_id(rate_id) -> bool:
        deleted = ExchangeRateRepository.delete_by_id(rate_id)
        if deleted:
            logger.info("Deleted exchange rate %s", rate_id)
        return deleted

    @staticmethod
    def stale_cutoff(now: datetime | None = None) -> datetime:
        now = now or timezone.now()
        return now - timedelta(hours=settings.EXCHANGE_RATE_STALE_THRESHOLD_HOURS)

    @staticmethod
    def stale_rates() -> list[ExchangeRateDTO]:
        """Get rates that need updating, oldest first."""
        return ExchangeRateService._to_dtos(
            ExchangeRateRepository.get_updated_before(ExchangeRateService.stale_cutoff())
        )

    @staticmethod
    def stats() -> ExchangeRateStatsDTO:
        return ExchangeRateStatsDTO(
            total_rates=ExchangeRateRepository.count(),
            stale_rates=ExchangeRateRepository.count_updated_before(ExchangeRateService.stale_cutoff()),
            last_update_time=ExchangeRateRepository.get_latest_update(),
            unique_base_currencies=ExchangeRateRepository.count_distinct_from_currencies(),
            unique_target_currencies=ExchangeRateRepository.count_distinct_to_currencies(),
        )
