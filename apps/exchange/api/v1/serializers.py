"""
Serializers for the exchange bounded context.
Handles validation and transformation between API and domain layers.
"""

from rest_framework import serializers

from apps.exchange.domain.currencies import is_valid_currency_code
from apps.exchange.domain.models import RoundingMode


class CurrencySerializer(serializers.Serializer):
    code = serializers.CharField()
    symbol = serializers.CharField()
    name = serializers.CharField()


class ExchangeRateSerializer(serializers.Serializer):
    id = serializers.CharField()
    from_currency = serializers.CharField()
    to_currency = serializers.CharField()
    rate = serializers.DecimalField(max_digits=12, decimal_places=6)
    last_updated = serializers.DateTimeField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
    is_stale = serializers.BooleanField()
    stale_duration_hours = serializers.DecimalField(max_digits=12, decimal_places=2)


class ExchangeRateStatsSerializer(serializers.Serializer):
    total_rates = serializers.IntegerField()
    stale_rates = serializers.IntegerField()
    last_update_time = serializers.DateTimeField(allow_null=True)
    unique_base_currencies = serializers.IntegerField()
    unique_target_currencies = serializers.IntegerField()


class ExchangeRateInputSerializer(serializers.Serializer):
    """Rate values are checked by ExchangeRateService.validate_input."""
    from_currency = serializers.CharField(max_length=3)
    to_currency = serializers.CharField(max_length=3)
    rate = serializers.CharField()

    def validate_from_currency(self, value: str) -> str:
        return value.upper()

    def validate_to_currency(self, value: str) -> str:
        return value.upper()


class ExchangeRateBulkSerializer(serializers.Serializer):
    rates = ExchangeRateInputSerializer(many=True, allow_empty=False)


class ConversionOptionsSerializer(serializers.Serializer):
    decimal_places = serializers.IntegerField(min_value=0, max_value=10, default=2)
    rounding_mode = serializers.ChoiceField(
        choices=[mode.value for mode in RoundingMode],
        default=RoundingMode.HALF_UP.value,
    )


class ConvertRequestSerializer(ConversionOptionsSerializer):
    """Amounts stay strings so that they reach the engine without float rounding."""
    amount = serializers.CharField()
    from_currency = serializers.CharField(max_length=3)
    to_currency = serializers.CharField(max_length=3)


class MoneyAmountSerializer(serializers.Serializer):
    amount = serializers.CharField()
    currency = serializers.CharField(max_length=3)


class TotalRequestSerializer(ConversionOptionsSerializer):
    items = MoneyAmountSerializer(many=True)
    target_currency = serializers.CharField(max_length=3)

    def validate_target_currency(self, value: str) -> str:
        if not is_valid_currency_code(value):
            raise serializers.ValidationError(f"Invalid target currency: {value.upper()}")
        return value.upper()


class ConversionResultSerializer(serializers.Serializer):
    original_amount = serializers.CharField()
    converted_amount = serializers.CharField()
    from_currency = serializers.CharField()
    to_currency = serializers.CharField()
    exchange_rate = serializers.CharField()
    rate_last_updated = serializers.DateTimeField()
    formatted_original = serializers.CharField()
    formatted_converted = serializers.CharField()


class ConversionTotalSerializer(serializers.Serializer):
    total_amount = serializers.CharField()
    formatted_total = serializers.CharField()
    target_currency = serializers.CharField()
    conversions = ConversionResultSerializer(many=True)
