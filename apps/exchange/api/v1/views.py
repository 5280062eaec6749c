"""
ViewSets for the exchange API v1.
Registry lookups, exchange rate management and conversions via DRF router.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.exchange.api.v1.serializers import (
    ConversionResultSerializer,
    ConversionTotalSerializer,
    ConvertRequestSerializer,
    CurrencySerializer,
    ExchangeRateBulkSerializer,
    ExchangeRateInputSerializer,
    ExchangeRateSerializer,
    ExchangeRateStatsSerializer,
    TotalRequestSerializer,
)
from apps.exchange.application.dto import ExchangeRateInputDTO
from apps.exchange.domain.currencies import (
    CURRENCIES,
    get_currencies_by_region,
    get_currency_by_code,
    search_currencies,
)
from apps.exchange.domain.exceptions import (
    ConversionError,
    ConversionErrorCode,
    InvalidExchangeRateError,
)
from apps.exchange.domain.models import ConversionOptions, MoneyAmount, RoundingMode
from apps.exchange.domain.services import CurrencyConversionService, ExchangeRateService


def conversion_error_response(error: ConversionError) -> Response:
    response_status = (
        status.HTTP_404_NOT_FOUND
        if error.code == ConversionErrorCode.RATE_NOT_FOUND
        else status.HTTP_400_BAD_REQUEST
    )
    return Response({"error": error.message, "code": error.code.value}, status=response_status)


def conversion_options(data: dict) -> ConversionOptions:
    return ConversionOptions(
        decimal_places=data["decimal_places"],
        rounding_mode=RoundingMode(data["rounding_mode"]),
    )


@extend_schema(tags=['Currencies'])
class CurrencyViewSet(viewsets.ViewSet):
    """Read-only access to the static currency registry."""

    lookup_field = "code"

    @extend_schema(
        parameters=[
            OpenApiParameter("search", OpenApiTypes.STR, description="Substring of code, name or symbol"),
            OpenApiParameter("grouped", OpenApiTypes.BOOL, description="Group currencies by region"),
        ],
        responses=CurrencySerializer(many=True),
    )
    def list(self, request):
        if request.query_params.get("grouped", "").lower() == "true":
            return Response({
                region: CurrencySerializer(currencies, many=True).data
                for region, currencies in get_currencies_by_region().items()
            })

        query = request.query_params.get("search")
        currencies = search_currencies(query) if query else CURRENCIES
        return Response(CurrencySerializer(currencies, many=True).data)

    @extend_schema(responses=CurrencySerializer)
    def retrieve(self, request, code=None):
        currency = get_currency_by_code(code)
        if currency is None:
            return Response(
                {"error": f"Currency {code.upper()} not found"},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(CurrencySerializer(currency).data)


@extend_schema(tags=['Rates'])
class ExchangeRateViewSet(viewsets.ViewSet):
    """Exchange rate management and conversions."""

    @extend_schema(description="List all exchange rates with staleness and statistics")
    def list(self, request):
        rates = ExchangeRateService.list_rates()
        return Response({
            "rates": ExchangeRateSerializer(rates, many=True).data,
            "stats": ExchangeRateStatsSerializer(ExchangeRateService.stats()).data,
        })

    @extend_schema(request=ExchangeRateInputSerializer, responses={201: ExchangeRateSerializer})
    def create(self, request):
        """Create the rate for a pair or overwrite the existing one."""
        serializer = ExchangeRateInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            rate = ExchangeRateService.upsert_rate(ExchangeRateInputDTO(**serializer.validated_data))
        except InvalidExchangeRateError as exc:
            return Response({"error": "Validation failed", "details": exc.errors}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExchangeRateSerializer(rate).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExchangeRateBulkSerializer, responses={201: ExchangeRateSerializer(many=True)})
    @action(detail=False, methods=['post'], url_path='bulk')
    def bulk(self, request):
        """Upsert several rates at once. Nothing is saved if any rate is invalid."""
        serializer = ExchangeRateBulkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        inputs = [ExchangeRateInputDTO(**item) for item in serializer.validated_data["rates"]]
        try:
            rates = ExchangeRateService.upsert_rates(inputs)
        except InvalidExchangeRateError as exc:
            return Response(
                {"error": f"Validation failed for {exc.pair}", "details": exc.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(ExchangeRateSerializer(rates, many=True).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        if not ExchangeRateService.delete_rate_by_id(pk):
            return Response(
                {"error": "Exchange rate not found"},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[
            OpenApiParameter("from_currency", OpenApiTypes.STR, required=True, description="Source currency code (e.g. USD)"),
            OpenApiParameter("to_currency", OpenApiTypes.STR, required=True, description="Target currency code (e.g. EUR)"),
        ],
        responses=ExchangeRateSerializer,
        description="Get the stored rate for one ordered currency pair"
    )
    @action(detail=False, methods=['get'], url_path='pair')
    def pair(self, request):
        from_currency = request.query_params.get('from_currency')
        to_currency = request.query_params.get('to_currency')

        if not all([from_currency, to_currency]):
            return Response(
                {"error": "from_currency and to_currency are required"},
                status=status.HTTP_400_BAD_REQUEST
            )

        rate = ExchangeRateService.get_rate(from_currency, to_currency)
        if rate is None:
            return Response(
                {"error": f"Exchange rate not found for {from_currency.upper()} to {to_currency.upper()}"},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(ExchangeRateSerializer(rate).data)

    @extend_schema(responses=ExchangeRateSerializer(many=True), description="Rates that need updating")
    @action(detail=False, methods=['get'], url_path='stale')
    def stale(self, request):
        rates = ExchangeRateService.stale_rates()
        return Response(ExchangeRateSerializer(rates, many=True).data)

    @extend_schema(
        request=ConvertRequestSerializer,
        responses=ConversionResultSerializer,
        description="Convert an amount, using the inverse rate when the direct one is missing"
    )
    @action(detail=False, methods=['post'], url_path='convert')
    def convert(self, request):
        serializer = ConvertRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = CurrencyConversionService().convert_with_fallback(
                data["amount"],
                data["from_currency"],
                data["to_currency"],
                conversion_options(data),
            )
        except ConversionError as error:
            return conversion_error_response(error)

        return Response(ConversionResultSerializer(result).data)

    @extend_schema(
        request=TotalRequestSerializer,
        responses=ConversionTotalSerializer,
        description="Convert several amounts into one currency and add them up"
    )
    @action(detail=False, methods=['post'], url_path='total')
    def total(self, request):
        serializer = TotalRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = [MoneyAmount(amount=item["amount"], currency=item["currency"]) for item in data["items"]]
        try:
            total = CurrencyConversionService().calculate_total(
                items,
                data["target_currency"],
                conversion_options(data),
            )
        except ConversionError as error:
            return conversion_error_response(error)

        return Response(ConversionTotalSerializer(total).data)
