import pytest
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework import status

from apps.exchange.infrastructure.persistence.models import ExchangeRate


@pytest.fixture
def usd_eur(db):
    """USD -> EUR rate of 0.925."""
    return ExchangeRate.objects.create(from_currency="USD", to_currency="EUR", rate=Decimal("0.925"))


@pytest.mark.django_db
class TestCurrencyViewSet:
    """Tests for CurrencyViewSet endpoints."""

    def test_list_currencies(self, api_client):
        """
        Test GET /api/v1/exchange/currencies/ lists the whole registry.
        """
        response = api_client.get("/api/v1/exchange/currencies/")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 40
        assert response.data[0] == {"code": "GBP", "symbol": "£", "name": "British Pound Sterling"}

    def test_search_currencies(self, api_client):
        response = api_client.get("/api/v1/exchange/currencies/", {"search": "yen"})

        assert response.status_code == status.HTTP_200_OK
        assert [c["code"] for c in response.data] == ["JPY"]

    def test_grouped_currencies(self, api_client):
        response = api_client.get("/api/v1/exchange/currencies/", {"grouped": "true"})

        assert response.status_code == status.HTTP_200_OK
        assert list(response.data)[0] == "Major Currencies"
        assert response.data["Oceania"][0]["code"] == "FJD"

    def test_retrieve_currency(self, api_client):
        """
        Test GET /api/v1/exchange/currencies/{code}/ is case-insensitive.
        """
        response = api_client.get("/api/v1/exchange/currencies/eur/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["symbol"] == "€"

    def test_retrieve_unknown_currency(self, api_client):
        response = api_client.get("/api/v1/exchange/currencies/XYZ/")

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db(transaction=True)
class TestExchangeRateViewSet:
    """Tests for exchange rate management endpoints."""

    def test_list_rates_with_stats(self, api_client, usd_eur):
        response = api_client.get("/api/v1/exchange/rates/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["rates"][0]["rate"] == "0.925000"
        assert response.data["rates"][0]["is_stale"] is False
        assert response.data["stats"]["total_rates"] == 1

    def test_create_rate(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/",
            {"from_currency": "usd", "to_currency": "eur", "rate": "0.925"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["from_currency"] == "USD"
        assert ExchangeRate.objects.get().rate == Decimal("0.925")

    def test_create_rate_updates_existing_pair(self, api_client, usd_eur):
        response = api_client.post(
            "/api/v1/exchange/rates/",
            {"from_currency": "USD", "to_currency": "EUR", "rate": "0.93"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["id"] == str(usd_eur.id)
        assert ExchangeRate.objects.get().rate == Decimal("0.93")

    def test_create_invalid_rate(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/",
            {"from_currency": "USD", "to_currency": "EUR", "rate": "0"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["details"] == ["Rate must be greater than zero"]

    def test_bulk_rates(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/bulk/",
            {"rates": [
                {"from_currency": "USD", "to_currency": "EUR", "rate": "0.9"},
                {"from_currency": "EUR", "to_currency": "USD", "rate": "1.1"},
            ]},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data) == 2

    def test_bulk_rates_invalid_entry_saves_nothing(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/bulk/",
            {"rates": [
                {"from_currency": "USD", "to_currency": "EUR", "rate": "0.9"},
                {"from_currency": "EUR", "to_currency": "EUR", "rate": "1"},
            ]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert ExchangeRate.objects.count() == 0

    def test_delete_rate(self, api_client, usd_eur):
        response = api_client.delete(f"/api/v1/exchange/rates/{usd_eur.id}/")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert ExchangeRate.objects.count() == 0

        response = api_client.delete(f"/api/v1/exchange/rates/{usd_eur.id}/")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_pair(self, api_client, usd_eur):
        response = api_client.get("/api/v1/exchange/rates/pair/", {"from_currency": "usd", "to_currency": "eur"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == str(usd_eur.id)

    def test_pair_identity_and_missing(self, api_client):
        response = api_client.get("/api/v1/exchange/rates/pair/", {"from_currency": "GBP", "to_currency": "GBP"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["rate"] == "1.000000"

        response = api_client.get("/api/v1/exchange/rates/pair/", {"from_currency": "GBP", "to_currency": "EUR"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_pair_requires_both_codes(self, api_client):
        response = api_client.get("/api/v1/exchange/rates/pair/", {"from_currency": "GBP"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_stale(self, api_client, usd_eur):
        ExchangeRate.objects.create(
            from_currency="GBP",
            to_currency="EUR",
            rate=Decimal("1.17"),
            last_updated=timezone.now() - timedelta(days=3),
        )

        response = api_client.get("/api/v1/exchange/rates/stale/")

        assert response.status_code == status.HTTP_200_OK
        assert [r["from_currency"] for r in response.data] == ["GBP"]


@pytest.mark.django_db(transaction=True)
class TestConversionEndpoints:
    """Tests for the convert and total endpoints."""

    def test_convert(self, api_client, usd_eur):
        response = api_client.post(
            "/api/v1/exchange/rates/convert/",
            {"amount": "100", "from_currency": "USD", "to_currency": "EUR"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["converted_amount"] == "92.50"
        assert response.data["formatted_converted"] == "€92.50"

    def test_convert_with_inverse_rate(self, api_client, usd_eur):
        response = api_client.post(
            "/api/v1/exchange/rates/convert/",
            {"amount": "92.50", "from_currency": "EUR", "to_currency": "USD"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["converted_amount"] == "100.00"

    def test_convert_with_options(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/convert/",
            {
                "amount": "2.345",
                "from_currency": "GBP",
                "to_currency": "GBP",
                "rounding_mode": "DOWN",
                "decimal_places": 2,
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["converted_amount"] == "2.34"

    def test_convert_missing_rate_is_404(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/convert/",
            {"amount": "100", "from_currency": "GBP", "to_currency": "JPY"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["code"] == "RATE_NOT_FOUND"

    @pytest.mark.parametrize("payload, code", [
        ({"amount": "100", "from_currency": "XYZ", "to_currency": "EUR"}, "INVALID_CURRENCY"),
        ({"amount": "abc", "from_currency": "USD", "to_currency": "EUR"}, "INVALID_AMOUNT"),
    ])
    def test_convert_invalid_input_is_400(self, api_client, payload, code):
        response = api_client.post("/api/v1/exchange/rates/convert/", payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["code"] == code

    def test_convert_rejects_unknown_rounding_mode(self, api_client):
        response = api_client.post(
            "/api/v1/exchange/rates/convert/",
            {"amount": "1", "from_currency": "USD", "to_currency": "USD", "rounding_mode": "CEILING"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "rounding_mode" in response.data

    def test_total(self, api_client, usd_eur):
        response = api_client.post(
            "/api/v1/exchange/rates/total/",
            {
                "items": [{"amount": "100", "currency": "USD"}, {"amount": "50", "currency": "EUR"}],
                "target_currency": "EUR",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["total_amount"] == "142.50"
        assert len(response.data["conversions"]) == 2

    def test_total_with_missing_rate(self, api_client, usd_eur):
        response = api_client.post(
            "/api/v1/exchange/rates/total/",
            {"items": [{"amount": "1", "currency": "JPY"}], "target_currency": "EUR"},
            format="json",
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
