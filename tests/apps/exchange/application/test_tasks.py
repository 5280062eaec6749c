import pytest
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from apps.exchange.application.tasks import report_stale_exchange_rates
from apps.exchange.infrastructure.persistence.models import ExchangeRate


@pytest.mark.django_db(transaction=True)
class TestCeleryTasks:
    """Tests for Celery background tasks."""

    def test_report_without_stale_rates(self):
        ExchangeRate.objects.create(from_currency="USD", to_currency="EUR", rate=Decimal("0.9"))

        result = report_stale_exchange_rates()

        assert result["success"] is True
        assert result["stale_count"] == 0
        assert result["threshold_hours"] == 24

    def test_report_lists_stale_pairs(self, caplog):
        ExchangeRate.objects.create(
            from_currency="GBP",
            to_currency="EUR",
            rate=Decimal("1.17"),
            last_updated=timezone.now() - timedelta(hours=25),
        )

        with caplog.at_level("WARNING"):
            result = report_stale_exchange_rates()

        assert result["stale_pairs"] == ["GBP/EUR"]
        assert "GBP -> EUR is stale" in caplog.text
