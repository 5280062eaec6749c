"""
Celery tasks for background processing.
"""

import logging
from typing import Dict

from celery import shared_task
from django.conf import settings

from apps.exchange.domain.services import ExchangeRateService

logger = logging.getLogger(__name__)


@shared_task(name="report_stale_exchange_rates")
def report_stale_exchange_rates() -> Dict:
    """
    Log every exchange rate older than the staleness threshold.

    Returns:
        Dict with the stale pairs and the threshold used
    """
    stale = ExchangeRateService.stale_rates()
    threshold = settings.EXCHANGE_RATE_STALE_THRESHOLD_HOURS

    for rate in stale:
        logger.warning(
            "Exchange rate %s -> %s is stale (last updated %s hours ago)",
            rate.from_currency,
            rate.to_currency,
            rate.stale_duration_hours,
        )

    if not stale:
        logger.info("No exchange rates older than %s hours", threshold)

    return {
        "success": True,
        "threshold_hours": threshold,
        "stale_count": len(stale),
        "stale_pairs": [f"{rate.from_currency}/{rate.to_currency}" for rate in stale],
    }
