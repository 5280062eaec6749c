"""
Celery tasks for background processing.
"""

import logging
from typing import Dict

from celery import shared_task

from apps.invoicing.domain.services import InvoiceValidationService
from apps.invoicing.infrastructure.persistence.models import InvoiceStatus
from apps.invoicing.infrastructure.persistence.repositories import InvoiceRepository

logger = logging.getLogger(__name__)


@shared_task(name="validate_invoices")
def validate_invoices(invoice_ids: list[str]) -> Dict:
    """
    Validate invoices against the timesheets of their billing periods.

    Args:
        invoice_ids: Ids of the invoices to validate; unknown ids are skipped

    Returns:
        Dict with operation results
    """
    results = InvoiceValidationService().batch_validate_invoices(invoice_ids)
    within = sum(1 for result in results if result.is_within_tolerance)

    summary = {
        "success": True,
        "validated": len(results),
        "within_tolerance": within,
        "exceeding_tolerance": len(results) - within,
        "skipped": len(invoice_ids) - len(results),
    }
    logger.info(
        "Validated %s of %s invoices (%s within tolerance, %s exceeding)",
        summary["validated"],
        len(invoice_ids),
        summary["within_tolerance"],
        summary["exceeding_tolerance"],
    )
    return summary


@shared_task(name="validate_pending_invoices")
def validate_pending_invoices() -> Dict:
    """Validate every invoice that is still pending."""
    invoice_ids = InvoiceRepository.get_ids_by_status(InvoiceStatus.PENDING)

    if not invoice_ids:
        logger.info("No pending invoices to validate")

    return validate_invoices(invoice_ids)
