"""
Domain services - Core business logic.

InvoiceValidationService derives the expected spend of a vendor from the
timesheets of its active team members and compares invoices against it.
InvoiceService answers the listing and reporting questions over stored
validation figures.
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable

from django.conf import settings

from apps.exchange.domain.calculations import add, divide, multiply, quantize, subtract
from apps.invoicing.domain.interfaces import (
    BaseInvoiceStore,
    BaseTeamMemberStore,
    BaseTimesheetStore,
)
from apps.invoicing.domain.models import (
    ExpectedSpend,
    InvoiceRecord,
    InvoiceValidationResult,
    TeamMemberSpendBreakdown,
    ValidationStatus,
)
from apps.invoicing.infrastructure.persistence.models import Invoice
from apps.invoicing.infrastructure.persistence.repositories import (
    InvoiceRepository,
    TeamMemberRepository,
    TimesheetRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_THRESHOLD = Decimal("5")

HUNDRED = Decimal(100)


def discrepancy_percentage(amount: Decimal, expected: Decimal) -> Decimal:
    """
    Absolute discrepancy as a percentage of the expected amount.
    With nothing expected, any positive amount is a 100% discrepancy.
    """
    if expected == 0:
        return HUNDRED if amount > 0 else Decimal(0)
    return multiply(divide(abs(subtract(amount, expected)), expected), HUNDRED)


def evaluate_invoice(
    invoice: InvoiceRecord,
    expected_spend: ExpectedSpend,
    default_tolerance: Decimal = DEFAULT_TOLERANCE_THRESHOLD,
) -> InvoiceValidationResult:
    """
    Compare an invoice amount against the expected spend.

    The tolerance check uses the unrounded percentage; discrepancy and
    percentage are rounded to 2 places only in the result.
    """
    expected = expected_spend.total_expected_spend
    tolerance = invoice.tolerance_threshold if invoice.tolerance_threshold is not None else default_tolerance

    discrepancy = subtract(invoice.amount, expected)
    percentage = discrepancy_percentage(invoice.amount, expected)

    return InvoiceValidationResult(
        invoice_id=invoice.id,
        invoice_amount=invoice.amount,
        expected_amount=expected,
        discrepancy=quantize(discrepancy, 2),
        discrepancy_percentage=quantize(percentage, 2),
        tolerance_threshold=Decimal(tolerance),
        is_within_tolerance=percentage <= tolerance,
        validation_details=list(expected_spend.breakdown),
    )


def stored_validation(
    amount: Decimal,
    expected_amount: Decimal | None,
    tolerance_threshold: Decimal | None,
    default_tolerance: Decimal = DEFAULT_TOLERANCE_THRESHOLD,
) -> tuple[ValidationStatus, Decimal | None]:
    """Validation status and percentage of an invoice from its written-back figures."""
    if expected_amount is None:
        return ValidationStatus.NOT_VALIDATED, None

    tolerance = tolerance_threshold if tolerance_threshold is not None else default_tolerance
    percentage = discrepancy_percentage(amount, expected_amount)
    status = (
        ValidationStatus.WITHIN_TOLERANCE
        if percentage <= tolerance
        else ValidationStatus.EXCEEDS_TOLERANCE
    )
    return status, quantize(percentage, 2)


class InvoiceValidationService:
    """
    Validates invoices against timesheet-derived expected spend.

    Spend per team member = total hours / hours per day × daily rate.
    Daily rates are taken at face value; no currency conversion is applied.
    """

    def __init__(
        self,
        team_member_store: BaseTeamMemberStore | None = None,
        timesheet_store: BaseTimesheetStore | None = None,
        invoice_store: BaseInvoiceStore | None = None,
    ):
        self.team_member_store = team_member_store or TeamMemberRepository()
        self.timesheet_store = timesheet_store or TimesheetRepository()
        self.invoice_store = invoice_store or InvoiceRepository()
        self.hours_per_day = Decimal(settings.INVOICE_HOURS_PER_DAY)
        self.default_tolerance = Decimal(settings.INVOICE_DEFAULT_TOLERANCE_THRESHOLD)

    def calculate_expected_spend(
        self,
        vendor_id: str,
        period_start: date,
        period_end: date,
    ) -> ExpectedSpend:
        """
        Calculate the expected spend for a vendor over an inclusive billing period.

        The vendor total is rounded once at the end; each breakdown line is
        rounded on its own, so the lines need not add up to the total.
        """
        members = self.team_member_store.find_active_members(vendor_id)
        if not members:
            return ExpectedSpend(total_expected_spend=Decimal("0.00"), breakdown=[])

        entries = self.timesheet_store.find_entries(
            [member.id for member in members],
            period_start,
            period_end,
        )

        hours_by_member: dict[str, Decimal] = defaultdict(Decimal)
        for entry in entries:
            # Time-off days without hours are not billable
            if entry.hours is not None:
                hours_by_member[entry.team_member_id] = add(hours_by_member[entry.team_member_id], entry.hours)

        total = Decimal(0)
        breakdown = []

        for member in members:
            hours = hours_by_member.get(member.id, Decimal(0))
            spend = multiply(divide(hours, self.hours_per_day), member.daily_rate)
            total = add(total, spend)

            if hours > 0:
                breakdown.append(
                    TeamMemberSpendBreakdown(
                        team_member_id=member.id,
                        team_member_name=member.full_name,
                        total_hours=hours,
                        daily_rate=member.daily_rate,
                        currency=member.currency,
                        total_spend=quantize(spend, 2),
                    )
                )

        return ExpectedSpend(total_expected_spend=quantize(total, 2), breakdown=breakdown)

    def validate_invoice_against_timesheet(self, invoice_id: str) -> InvoiceValidationResult | None:
        """
        Validate one invoice and write the figures back to it.

        Returns:
            The validation result, or None when the invoice does not exist
        """
        invoice = self.invoice_store.find_invoice(invoice_id)
        if invoice is None:
            logger.info("Invoice %s not found, nothing to validate", invoice_id)
            return None

        expected_spend = self.calculate_expected_spend(
            invoice.vendor_id,
            invoice.billing_period_start,
            invoice.billing_period_end,
        )
        result = evaluate_invoice(invoice, expected_spend, self.default_tolerance)

        self.invoice_store.save_validation(
            invoice.id,
            result.expected_amount,
            result.discrepancy,
            result.tolerance_threshold,
        )

        logger.info(
            "Invoice %s validated: expected %s, invoiced %s, discrepancy %s%% (%s)",
            invoice.id,
            result.expected_amount,
            result.invoice_amount,
            result.discrepancy_percentage,
            result.validation_status.value,
        )
        return result

    def batch_validate_invoices(self, invoice_ids: Iterable[str]) -> list[InvoiceValidationResult]:
        """Validate invoices one after another, skipping the ones that do not exist."""
        results = []
        for invoice_id in invoice_ids:
            result = self.validate_invoice_against_timesheet(invoice_id)
            if result is not None:
                results.append(result)
        return results


class InvoiceService:
    """Read-side operations over invoices and their stored validation figures."""

    @staticmethod
    def default_tolerance() -> Decimal:
        return Decimal(settings.INVOICE_DEFAULT_TOLERANCE_THRESHOLD)

    @staticmethod
    def validation_of(invoice: Invoice) -> tuple[ValidationStatus, Decimal | None]:
        return stored_validation(
            invoice.amount,
            invoice.expected_amount,
            invoice.tolerance_threshold,
            InvoiceService.default_tolerance(),
        )

    @staticmethod
    def exceeding_tolerance() -> list[Invoice]:
        return [
            invoice
            for invoice in InvoiceRepository.get_validated()
            if InvoiceService.validation_of(invoice)[0] == ValidationStatus.EXCEEDS_TOLERANCE
        ]

    @staticmethod
    def stats() -> dict:
        counts = InvoiceRepository.count_by_status()
        totals = InvoiceRepository.totals()

        return {
            "total_invoices": sum(counts.values()),
            "pending_invoices": counts["pending"],
            "validated_invoices": counts["validated"],
            "disputed_invoices": counts["disputed"],
            "paid_invoices": counts["paid"],
            "total_amount": quantize(totals["total_amount"] or Decimal(0), 2),
            "total_expected_amount": quantize(totals["total_expected_amount"] or Decimal(0), 2),
            "invoices_exceeding_tolerance": len(InvoiceService.exceeding_tolerance()),
        }
