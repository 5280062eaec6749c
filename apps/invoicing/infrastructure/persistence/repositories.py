"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

from datetime import date
from decimal import Decimal
from typing import Sequence

from django.core.exceptions import ValidationError
from django.db.models import Count, Q, QuerySet, Sum

from apps.invoicing.domain.interfaces import (
    BaseInvoiceStore,
    BaseTeamMemberStore,
    BaseTimesheetStore,
)
from apps.invoicing.domain.models import (
    InvoiceRecord,
    TeamMemberRecord,
    TimesheetEntryRecord,
)
from apps.invoicing.infrastructure.persistence.models import (
    Invoice,
    InvoiceStatus,
    TeamMember,
    TeamMemberStatus,
    TimesheetEntry,
)


class TeamMemberRepository(BaseTeamMemberStore):

    @staticmethod
    def find_active_members(vendor_id: str) -> list[TeamMemberRecord]:
        members = TeamMember.objects.filter(
            vendor_id=vendor_id,
            status=TeamMemberStatus.ACTIVE,
        ).order_by("last_name", "first_name")

        return [
            TeamMemberRecord(
                id=str(member.id),
                first_name=member.first_name,
                last_name=member.last_name,
                daily_rate=Decimal(member.daily_rate),
                currency=member.currency,
            )
            for member in members
        ]


class TimesheetRepository(BaseTimesheetStore):

    @staticmethod
    def find_entries(
        team_member_ids: Sequence[str],
        period_start: date,
        period_end: date,
    ) -> list[TimesheetEntryRecord]:
        entries = TimesheetEntry.objects.filter(
            team_member_id__in=list(team_member_ids),
            date__gte=period_start,
            date__lte=period_end,
        ).order_by("date")

        return [
            TimesheetEntryRecord(
                team_member_id=str(entry.team_member_id),
                date=entry.date,
                hours=entry.hours,
                time_off_code=entry.time_off_code,
            )
            for entry in entries
        ]


class InvoiceRepository(BaseInvoiceStore):

    @staticmethod
    def get_by_id(invoice_id) -> Invoice | None:
        try:
            return Invoice.objects.select_related("vendor").get(pk=invoice_id)
        except (Invoice.DoesNotExist, ValidationError, ValueError):
            return None

    @staticmethod
    def find_invoice(invoice_id: str) -> InvoiceRecord | None:
        invoice = InvoiceRepository.get_by_id(invoice_id)
        if invoice is None:
            return None

        return InvoiceRecord(
            id=str(invoice.id),
            vendor_id=str(invoice.vendor_id),
            amount=Decimal(invoice.amount),
            currency=invoice.currency,
            billing_period_start=invoice.billing_period_start,
            billing_period_end=invoice.billing_period_end,
            tolerance_threshold=invoice.tolerance_threshold,
        )

    @staticmethod
    def save_validation(
        invoice_id: str,
        expected_amount: Decimal,
        discrepancy: Decimal,
        tolerance_threshold: Decimal,
    ) -> None:
        """Write validation figures back. Concurrent writers overwrite each other."""
        Invoice.objects.filter(pk=invoice_id).update(
            expected_amount=expected_amount,
            discrepancy=discrepancy,
            tolerance_threshold=tolerance_threshold,
        )

    @staticmethod
    def filter(
        status: str | None = None,
        vendor_id: str | None = None,
        search: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> QuerySet:
        invoices = Invoice.objects.select_related("vendor").order_by("-invoice_date")

        if status:
            invoices = invoices.filter(status=status)
        if vendor_id:
            invoices = invoices.filter(vendor_id=vendor_id)
        if search:
            invoices = invoices.filter(
                Q(invoice_number__icontains=search) | Q(vendor__name__icontains=search)
            )
        if date_from:
            invoices = invoices.filter(invoice_date__gte=date_from)
        if date_to:
            invoices = invoices.filter(invoice_date__lte=date_to)

        return invoices

    @staticmethod
    def get_validated() -> list[Invoice]:
        """Invoices with validation figures written back."""
        return list(
            Invoice.objects
            .select_related("vendor")
            .filter(expected_amount__isnull=False)
            .order_by("-invoice_date")
        )

    @staticmethod
    def get_ids_by_status(status: str) -> list[str]:
        return [
            str(invoice_id)
            for invoice_id in Invoice.objects.filter(status=status).order_by("invoice_date").values_list("id", flat=True)
        ]

    @staticmethod
    def count_by_status() -> dict:
        counts = {choice: 0 for choice in InvoiceStatus.values}
        rows = Invoice.objects.order_by().values("status").annotate(total=Count("id"))
        for row in rows:
            counts[row["status"]] = row["total"]
        return counts

    @staticmethod
    def totals() -> dict:
        return Invoice.objects.aggregate(
            total_amount=Sum("amount"),
            total_expected_amount=Sum("expected_amount"),
        )
