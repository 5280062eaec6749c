import pytest
from datetime import date
from decimal import Decimal

from django.db import IntegrityError

from apps.invoicing.infrastructure.persistence.models import (
    Invoice,
    InvoiceStatus,
    TeamMemberStatus,
    TimeOffCode,
    TimesheetEntry,
    Vendor,
)
from apps.invoicing.infrastructure.persistence.repositories import (
    InvoiceRepository,
    TeamMemberRepository,
    TimesheetRepository,
)


@pytest.mark.django_db(transaction=True)
class TestTeamMemberAndTimesheetRepositories:
    """Tests for the team member and timesheet stores."""

    def test_only_active_members_of_the_vendor(self, vendor, make_team_member):
        active = make_team_member()
        make_team_member(first_name="Grace", last_name="Hopper", status=TeamMemberStatus.OFFBOARDED)
        other_vendor = Vendor.objects.create(name="Other Ltd")
        make_team_member(first_name="Alan", last_name="Turing", vendor=other_vendor)

        members = TeamMemberRepository().find_active_members(str(vendor.id))

        assert [m.id for m in members] == [str(active.id)]
        assert members[0].daily_rate == Decimal("100.00")
        assert members[0].currency == "GBP"

    def test_entries_within_inclusive_period(self, make_team_member, log_hours):
        member = make_team_member()
        log_hours(member, [
            (date(2024, 12, 31), "8", None),
            (date(2025, 1, 1), "8", None),
            (date(2025, 1, 15), None, TimeOffCode.SICK),
            (date(2025, 1, 31), "4", TimeOffCode.HALF_DAY),
            (date(2025, 2, 1), "8", None),
        ])

        entries = TimesheetRepository().find_entries([str(member.id)], date(2025, 1, 1), date(2025, 1, 31))

        assert [e.date.day for e in entries] == [1, 15, 31]
        assert entries[1].hours is None
        assert entries[1].time_off_code == "SICK"
        assert entries[0].team_member_id == str(member.id)

    def test_one_entry_per_member_and_day(self, make_team_member):
        member = make_team_member()
        TimesheetEntry.objects.create(team_member=member, date=date(2025, 1, 2), hours=Decimal("8"))

        with pytest.raises(IntegrityError):
            TimesheetEntry.objects.create(team_member=member, date=date(2025, 1, 2), hours=Decimal("4"))


@pytest.mark.django_db(transaction=True)
class TestInvoiceRepository:
    """Tests for InvoiceRepository."""

    def test_find_invoice(self, make_invoice):
        invoice = make_invoice()

        record = InvoiceRepository().find_invoice(str(invoice.id))

        assert record.id == str(invoice.id)
        assert record.amount == Decimal("130.00")
        assert record.tolerance_threshold == Decimal("5.00")

    @pytest.mark.parametrize("invoice_id", ["00000000-0000-0000-0000-000000000000", "not-a-uuid"])
    def test_find_missing_invoice(self, invoice_id):
        assert InvoiceRepository().find_invoice(invoice_id) is None

    def test_save_validation(self, make_invoice):
        invoice = make_invoice(tolerance_threshold=None)

        InvoiceRepository().save_validation(str(invoice.id), Decimal("125.00"), Decimal("5.00"), Decimal("5"))

        invoice.refresh_from_db()
        assert invoice.expected_amount == Decimal("125.00")
        assert invoice.discrepancy == Decimal("5.00")
        assert invoice.tolerance_threshold == Decimal("5")

    def test_billing_period_check_constraint(self, make_invoice):
        with pytest.raises(IntegrityError):
            make_invoice(billing_period_start=date(2025, 2, 1), billing_period_end=date(2025, 1, 1))

    def test_invoice_number_is_unique(self, make_invoice):
        make_invoice()

        with pytest.raises(IntegrityError):
            make_invoice()

    def test_filters(self, vendor, make_invoice):
        other = Vendor.objects.create(name="Globex")
        make_invoice("INV-001", invoice_date=date(2025, 1, 10))
        make_invoice("INV-002", invoice_date=date(2025, 2, 10), status=InvoiceStatus.PAID)
        make_invoice("GLX-100", vendor=other, invoice_date=date(2025, 3, 10))

        def numbers(**filters):
            return [invoice.invoice_number for invoice in InvoiceRepository.filter(**filters)]

        assert numbers() == ["GLX-100", "INV-002", "INV-001"]
        assert numbers(status="paid") == ["INV-002"]
        assert numbers(vendor_id=str(other.id)) == ["GLX-100"]
        assert numbers(search="inv-00") == ["INV-002", "INV-001"]
        assert numbers(search="globex") == ["GLX-100"]
        assert numbers(date_from=date(2025, 2, 1), date_to=date(2025, 2, 28)) == ["INV-002"]

    def test_counts_and_totals(self, make_invoice):
        make_invoice("INV-001", amount="100.00")
        make_invoice("INV-002", amount="50.50", status=InvoiceStatus.DISPUTED, expected_amount=Decimal("40.00"))

        assert InvoiceRepository.count_by_status() == {"pending": 1, "validated": 0, "disputed": 1, "paid": 0}
        assert InvoiceRepository.totals() == {
            "total_amount": Decimal("150.50"),
            "total_expected_amount": Decimal("40.00"),
        }
        assert len(InvoiceRepository.get_validated()) == 1
        assert len(InvoiceRepository.get_ids_by_status(InvoiceStatus.PENDING)) == 1

    def test_invoice_default_tolerance(self, make_invoice):
        assert make_invoice().tolerance_threshold == Decimal("5.00")
        assert Invoice._meta.get_field("tolerance_threshold").null is True
