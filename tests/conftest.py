import pytest
from datetime import date
from decimal import Decimal

from rest_framework.test import APIClient

from apps.invoicing.infrastructure.persistence.models import (
    Invoice,
    TeamMember,
    TeamMemberStatus,
    TimesheetEntry,
    Vendor,
)


@pytest.fixture
def api_client():
    """DRF API client."""
    return APIClient()


@pytest.fixture
def vendor(db):
    """Active vendor with no team members."""
    return Vendor.objects.create(name="Acme Consulting", location="London")


@pytest.fixture
def make_team_member(vendor):
    """Factory for team members of the vendor fixture."""
    def _make(first_name="Ada", last_name="Lovelace", daily_rate="100.00", status=TeamMemberStatus.ACTIVE, **kwargs):
        return TeamMember.objects.create(
            vendor=kwargs.pop("vendor", vendor),
            first_name=first_name,
            last_name=last_name,
            email=kwargs.pop("email", f"{first_name}.{last_name}@example.com".lower()),
            daily_rate=Decimal(daily_rate),
            start_date=kwargs.pop("start_date", date(2024, 1, 1)),
            status=status,
            **kwargs,
        )
    return _make


@pytest.fixture
def log_hours():
    """Create one timesheet entry per (date, hours) pair."""
    def _log(team_member, days):
        return [
            TimesheetEntry.objects.create(
                team_member=team_member,
                date=day,
                hours=Decimal(hours) if hours is not None else None,
                time_off_code=code,
            )
            for day, hours, code in days
        ]
    return _log


@pytest.fixture
def make_invoice(vendor):
    """Factory for invoices billing January 2025 by default."""
    def _make(invoice_number="INV-001", amount="130.00", **kwargs):
        return Invoice.objects.create(
            vendor=kwargs.pop("vendor", vendor),
            invoice_number=invoice_number,
            invoice_date=kwargs.pop("invoice_date", date(2025, 2, 1)),
            billing_period_start=kwargs.pop("billing_period_start", date(2025, 1, 1)),
            billing_period_end=kwargs.pop("billing_period_end", date(2025, 1, 31)),
            amount=Decimal(amount),
            **kwargs,
        )
    return _make
