"""
Django ORM models for persistence.
Infrastructure layer: technical storage detail.
"""

from decimal import Decimal

from django.db import models

from apps.exchange.domain.currencies import DEFAULT_CURRENCY_CODE
from apps.exchange.infrastructure.persistence.models import BaseModel


class VendorStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"


class TeamMemberStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"
    ONBOARDING = "onboarding", "Onboarding"
    OFFBOARDED = "offboarded", "Offboarded"


class TimeOffCode(models.TextChoices):
    VACATION = "VAC", "Vacation"
    HALF_DAY = "HALF", "Half day"
    SICK = "SICK", "Sick leave"
    MATERNITY = "MAT", "Maternity / paternity leave"
    CASUAL = "CAS", "Casual leave"
    UNPAID = "UNPAID", "Unpaid leave"


class InvoiceStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    VALIDATED = "validated", "Validated"
    DISPUTED = "disputed", "Disputed"
    PAID = "paid", "Paid"


class Vendor(BaseModel):

    name = models.CharField(max_length=255)
    address = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    service_description = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=VendorStatus.choices,
        default=VendorStatus.ACTIVE,
    )

    class Meta:
        app_label = "invoicing"
        ordering = ["name"]

    def __str__(self):
        return self.name


class TeamMember(BaseModel):

    vendor = models.ForeignKey(
        Vendor,
        on_delete=models.CASCADE,
        related_name="team_members",
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    daily_rate = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default=DEFAULT_CURRENCY_CODE)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=TeamMemberStatus.choices,
        default=TeamMemberStatus.ACTIVE,
        db_index=True,
    )

    class Meta:
        app_label = "invoicing"
        ordering = ["last_name", "first_name"]

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self):
        return f"{self.full_name} ({self.vendor.name})"


class TimesheetEntry(BaseModel):

    team_member = models.ForeignKey(
        TeamMember,
        on_delete=models.CASCADE,
        related_name="timesheet_entries",
    )
    date = models.DateField(db_index=True)
    hours = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)
    time_off_code = models.CharField(
        max_length=10,
        choices=TimeOffCode.choices,
        null=True,
        blank=True,
    )

    class Meta:
        app_label = "invoicing"
        verbose_name_plural = "timesheet entries"
        constraints = [
            models.UniqueConstraint(
                fields=["team_member", "date"],
                name="unique_timesheet_entry_per_day",
            )
        ]
        ordering = ["-date"]

    def __str__(self):
        recorded = f"{self.hours}h" if self.hours is not None else self.time_off_code
        return f"{self.team_member.full_name} | {self.date} | {recorded}"


class Invoice(BaseModel):

    vendor = models.ForeignKey(
        Vendor,
        on_delete=models.PROTECT,
        related_name="invoices",
    )
    invoice_number = models.CharField(max_length=100, unique=True)
    invoice_date = models.DateField(db_index=True)
    billing_period_start = models.DateField()
    billing_period_end = models.DateField()
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, default=DEFAULT_CURRENCY_CODE)
    status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.PENDING,
        db_index=True,
    )
    expected_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    discrepancy = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    tolerance_threshold = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        default=Decimal("5.00"),
    )

    class Meta:
        app_label = "invoicing"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(billing_period_end__gte=models.F("billing_period_start")),
                name="invoice_billing_period_order",
            )
        ]
        ordering = ["-invoice_date"]

    def __str__(self):
        return f"{self.invoice_number} | {self.vendor.name} | {self.amount} {self.currency}"
