"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class ValidationStatus(str, Enum):
    WITHIN_TOLERANCE = "within_tolerance"
    EXCEEDS_TOLERANCE = "exceeds_tolerance"
    NOT_VALIDATED = "not_validated"


@dataclass(frozen=True)
class TeamMemberRecord:

    id: str
    first_name: str
    last_name: str
    daily_rate: Decimal
    currency: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class TimesheetEntryRecord:
    """One day of a team member's timesheet. Time-off days carry a code and usually no hours."""

    team_member_id: str
    date: date
    hours: Decimal | None = None
    time_off_code: str | None = None


@dataclass(frozen=True)
class InvoiceRecord:

    id: str
    vendor_id: str
    amount: Decimal
    currency: str
    billing_period_start: date
    billing_period_end: date
    tolerance_threshold: Decimal | None = None


@dataclass(frozen=True)
class TeamMemberSpendBreakdown:

    team_member_id: str
    team_member_name: str
    total_hours: Decimal
    daily_rate: Decimal
    currency: str
    total_spend: Decimal


@dataclass(frozen=True)
class ExpectedSpend:

    total_expected_spend: Decimal
    breakdown: list[TeamMemberSpendBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class InvoiceValidationResult:

    invoice_id: str
    invoice_amount: Decimal
    expected_amount: Decimal
    discrepancy: Decimal
    discrepancy_percentage: Decimal
    tolerance_threshold: Decimal
    is_within_tolerance: bool
    validation_details: list[TeamMemberSpendBreakdown] = field(default_factory=list)

    @property
    def validation_status(self) -> ValidationStatus:
        if self.is_within_tolerance:
            return ValidationStatus.WITHIN_TOLERANCE
        return ValidationStatus.EXCEEDS_TOLERANCE
