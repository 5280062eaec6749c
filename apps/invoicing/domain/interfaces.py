from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Sequence

from apps.invoicing.domain.models import InvoiceRecord, TeamMemberRecord, TimesheetEntryRecord


class BaseTeamMemberStore(ABC):
    @abstractmethod
    def find_active_members(self, vendor_id: str) -> list[TeamMemberRecord]:
        pass


class BaseTimesheetStore(ABC):
    @abstractmethod
    def find_entries(
        self,
        team_member_ids: Sequence[str],
        period_start: date,
        period_end: date,
    ) -> list[TimesheetEntryRecord]:
        """Entries of the given members dated within the inclusive period."""
        pass


class BaseInvoiceStore(ABC):
    @abstractmethod
    def find_invoice(self, invoice_id: str) -> InvoiceRecord | None:
        pass

    @abstractmethod
    def save_validation(
        self,
        invoice_id: str,
        expected_amount: Decimal,
        discrepancy: Decimal,
        tolerance_threshold: Decimal,
    ) -> None:
        pass
