import pytest
from io import StringIO
from unittest.mock import MagicMock, patch

from django.core.management import call_command
from django.core.management.base import CommandError


@pytest.mark.django_db(transaction=True)
class TestValidateInvoicesCommand:
    """Tests for the validate_invoices management command."""

    def test_requires_ids_or_pending(self):
        with pytest.raises(CommandError):
            call_command("validate_invoices")

    def test_rejects_both_modes(self, make_invoice):
        invoice = make_invoice()

        with pytest.raises(CommandError):
            call_command("validate_invoices", "--pending", "--ids", str(invoice.id))

    def test_rejects_malformed_ids(self):
        with pytest.raises(CommandError):
            call_command("validate_invoices", "--ids", "INV-001", "--sync")

    def test_sync_run(self, make_invoice):
        invoice = make_invoice(amount="10.00")
        out = StringIO()

        call_command("validate_invoices", "--ids", str(invoice.id), "--sync", stdout=out)

        assert "Validated 1 invoice(s): 0 within tolerance, 1 exceeding" in out.getvalue()
        invoice.refresh_from_db()
        assert invoice.expected_amount == 0

    @patch("apps.invoicing.management.commands.validate_invoices.validate_pending_invoices")
    def test_dispatches_celery_task(self, mock_task):
        mock_task.delay.return_value = MagicMock(id="task-123")
        out = StringIO()

        call_command("validate_invoices", "--pending", stdout=out)

        mock_task.delay.assert_called_once_with()
        assert "task-123" in out.getvalue()
