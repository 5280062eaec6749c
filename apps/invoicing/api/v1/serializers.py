"""
Serializers for the invoicing bounded context.
Handles validation and transformation between API and ORM layers.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.exchange.domain.currencies import is_valid_currency_code
from apps.invoicing.domain.services import InvoiceService
from apps.invoicing.infrastructure.persistence.models import Invoice


class InvoiceSerializer(serializers.ModelSerializer):
    vendor_name = serializers.CharField(source="vendor.name", read_only=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0"))
    tolerance_threshold = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        required=False,
    )
    validation_status = serializers.SerializerMethodField()
    discrepancy_percentage = serializers.SerializerMethodField()

    class Meta:
        model = Invoice
        fields = [
            "id",
            "vendor",
            "vendor_name",
            "invoice_number",
            "invoice_date",
            "billing_period_start",
            "billing_period_end",
            "amount",
            "currency",
            "status",
            "expected_amount",
            "discrepancy",
            "tolerance_threshold",
            "validation_status",
            "discrepancy_percentage",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "expected_amount", "discrepancy", "created_at", "updated_at"]

    def get_validation_status(self, obj) -> str:
        return InvoiceService.validation_of(obj)[0].value

    def get_discrepancy_percentage(self, obj) -> str | None:
        percentage = InvoiceService.validation_of(obj)[1]
        return str(percentage) if percentage is not None else None

    def validate_currency(self, value: str) -> str:
        if not is_valid_currency_code(value):
            raise serializers.ValidationError(f"Invalid currency code: {value}")
        return value.upper()

    def validate(self, attrs):
        start = attrs.get("billing_period_start", getattr(self.instance, "billing_period_start", None))
        end = attrs.get("billing_period_end", getattr(self.instance, "billing_period_end", None))

        if start and end and end < start:
            raise serializers.ValidationError(
                {"billing_period_end": "Billing period end must be on or after the start date."}
            )
        return attrs


class TeamMemberSpendBreakdownSerializer(serializers.Serializer):
    team_member_id = serializers.CharField()
    team_member_name = serializers.CharField()
    total_hours = serializers.DecimalField(max_digits=10, decimal_places=2)
    daily_rate = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    total_spend = serializers.DecimalField(max_digits=16, decimal_places=2)


class InvoiceValidationResultSerializer(serializers.Serializer):
    invoice_id = serializers.CharField()
    invoice_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    expected_amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    discrepancy = serializers.DecimalField(max_digits=16, decimal_places=2)
    discrepancy_percentage = serializers.DecimalField(max_digits=20, decimal_places=2)
    tolerance_threshold = serializers.DecimalField(max_digits=5, decimal_places=2)
    is_within_tolerance = serializers.BooleanField()
    validation_status = serializers.CharField(source="validation_status.value")
    validation_details = TeamMemberSpendBreakdownSerializer(many=True)


class BatchValidateSerializer(serializers.Serializer):
    invoice_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class InvoiceStatsSerializer(serializers.Serializer):
    total_invoices = serializers.IntegerField()
    pending_invoices = serializers.IntegerField()
    validated_invoices = serializers.IntegerField()
    disputed_invoices = serializers.IntegerField()
    paid_invoices = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_expected_amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    invoices_exceeding_tolerance = serializers.IntegerField()
