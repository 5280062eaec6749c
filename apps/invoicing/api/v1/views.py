"""
ViewSets for the invoicing API v1.
Invoice CRUD with filters, reporting and validation against timesheets.
"""

import uuid
from datetime import date

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.invoicing.api.v1.serializers import (
    BatchValidateSerializer,
    InvoiceSerializer,
    InvoiceStatsSerializer,
    InvoiceValidationResultSerializer,
)
from apps.invoicing.domain.services import InvoiceService, InvoiceValidationService
from apps.invoicing.infrastructure.persistence.models import InvoiceStatus
from apps.invoicing.infrastructure.persistence.repositories import InvoiceRepository


def parse_date_param(name: str, value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError({name: "Invalid date format. Use YYYY-MM-DD"})


def parse_uuid_param(name: str, value: str | None) -> str | None:
    if not value:
        return None
    try:
        return str(uuid.UUID(value))
    except ValueError:
        raise ValidationError({name: f"Invalid id: {value}"})


@extend_schema(tags=['Invoices'])
class InvoiceViewSet(viewsets.ModelViewSet):

    serializer_class = InvoiceSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, enum=InvoiceStatus.values, description="Invoice status"),
            OpenApiParameter("vendor", OpenApiTypes.UUID, description="Vendor id"),
            OpenApiParameter("search", OpenApiTypes.STR, description="Invoice number or vendor name"),
            OpenApiParameter("date_from", OpenApiTypes.DATE, description="Invoice date from (YYYY-MM-DD)"),
            OpenApiParameter("date_to", OpenApiTypes.DATE, description="Invoice date to (YYYY-MM-DD)"),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def get_queryset(self):
        params = self.request.query_params

        status_filter = params.get("status")
        if status_filter and status_filter not in InvoiceStatus.values:
            raise ValidationError({"status": f"Invalid status: {status_filter}"})

        return InvoiceRepository.filter(
            status=status_filter,
            vendor_id=parse_uuid_param("vendor", params.get("vendor")),
            search=params.get("search"),
            date_from=parse_date_param("date_from", params.get("date_from")),
            date_to=parse_date_param("date_to", params.get("date_to")),
        )

    @extend_schema(responses=InvoiceStatsSerializer, description="Invoice counts and totals")
    @action(detail=False, methods=['get'], url_path='stats')
    def stats(self, request):
        return Response(InvoiceStatsSerializer(InvoiceService.stats()).data)

    @extend_schema(responses=InvoiceSerializer(many=True), description="Validated invoices over their tolerance")
    @action(detail=False, methods=['get'], url_path='exceeding-tolerance')
    def exceeding_tolerance(self, request):
        invoices = InvoiceService.exceeding_tolerance()
        return Response(self.get_serializer(invoices, many=True).data)

    @extend_schema(
        request=None,
        responses=InvoiceValidationResultSerializer,
        description="Validate an invoice against the timesheets of its billing period"
    )
    @action(detail=True, methods=['post'], url_path='validate')
    def validate(self, request, pk=None):
        result = InvoiceValidationService().validate_invoice_against_timesheet(pk)

        if result is None:
            return Response(
                {"error": "Invoice not found"},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(InvoiceValidationResultSerializer(result).data)

    @extend_schema(
        request=BatchValidateSerializer,
        responses=InvoiceValidationResultSerializer(many=True),
        description="Validate several invoices; unknown ids are skipped"
    )
    @action(detail=False, methods=['post'], url_path='batch-validate')
    def batch_validate(self, request):
        serializer = BatchValidateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invoice_ids = [str(invoice_id) for invoice_id in serializer.validated_data["invoice_ids"]]
        results = InvoiceValidationService().batch_validate_invoices(invoice_ids)

        return Response({
            "requested": len(invoice_ids),
            "validated": len(results),
            "results": InvoiceValidationResultSerializer(results, many=True).data,
        })
