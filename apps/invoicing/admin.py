"""
Django Admin configuration for Invoicing app.
"""

from django.contrib import admin
from django.utils.html import format_html

from apps.invoicing.domain.models import ValidationStatus
from apps.invoicing.domain.services import InvoiceService, InvoiceValidationService
from apps.invoicing.infrastructure.persistence.models import (
    Invoice,
    TeamMember,
    TimesheetEntry,
    Vendor,
)


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):

    list_display = ('name', 'location', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('name', 'location')
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('name',)


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):

    list_display = ('full_name', 'vendor', 'email', 'daily_rate', 'currency', 'status')
    list_filter = ('status', 'vendor')
    search_fields = ('first_name', 'last_name', 'email')
    readonly_fields = ('id', 'created_at', 'updated_at')
    list_select_related = ('vendor',)


@admin.register(TimesheetEntry)
class TimesheetEntryAdmin(admin.ModelAdmin):

    list_display = ('team_member', 'date', 'hours', 'time_off_code')
    list_filter = ('time_off_code', 'team_member__vendor')
    search_fields = ('team_member__first_name', 'team_member__last_name')
    date_hierarchy = 'date'
    list_select_related = ('team_member', 'team_member__vendor')


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    """Admin interface for Invoice model with timesheet validation."""

    list_display = (
        'invoice_number',
        'vendor',
        'invoice_date',
        'amount',
        'currency',
        'status',
        'expected_amount',
        'get_validation',
    )
    list_filter = ('status', 'currency', 'vendor')
    search_fields = ('invoice_number', 'vendor__name')
    readonly_fields = ('id', 'expected_amount', 'discrepancy', 'created_at', 'updated_at')
    date_hierarchy = 'invoice_date'
    list_select_related = ('vendor',)
    actions = ['validate_invoices']

    fieldsets = (
        ('Invoice', {
            'fields': (
                'vendor',
                'invoice_number',
                'invoice_date',
                ('billing_period_start', 'billing_period_end'),
                ('amount', 'currency'),
                'status',
            )
        }),
        ('Validation', {
            'fields': ('tolerance_threshold', 'expected_amount', 'discrepancy')
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_validation(self, obj):
        validation_status, percentage = InvoiceService.validation_of(obj)
        if validation_status == ValidationStatus.WITHIN_TOLERANCE:
            return format_html('<span style="color: green;">● {}%</span>', percentage)
        if validation_status == ValidationStatus.EXCEEDS_TOLERANCE:
            return format_html('<span style="color: red; font-weight: bold;">● {}%</span>', percentage)
        return '-'
    get_validation.short_description = 'Discrepancy'

    @admin.action(description='Validate selected invoices against timesheets')
    def validate_invoices(self, request, queryset):
        invoice_ids = [str(invoice_id) for invoice_id in queryset.values_list('id', flat=True)]
        results = InvoiceValidationService().batch_validate_invoices(invoice_ids)
        exceeding = sum(1 for result in results if not result.is_within_tolerance)

        self.message_user(
            request,
            f'{len(results)} invoice(s) validated, {exceeding} exceeding tolerance.'
        )
