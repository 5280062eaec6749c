"""
Django Admin configuration for Exchange app.
"""

from django.contrib import admin
from django.utils.html import format_html

from apps.exchange.infrastructure.persistence.models import ExchangeRate
from apps.exchange.domain.services import ExchangeRateService


@admin.register(ExchangeRate)
class ExchangeRateAdmin(admin.ModelAdmin):
    """Admin interface for ExchangeRate model with a staleness indicator."""

    list_display = (
        'get_currency_pair',
        'rate',
        'last_updated',
        'get_freshness',
    )
    list_filter = ('from_currency', 'to_currency')
    search_fields = ('from_currency', 'to_currency')
    readonly_fields = ('id', 'created_at', 'updated_at')
    date_hierarchy = 'last_updated'
    ordering = ('from_currency', 'to_currency')

    fieldsets = (
        ('Exchange Rate', {
            'fields': (
                'from_currency',
                'to_currency',
                'rate',
                'last_updated'
            )
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def save_model(self, request, obj, form, change):
        obj.from_currency = obj.from_currency.upper()
        obj.to_currency = obj.to_currency.upper()
        super().save_model(request, obj, form, change)

    def get_currency_pair(self, obj):
        """Display currency pair in format FROM/TO."""
        return f"{obj.from_currency}/{obj.to_currency}"
    get_currency_pair.short_description = 'Currency Pair'
    get_currency_pair.admin_order_field = 'from_currency'

    def get_freshness(self, obj):
        is_stale, hours = ExchangeRateService.staleness(obj.last_updated)
        if is_stale:
            return format_html(
                '<span style="color: red;">○ Stale ({}h)</span>', hours
            )
        return format_html(
            '<span style="color: green; font-weight: bold;">● Fresh</span>'
        )
    get_freshness.short_description = 'Freshness'
