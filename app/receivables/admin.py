"""
Django admin configuration for receivables models.

Provides admin interfaces for:
- Account: Counterparties with their invoice counts
- Invoice: Billing records with their payments inline
- Payment: Read-only view of recorded payments

Payments are immutable and can only be recorded through LedgerService
so that locking and paid_amount bookkeeping always run.
"""

from __future__ import annotations

from django.contrib import admin
from django.db.models import Count

from .models import Account, Invoice, Payment


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin configuration for Account model."""

    list_display = ["name", "id", "invoice_count", "created_at"]
    search_fields = ["name", "id"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["name"]

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_invoice_count=Count("invoices"))

    def invoice_count(self, obj: Account) -> int:
        return obj._invoice_count

    invoice_count.short_description = "Invoices"
    invoice_count.admin_order_field = "_invoice_count"


class PaymentInline(admin.TabularInline):
    """Read-only list of an invoice's payments."""

    model = Payment
    extra = 0
    fields = [
        "payment_date",
        "amount",
        "payment_mode",
        "reference_number",
        "created_by",
        "created_at",
    ]
    readonly_fields = fields
    ordering = ["created_at"]
    can_delete = False

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    """
    Admin configuration for Invoice.

    paid_amount and payment_status are maintained by the payment recorder
    and shown read-only here.
    """

    list_display = [
        "invoice_number",
        "account",
        "invoice_date",
        "due_date",
        "total_amount",
        "paid_amount",
        "payment_status",
    ]
    list_filter = ["payment_status", "due_date"]
    search_fields = ["invoice_number", "account__name", "id"]
    readonly_fields = ["id", "paid_amount", "payment_status", "created_at", "updated_at"]
    raw_id_fields = ["account"]
    date_hierarchy = "invoice_date"
    inlines = [PaymentInline]

    fieldsets = (
        (
            "Invoice",
            {
                "fields": (
                    "id",
                    "account",
                    "invoice_number",
                    "invoice_date",
                    "due_date",
                    "total_amount",
                ),
            },
        ),
        (
            "Settlement",
            {
                "fields": ("paid_amount", "payment_status"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin configuration for Payment.

    Payments are immutable - they cannot be added, edited or deleted
    through the admin interface. Corrections are recorded as new
    payments through LedgerService.
    """

    list_display = [
        "id",
        "invoice",
        "amount",
        "payment_date",
        "payment_mode",
        "reference_number",
        "created_by",
        "created_at",
    ]
    list_filter = ["payment_mode", "payment_date"]
    search_fields = ["id", "reference_number", "invoice__invoice_number", "created_by"]
    readonly_fields = [
        "id",
        "invoice",
        "amount",
        "payment_date",
        "payment_mode",
        "reference_number",
        "created_by",
        "created_at",
    ]
    date_hierarchy = "payment_date"
    ordering = ["-created_at"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
