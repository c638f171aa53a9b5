"""
Receivables models: accounts, invoices, and the payments applied to them.

This module is the record store for the ledger reconciliation engine:
- Account: The counterparty being reconciled (a client/company)
- Invoice: A billing record that debits an account
- Payment: A credit applied against exactly one invoice

Ledger entries and summaries are never stored. They are rebuilt from these
rows on every read (see receivables.builder and receivables.aggregator).

Usage:
    from receivables.models import Account, Invoice, Payment, PaymentMode

    account = Account.objects.create(name="Acme Traders")
    invoice = Invoice.objects.create(
        account=account,
        invoice_number="INV-001",
        invoice_date=date(2026, 1, 1),
        due_date=date(2026, 1, 15),
        total_amount=Decimal("10000.00"),
    )
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce

from core.exceptions import ConflictError
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

ZERO = Decimal("0.00")


class PaymentStatus(models.TextChoices):
    """
    Advisory payment status of an invoice.

    The ledger engine never trusts this field for overdue exposure; it is
    kept for display and for collections workflows.

    Values:
        UNPAID: No payment recorded yet
        PARTIAL: Some payment recorded, balance outstanding
        PAID: Payments cover the invoice total
        OVERDUE: Flagged by the overdue job (see receivables.tasks)
    """

    UNPAID = "UNPAID", "Unpaid"
    PARTIAL = "PARTIAL", "Partially Paid"
    PAID = "PAID", "Paid"
    OVERDUE = "OVERDUE", "Overdue"


class PaymentMode(models.TextChoices):
    """How a payment was received. Closed set; unknown values are rejected."""

    CASH = "CASH", "Cash"
    CHEQUE = "CHEQUE", "Cheque"
    UPI = "UPI", "UPI"
    BANK_TRANSFER = "BANK_TRANSFER", "Bank Transfer"
    CREDIT_CARD = "CREDIT_CARD", "Credit Card"
    NEFT = "NEFT", "NEFT"
    RTGS = "RTGS", "RTGS"


class Account(UUIDPrimaryKeyMixin, BaseModel):
    """
    The counterparty whose invoices and payments are reconciled.

    Fields:
        id: UUID primary key (from UUIDPrimaryKeyMixin)
        name: Display name shown on statements
        created_at / updated_at: From BaseModel

    An account is immutable once an invoice references it; saving changes
    to such an account raises ConflictError.
    """

    name = models.CharField(
        max_length=255,
        help_text="Display name of the account",
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding and self.invoices.exists():
            raise ConflictError(
                f"Account {self.pk} is referenced by invoices and cannot be modified",
                error_code="ACCOUNT_IMMUTABLE",
                details={"account_id": str(self.pk)},
            )
        super().save(*args, **kwargs)


class Invoice(UUIDPrimaryKeyMixin, BaseModel):
    """
    A billing record that debits an account.

    Fields:
        account: Owning account
        invoice_number: Human-readable number, unique within the account
        invoice_date: Billing date (optional; missing dates sort first)
        due_date: Optional due date used for overdue exposure
        total_amount: Invoice total (non-negative, two decimal places)
        paid_amount: Sum of payments, maintained by the payment recorder
        payment_status: Advisory status (see PaymentStatus)

    Note:
        paid_amount is bookkeeping for display. The aggregator always
        recomputes paid-to-date from Payment rows.
    """

    account = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name="invoices",
        help_text="Account this invoice bills",
    )
    invoice_number = models.CharField(
        max_length=64,
        help_text="Human-readable invoice number (unique per account)",
    )
    invoice_date = models.DateField(
        null=True,
        blank=True,
        help_text="Date the invoice was issued",
    )
    due_date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Date payment is due",
    )
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Invoice total",
    )
    paid_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=ZERO,
        help_text="Sum of recorded payments (maintained on payment)",
    )
    payment_status = models.CharField(
        max_length=16,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
        db_index=True,
        help_text="Advisory payment status",
    )

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["account", "invoice_number"],
                name="unique_invoice_number_per_account",
            ),
            models.CheckConstraint(
                condition=Q(total_amount__gte=0),
                name="invoice_total_amount_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"Invoice {self.invoice_number}"

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_amount - self.paid_amount

    def compute_paid_amount(self) -> Decimal:
        """Sum this invoice's payments from the database."""
        return self.payments.aggregate(
            total=Coalesce(
                Sum("amount"),
                ZERO,
                output_field=models.DecimalField(max_digits=14, decimal_places=2),
            )
        )["total"]


class Payment(UUIDPrimaryKeyMixin, models.Model):
    """
    A credit applied against exactly one invoice.

    Payments are immutable once created: updates raise ConflictError and
    the admin exposes them read-only. Corrections are made by recording
    new payments, never by editing old ones.

    Fields:
        invoice: The invoice this payment settles
        amount: Positive amount (two decimal places)
        payment_date: Date the payment was received
        payment_mode: How the payment was received (see PaymentMode)
        reference_number: Optional cheque/UTR/transaction reference
        created_by: Identifier of the user/service that recorded it
        created_at: Timestamp when the payment was recorded
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="Timestamp when this payment was recorded",
    )
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.PROTECT,
        related_name="payments",
        help_text="Invoice this payment is applied to",
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Payment amount (always positive)",
    )
    payment_date = models.DateField(
        help_text="Date the payment was received",
    )
    payment_mode = models.CharField(
        max_length=16,
        choices=PaymentMode.choices,
        help_text="How the payment was received",
    )
    reference_number = models.CharField(
        max_length=128,
        blank=True,
        default="",
        help_text="Cheque number, UTR, or other reference",
    )
    created_by = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        help_text="Identifier of user/service that recorded this payment",
    )

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="payment_amount_positive",
            )
        ]

    def __str__(self) -> str:
        return f"{self.get_payment_mode_display()} payment of {self.amount}"

    def save(self, *args, **kwargs) -> None:
        if not self._state.adding:
            raise ConflictError(
                f"Payment {self.pk} is immutable",
                error_code="PAYMENT_IMMUTABLE",
                details={"payment_id": str(self.pk)},
            )
        super().save(*args, **kwargs)
