"""
Tests for receivables models.

Covers database constraints, immutability rules and derived properties.
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from core.exceptions import ConflictError
from receivables.models import PaymentMode, PaymentStatus
from receivables.tests.factories import AccountFactory, InvoiceFactory, PaymentFactory


class TestAccount:
    """Tests for Account model."""

    def test_str_is_name(self, db):
        assert str(AccountFactory(name="Acme Traders")) == "Acme Traders"

    def test_can_rename_before_invoicing(self, account):
        """Should allow edits while no invoice references the account."""
        account.name = "Acme Traders Pvt Ltd"
        account.save()

        account.refresh_from_db()
        assert account.name == "Acme Traders Pvt Ltd"

    def test_cannot_modify_once_invoiced(self, account, invoice):
        """Should refuse edits once an invoice references the account."""
        account.name = "Renamed"

        with pytest.raises(ConflictError) as exc_info:
            account.save()

        assert exc_info.value.error_code == "ACCOUNT_IMMUTABLE"


class TestInvoice:
    """Tests for Invoice model."""

    def test_defaults(self, invoice):
        """New invoices start unpaid with nothing paid."""
        assert invoice.paid_amount == Decimal("0.00")
        assert invoice.payment_status == PaymentStatus.UNPAID
        assert invoice.remaining_balance == Decimal("10000.00")

    def test_invoice_number_unique_per_account(self, invoice):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                InvoiceFactory(account=invoice.account, invoice_number="INV-001")

    def test_same_number_allowed_on_other_account(self, invoice):
        other = InvoiceFactory(invoice_number="INV-001")

        assert other.invoice_number == invoice.invoice_number

    def test_negative_total_rejected(self, account):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                InvoiceFactory(account=account, total_amount=Decimal("-1.00"))

    def test_compute_paid_amount_sums_payments(self, invoice):
        PaymentFactory(invoice=invoice, amount=Decimal("100.10"))
        PaymentFactory(invoice=invoice, amount=Decimal("0.90"))

        assert invoice.compute_paid_amount() == Decimal("101.00")

    def test_compute_paid_amount_without_payments_is_zero(self, invoice):
        assert invoice.compute_paid_amount() == Decimal("0.00")


class TestPayment:
    """Tests for Payment model."""

    def test_str(self, invoice):
        payment = PaymentFactory(
            invoice=invoice,
            amount=Decimal("50.00"),
            payment_mode=PaymentMode.UPI,
        )

        assert str(payment) == "UPI payment of 50.00"

    def test_non_positive_amount_rejected(self, invoice):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                PaymentFactory(invoice=invoice, amount=Decimal("0.00"))

    def test_payments_are_immutable(self, invoice):
        """Should refuse to update a recorded payment."""
        payment = PaymentFactory(invoice=invoice)
        payment.amount = Decimal("1.00")

        with pytest.raises(ConflictError) as exc_info:
            payment.save()

        assert exc_info.value.error_code == "PAYMENT_IMMUTABLE"
        payment.refresh_from_db()
        assert payment.amount == Decimal("1000.00")
