"""
Tests for the ledger aggregator.

summarize() is pure and takes the reference date explicitly, so these
tests build unsaved invoices/payments and never read the clock.
"""

import datetime
from decimal import Decimal

import pytest

from receivables.aggregator import is_overdue, paid_to_date, summarize
from receivables.builder import build_entries
from receivables.models import PaymentStatus
from receivables.tests.factories import (
    AccountFactory,
    InvoiceFactory,
    PaymentFactory,
)

AS_OF = datetime.date(2026, 2, 1)


@pytest.fixture
def account():
    return AccountFactory.build()


@pytest.fixture
def invoice(account):
    return InvoiceFactory.build(
        account=account,
        invoice_date=datetime.date(2026, 1, 1),
        due_date=datetime.date(2026, 1, 15),
        total_amount=Decimal("10000.00"),
    )


def summarize_all(invoices, payments, as_of=AS_OF):
    return summarize(invoices, build_entries(invoices, payments), as_of)


class TestSummarize:
    """Tests for summarize()."""

    def test_empty_ledger_is_all_zero(self):
        """Should report zero totals for an account with no invoices."""
        summary = summarize([], [], AS_OF)

        assert summary.as_of == AS_OF
        assert summary.total_debit == Decimal("0.00")
        assert summary.total_credit == Decimal("0.00")
        assert summary.net_balance == Decimal("0.00")
        assert summary.overdue_amount == Decimal("0.00")
        assert summary.overdue_count == 0

    def test_unpaid_invoice_past_due_is_overdue(self, invoice):
        """Should count the full total of an unpaid invoice past due."""
        summary = summarize_all([invoice], [])

        assert summary.total_debit == Decimal("10000.00")
        assert summary.total_credit == Decimal("0.00")
        assert summary.net_balance == Decimal("10000.00")
        assert summary.overdue_amount == Decimal("10000.00")
        assert summary.overdue_count == 1

    def test_settled_invoice_is_not_overdue(self, invoice):
        """Should exclude an invoice fully settled by payments."""
        payments = [
            PaymentFactory.build(
                invoice=invoice,
                amount=Decimal("4000.00"),
                payment_date=datetime.date(2026, 1, 10),
            ),
            PaymentFactory.build(
                invoice=invoice,
                amount=Decimal("6000.00"),
                payment_date=datetime.date(2026, 1, 20),
            ),
        ]

        summary = summarize_all([invoice], payments)

        assert summary.total_credit == Decimal("10000.00")
        assert summary.net_balance == Decimal("0.00")
        assert summary.overdue_amount == Decimal("0.00")
        assert summary.overdue_count == 0

    def test_partial_payment_leaves_remainder_overdue(self, invoice):
        """Should count only the outstanding part of a partly paid invoice."""
        payment = PaymentFactory.build(invoice=invoice, amount=Decimal("2500.00"))

        summary = summarize_all([invoice], [payment])

        assert summary.overdue_amount == Decimal("7500.00")
        assert summary.overdue_count == 1

    def test_due_on_as_of_is_not_overdue(self, invoice):
        """Should only count due dates strictly before as_of."""
        summary = summarize_all([invoice], [], as_of=invoice.due_date)

        assert summary.overdue_count == 0
        assert summary.overdue_amount == Decimal("0.00")

    def test_no_due_date_is_never_overdue(self, account):
        """Should ignore invoices without a due date."""
        undated = InvoiceFactory.build(account=account, due_date=None)

        summary = summarize_all([undated], [])

        assert summary.overdue_count == 0
        assert summary.net_balance == Decimal("10000.00")

    def test_paid_status_excludes_invoice(self, account):
        """Should trust a PAID status even if payments look short."""
        invoice = InvoiceFactory.build(
            account=account,
            payment_status=PaymentStatus.PAID,
        )

        summary = summarize_all([invoice], [])

        assert summary.overdue_count == 0

    def test_stale_status_does_not_hide_payments(self, account):
        """Should recompute paid-to-date instead of reading paid_amount."""
        invoice = InvoiceFactory.build(
            account=account,
            paid_amount=Decimal("0.00"),
            payment_status=PaymentStatus.UNPAID,
        )
        payment = PaymentFactory.build(invoice=invoice, amount=Decimal("10000.00"))

        summary = summarize_all([invoice], [payment])

        assert summary.overdue_count == 0

    def test_overpaid_invoice_is_not_overdue(self, invoice):
        """Should not report negative overdue exposure."""
        payment = PaymentFactory.build(invoice=invoice, amount=Decimal("12000.00"))

        summary = summarize_all([invoice], [payment])

        assert summary.net_balance == Decimal("-2000.00")
        assert summary.overdue_amount == Decimal("0.00")
        assert summary.overdue_count == 0

    def test_net_balance_equals_last_running_balance(self, account):
        """Should agree with the builder's closing balance."""
        invoices = [
            InvoiceFactory.build(account=account, total_amount=Decimal("300.10")),
            InvoiceFactory.build(account=account, total_amount=Decimal("45.55")),
        ]
        payments = [
            PaymentFactory.build(invoice=invoices[1], amount=Decimal("45.55")),
            PaymentFactory.build(invoice=invoices[0], amount=Decimal("0.10")),
        ]
        entries = build_entries(invoices, payments)

        summary = summarize(invoices, entries, AS_OF)

        assert summary.net_balance == entries[-1].running_balance
        assert summary.net_balance == summary.total_debit - summary.total_credit
        assert summary.overdue_amount == Decimal("300.00")
        assert summary.overdue_count == 1

    def test_overdue_amount_never_exceeds_net_balance(self, account):
        """With no overpayment, overdue exposure is bounded by the balance."""
        invoices = [
            InvoiceFactory.build(
                account=account,
                due_date=datetime.date(2026, 1, day),
                total_amount=Decimal("1000.00"),
            )
            for day in (5, 25)
        ]
        payments = [PaymentFactory.build(invoice=invoices[0], amount=Decimal("400.00"))]

        summary = summarize_all(invoices, payments)

        assert Decimal("0.00") <= summary.overdue_amount <= summary.net_balance

    def test_same_inputs_same_summary(self, invoice):
        """Should be deterministic for the same snapshot and date."""
        payment = PaymentFactory.build(invoice=invoice, amount=Decimal("1.00"))

        assert summarize_all([invoice], [payment]) == summarize_all([invoice], [payment])


class TestPaidToDate:
    """Tests for paid_to_date()."""

    def test_sums_credits_per_invoice(self, account):
        """Should group payment credits by the invoice they settle."""
        first = InvoiceFactory.build(account=account)
        second = InvoiceFactory.build(account=account)
        payments = [
            PaymentFactory.build(invoice=first, amount=Decimal("10.00")),
            PaymentFactory.build(invoice=second, amount=Decimal("5.00")),
            PaymentFactory.build(invoice=first, amount=Decimal("2.50")),
        ]

        paid = paid_to_date(build_entries([first, second], payments))

        assert paid[first.id] == Decimal("12.50")
        assert paid[second.id] == Decimal("5.00")

    def test_unpaid_invoice_defaults_to_zero(self, invoice):
        """Should report zero for an invoice with no payments."""
        paid = paid_to_date(build_entries([invoice], []))

        assert paid[invoice.id] == Decimal("0.00")


class TestIsOverdue:
    """Tests for is_overdue()."""

    def test_true_for_past_due_with_balance(self, invoice):
        assert is_overdue(invoice, Decimal("0.00"), AS_OF) is True

    def test_false_when_fully_paid(self, invoice):
        assert is_overdue(invoice, Decimal("10000.00"), AS_OF) is False

    def test_false_before_due_date(self, invoice):
        assert is_overdue(invoice, Decimal("0.00"), datetime.date(2026, 1, 10)) is False
