"""
Aggregator: totals and overdue exposure for a built ledger.

summarize() is pure and deterministic. The reference date is always an
explicit argument; nothing here reads the clock.

Overdue rules:
    An invoice is overdue as of a date when all of these hold:
    - it has a due date and that date is strictly before as_of
    - its advisory payment_status is not PAID
    - its outstanding amount (total minus payments) is positive

    Paid-to-date is recomputed from the ledger's PAYMENT rows. The
    invoice's stored paid_amount is never consulted.

Usage:
    from receivables.aggregator import summarize

    summary = summarize(invoices, entries, as_of=date(2026, 2, 1))
    summary.net_balance, summary.overdue_amount
"""

from __future__ import annotations

import datetime
from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

from .models import PaymentStatus
from .types import ZERO, EntryKind, LedgerEntry, LedgerSummary

if TYPE_CHECKING:
    from .models import Invoice


def paid_to_date(entries: Iterable[LedgerEntry]) -> dict:
    """Map invoice_id -> sum of credit rows for that invoice."""
    paid: dict = defaultdict(lambda: ZERO)
    for entry in entries:
        if entry.kind is EntryKind.PAYMENT:
            paid[entry.invoice_id] += entry.credit
    return paid


def is_overdue(invoice: Invoice, paid: Decimal, as_of: datetime.date) -> bool:
    if invoice.due_date is None or invoice.due_date >= as_of:
        return False
    if invoice.payment_status == PaymentStatus.PAID:
        return False
    return Decimal(invoice.total_amount) - paid > ZERO


def summarize(
    invoices: Iterable[Invoice],
    entries: Sequence[LedgerEntry],
    as_of: datetime.date,
) -> LedgerSummary:
    """
    Compute totals and overdue exposure.

    Args:
        invoices: The account's invoices (same snapshot as entries)
        entries: Output of build_entries() for those invoices
        as_of: Reference date for overdue exposure

    Returns:
        LedgerSummary. When entries is non-empty, net_balance equals the
        last entry's running balance.
    """
    total_debit = sum((entry.debit for entry in entries), ZERO)
    total_credit = sum((entry.credit for entry in entries), ZERO)

    paid = paid_to_date(entries)
    overdue_amount = ZERO
    overdue_count = 0
    for invoice in invoices:
        invoice_paid = paid[invoice.id]
        if is_overdue(invoice, invoice_paid, as_of):
            overdue_amount += Decimal(invoice.total_amount) - invoice_paid
            overdue_count += 1

    return LedgerSummary(
        as_of=as_of,
        total_debit=total_debit,
        total_credit=total_credit,
        net_balance=total_debit - total_credit,
        overdue_amount=overdue_amount,
        overdue_count=overdue_count,
    )
