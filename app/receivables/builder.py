"""
Ledger builder: merge invoices and payments into one dated timeline.

build_entries() is a pure function of its inputs. It emits one debit row
per invoice and one credit row per payment, sorts them by date, and folds
a running balance over the result.

Ordering rules:
    1. Ascending by date. An invoice with no date sorts at date.min.
    2. On equal dates, invoices come before payments.
    3. Remaining ties keep input order: invoices in the order given,
       then payments in the order given (stable sort).

Callers must pass invoices and payments in creation order for re-reads
to be reproducible; LedgerService does this.

Usage:
    from receivables.builder import build_entries

    entries = build_entries(invoices, payments)
    entries[-1].running_balance  # Outstanding balance
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

from .exceptions import DataIntegrityFault
from .types import ZERO, EntryKind, LedgerEntry

if TYPE_CHECKING:
    from .models import Invoice, Payment

logger = logging.getLogger(__name__)

UNDATED = datetime.date.min


def _invoice_entry(invoice: Invoice) -> LedgerEntry:
    return LedgerEntry(
        source_id=invoice.id,
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        date=invoice.invoice_date or UNDATED,
        kind=EntryKind.INVOICE,
        debit=Decimal(invoice.total_amount),
        credit=ZERO,
        description=f"Invoice {invoice.invoice_number}",
    )


def _payment_entry(payment: Payment, invoice: Invoice) -> LedgerEntry:
    return LedgerEntry(
        source_id=payment.id,
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        date=payment.payment_date,
        kind=EntryKind.PAYMENT,
        debit=ZERO,
        credit=Decimal(payment.amount),
        description=f"Payment received for {invoice.invoice_number}",
        payment_mode=payment.payment_mode,
        reference_number=payment.reference_number or None,
    )


def build_entries(
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
) -> list[LedgerEntry]:
    """
    Build an account's ordered ledger entries with running balances.

    Args:
        invoices: The account's invoices, in creation order
        payments: Payments against those invoices, in creation order

    Returns:
        Entries sorted by (date, invoice-before-payment, input order),
        each carrying the running balance after it is applied.
        Empty list when there are no invoices.

    Raises:
        DataIntegrityFault: If a payment's invoice_id is not one of the
            given invoices
    """
    invoices_by_id: dict = {}
    entries: list[LedgerEntry] = []

    for invoice in invoices:
        invoices_by_id[invoice.id] = invoice
        entries.append(_invoice_entry(invoice))

    for payment in payments:
        invoice = invoices_by_id.get(payment.invoice_id)
        if invoice is None:
            logger.error(
                "Payment references invoice outside the account",
                extra={
                    "payment_id": str(payment.id),
                    "invoice_id": str(payment.invoice_id),
                },
            )
            raise DataIntegrityFault(payment.id, payment.invoice_id)
        entries.append(_payment_entry(payment, invoice))

    entries.sort(key=lambda entry: (entry.date, entry.kind.rank))

    balance = ZERO
    for entry in entries:
        balance += entry.debit - entry.credit
        entry.running_balance = balance

    return entries
