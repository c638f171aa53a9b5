"""
Data types for the ledger reconciliation engine.

These are derived, never persisted. They are rebuilt from Invoice and
Payment rows on every read.

Types:
    EntryKind: INVOICE (debit) or PAYMENT (credit)
    LedgerEntry: One row of the reconciled timeline
    Ledger: An account plus its ordered entries
    LedgerSummary: Totals and overdue exposure

Usage:
    from receivables.types import EntryKind, LedgerEntry, LedgerSummary

    entry = LedgerEntry(
        source_id=invoice.id,
        invoice_id=invoice.id,
        invoice_number="INV-001",
        date=date(2026, 1, 1),
        kind=EntryKind.INVOICE,
        debit=Decimal("10000.00"),
    )
"""

from __future__ import annotations

import datetime
import enum
import uuid
from dataclasses import dataclass, field
from decimal import Decimal

ZERO = Decimal("0.00")


class EntryKind(str, enum.Enum):
    """
    Kind of ledger entry.

    The declaration order doubles as the same-date tie-break rank:
    invoices sort before payments on the same date.
    """

    INVOICE = "INVOICE"
    PAYMENT = "PAYMENT"

    @property
    def rank(self) -> int:
        return 0 if self is EntryKind.INVOICE else 1


@dataclass
class LedgerEntry:
    """
    One chronological row of an account's ledger.

    Attributes:
        source_id: UUID of the Invoice or Payment this row represents
        invoice_id: UUID of the invoice (for payments, the invoice paid)
        invoice_number: Human-readable number of that invoice
        date: Invoice date or payment date
        kind: EntryKind.INVOICE or EntryKind.PAYMENT
        debit: Invoice total (zero for payments)
        credit: Payment amount (zero for invoices)
        description: Human-readable label for statements
        payment_mode: Payment mode (payments only)
        reference_number: Payment reference (payments only)
        running_balance: Debit-minus-credit total after this row
    """

    source_id: uuid.UUID
    invoice_id: uuid.UUID
    invoice_number: str
    date: datetime.date
    kind: EntryKind
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: str = ""
    payment_mode: str | None = None
    reference_number: str | None = None
    running_balance: Decimal = ZERO


@dataclass
class Ledger:
    """An account's ledger: identity plus entries in date order."""

    account_id: uuid.UUID
    account_name: str
    entries: list[LedgerEntry] = field(default_factory=list)

    @property
    def closing_balance(self) -> Decimal:
        if not self.entries:
            return ZERO
        return self.entries[-1].running_balance


@dataclass(frozen=True)
class LedgerSummary:
    """
    Aggregates derived from a built ledger.

    Attributes:
        as_of: Reference date used for overdue exposure
        total_debit: Sum of all invoice totals
        total_credit: Sum of all payment amounts
        net_balance: total_debit - total_credit
        overdue_amount: Outstanding amount on overdue invoices
        overdue_count: Number of overdue invoices
    """

    as_of: datetime.date
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    net_balance: Decimal = ZERO
    overdue_amount: Decimal = ZERO
    overdue_count: int = 0
