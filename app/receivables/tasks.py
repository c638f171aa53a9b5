"""
Celery tasks for receivables.

This module provides periodic tasks for:
- Flagging invoices whose due date has passed with a balance outstanding

Usage:
    from receivables.tasks import flag_overdue_invoices

    # Typically run daily via celery-beat (see migration 0002)
    flag_overdue_invoices.delay()

    # Re-run for a specific reference date
    flag_overdue_invoices.delay(as_of="2026-02-01")
"""

from __future__ import annotations

import datetime
import logging

from celery import shared_task
from django.db.models import F
from django.utils import timezone

from receivables.models import Invoice, PaymentStatus

logger = logging.getLogger(__name__)


@shared_task
def flag_overdue_invoices(as_of: str | None = None) -> dict:
    """
    Mark unpaid and partially paid invoices past their due date as OVERDUE.

    Only the advisory payment_status changes. Ledger summaries compute
    overdue exposure from payments directly and do not read this flag.

    Args:
        as_of: ISO date to evaluate against (default: today)

    Returns:
        Dict with the reference date and count of invoices flagged
    """
    reference = (
        datetime.date.fromisoformat(as_of) if as_of else timezone.localdate()
    )

    flagged_count = Invoice.objects.filter(
        due_date__lt=reference,
        payment_status__in=[PaymentStatus.UNPAID, PaymentStatus.PARTIAL],
        total_amount__gt=F("paid_amount"),
    ).update(payment_status=PaymentStatus.OVERDUE, updated_at=timezone.now())

    if flagged_count > 0:
        logger.info(
            f"Flagged {flagged_count} overdue invoices",
            extra={"flagged_count": flagged_count, "as_of": reference.isoformat()},
        )

    return {"as_of": reference.isoformat(), "flagged_count": flagged_count}
