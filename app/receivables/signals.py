"""
Signals for the receivables app.

Custom signals, sent by the payment recorder after its transaction
commits, so receivers always see the committed payment:

    payment_recorded(sender=Payment, payment, invoice)
        A payment was recorded.
    invoice_overpaid(sender=Invoice, invoice, paid_amount, excess)
        Payments on an invoice now exceed its total. Overpayment is
        accepted (credit notes, rounding); this is a flag for review.

Model signal handlers, connected by ReceivablesConfig.ready():
    Any committed save or delete of an Account, Invoice or Payment drops
    that account's cached ledger.

Usage:
    from django.dispatch import receiver
    from receivables.signals import invoice_overpaid

    @receiver(invoice_overpaid)
    def notify_collections(sender, invoice, paid_amount, excess, **kwargs):
        ...
"""

from __future__ import annotations

import logging
from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal

from .cache import invalidate_ledger

logger = logging.getLogger(__name__)

payment_recorded = Signal()
invoice_overpaid = Signal()


def connect_signals():
    """
    Connect model signal handlers.

    Called from ReceivablesConfig.ready() so the models are loaded.
    """
    from receivables.models import Account, Invoice, Payment

    for model, handler in (
        (Account, invalidate_on_account_change),
        (Invoice, invalidate_on_invoice_change),
        (Payment, invalidate_on_payment_change),
    ):
        post_save.connect(
            handler,
            sender=model,
            dispatch_uid=f"receivables_ledger_cache_{model.__name__.lower()}_save",
        )
        post_delete.connect(
            handler,
            sender=model,
            dispatch_uid=f"receivables_ledger_cache_{model.__name__.lower()}_delete",
        )

    logger.debug("Receivables signals connected")


def _invalidate_after_commit(account_id) -> None:
    transaction.on_commit(partial(invalidate_ledger, account_id))


def invalidate_on_account_change(sender, instance, **kwargs) -> None:
    _invalidate_after_commit(instance.pk)


def invalidate_on_invoice_change(sender, instance, **kwargs) -> None:
    _invalidate_after_commit(instance.account_id)


def invalidate_on_payment_change(sender, instance, **kwargs) -> None:
    _invalidate_after_commit(instance.invoice.account_id)
