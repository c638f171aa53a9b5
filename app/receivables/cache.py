"""
Optional snapshot cache for built ledgers.

Disabled unless RECEIVABLES_LEDGER_CACHE_TIMEOUT is positive. Every
committed save or delete of an account, invoice or payment calls
invalidate_ledger() through the model signal handlers in
receivables.signals, so a cached ledger never outlives its source rows.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.cache import cache

if TYPE_CHECKING:
    import uuid

    from .types import Ledger

logger = logging.getLogger(__name__)


def ledger_cache_key(account_id: uuid.UUID) -> str:
    return f"receivables:ledger:{account_id}"


def cache_enabled() -> bool:
    return settings.RECEIVABLES_LEDGER_CACHE_TIMEOUT > 0


def get_cached_ledger(account_id: uuid.UUID) -> Ledger | None:
    if not cache_enabled():
        return None
    return cache.get(ledger_cache_key(account_id))


def store_ledger(ledger: Ledger) -> None:
    if not cache_enabled():
        return
    cache.set(
        ledger_cache_key(ledger.account_id),
        ledger,
        timeout=settings.RECEIVABLES_LEDGER_CACHE_TIMEOUT,
    )


def invalidate_ledger(account_id: uuid.UUID) -> None:
    """Drop the cached ledger so the next read rebuilds it."""
    if not cache_enabled():
        return
    cache.delete(ledger_cache_key(account_id))
    logger.debug(
        "Ledger cache invalidated",
        extra={"account_id": str(account_id)},
    )
