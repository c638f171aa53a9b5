"""
Pytest fixtures for receivables tests.

Sections:
    - Redis Fixtures: Mocked connection behind the per-invoice lock,
      optionally backed by an in-memory key store
    - Data Fixtures: Accounts and invoices in common states
    - API Client Fixtures: JWT-authenticated clients
    - Signal Fixtures: Receivers that record what was sent
"""

import datetime
import threading
from decimal import Decimal
from types import SimpleNamespace

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from receivables.signals import invoice_overpaid, payment_recorded
from receivables.tests.factories import AccountFactory, InvoiceFactory, UserFactory


# =============================================================================
# Redis Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def mock_redis(mocker):
    """
    Mock Redis client for distributed lock operations.

    Autouse so payment recording never needs a live Redis. By default
    every lock is free (SET NX succeeds) and releases cleanly.
    """
    mock_client = mocker.MagicMock()
    mock_client.set.return_value = True
    mock_client.eval.return_value = 1

    mocker.patch(
        "receivables.locks.get_redis_connection",
        return_value=mock_client,
    )
    return mock_client


@pytest.fixture
def lock_store(mock_redis):
    """
    Back the mocked Redis client with a dict honoring SET NX and the
    token-checked release script, so concurrent lock holders exclude
    each other.

    Returns:
        Namespace with `keys` (held locks) and `denied` (keys whose
        SET NX was refused because another holder had them)
    """
    keys = {}
    denied = []
    guard = threading.Lock()

    def set_if_absent(key, value, nx=False, ex=None):
        with guard:
            if nx and key in keys:
                denied.append(key)
                return None
            keys[key] = value
            return True

    def release_if_owner(script, numkeys, key, token):
        with guard:
            if keys.get(key) != token:
                return 0
            del keys[key]
            return 1

    mock_redis.set.side_effect = set_if_absent
    mock_redis.eval.side_effect = release_if_owner
    return SimpleNamespace(keys=keys, denied=denied)


@pytest.fixture
def contended_lock(mock_redis, settings):
    """Every invoice lock is held elsewhere and never frees up."""
    mock_redis.set.return_value = False
    settings.RECEIVABLES_PAYMENT_LOCK_TIMEOUT = 0.1
    return mock_redis


@pytest.fixture
def ledger_cache(settings):
    """Enable the ledger snapshot cache on an in-memory backend."""
    settings.CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "receivables-tests",
        }
    }
    settings.RECEIVABLES_LEDGER_CACHE_TIMEOUT = 60

    from django.core.cache import cache

    cache.clear()
    yield cache
    cache.clear()


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def account(db):
    """Account with no invoices."""
    return AccountFactory(name="Acme Traders")


@pytest.fixture
def invoice(db, account):
    """10000.00 invoice dated 2026-01-01, due 2026-01-15, unpaid."""
    return InvoiceFactory(
        account=account,
        invoice_number="INV-001",
        invoice_date=datetime.date(2026, 1, 1),
        due_date=datetime.date(2026, 1, 15),
        total_amount=Decimal("10000.00"),
    )


@pytest.fixture
def as_of():
    """Reference date after the default invoice's due date."""
    return datetime.date(2026, 2, 1)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a test user."""
    return UserFactory()


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client carrying a JWT for the test user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# =============================================================================
# Signal Fixtures
# =============================================================================


@pytest.fixture
def recorded_signals():
    """
    Capture payment_recorded and invoice_overpaid sends.

    Returns:
        Dict mapping signal name to a list of the kwargs of each send
    """
    sent = {"payment_recorded": [], "invoice_overpaid": []}

    def on_payment_recorded(sender, **kwargs):
        sent["payment_recorded"].append(kwargs)

    def on_invoice_overpaid(sender, **kwargs):
        sent["invoice_overpaid"].append(kwargs)

    payment_recorded.connect(on_payment_recorded, weak=False)
    invoice_overpaid.connect(on_invoice_overpaid, weak=False)
    yield sent
    payment_recorded.disconnect(on_payment_recorded)
    invoice_overpaid.disconnect(on_invoice_overpaid)
