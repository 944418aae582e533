"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Environment defaults are set before any application module reads settings.
"""

import os
import uuid
from datetime import datetime, timedelta, timezone

import pytest

# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("STORAGE_BACKEND", "memory")
# Cheap argon2 parameters keep the suite fast
os.environ.setdefault("PASSWORD_HASH_TIME_COST", "1")
os.environ.setdefault("PASSWORD_HASH_MEMORY_COST", "1024")
os.environ.setdefault("PASSWORD_HASH_PARALLELISM", "1")

from fastapi.testclient import TestClient  # noqa: E402

from api.dependencies import ServiceContainer, get_container, reset_container  # noqa: E402
from modules.accounts.store import InMemoryAccountStore  # noqa: E402
from modules.audit.service import AuditRecorder  # noqa: E402
from modules.audit.store import InMemoryAuditStore  # noqa: E402
from modules.passwords.hasher import PasswordHasher  # noqa: E402
from modules.refresh.service import RefreshTokenLedger  # noqa: E402
from modules.refresh.store import InMemoryRefreshTokenStore  # noqa: E402
from modules.tokens.service import TokenIssuer  # noqa: E402
from shared.config import get_settings  # noqa: E402
from shared.database import reset_client_cache  # noqa: E402


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, the service container and the DB client around each test."""
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_client_cache()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def hasher() -> PasswordHasher:
    """argon2id hasher with minimal cost."""
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def token_issuer(clock) -> TokenIssuer:
    return TokenIssuer(
        secret=TEST_JWT_SECRET,
        issuer="gatehouse",
        audience="gatehouse-clients",
        ttl=timedelta(minutes=15),
        clock=clock,
    )


@pytest.fixture
def account_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def refresh_store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture
def ledger(refresh_store, clock) -> RefreshTokenLedger:
    return RefreshTokenLedger(refresh_store, ttl=timedelta(days=7), clock=clock)


@pytest.fixture
def audit_store() -> InMemoryAuditStore:
    return InMemoryAuditStore()


@pytest.fixture
def audit(audit_store, clock) -> AuditRecorder:
    return AuditRecorder(audit_store, clock=clock)


@pytest.fixture
def container(clock) -> ServiceContainer:
    """The app's service container, driven by the manual clock."""
    container = get_container()
    container.clock = clock
    return container


@pytest.fixture
def client(container):
    """Test client running the app lifespan against the fresh container."""
    from api import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_account(clock):
    """Factory for unsaved Account records."""
    from modules.accounts.models import Account

    def factory(email: str = "a@x.com", **overrides) -> Account:
        now = clock.now()
        fields = dict(
            id=str(uuid.uuid4()),
            email=email,
            password_hash="hash",
            created_at=now,
            updated_at=now,
        )
        fields.update(overrides)
        return Account(**fields)

    return factory
