"""Tests for the password reset flow."""

import logging
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from modules.audit import AuditAction, ClientContext
from modules.auth import (
    AuthCoordinator,
    InMemoryResetTokenStore,
    InvalidCredentialsError,
    InvalidResetTokenError,
    LoggingResetNotifier,
    PasswordResetService,
    RegisterRequest,
    SessionCoordinator,
)
from modules.refresh import InvalidRefreshTokenError

CLIENT = ClientContext(ip_address="10.0.0.1", user_agent="pytest")
PASSWORD = "Passw0rd!"
NEW_PASSWORD = "N3w-Passw0rd"


@pytest.fixture
def notifier():
    return AsyncMock()


@pytest.fixture
def reset_service(account_store, hasher, ledger, audit, notifier, clock):
    return PasswordResetService(
        accounts=account_store,
        hasher=hasher,
        ledger=ledger,
        audit=audit,
        store=InMemoryResetTokenStore(),
        notifier=notifier,
        ttl=timedelta(hours=1),
        clock=clock,
    )


@pytest.fixture
def coordinator(account_store, hasher, token_issuer, ledger, audit, clock):
    return AuthCoordinator(account_store, hasher, token_issuer, ledger, audit, clock=clock)


async def _sign_up(coordinator):
    return await coordinator.register(RegisterRequest(email="a@x.com", password=PASSWORD), CLIENT)


async def _issued_token(reset_service, notifier):
    await reset_service.request_reset("a@x.com", CLIENT)
    notifier.send.assert_awaited_once()
    return notifier.send.await_args.args[1]


class TestRequestReset:
    @pytest.mark.asyncio
    async def test_unknown_email_is_silent(self, reset_service, notifier, audit, audit_store):
        await reset_service.request_reset("nobody@x.com", CLIENT)

        notifier.send.assert_not_awaited()
        await audit.flush()
        assert audit_store.entries == []

    @pytest.mark.asyncio
    async def test_known_email_gets_token(self, coordinator, reset_service, notifier, clock, audit, audit_store):
        login = await _sign_up(coordinator)

        await reset_service.request_reset("A@X.com", CLIENT)

        account, token, expires_at = notifier.send.await_args.args
        assert account.id == login.user.id
        assert len(token) >= 32
        assert expires_at == clock.now() + timedelta(hours=1)

        await audit.flush()
        assert audit_store.entries[-1].action == AuditAction.PASSWORD_RESET_REQUEST


class TestConfirmReset:
    @pytest.mark.asyncio
    async def test_sets_new_password(self, coordinator, reset_service, notifier):
        await _sign_up(coordinator)
        token = await _issued_token(reset_service, notifier)

        await reset_service.confirm_reset(token, NEW_PASSWORD, CLIENT)

        await coordinator.login("a@x.com", NEW_PASSWORD, CLIENT)
        with pytest.raises(InvalidCredentialsError):
            await coordinator.login("a@x.com", PASSWORD, CLIENT)

    @pytest.mark.asyncio
    async def test_revokes_sessions(self, coordinator, reset_service, notifier, account_store, token_issuer, ledger, audit):
        login = await _sign_up(coordinator)
        token = await _issued_token(reset_service, notifier)

        await reset_service.confirm_reset(token, NEW_PASSWORD, CLIENT)

        sessions = SessionCoordinator(account_store, token_issuer, ledger, audit)
        with pytest.raises(InvalidRefreshTokenError):
            await sessions.refresh(login.refresh_token, CLIENT)

    @pytest.mark.asyncio
    async def test_token_is_single_use(self, coordinator, reset_service, notifier):
        await _sign_up(coordinator)
        token = await _issued_token(reset_service, notifier)
        await reset_service.confirm_reset(token, NEW_PASSWORD, CLIENT)

        with pytest.raises(InvalidResetTokenError) as exc_info:
            await reset_service.confirm_reset(token, "An0ther-pass", CLIENT)
        assert exc_info.value.code == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_expired_token(self, coordinator, reset_service, notifier, clock):
        await _sign_up(coordinator)
        token = await _issued_token(reset_service, notifier)
        clock.advance(hours=1)

        with pytest.raises(InvalidResetTokenError):
            await reset_service.confirm_reset(token, NEW_PASSWORD, CLIENT)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", "made-up-token"])
    async def test_unknown_token(self, reset_service, audit, audit_store, token):
        with pytest.raises(InvalidResetTokenError):
            await reset_service.confirm_reset(token, NEW_PASSWORD, CLIENT)

        await audit.flush()
        [entry] = audit_store.entries
        assert entry.action == AuditAction.PASSWORD_RESET
        assert entry.success is False


class TestLoggingResetNotifier:
    @pytest.mark.asyncio
    async def test_never_logs_token(self, make_account, clock, caplog):
        account = make_account()

        with caplog.at_level(logging.INFO, logger="modules.auth.reset"):
            await LoggingResetNotifier().send(account, "secret-token-value", clock.now())

        assert account.id in caplog.text
        assert "secret-token-value" not in caplog.text
