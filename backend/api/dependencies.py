"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its collaborators through
interfaces, and this file picks the concrete implementations: the
in-memory stores, or the Supabase repositories when
STORAGE_BACKEND=supabase.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Request

from shared.clock import Clock, SystemClock
from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client

    from modules.accounts.interfaces import IAccountStore
    from modules.accounts.service import AccountService
    from modules.audit.interfaces import IAuditStore
    from modules.audit.models import ClientContext
    from modules.audit.service import AuditRecorder
    from modules.auth.interfaces import IResetTokenStore
    from modules.auth.reset import PasswordResetService
    from modules.auth.service import AuthCoordinator
    from modules.auth.session import SessionCoordinator
    from modules.passwords.interfaces import IPasswordHasher
    from modules.refresh.interfaces import IRefreshTokenStore
    from modules.refresh.service import RefreshTokenLedger
    from modules.throttle.interfaces import IThrottleStore
    from modules.throttle.service import LoginThrottle
    from modules.tokens.interfaces import ITokenIssuer


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access and
    cached for the life of the container, so the in-memory stores and
    the throttle counters are shared by every request.

    `clock` may be replaced before the first service is built; tests use
    this to drive expiry and throttle windows.
    """

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None) -> None:
        self.settings = settings or get_settings()
        self.clock: Clock = clock or SystemClock()
        self._db: "Client | None" = None
        self._account_store: "IAccountStore | None" = None
        self._refresh_store: "IRefreshTokenStore | None" = None
        self._audit_store: "IAuditStore | None" = None
        self._throttle_store: "IThrottleStore | None" = None
        self._reset_store: "IResetTokenStore | None" = None
        self._hasher: "IPasswordHasher | None" = None
        self._token_issuer: "ITokenIssuer | None" = None
        self._ledger: "RefreshTokenLedger | None" = None
        self._throttle: "LoginThrottle | None" = None
        self._audit: "AuditRecorder | None" = None
        self._accounts: "AccountService | None" = None
        self._auth: "AuthCoordinator | None" = None
        self._sessions: "SessionCoordinator | None" = None
        self._password_reset: "PasswordResetService | None" = None

    # -------------------------------------------------------------------------
    # Stores
    # -------------------------------------------------------------------------

    @property
    def uses_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    @property
    def db(self) -> "Client":
        """Get the Supabase client (supabase backend only)."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    @property
    def account_store(self) -> "IAccountStore":
        """Get the account store instance."""
        if self._account_store is None:
            if self.uses_supabase:
                from modules.accounts.repository import AccountRepository
                self._account_store = AccountRepository(self.db)
            else:
                from modules.accounts.store import InMemoryAccountStore
                self._account_store = InMemoryAccountStore()
        return self._account_store

    @property
    def refresh_store(self) -> "IRefreshTokenStore":
        """Get the refresh token store instance."""
        if self._refresh_store is None:
            if self.uses_supabase:
                from modules.refresh.repository import RefreshTokenRepository
                self._refresh_store = RefreshTokenRepository(self.db)
            else:
                from modules.refresh.store import InMemoryRefreshTokenStore
                self._refresh_store = InMemoryRefreshTokenStore()
        return self._refresh_store

    @property
    def audit_store(self) -> "IAuditStore":
        """Get the audit store instance."""
        if self._audit_store is None:
            if self.uses_supabase:
                from modules.audit.repository import AuditRepository
                self._audit_store = AuditRepository(self.db)
            else:
                from modules.audit.store import InMemoryAuditStore
                self._audit_store = InMemoryAuditStore()
        return self._audit_store

    @property
    def reset_store(self) -> "IResetTokenStore":
        """Get the password reset token store instance."""
        if self._reset_store is None:
            if self.uses_supabase:
                from modules.auth.repository import ResetTokenRepository
                self._reset_store = ResetTokenRepository(self.db)
            else:
                from modules.auth.store import InMemoryResetTokenStore
                self._reset_store = InMemoryResetTokenStore()
        return self._reset_store

    @property
    def throttle_store(self) -> "IThrottleStore":
        """Get the throttle counter store (always process-local)."""
        if self._throttle_store is None:
            from modules.throttle.store import InMemoryThrottleStore
            self._throttle_store = InMemoryThrottleStore()
        return self._throttle_store

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> "IPasswordHasher":
        """Get the password hasher instance."""
        if self._hasher is None:
            from modules.passwords.hasher import PasswordHasher
            self._hasher = PasswordHasher(
                time_cost=self.settings.password_hash_time_cost,
                memory_cost=self.settings.password_hash_memory_cost,
                parallelism=self.settings.password_hash_parallelism,
            )
        return self._hasher

    @property
    def token_issuer(self) -> "ITokenIssuer":
        """
        Get the access token issuer.

        Raises:
            ConfigurationError: If JWT_SECRET is not set
        """
        if self._token_issuer is None:
            from modules.tokens.service import TokenIssuer
            self._token_issuer = TokenIssuer.from_settings(self.settings, clock=self.clock)
        return self._token_issuer

    @property
    def ledger(self) -> "RefreshTokenLedger":
        """Get the refresh token ledger instance."""
        if self._ledger is None:
            from modules.refresh.service import RefreshTokenLedger
            self._ledger = RefreshTokenLedger(
                self.refresh_store,
                ttl=timedelta(days=self.settings.refresh_token_ttl_days),
                clock=self.clock,
            )
        return self._ledger

    @property
    def throttle(self) -> "LoginThrottle":
        """Get the login throttle instance."""
        if self._throttle is None:
            from modules.throttle.service import LoginThrottle
            self._throttle = LoginThrottle(
                self.throttle_store,
                max_attempts=self.settings.login_max_failed_attempts,
                window=timedelta(minutes=self.settings.login_window_minutes),
                clock=self.clock,
            )
        return self._throttle

    @property
    def audit(self) -> "AuditRecorder":
        """Get the audit recorder instance."""
        if self._audit is None:
            from modules.audit.service import AuditRecorder
            self._audit = AuditRecorder(self.audit_store, clock=self.clock)
        return self._audit

    @property
    def accounts(self) -> "AccountService":
        """Get the account service instance."""
        if self._accounts is None:
            from modules.accounts.service import AccountService
            self._accounts = AccountService(self.account_store, clock=self.clock)
        return self._accounts

    @property
    def auth(self) -> "AuthCoordinator":
        """Get the auth coordinator instance."""
        if self._auth is None:
            from modules.auth.service import AuthCoordinator
            self._auth = AuthCoordinator(
                accounts=self.account_store,
                hasher=self.hasher,
                tokens=self.token_issuer,
                ledger=self.ledger,
                audit=self.audit,
                clock=self.clock,
                default_role=self.settings.default_role,
            )
        return self._auth

    @property
    def sessions(self) -> "SessionCoordinator":
        """Get the session coordinator instance."""
        if self._sessions is None:
            from modules.auth.session import SessionCoordinator
            self._sessions = SessionCoordinator(
                accounts=self.account_store,
                tokens=self.token_issuer,
                ledger=self.ledger,
                audit=self.audit,
            )
        return self._sessions

    @property
    def password_reset(self) -> "PasswordResetService":
        """Get the password reset service instance."""
        if self._password_reset is None:
            from modules.auth.reset import LoggingResetNotifier, PasswordResetService
            self._password_reset = PasswordResetService(
                accounts=self.account_store,
                hasher=self.hasher,
                ledger=self.ledger,
                audit=self.audit,
                store=self.reset_store,
                notifier=LoggingResetNotifier(),
                ttl=timedelta(minutes=self.settings.password_reset_ttl_minutes),
                clock=self.clock,
            )
        return self._password_reset


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances and empty
    in-memory stores.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_client_context(request: Request) -> "ClientContext":
    """FastAPI dependency for the caller's address and user agent."""
    from modules.audit.models import ClientContext
    return ClientContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def get_token_issuer() -> "ITokenIssuer":
    """FastAPI dependency for the access token issuer."""
    return get_container().token_issuer


def get_login_throttle() -> "LoginThrottle":
    """FastAPI dependency for the login throttle."""
    return get_container().throttle


def get_account_service() -> "AccountService":
    """FastAPI dependency for the account service."""
    return get_container().accounts


def get_account_store() -> "IAccountStore":
    """FastAPI dependency for the account store."""
    return get_container().account_store


def get_auth_coordinator() -> "AuthCoordinator":
    """FastAPI dependency for the auth coordinator."""
    return get_container().auth


def get_session_coordinator() -> "SessionCoordinator":
    """FastAPI dependency for the session coordinator."""
    return get_container().sessions


def get_password_reset_service() -> "PasswordResetService":
    """FastAPI dependency for the password reset service."""
    return get_container().password_reset
