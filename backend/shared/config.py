"""
Centralized configuration for the Gatehouse backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., JWT_*, LOGIN_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Gatehouse API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Access tokens (JWT_SECRET is required, startup fails without it)
    jwt_secret: str = ""
    jwt_issuer: str = "gatehouse"
    jwt_audience: str = "gatehouse-clients"
    access_token_ttl_minutes: int = 15

    # Refresh tokens
    refresh_token_ttl_days: int = 7

    # Login throttling
    login_max_failed_attempts: int = 5
    login_window_minutes: int = 15

    # Password hashing (argon2id cost parameters)
    password_hash_time_cost: int = 3
    password_hash_memory_cost: int = 65536  # KiB
    password_hash_parallelism: int = 4

    # Password reset
    password_reset_ttl_minutes: int = 60

    # Role granted to new accounts when present in the role catalog
    default_role: str = "User"

    # Persistence
    storage_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_service_role_key: str = ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
