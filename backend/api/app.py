"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from modules.accounts.routes import router as admin_router
from modules.auth.routes import router as auth_router

from .dependencies import get_container
from .errors import register_exception_handlers
from .routes import health, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds the token issuer up front so a missing JWT_SECRET aborts
    startup, and drains pending audit writes on shutdown.
    """
    # Startup
    settings = get_settings()
    container = get_container()
    # Raises ConfigurationError when JWT_SECRET is missing
    _ = container.token_issuer
    logger.info(
        "Starting %s on %s:%s (storage: %s)",
        settings.app_name,
        settings.host,
        settings.port,
        settings.storage_backend,
    )
    yield
    # Shutdown
    await get_container().audit.flush()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Authentication service: credentials, access and refresh tokens, roles",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
