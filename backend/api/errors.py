"""
Exception handlers.

Maps the GatehouseError hierarchy to HTTP responses with one JSON
envelope: {"error": CODE, "message": ..., "details": {...}}.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    GatehouseError,
    NotFoundError,
    ThrottledError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: list[tuple[type[GatehouseError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ThrottledError, 429),
]


def status_code_for(exc: GatehouseError) -> int:
    """HTTP status for an application error; 500 for anything unmapped."""
    for error_type, status_code in STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def gatehouse_error_handler(request: Request, exc: GatehouseError) -> JSONResponse:
    status_code = status_code_for(exc)
    headers: dict[str, str] = {}
    if isinstance(exc, AuthenticationError):
        headers["WWW-Authenticate"] = "Bearer"
    if isinstance(exc, ThrottledError):
        headers["Retry-After"] = str(exc.retry_after)
    if status_code >= 500:
        logger.error("Unhandled application error %s: %s", exc.code, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = error.get("msg", "Invalid value")
        errors.append(
            {
                "field": ".".join(location),
                "message": message.removeprefix("Value error, "),
            }
        )
    body = ValidationError(
        "Validation failed",
        code="VALIDATION_ERROR",
        details={"errors": errors},
    ).to_dict()
    return JSONResponse(status_code=400, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the application's exception handlers."""
    app.add_exception_handler(GatehouseError, gatehouse_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
