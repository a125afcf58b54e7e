"""Translate storefront and Protean errors into JSON responses.

Every error body has ``success: false``, a customer-facing ``message`` and an
``errors`` list. Persistence failures only ever return the generic message;
the cause is logged where it happened.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from ordering.exceptions import (
    BelowMinimumError,
    EmptyCartError,
    NotFoundError,
    OutOfStockError,
    PersistenceError,
    RateLimitedError,
    StorefrontError,
    UnauthenticatedError,
)

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"

_STATUS_CODES = {
    NotFoundError: 404,
    OutOfStockError: 409,
    EmptyCartError: 409,
    BelowMinimumError: 409,
    RateLimitedError: 429,
    UnauthenticatedError: 401,
    PersistenceError: 500,
}


def flatten_messages(messages) -> list[str]:
    """``{"field": ["a", "b"], "other": "c"}`` -> ``["a", "b", "c"]``."""
    if isinstance(messages, dict):
        flat = []
        for value in messages.values():
            flat.extend(flatten_messages(value))
        return flat
    if isinstance(messages, (list, tuple)):
        flat = []
        for value in messages:
            flat.extend(flatten_messages(value))
        return flat
    return [str(messages)]


def _error_body(message: str, errors: list[str]) -> dict:
    return {"success": False, "message": message, "errors": errors}


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    errors = flatten_messages(exc.messages)
    logger.info("Request rejected", path=request.url.path, errors=errors)
    return JSONResponse(status_code=400, content=_error_body("Validation failed", errors))


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = next(
        (code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)),
        500,
    )
    body = _error_body(exc.message, exc.errors)
    if isinstance(exc, UnauthenticatedError):
        body["redirect"] = LOGIN_PATH
    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
