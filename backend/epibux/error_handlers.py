"""Global exception handlers — every failure leaves as {"error": ..., "code": ...}."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from epibux.errors import MarketplaceError, TransientConflictError, ValidationError

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        level = logging.WARNING if isinstance(exc, TransientConflictError) else logging.INFO
        logger.log(
            level,
            "%s: %s",
            type(exc).__name__,
            exc.message,
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = validation_message(exc.errors())
        logger.info(
            "Validation error: %s",
            message,
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        err = ValidationError(message)
        return JSONResponse(status_code=err.http_status, content=err.to_response())

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception: %s",
            exc,
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred.", "code": "INTERNAL_ERROR"},
        )


def validation_message(errors) -> str:
    """Pick a single human-readable message from pydantic's error list."""
    if not errors:
        return "Invalid request."
    first = errors[0]
    if first.get("type") == "missing":
        return "Missing required fields."
    msg = first.get("msg", "Invalid request.")
    if msg.startswith(_VALUE_ERROR_PREFIX):
        msg = msg[len(_VALUE_ERROR_PREFIX):]
    return msg
