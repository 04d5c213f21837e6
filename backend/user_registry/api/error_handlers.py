"""Error Handlers: global exception handlers for the registry API.

Invariants:
    - RegistryError -> its own to_response() envelope and http_status
    - RequestValidationError -> 400 VALIDATION_ERROR with one detail per failing field
    - Any other exception -> 500 INTERNAL_ERROR, message never includes the exception text
    - Retry-After (seconds, at least 1) set when an upstream error carries retry_after_ms

Design Decisions:
    - Registered from main.py through register_error_handlers(app)
    - Envelopes built outside RegistryError share _envelope() so every body has
      the same error.code / error.message / error.category / error.severity keys
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_registry.core.errors import ErrorCategory, ErrorSeverity, RegistryError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, handle_registry_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_registry_error(request: Request, exc: RegistryError):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
            "username": exc.context.username,
        },
    )
    headers = None
    if exc.context.retry_after_ms:
        seconds = max(1, exc.context.retry_after_ms // 1000)
        headers = {"Retry-After": str(seconds)}
    return JSONResponse(
        exc.to_response(), status_code=exc.http_status, headers=headers,
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
):
    details = [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    logger.warning(
        f"Rejected request to {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    body = _envelope(
        "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
    )
    body["error"]["details"] = details
    return JSONResponse(body, status_code=status.HTTP_400_BAD_REQUEST)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        _envelope(
            "INTERNAL_ERROR", "The registry could not complete the request",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _envelope(
    code: str, message: str,
    category: ErrorCategory, severity: ErrorSeverity,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
        },
    }
