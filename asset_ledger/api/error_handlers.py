"""Error Handlers: map raised ledger errors and request problems to the REST envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - AssetLedgerError keeps its own HTTP status; 5xx logged as error, 4xx as warning
    - Malformed request bodies -> 400 VALIDATION_ERROR with per-field details
    - Anything else -> 500 INTERNAL_ERROR, exception text never returned

Design Decisions:
    - Ledger operations return Err values; routes unwrap() them, so this module
      is the one place a ledger failure becomes an HTTP response
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from asset_ledger.core.errors import AssetLedgerError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AssetLedgerError, _ledger_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)


async def _ledger_error(request: Request, exc: AssetLedgerError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "asset_id": exc.context.asset_id,
            "operation": exc.context.operation,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request body on {request.url.path}: "
        f"{[d['field'] for d in details]}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        code="VALIDATION_ERROR",
        message="Invalid request data",
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.ERROR,
        details=details,
    )


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        category=ErrorCategory.INTERNAL,
        severity=ErrorSeverity.CRITICAL,
    )


def _envelope(
    status_code: int, *, code: str, message: str,
    category: ErrorCategory, severity: ErrorSeverity, **extra,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "category": category.value,
                "severity": severity.value,
                **extra,
            },
        },
    )
