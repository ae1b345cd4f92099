"""Error Hierarchy: typed, categorized errors for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AssetLedgerError base: FastAPI global handler catches all
    - Ledger operations return these as Err values; only the HTTP boundary raises them
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    asset_id: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class AssetLedgerError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "asset_id": self.context.asset_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class AssetAlreadyExistsError(AssetLedgerError):
    """create() on a key that already holds a value."""
    def __init__(self, asset_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.asset_id = asset_id
        super().__init__(
            f"The asset {asset_id} already exists",
            "ASSET_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.asset_id = asset_id


class AssetNotFoundError(AssetLedgerError):
    """read/update/delete/transfer on an absent key."""
    def __init__(self, asset_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.asset_id = asset_id
        super().__init__(
            f"The asset {asset_id} does not exist",
            "ASSET_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.asset_id = asset_id


class DecodeFailureError(AssetLedgerError):
    """Stored bytes are not a structured asset record."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Stored value could not be decoded: {message}",
            "DECODE_FAILURE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )


class CanonicalEncodingError(AssetLedgerError):
    """Value has no canonical representation (float, bytes, non-str key...)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Value cannot be canonically encoded: {message}",
            "ENCODING_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class ArgumentError(AssetLedgerError):
    """Transaction arguments have the wrong arity or are malformed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class UnknownFunctionError(AssetLedgerError):
    """Transaction name is not registered with the dispatcher."""
    def __init__(self, function: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown ledger function '{function}'",
            "UNKNOWN_FUNCTION", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.function = function


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(AssetLedgerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreFailureError(AssetLedgerError):
    """State store get/put/delete/range_scan failed. Wraps the collaborator error."""
    def __init__(
        self, operation: str, cause: Exception, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"State store {operation} failed",
            "STORE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
        self.cause = cause
