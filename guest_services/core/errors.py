"""Error Hierarchy - typed, categorized exceptions for all request-tracker failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() exposes only {"message": ...}; codes and causes stay in the logs
    - StorageError messages are generic; the underlying cause is never part of them

Design Decisions:
    - Single hierarchy with GuestServicesError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for log records."""
    request_id: str | None = None
    field: str | None = None


class GuestServicesError(Exception):
    """Base exception for all request-tracker errors."""

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
        """Convert to the public REST error body."""
        return {"message": self.message}

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "request_id": self.context.request_id,
            "field": self.context.field,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(GuestServicesError):
    """Input rejected: missing field, invalid enum, bad id or disallowed update."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class NotFoundError(GuestServicesError):
    """No stored request for the given id."""
    def __init__(self, request_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.request_id = request_id
        super().__init__(
            "Request not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(GuestServicesError):
    """Request store operation failed."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
