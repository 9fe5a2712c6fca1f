"""Error Hierarchy — typed, categorized exceptions for all ticket exchange failure modes.

Invariants:
    - Every error has a code (str), kind (ErrorKind), severity (ErrorSeverity)
    - Only four kinds exist: validation, not_found, conflict, internal
    - Validation/NotFound errors are raised before any mutation
    - Conflict errors mean an optimistic delete/update matched zero rows (retryable)
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ExchangeError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Engines raise instead of returning Result objects: the route layer maps kind → status
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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


class ErrorKind(str, Enum):
    """Error kinds exposed to the HTTP layer."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    username: str | None = None
    ticket_id: str | None = None
    operation: str | None = None
    step: str | None = None
    debug_info: dict[str, Any] | None = None


class ExchangeError(Exception):
    """Base exception for all ticket exchange errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def retryable(self) -> bool:
        return self.kind == ErrorKind.CONFLICT

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "kind": self.kind.value,
                "severity": self.severity.value,
                "retryable": self.retryable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "ticket_id": self.context.ticket_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(ExchangeError):
    """Malformed or policy-violating input. Never mutates."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorKind.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(ExchangeError):
    """Ticket or account absent, or not in the required state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class ConflictError(ExchangeError):
    """Optimistic delete/update lost a race with a concurrent request."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorKind.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(ExchangeError):
    """Unexpected failure. A partial mutation may already have happened."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorKind.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DatabaseError(ExchangeError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorKind.INTERNAL,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
