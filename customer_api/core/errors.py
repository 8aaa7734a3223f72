"""Error Hierarchy — typed, categorized exceptions for customer API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors are 400-level; infrastructure errors are 500-level
    - to_response() produces the REST envelope used by the status-mapping policy

Design Decisions:
    - Store drivers raise their own exceptions; these types only exist once an
      ErrorPolicy decides to classify a failure (see api/error_handlers.py)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class CustomerApiError(Exception):
    """Base exception for all customer API errors."""

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
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "customer_id": self.context.customer_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidCustomerIdError(CustomerApiError):
    """Path identifier is not a well-formed ObjectId."""
    def __init__(self, customer_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{customer_id}' is not a valid customer id",
            "INVALID_CUSTOMER_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.customer_id = customer_id


class InvalidPayloadError(CustomerApiError):
    """Request body could not be read as customer fields."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class CustomerNotFoundError(CustomerApiError):
    """No customer document matches the identifier."""
    def __init__(self, customer_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Customer '{customer_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.customer_id = customer_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CustomerApiError):
    """Document store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class InternalError(CustomerApiError):
    """Unclassified failure."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
