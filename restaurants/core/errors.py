"""Error Hierarchy — typed, categorized exceptions for all Restaurants API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by the global error handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RestaurantsError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Programming errors (bad handler wiring, missing request scope) are NOT RestaurantsError:
      they must surface as 500 through the catch-all, never as a client error
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RestaurantsError(Exception):
    """Base exception for all Restaurants API errors."""

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
                    "request_type": self.context.request_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationFailedError(RestaurantsError):
    """One or more field rules failed. Carries every violation, not just the first."""
    def __init__(
        self, errors: list[tuple[str, str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            "One or more validation errors occurred",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        body = super().to_response()
        body["error"]["details"] = [
            {"field": name, "message": message}
            for name, message in self.errors
        ]
        return body


class InvalidReferenceError(RestaurantsError):
    """A foreign key points at a row that does not exist."""
    def __init__(
        self, field: str, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' referenced by '{field}' does not exist",
            "INVALID_REFERENCE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceNotFoundError(RestaurantsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnauthorizedError(RestaurantsError):
    """Caller is anonymous where an identity is required."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(RestaurantsError):
    """Caller is authenticated but lacks the required role."""
    def __init__(self, required_roles: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Requires one of roles: {', '.join(required_roles)}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_roles = required_roles


class RoleAssignmentError(RestaurantsError):
    """Identity store rejected a role change."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ROLE_ASSIGNMENT_FAILED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RestaurantsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Programming Errors ─────────────────────────────────────────

class DispatcherConfigurationError(RuntimeError):
    """Handler table is miswired: duplicate, missing, or unknown request type."""


class UserContextUnavailableError(RuntimeError):
    """User context resolved outside of any request scope."""
