"""Error Hierarchy — typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - Messages name the violated precondition, never internal details

Design Decisions:
    - Single hierarchy with WaterBoxError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Core rule checks return violation dicts; error_from_violation() is the one place
      where a violation becomes an exception (conflict codes map to 409, the rest to 400)
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
    DATABASE = "database"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    box_id: int | None = None
    assignment_id: int | None = None
    transfer_id: int | None = None
    caller_id: str | None = None
    debug_info: dict[str, Any] | None = None


class WaterBoxError(Exception):
    """Base exception for all registry errors."""

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
                    "box_id": self.context.box_id,
                    "assignment_id": self.context.assignment_id,
                    "transfer_id": self.context.transfer_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(WaterBoxError):
    """Requested box, assignment or transfer does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidStateError(WaterBoxError):
    """Lifecycle step not allowed from the current state (inactive target,
    mismatched box, identical ids, already in target state)."""
    def __init__(
        self, message: str, code: str = "INVALID_STATE",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class AssignmentLinkConflictError(WaterBoxError):
    """Box cannot be deactivated while it still points at a live assignment."""
    def __init__(
        self, message: str, code: str = "BOX_HAS_CURRENT_ASSIGNMENT",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class ConcurrencyError(WaterBoxError):
    """Concurrent modification of the same box detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class AuthenticationRequiredError(WaterBoxError):
    """No caller identity was forwarded with the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication is required to access this resource",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(WaterBoxError):
    """Caller holds none of the roles accepted by the endpoint."""
    def __init__(self, required_roles: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Caller lacks a required role: {', '.join(required_roles)}",
            "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_roles = required_roles


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(WaterBoxError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Violation mapping ──────────────────────────────────────────

CONFLICT_CODES: frozenset[str] = frozenset({"BOX_HAS_CURRENT_ASSIGNMENT"})


def error_from_violation(
    violation: dict, context: ErrorContext | None = None,
) -> WaterBoxError:
    """Build the typed exception for a rule violation returned by core checks."""
    code = violation["error_code"]
    if code in CONFLICT_CODES:
        return AssignmentLinkConflictError(violation["message"], code, context)
    return InvalidStateError(violation["message"], code, context)
