"""Error Hierarchy — typed, categorized exceptions for all TaskShield failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are raised BEFORE any field is mutated (no partial mutation)
    - Nothing here is retried internally; the caller decides what to do
    - to_response() produces a flat envelope; no internal details leaked in messages

Design Decisions:
    - Single hierarchy with TaskShieldError base: one except clause catches all domain failures
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - IllegalTransitionError carries the rejected (from, to) pair for diagnostics
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
    BUSINESS_RULE = "business_rule"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    task_id: str | None = None
    action: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskShieldError(Exception):
    """Base exception for all TaskShield errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "task_id": self.context.task_id,
                    "action": self.context.action,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class ValidationError(TaskShieldError):
    """A required field is missing or malformed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class InvalidEmailError(ValidationError):
    """Email is null, blank, or not shaped like local@domain.tld."""
    def __init__(self, email: str | None, context: ErrorContext | None = None):
        if email is None or not email.strip():
            message = "Email cannot be null or empty"
        else:
            message = f"Invalid email format: {email}"
        super().__init__(message, "email", context)
        self.code = "INVALID_EMAIL"
        self.email = email


class IllegalTransitionError(TaskShieldError):
    """Task status change rejected by the lifecycle state machine."""
    def __init__(self, from_status, to_status, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot change task status from {from_status.display_name} "
            f"to {to_status.display_name}",
            "ILLEGAL_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.from_status = from_status
        self.to_status = to_status


class IllegalAssignmentError(TaskShieldError):
    """Task assignment to a null user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot assign task to null user",
            "ILLEGAL_ASSIGNMENT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )


class PermissionDeniedError(TaskShieldError):
    """Actor is not allowed to mutate the resource."""
    def __init__(
        self,
        user_id: str | None,
        resource_id: str,
        resource_type: str = "Task",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        if resource_type == "Task":
            ctx.task_id = resource_id
        super().__init__(
            f"User '{user_id}' may not edit {resource_type} '{resource_id}'",
            "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AccountLockedError(TaskShieldError):
    """Login refused because the account cannot authenticate."""
    def __init__(
        self,
        user_id: str,
        locked_until: datetime | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        if locked_until is not None:
            message = f"Account '{user_id}' is locked until {locked_until.isoformat()}"
        else:
            message = f"Account '{user_id}' cannot authenticate"
        super().__init__(
            message, "ACCOUNT_LOCKED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx,
        )
        self.locked_until = locked_until


class ResourceNotFoundError(TaskShieldError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(TaskShieldError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
