"""Error Hierarchy — typed, categorized exceptions for all store failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400/404) leave the store unchanged; infrastructure errors are 5xx
    - to_response() produces the REST envelope used by every error handler
    - Storage failures are DatabaseError, never ResourceNotFoundError

Design Decisions:
    - Single hierarchy with MaintenanceApiError base: FastAPI global handler catches all
      (ADR: uniform error shape)
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


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_type: str | None = None
    entity_id: int | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class MaintenanceApiError(Exception):
    """Base exception for all maintenance API errors."""

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
                    "entity_type": self.context.entity_type,
                    "entity_id": self.context.entity_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(MaintenanceApiError):
    """Requested entity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity_type = resource_type
        ctx.entity_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DomainValidationError(MaintenanceApiError):
    """Structural or value-domain rule violated."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class PatchError(MaintenanceApiError):
    """Patch document is malformed or targets a field it may not touch."""
    def __init__(
        self,
        message: str,
        operation_index: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "PATCH_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.operation_index = operation_index


class IdMismatchError(MaintenanceApiError):
    """Path identifier and body identifier disagree on a full update."""
    def __init__(self, path_id: int, body_id: int | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity_id = path_id
        super().__init__(
            f"Path id {path_id} does not match body id {body_id}",
            "ID_MISMATCH", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.path_id = path_id
        self.body_id = body_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MaintenanceApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
