"""Error Hierarchy — typed, categorized exceptions for all catalog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - "Not found" on identity lookups is a None result, never an exception
      (ResourceNotFoundError is reserved for filter references that must exist)
    - Every store failure is a StorageError subclass; callers never see raw
      SQLAlchemy exceptions
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CatalogError base: the transport layer maps one type
      to its responses
    - ConstraintViolationError split into SlugConflictError and
      ReferentialIntegrityError so callers can tell a duplicate slug from a
      dangling team/system reference
    - No retries anywhere in this package: retry policy belongs to callers
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
    operation: str | None = None
    core_id: int | None = None
    slug: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all catalog errors."""

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

    def to_dict(self) -> dict:
        """Convert to a transport-neutral error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "core_id": self.context.core_id,
                    "slug": self.context.slug,
                },
            }
        }


# ─── Domain Errors ──────────────────────────────────────────────

class MalformedFilterError(CatalogError):
    """A supplied filter, identity or paging value is not well-formed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_FILTER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field


class ResourceNotFoundError(CatalogError):
    """A referenced resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class GroupingMismatchError(CatalogError):
    """Child rows do not line up with the parent set they were fetched for."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "GROUPING_MISMATCH", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context,
        )


# ─── Storage Errors ─────────────────────────────────────────────

class StorageError(CatalogError):
    """Database operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        code: str = "STORAGE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Database {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, ctx,
        )
        self.operation = operation


class ConstraintViolationError(StorageError):
    """An integrity constraint rejected the write."""
    def __init__(
        self,
        message: str,
        operation: str,
        constraint: str = "unknown",
        code: str = "CONSTRAINT_VIOLATION",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, operation, code, ErrorCategory.CONFLICT, context,
        )
        self.severity = ErrorSeverity.ERROR
        self.constraint = constraint


class SlugConflictError(ConstraintViolationError):
    """Slug already taken by another row."""
    def __init__(self, slug: str | None, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.slug = ctx.slug or slug
        super().__init__(
            f"slug '{slug}' already exists", operation,
            "unique", "SLUG_CONFLICT", ctx,
        )


class ReferentialIntegrityError(ConstraintViolationError):
    """A foreign key points at a row that does not exist."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, "foreign_key", "REFERENTIAL_INTEGRITY", context,
        )


class StorageUnavailableError(StorageError):
    """Connection or transport failure talking to the store."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, "STORAGE_UNAVAILABLE", ErrorCategory.DATABASE, context,
        )
