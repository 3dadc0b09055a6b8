"""Domain exceptions.

All catalog-level errors surfaced to API callers. Each error carries
an error category, a machine-readable code and the HTTP status the
presentation layer renders it with.
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """User-facing error categories."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Catalog Errors
# ============================================================================


class CatalogError(DomainError):
    """Base class for catalog errors."""

    category: ErrorCategory = ErrorCategory.INTERNAL
    error_code: str = "INTERNAL_ERROR"
    status_code: int = 500


class ValidationError(CatalogError):
    """Raised when caller input breaks a rule. Never retried."""

    category = ErrorCategory.VALIDATION
    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize validation error.

        Args:
            message: Description of the violated rule.
            field: Name of the offending field, if any.
        """
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class NotFoundError(CatalogError):
    """Raised when the requested entity does not exist."""

    category = ErrorCategory.NOT_FOUND
    error_code = "NOT_FOUND"
    status_code = 404


class ConflictError(CatalogError):
    """Raised when a create violates a uniqueness constraint."""

    category = ErrorCategory.CONFLICT
    error_code = "CONFLICT"
    status_code = 409


class ServiceUnavailableError(CatalogError):
    """Raised when the store cannot be reached. Safe to retry upstream."""

    category = ErrorCategory.SERVICE_UNAVAILABLE
    error_code = "SERVICE_UNAVAILABLE"
    status_code = 503


class InternalError(CatalogError):
    """Raised for any unclassified store failure."""

    category = ErrorCategory.INTERNAL
    error_code = "INTERNAL_ERROR"
    status_code = 500
