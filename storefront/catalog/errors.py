"""Store failures and their classification.

The store adapters never leak driver exceptions. Every persistence
failure is raised as a StoreFailure tagged with a StoreFailureKind,
and the services turn it into a user-facing CatalogError through
classify() and raise_for_failure().
"""

from enum import Enum
from typing import NoReturn

import structlog
from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from storefront.domain.exceptions import (
    CatalogError,
    ConflictError,
    ErrorCategory,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
)

logger = structlog.get_logger()

CONNECTIVITY_FAILURE_SIGNALS = ("database connection failed",)

UNIQUE_VIOLATION_SIGNALS = (
    "UNIQUE constraint failed: categories.code",
    "duplicate key value violates unique constraint",
)


class StoreFailureKind(str, Enum):
    """Closed set of failure shapes a store can report."""

    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    CONNECTIVITY_FAILURE = "connectivity_failure"
    OTHER = "other"

    @classmethod
    def from_message(cls, message: str) -> "StoreFailureKind":
        """Classify a descriptive failure message.

        Args:
            message: Failure text reported by the store or driver.

        Returns:
            CONNECTIVITY_FAILURE or UNIQUE_VIOLATION when the text contains
            a known signal, OTHER otherwise.
        """
        if any(signal in message for signal in CONNECTIVITY_FAILURE_SIGNALS):
            return cls.CONNECTIVITY_FAILURE
        if any(signal in message for signal in UNIQUE_VIOLATION_SIGNALS):
            return cls.UNIQUE_VIOLATION
        return cls.OTHER


class StoreFailure(Exception):
    """Persistence failure raised by a store adapter."""

    def __init__(self, kind: StoreFailureKind, message: str = "") -> None:
        """Initialize store failure.

        Args:
            kind: Failure shape.
            message: Descriptive text from the underlying store.
        """
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message or kind.value

    @classmethod
    def from_exception(cls, exc: BaseException) -> "StoreFailure":
        """Translate a driver or SQLAlchemy exception.

        Args:
            exc: Exception raised while talking to the database.

        Returns:
            Tagged store failure.
        """
        message = str(exc)

        if isinstance(exc, IntegrityError):
            kind = StoreFailureKind.from_message(message)
            if kind is StoreFailureKind.CONNECTIVITY_FAILURE:
                kind = StoreFailureKind.OTHER
            return cls(kind, message)

        # A pool checkout timeout counts as an unreachable store.
        if isinstance(exc, (OperationalError, InterfaceError, PoolTimeoutError, OSError)):
            return cls(StoreFailureKind.CONNECTIVITY_FAILURE, message)

        if isinstance(exc, DBAPIError) and exc.connection_invalidated:
            return cls(StoreFailureKind.CONNECTIVITY_FAILURE, message)

        return cls(StoreFailureKind.from_message(message), message)


# Exceptions a store adapter translates into StoreFailure
TRANSLATED_EXCEPTIONS = (SQLAlchemyError, OSError)


_CATEGORY_BY_KIND: dict[StoreFailureKind, ErrorCategory] = {
    StoreFailureKind.NOT_FOUND: ErrorCategory.NOT_FOUND,
    StoreFailureKind.UNIQUE_VIOLATION: ErrorCategory.CONFLICT,
    StoreFailureKind.CONNECTIVITY_FAILURE: ErrorCategory.SERVICE_UNAVAILABLE,
    StoreFailureKind.OTHER: ErrorCategory.INTERNAL,
}

_ERROR_BY_CATEGORY: dict[ErrorCategory, type[CatalogError]] = {
    ErrorCategory.NOT_FOUND: NotFoundError,
    ErrorCategory.CONFLICT: ConflictError,
    ErrorCategory.SERVICE_UNAVAILABLE: ServiceUnavailableError,
    ErrorCategory.INTERNAL: InternalError,
}


def classify(failure: StoreFailure) -> ErrorCategory:
    """Map a store failure to a user-facing error category.

    Args:
        failure: Failure raised by a store adapter.

    Returns:
        NOT_FOUND, CONFLICT, SERVICE_UNAVAILABLE or INTERNAL.
    """
    return _CATEGORY_BY_KIND[failure.kind]


def raise_for_failure(failure: StoreFailure, message: str) -> NoReturn:
    """Raise the CatalogError matching a classified store failure.

    Args:
        failure: Failure raised by a store adapter.
        message: User-facing message for the error. Replaced by a
            generic message when the store is unreachable.

    Raises:
        CatalogError: Always, chained to the store failure.
    """
    category = classify(failure)

    if category is ErrorCategory.SERVICE_UNAVAILABLE:
        logger.warning("Store unavailable", message=message, error=failure.message)
        message = "Database service is temporarily unavailable"
    elif category is ErrorCategory.INTERNAL:
        logger.error("Store failure", message=message, error=failure.message)

    raise _ERROR_BY_CATEGORY[category](message, details={"reason": failure.kind.value}) from failure
