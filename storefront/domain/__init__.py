"""Domain layer - catalog error taxonomy.

Example usage:
    from storefront.domain import NotFoundError

    raise NotFoundError("Product not found: PROD999")
"""

from storefront.domain.exceptions import (
    CatalogError,
    ConflictError,
    DomainError,
    ErrorCategory,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "ConflictError",
    "DomainError",
    "ErrorCategory",
    "InternalError",
    "NotFoundError",
    "ServiceUnavailableError",
    "ValidationError",
]
