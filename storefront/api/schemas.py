"""API schemas for the Storefront API.

Pydantic models for request/response validation and serialization.
"""

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[dict] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Product in a catalog listing."""

    code: str = Field(..., description="Product code")
    price: float = Field(..., description="Product price")
    category: str = Field(..., description="Category name, empty if unassigned")


class ProductListResponse(BaseModel):
    """Catalog listing response."""

    products: list[ProductSchema] = Field(..., description="Products on this page")
    total: int = Field(..., description="Total number of matching products")


class VariantSchema(BaseModel):
    """Product variant with its effective price."""

    name: str = Field(..., description="Variant name")
    sku: str = Field(..., description="Variant SKU")
    price: float = Field(..., description="Effective variant price")


class ProductDetailsResponse(BaseModel):
    """Product details response."""

    code: str
    price: float
    category: str
    variants: list[VariantSchema] = Field(default_factory=list)


# ============================================================================
# Category Schemas
# ============================================================================


class CategorySchema(BaseModel):
    """Category representation."""

    code: str = Field(..., description="Category code")
    name: str = Field(..., description="Category name")


class CategoryCreateRequest(BaseModel):
    """Request to create a category.

    Missing and null fields are accepted here so that the service
    reports which required field is absent.
    """

    code: str | None = Field(default=None, max_length=32, description="Unique category code")
    name: str | None = Field(default=None, max_length=256, description="Category name")
