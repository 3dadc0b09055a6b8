"""Catalog API endpoints.

Provides endpoints for browsing products:
- GET /catalog - list products, optionally paginated and filtered
- GET /catalog/{code} - product details with variants
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.schemas import (
    ErrorResponse,
    ProductDetailsResponse,
    ProductListResponse,
    ProductSchema,
    VariantSchema,
)
from storefront.catalog.repository import ProductRepository
from storefront.catalog.service import (
    CatalogService,
    ProductDetailsView,
    ProductFilter,
    ProductView,
)
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import get_session

router = APIRouter(prefix="/catalog", tags=["Catalog"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(ProductRepository(session))


# ============================================================================
# Converters
# ============================================================================


def product_to_schema(product: ProductView) -> ProductSchema:
    """Convert ProductView to ProductSchema."""
    return ProductSchema(code=product.code, price=product.price, category=product.category)


def details_to_response(product: ProductDetailsView) -> ProductDetailsResponse:
    """Convert ProductDetailsView to ProductDetailsResponse."""
    return ProductDetailsResponse(
        code=product.code,
        price=product.price,
        category=product.category,
        variants=[
            VariantSchema(name=v.name, sku=v.sku, price=v.price)
            for v in product.variants
        ],
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductListResponse,
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="List products",
    description=(
        "List products. Without query parameters every product is returned. "
        "Passing offset or limit paginates; category or price_lt also filters."
    ),
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    offset: int | None = Query(default=None, ge=0, description="Rows to skip"),
    limit: int | None = Query(
        default=None, ge=1, le=settings.max_page_limit, description="Page size"
    ),
    category: str | None = Query(default=None, description="Exact category name"),
    price_lt: Decimal | None = Query(
        default=None, ge=0, description="Only products priced strictly below this"
    ),
) -> ProductListResponse:
    """List products.

    Args:
        service: Catalog service.
        offset: Rows to skip.
        limit: Page size.
        category: Category name filter.
        price_lt: Exclusive upper price bound.

    Returns:
        Products and total count.
    """
    filters = ProductFilter(category=category, price_lt=price_lt)

    if offset is None and limit is None and filters.is_empty:
        products = await service.list_products()
        return ProductListResponse(
            products=[product_to_schema(p) for p in products],
            total=len(products),
        )

    offset = offset if offset is not None else 0
    limit = limit if limit is not None else settings.default_page_limit

    if filters.is_empty:
        page = await service.list_products_page(offset, limit)
    else:
        page = await service.list_products_filtered(offset, limit, filters)

    return ProductListResponse(
        products=[product_to_schema(p) for p in page.products],
        total=page.total,
    )


@router.get(
    "/{code}",
    response_model=ProductDetailsResponse,
    responses={
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Get product details",
    description="Get a product by code with its category and variants.",
)
async def get_product(
    code: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductDetailsResponse:
    """Get a product by code.

    Args:
        code: Product code (case-sensitive).
        service: Catalog service.

    Returns:
        Product details.
    """
    product = await service.get_product(code)
    return details_to_response(product)
