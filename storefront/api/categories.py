"""Category API endpoints.

Provides endpoints for category management:
- GET /categories - list categories
- POST /categories - create a category
- GET /categories/{code} - get one category
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.schemas import CategoryCreateRequest, CategorySchema, ErrorResponse
from storefront.catalog.repository import CategoryRepository
from storefront.catalog.service import CategoryService, CategoryView
from storefront.infrastructure.database import get_session

router = APIRouter(prefix="/categories", tags=["Categories"])


def get_category_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryService:
    """Get category service bound to the request session."""
    return CategoryService(CategoryRepository(session))


def category_to_schema(category: CategoryView) -> CategorySchema:
    """Convert CategoryView to CategorySchema."""
    return CategorySchema(code=category.code, name=category.name)


@router.get(
    "",
    response_model=list[CategorySchema],
    responses={503: {"model": ErrorResponse}},
    summary="List categories",
)
async def list_categories(
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> list[CategorySchema]:
    """List all categories."""
    categories = await service.list_categories()
    return [category_to_schema(c) for c in categories]


@router.post(
    "",
    response_model=CategorySchema,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Create category",
    description="Create a category. Codes are unique.",
)
async def create_category(
    request: CategoryCreateRequest,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> CategorySchema:
    """Create a category.

    Args:
        request: Category code and name.
        service: Category service.

    Returns:
        The created category.
    """
    category = await service.create_category(request.code, request.name)
    return category_to_schema(category)


@router.get(
    "/{code}",
    response_model=CategorySchema,
    responses={
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
    summary="Get category",
)
async def get_category(
    code: str,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> CategorySchema:
    """Get a category by code."""
    category = await service.get_category(code)
    return category_to_schema(category)
