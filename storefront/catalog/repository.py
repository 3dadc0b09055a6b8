"""Catalog store ports and their SQLAlchemy implementations.

The services depend on the ProductStore and CategoryStore protocols only.
ProductRepository and CategoryRepository implement them on top of an
async SQLAlchemy session; tests substitute in-memory doubles.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from decimal import Decimal
from typing import Protocol

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.errors import TRANSLATED_EXCEPTIONS, StoreFailure, StoreFailureKind
from storefront.catalog.models import Category, Product


class ProductStore(Protocol):
    """Read access to products. Methods raise StoreFailure."""

    async def fetch_all(
        self,
        with_category: bool = True,
        with_variants: bool = True,
    ) -> Sequence[Product]: ...

    async def fetch_page(
        self,
        offset: int,
        limit: int,
        with_category: bool = True,
        with_variants: bool = True,
    ) -> Sequence[Product]: ...

    async def count_all(self) -> int: ...

    async def fetch_page_filtered(
        self,
        offset: int,
        limit: int,
        category_name: str | None = None,
        price_lt: Decimal | None = None,
    ) -> Sequence[Product]: ...

    async def count_filtered(
        self,
        category_name: str | None = None,
        price_lt: Decimal | None = None,
    ) -> int: ...

    async def fetch_by_code(self, code: str) -> Product: ...


class CategoryStore(Protocol):
    """Access to categories. Methods raise StoreFailure."""

    async def fetch_all_categories(self) -> Sequence[Category]: ...

    async def fetch_category_by_code(self, code: str) -> Category: ...

    async def insert_category(self, code: str, name: str) -> Category: ...


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise database exceptions as StoreFailure."""
    try:
        yield
    except TRANSLATED_EXCEPTIONS as e:
        raise StoreFailure.from_exception(e) from e


class ProductRepository:
    """Repository for Product database operations.

    Handles all database interactions for products including
    filtering and pagination.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.fetch_page_filtered(
                offset=0,
                limit=10,
                category_name="Shoes",
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def fetch_all(
        self,
        with_category: bool = True,
        with_variants: bool = True,
    ) -> Sequence[Product]:
        """Get every product.

        Args:
            with_category: Whether to eagerly load the category.
            with_variants: Whether to eagerly load variants.

        Returns:
            All products, in insertion order.
        """
        query = self._with_relations(select(Product), with_category, with_variants)
        query = query.order_by(Product.id)

        with translate_errors():
            result = await self.session.execute(query)
            return result.scalars().all()

    async def fetch_page(
        self,
        offset: int,
        limit: int,
        with_category: bool = True,
        with_variants: bool = True,
    ) -> Sequence[Product]:
        """Get one page of products.

        Args:
            offset: Number of rows to skip.
            limit: Maximum rows to return.
            with_category: Whether to eagerly load the category.
            with_variants: Whether to eagerly load variants.

        Returns:
            Products on the page.
        """
        query = self._with_relations(select(Product), with_category, with_variants)
        query = query.order_by(Product.id).offset(offset).limit(limit)

        with translate_errors():
            result = await self.session.execute(query)
            return result.scalars().all()

    async def count_all(self) -> int:
        """Count all products.

        Returns:
            Total number of products.
        """
        with translate_errors():
            result = await self.session.execute(select(func.count(Product.id)))
            return result.scalar_one()

    async def fetch_page_filtered(
        self,
        offset: int,
        limit: int,
        category_name: str | None = None,
        price_lt: Decimal | None = None,
    ) -> Sequence[Product]:
        """Get one page of products matching the filters.

        Args:
            offset: Number of rows to skip.
            limit: Maximum rows to return.
            category_name: Exact category name to match.
            price_lt: Exclusive upper price bound.

        Returns:
            Matching products ordered by code.
        """
        query = self._with_relations(select(Product), with_category=True, with_variants=True)
        query = self._apply_filters(query, category_name, price_lt)
        query = query.order_by(Product.code.asc()).offset(offset).limit(limit)

        with translate_errors():
            result = await self.session.execute(query)
            return result.scalars().all()

    async def count_filtered(
        self,
        category_name: str | None = None,
        price_lt: Decimal | None = None,
    ) -> int:
        """Count products matching the filters.

        Args:
            category_name: Exact category name to match.
            price_lt: Exclusive upper price bound.

        Returns:
            Number of matching products.
        """
        query = self._apply_filters(
            select(func.count(Product.id)).select_from(Product),
            category_name,
            price_lt,
        )

        with translate_errors():
            result = await self.session.execute(query)
            return result.scalar_one()

    async def fetch_by_code(self, code: str) -> Product:
        """Get product by exact code with category and variants.

        Args:
            code: Product code (case-sensitive).

        Returns:
            The product.

        Raises:
            StoreFailure: NOT_FOUND if no product has this code.
        """
        query = self._with_relations(select(Product), with_category=True, with_variants=True)
        query = query.where(Product.code == code)

        with translate_errors():
            result = await self.session.execute(query)
            product = result.scalar_one_or_none()

        if product is None:
            raise StoreFailure(StoreFailureKind.NOT_FOUND, f"record not found: {code}")
        return product

    def _with_relations(
        self,
        query: Select,
        with_category: bool,
        with_variants: bool,
    ) -> Select:
        """Add eager-loading options to a product query."""
        if with_category:
            query = query.options(selectinload(Product.category))
        if with_variants:
            query = query.options(selectinload(Product.variants))
        return query

    def _apply_filters(
        self,
        query: Select,
        category_name: str | None,
        price_lt: Decimal | None,
    ) -> Select:
        """Restrict a product query by category name and price bound."""
        if category_name:
            query = query.join(Category, Product.category_id == Category.id).where(
                Category.name == category_name
            )
        if price_lt is not None:
            query = query.where(Product.price < price_lt)
        return query


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def fetch_all_categories(self) -> Sequence[Category]:
        """Get all categories in insertion order."""
        with translate_errors():
            result = await self.session.execute(select(Category).order_by(Category.id))
            return result.scalars().all()

    async def fetch_category_by_code(self, code: str) -> Category:
        """Get category by exact code.

        Raises:
            StoreFailure: NOT_FOUND if no category has this code.
        """
        with translate_errors():
            result = await self.session.execute(select(Category).where(Category.code == code))
            category = result.scalar_one_or_none()

        if category is None:
            raise StoreFailure(StoreFailureKind.NOT_FOUND, f"record not found: {code}")
        return category

    async def insert_category(self, code: str, name: str) -> Category:
        """Insert a new category.

        The unique constraint on code is enforced by the database and
        surfaces as a UNIQUE_VIOLATION failure.

        Args:
            code: Category code.
            name: Category name.

        Returns:
            The persisted category.
        """
        category = Category(code=code, name=name)

        with translate_errors():
            self.session.add(category)
            await self.session.flush()
        return category
