"""Catalog services.

Turns persisted products and categories into API-facing records,
applies pagination and filtering, resolves variant prices, and
converts store failures into catalog errors.
"""

from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from storefront.catalog.errors import StoreFailure, StoreFailureKind, raise_for_failure
from storefront.catalog.models import Category, Product, ProductVariant
from storefront.catalog.repository import CategoryStore, ProductStore
from storefront.domain.exceptions import ValidationError

logger = structlog.get_logger()


# ============================================================================
# Presentation Records
# ============================================================================


@dataclass(frozen=True)
class ProductView:
    """Product as listed in the catalog."""

    code: str
    price: float
    category: str


@dataclass(frozen=True)
class VariantView:
    """Variant with its effective price."""

    name: str
    sku: str
    price: float


@dataclass(frozen=True)
class ProductDetailsView:
    """Product with category and variants."""

    code: str
    price: float
    category: str
    variants: list[VariantView] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryView:
    """Category as exposed by the API."""

    code: str
    name: str


@dataclass(frozen=True)
class ProductPage:
    """One page of products plus the total row count.

    Attributes:
        products: Products on the page.
        total: Count of all rows the page was drawn from. Read separately
            from the page, so it may reflect concurrent writes.
    """

    products: list[ProductView]
    total: int


@dataclass(frozen=True)
class ProductFilter:
    """Filter parameters for product listing.

    Attributes:
        category: Exact category name. Empty means no restriction.
        price_lt: Exclusive upper price bound.
    """

    category: str | None = None
    price_lt: Decimal | None = None

    def __post_init__(self) -> None:
        if self.price_lt is not None and self.price_lt < 0:
            raise ValidationError("price_lt must be a non-negative number", field="price_lt")

    @property
    def is_empty(self) -> bool:
        """Check whether no field restricts the listing."""
        return not self.category and self.price_lt is None


# ============================================================================
# Pricing
# ============================================================================


def effective_price(variant_price: Decimal | None, product_price: Decimal) -> Decimal:
    """Resolve the price a variant sells at.

    A missing override and an override of exactly zero both fall back
    to the product price, so a genuinely free variant cannot be expressed.

    Args:
        variant_price: Variant override price, if any.
        product_price: Owning product's price.

    Returns:
        The effective price.
    """
    if variant_price is None or variant_price == 0:
        return product_price
    return variant_price


def _category_name(product: Product) -> str:
    return product.category.name if product.category is not None else ""


def _to_product_view(product: Product) -> ProductView:
    return ProductView(
        code=product.code,
        price=float(product.price),
        category=_category_name(product),
    )


def _to_variant_view(variant: ProductVariant, product_price: Decimal) -> VariantView:
    return VariantView(
        name=variant.name,
        sku=variant.sku,
        price=float(effective_price(variant.price, product_price)),
    )


def _to_category_view(category: Category) -> CategoryView:
    return CategoryView(code=category.code, name=category.name)


def _check_page(offset: int, limit: int) -> None:
    if offset < 0:
        raise ValidationError("offset must be a non-negative integer", field="offset")
    if limit < 1:
        raise ValidationError("limit must be a positive integer", field="limit")


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for product catalog queries.

    Stateless: every call is one or two round trips to the store.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(ProductRepository(session))
            page = await service.list_products_filtered(
                offset=0,
                limit=10,
                filters=ProductFilter(category="Shoes"),
            )
    """

    def __init__(self, products: ProductStore) -> None:
        """Initialize service with a product store.

        Args:
            products: Store to read products from.
        """
        self.products = products

    async def list_products(self) -> list[ProductView]:
        """List every product with its category name.

        Returns:
            Products in store order, empty if the store holds none.
        """
        try:
            products = await self.products.fetch_all(with_category=True, with_variants=False)
        except StoreFailure as e:
            raise_for_failure(e, "Unable to retrieve products at this time")

        return [_to_product_view(p) for p in products]

    async def list_products_page(self, offset: int, limit: int) -> ProductPage:
        """List one page of products with the unfiltered total.

        Args:
            offset: Rows to skip.
            limit: Page size.

        Returns:
            The page and the total product count.
        """
        _check_page(offset, limit)

        try:
            products = await self.products.fetch_page(
                offset, limit, with_category=True, with_variants=False
            )
            total = await self.products.count_all()
        except StoreFailure as e:
            raise_for_failure(e, "Unable to retrieve products at this time")

        return ProductPage(products=[_to_product_view(p) for p in products], total=total)

    async def list_products_filtered(
        self,
        offset: int,
        limit: int,
        filters: ProductFilter,
    ) -> ProductPage:
        """List one page of products matching the filters.

        Both the page and the total are restricted by the filters.
        Category matches by name, price is a strict less-than, and
        the two are combined with AND.

        Args:
            offset: Rows to skip.
            limit: Page size.
            filters: Category and price restrictions.

        Returns:
            The page and the matching row count.
        """
        _check_page(offset, limit)
        category = filters.category or None

        try:
            products = await self.products.fetch_page_filtered(
                offset, limit, category_name=category, price_lt=filters.price_lt
            )
            total = await self.products.count_filtered(
                category_name=category, price_lt=filters.price_lt
            )
        except StoreFailure as e:
            raise_for_failure(e, "Unable to retrieve products at this time")

        return ProductPage(products=[_to_product_view(p) for p in products], total=total)

    async def get_product(self, code: str) -> ProductDetailsView:
        """Get a product with its variants by exact code.

        Variants keep the order the store returned them in.

        Args:
            code: Product code (case-sensitive).

        Returns:
            Product details with effective variant prices.

        Raises:
            NotFoundError: If no product has this code.
        """
        try:
            product = await self.products.fetch_by_code(code)
        except StoreFailure as e:
            if e.kind is StoreFailureKind.NOT_FOUND:
                raise_for_failure(e, f"Product not found: {code}")
            raise_for_failure(e, "Unable to retrieve product")

        return ProductDetailsView(
            code=product.code,
            price=float(product.price),
            category=_category_name(product),
            variants=[_to_variant_view(v, product.price) for v in product.variants],
        )


# ============================================================================
# Category Service
# ============================================================================


class CategoryService:
    """Service for category listing and creation."""

    def __init__(self, categories: CategoryStore) -> None:
        """Initialize service with a category store.

        Args:
            categories: Store to read and write categories.
        """
        self.categories = categories

    async def list_categories(self) -> list[CategoryView]:
        """List all categories."""
        try:
            categories = await self.categories.fetch_all_categories()
        except StoreFailure as e:
            raise_for_failure(e, "Unable to retrieve categories at this time")

        return [_to_category_view(c) for c in categories]

    async def get_category(self, code: str) -> CategoryView:
        """Get a category by exact code.

        Raises:
            NotFoundError: If no category has this code.
        """
        try:
            category = await self.categories.fetch_category_by_code(code)
        except StoreFailure as e:
            if e.kind is StoreFailureKind.NOT_FOUND:
                raise_for_failure(e, f"Category not found: {code}")
            raise_for_failure(e, "Unable to retrieve category")

        return _to_category_view(category)

    async def create_category(self, code: str | None, name: str | None) -> CategoryView:
        """Create a category.

        Code is validated before name; only the first violation is reported.

        Args:
            code: Unique category code.
            name: Category name.

        Returns:
            The created category's code and name.

        Raises:
            ValidationError: If code or name is empty or missing.
            ConflictError: If a category with this code exists.
            ServiceUnavailableError: If the store is unreachable.
            InternalError: For any other store failure.
        """
        if not code:
            raise ValidationError("code required", field="code")
        if not name:
            raise ValidationError("name required", field="name")

        try:
            category = await self.categories.insert_category(code, name)
        except StoreFailure as e:
            if e.kind is StoreFailureKind.UNIQUE_VIOLATION:
                raise_for_failure(e, "Category with this code already exists")
            raise_for_failure(e, "Unable to create category")

        logger.info("Category created", code=category.code, name=category.name)
        return _to_category_view(category)
