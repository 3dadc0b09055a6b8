"""Shared fixtures: in-memory catalog stores and sample data."""

from decimal import Decimal

import pytest

from storefront.catalog.models import Category, Product, ProductVariant
from tests.fakes import InMemoryCategoryStore, InMemoryProductStore


# ============================================================================
# Sample Data
# ============================================================================


@pytest.fixture
def clothing() -> Category:
    return Category(id=1, code="CATGORY001", name="Clothing")


@pytest.fixture
def shoes() -> Category:
    return Category(id=2, code="CATGORY002", name="Shoes")


@pytest.fixture
def accessories() -> Category:
    return Category(id=3, code="CATGORY003", name="Accessories")


@pytest.fixture
def sample_products(clothing: Category, shoes: Category, accessories: Category) -> list[Product]:
    """Five products across three categories.

    PROD001 has one variant with an explicit price and one priced at zero.
    """
    return [
        Product(
            code="PROD001",
            price=Decimal("29.99"),
            category=clothing,
            variants=[
                ProductVariant(name="Small", sku="PROD001-S", price=Decimal("29.99")),
                ProductVariant(name="Large", sku="PROD001-L", price=Decimal("0")),
            ],
        ),
        Product(code="PROD002", price=Decimal("49.99"), category=shoes, variants=[]),
        Product(code="PROD003", price=Decimal("8.75"), category=accessories, variants=[]),
        Product(code="PROD006", price=Decimal("19.99"), category=shoes, variants=[]),
        Product(code="PROD007", price=Decimal("30.00"), category=clothing, variants=[]),
    ]


@pytest.fixture
def product_store(sample_products: list[Product]) -> InMemoryProductStore:
    return InMemoryProductStore(sample_products)


@pytest.fixture
def category_store(clothing: Category, shoes: Category, accessories: Category) -> InMemoryCategoryStore:
    return InMemoryCategoryStore([clothing, shoes, accessories])
