"""Product Catalog.

Store ports and adapters, failure classification, and the services
that present products, variants and categories to the API.
"""

from storefront.catalog.errors import StoreFailure, StoreFailureKind, classify
from storefront.catalog.models import Category, Product, ProductVariant
from storefront.catalog.repository import (
    CategoryRepository,
    CategoryStore,
    ProductRepository,
    ProductStore,
)
from storefront.catalog.service import (
    CatalogService,
    CategoryService,
    CategoryView,
    ProductDetailsView,
    ProductFilter,
    ProductPage,
    ProductView,
    VariantView,
    effective_price,
)

__all__ = [
    # Models
    "Category",
    "Product",
    "ProductVariant",
    # Store
    "CategoryRepository",
    "CategoryStore",
    "ProductRepository",
    "ProductStore",
    "StoreFailure",
    "StoreFailureKind",
    "classify",
    # Service
    "CatalogService",
    "CategoryService",
    "CategoryView",
    "ProductDetailsView",
    "ProductFilter",
    "ProductPage",
    "ProductView",
    "VariantView",
    "effective_price",
]
