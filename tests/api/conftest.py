"""Shared fixtures for API tests."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from storefront.api.catalog import get_catalog_service
from storefront.api.categories import get_category_service
from storefront.catalog.service import CatalogService, CategoryService
from storefront.main import app

from tests.fakes import InMemoryCategoryStore, InMemoryProductStore


@pytest.fixture
def client(
    product_store: InMemoryProductStore,
    category_store: InMemoryCategoryStore,
) -> Generator[TestClient, None, None]:
    """Create test client with services bound to in-memory stores."""
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(product_store)
    app.dependency_overrides[get_category_service] = lambda: CategoryService(category_store)

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
