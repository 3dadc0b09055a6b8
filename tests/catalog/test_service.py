"""Tests for CatalogService."""

from decimal import Decimal

import pytest

from storefront.catalog.errors import StoreFailure, StoreFailureKind
from storefront.catalog.models import Product, ProductVariant
from storefront.catalog.service import (
    CatalogService,
    ProductDetailsView,
    ProductFilter,
    ProductView,
    VariantView,
    effective_price,
)
from storefront.domain.exceptions import (
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)

from tests.fakes import InMemoryProductStore


@pytest.fixture
def service(product_store: InMemoryProductStore) -> CatalogService:
    """Create catalog service over the sample products."""
    return CatalogService(product_store)


class TestEffectivePrice:
    """Tests for variant price inheritance."""

    def test_missing_override_uses_product_price(self) -> None:
        assert effective_price(None, Decimal("29.99")) == Decimal("29.99")

    def test_zero_override_uses_product_price(self) -> None:
        assert effective_price(Decimal("0"), Decimal("29.99")) == Decimal("29.99")
        assert effective_price(Decimal("0.00"), Decimal("12.50")) == Decimal("12.50")

    def test_non_zero_override_wins(self) -> None:
        assert effective_price(Decimal("34.99"), Decimal("29.99")) == Decimal("34.99")

    def test_override_below_product_price_wins(self) -> None:
        assert effective_price(Decimal("0.01"), Decimal("29.99")) == Decimal("0.01")


class TestListProducts:
    """Tests for listing every product."""

    @pytest.mark.asyncio
    async def test_maps_products(self, service: CatalogService) -> None:
        """Products map to code, float price and category name."""
        products = await service.list_products()

        assert len(products) == 5
        assert products[0] == ProductView(code="PROD001", price=29.99, category="Clothing")
        assert products[1] == ProductView(code="PROD002", price=49.99, category="Shoes")

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self) -> None:
        service = CatalogService(InMemoryProductStore([]))
        assert await service.list_products() == []

    @pytest.mark.asyncio
    async def test_product_without_category(self) -> None:
        """Unassigned category presents as empty string."""
        store = InMemoryProductStore([Product(code="PROD009", price=Decimal("5.00"), category=None)])
        products = await CatalogService(store).list_products()

        assert products == [ProductView(code="PROD009", price=5.0, category="")]

    @pytest.mark.asyncio
    async def test_unreachable_store_is_service_unavailable(
        self, product_store: InMemoryProductStore, service: CatalogService
    ) -> None:
        product_store.failure = StoreFailure(
            StoreFailureKind.from_message("database connection failed"),
            "database connection failed",
        )

        with pytest.raises(ServiceUnavailableError):
            await service.list_products()

    @pytest.mark.asyncio
    async def test_other_failure_is_internal(
        self, product_store: InMemoryProductStore, service: CatalogService
    ) -> None:
        product_store.failure = StoreFailure(StoreFailureKind.OTHER, "some other error")

        with pytest.raises(InternalError):
            await service.list_products()


class TestListProductsPage:
    """Tests for unfiltered pagination."""

    @pytest.mark.asyncio
    async def test_returns_page_and_total(self, service: CatalogService) -> None:
        page = await service.list_products_page(offset=1, limit=2)

        assert [p.code for p in page.products] == ["PROD002", "PROD003"]
        assert page.total == 5

    @pytest.mark.asyncio
    async def test_offset_past_end(self, service: CatalogService) -> None:
        page = await service.list_products_page(offset=10, limit=5)

        assert page.products == []
        assert page.total == 5

    @pytest.mark.asyncio
    async def test_reads_page_then_count(
        self, product_store: InMemoryProductStore, service: CatalogService
    ) -> None:
        await service.list_products_page(offset=0, limit=2)
        assert product_store.calls == ["fetch_page", "count_all"]

    @pytest.mark.asyncio
    async def test_rejects_negative_offset(self, service: CatalogService) -> None:
        with pytest.raises(ValidationError):
            await service.list_products_page(offset=-1, limit=2)

    @pytest.mark.asyncio
    async def test_rejects_zero_limit(self, service: CatalogService) -> None:
        with pytest.raises(ValidationError):
            await service.list_products_page(offset=0, limit=0)

    @pytest.mark.asyncio
    async def test_count_failure_is_classified(
        self, product_store: InMemoryProductStore, service: CatalogService
    ) -> None:
        product_store.failure = StoreFailure(StoreFailureKind.CONNECTIVITY_FAILURE)

        with pytest.raises(ServiceUnavailableError):
            await service.list_products_page(offset=0, limit=2)


class TestListProductsFiltered:
    """Tests for filtered pagination."""

    @pytest.mark.asyncio
    async def test_price_filter_is_strict(self, service: CatalogService) -> None:
        """A product priced exactly at the bound is excluded."""
        page = await service.list_products_filtered(
            0, 10, ProductFilter(price_lt=Decimal("30.00"))
        )

        assert all(p.price < 30.00 for p in page.products)
        assert "PROD007" not in [p.code for p in page.products]
        assert page.total == 3

    @pytest.mark.asyncio
    async def test_category_filter_matches_name(self, service: CatalogService) -> None:
        page = await service.list_products_filtered(0, 10, ProductFilter(category="Shoes"))

        assert [p.code for p in page.products] == ["PROD002", "PROD006"]
        assert all(p.category == "Shoes" for p in page.products)
        assert page.total == 2

    @pytest.mark.asyncio
    async def test_category_filter_does_not_match_code(self, service: CatalogService) -> None:
        page = await service.list_products_filtered(0, 10, ProductFilter(category="CATGORY002"))

        assert page.products == []
        assert page.total == 0

    @pytest.mark.asyncio
    async def test_filters_are_anded(self, service: CatalogService) -> None:
        page = await service.list_products_filtered(
            0, 10, ProductFilter(category="Shoes", price_lt=Decimal("30"))
        )

        assert [p.code for p in page.products] == ["PROD006"]
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_total_counts_all_matches_not_page(self, service: CatalogService) -> None:
        page = await service.list_products_filtered(
            0, 1, ProductFilter(price_lt=Decimal("100"))
        )

        assert len(page.products) == 1
        assert page.total == 5

    @pytest.mark.asyncio
    async def test_empty_category_means_no_restriction(self, service: CatalogService) -> None:
        page = await service.list_products_filtered(0, 10, ProductFilter(category=""))
        assert page.total == 5

    def test_negative_price_bound_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProductFilter(price_lt=Decimal("-1"))
        assert exc_info.value.field == "price_lt"

    def test_filter_is_empty(self) -> None:
        assert ProductFilter().is_empty
        assert ProductFilter(category="").is_empty
        assert not ProductFilter(price_lt=Decimal("0")).is_empty
        assert not ProductFilter(category="Shoes").is_empty


class TestGetProduct:
    """Tests for product details."""

    @pytest.mark.asyncio
    async def test_resolves_variant_prices(self, service: CatalogService) -> None:
        """Zero-priced variant inherits the product price."""
        details = await service.get_product("PROD001")

        assert details == ProductDetailsView(
            code="PROD001",
            price=29.99,
            category="Clothing",
            variants=[
                VariantView(name="Small", sku="PROD001-S", price=29.99),
                VariantView(name="Large", sku="PROD001-L", price=29.99),
            ],
        )

    @pytest.mark.asyncio
    async def test_preserves_store_variant_order(self) -> None:
        product = Product(
            code="PROD010",
            price=Decimal("10.00"),
            variants=[
                ProductVariant(name="Z", sku="PROD010-Z", price=None),
                ProductVariant(name="A", sku="PROD010-A", price=Decimal("12.00")),
                ProductVariant(name="M", sku="PROD010-M", price=Decimal("0")),
            ],
        )
        details = await CatalogService(InMemoryProductStore([product])).get_product("PROD010")

        assert [v.sku for v in details.variants] == ["PROD010-Z", "PROD010-A", "PROD010-M"]
        assert [v.price for v in details.variants] == [10.0, 12.0, 10.0]

    @pytest.mark.asyncio
    async def test_product_without_variants(self, service: CatalogService) -> None:
        details = await service.get_product("PROD002")
        assert details.variants == []

    @pytest.mark.asyncio
    async def test_unknown_code_not_found(self, service: CatalogService) -> None:
        with pytest.raises(NotFoundError):
            await service.get_product("UNKNOWN")

    @pytest.mark.asyncio
    async def test_code_match_is_case_sensitive(self, service: CatalogService) -> None:
        with pytest.raises(NotFoundError):
            await service.get_product("prod001")

    @pytest.mark.asyncio
    async def test_unreachable_store(
        self, product_store: InMemoryProductStore, service: CatalogService
    ) -> None:
        product_store.failure = StoreFailure(StoreFailureKind.CONNECTIVITY_FAILURE)

        with pytest.raises(ServiceUnavailableError):
            await service.get_product("PROD001")

    @pytest.mark.asyncio
    async def test_other_failure_is_not_reported_as_missing(
        self, product_store: InMemoryProductStore, service: CatalogService
    ) -> None:
        product_store.failure = StoreFailure(StoreFailureKind.OTHER, "syntax error")

        with pytest.raises(InternalError) as exc_info:
            await service.get_product("PROD001")

        assert exc_info.value.message == "Unable to retrieve product"
