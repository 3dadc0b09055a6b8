"""SQLAlchemy models for the product catalog.

Defines Category, Product and ProductVariant tables.
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


class Category(Base):
    """Product category.

    Attributes:
        id: Surrogate key, never exposed through the API.
        code: Unique category code (e.g. "CATGORY001").
        name: Human-readable name (e.g. "Clothing").
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(code={self.code}, name={self.name})>"


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Surrogate key.
        code: Unique product code (e.g. "PROD001").
        price: Base price, fixed-point decimal.
        category_id: Owning category, unset until assigned.
        category: Loaded category relationship.
        variants: Variants owned by this product.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )

    # Relationships
    category: Mapped[Category | None] = relationship("Category")
    variants: Mapped[list["ProductVariant"]] = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductVariant.id",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(code={self.code}, price={self.price})>"


class ProductVariant(Base):
    """Product variant (e.g. a size).

    A variant without its own price, or with a price of exactly zero,
    sells at the owning product's price.

    Attributes:
        id: Surrogate key.
        product_id: Parent product ID.
        name: Variant name (e.g. "Small").
        sku: Stock keeping unit (e.g. "PROD001-S").
        price: Optional override price.
    """

    __tablename__ = "product_variants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    sku: Mapped[str] = mapped_column(String(256), nullable=False)
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="variants")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductVariant(sku={self.sku}, name={self.name})>"
