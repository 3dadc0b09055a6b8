"""Reference catalog data.

Three categories and eight products, some with variants. Used by the
seed script and by the repository tests.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Category, Product, ProductVariant

REFERENCE_CATEGORIES = [
    ("CATGORY001", "Clothing"),
    ("CATGORY002", "Shoes"),
    ("CATGORY003", "Accessories"),
]

# code, price, category code, variants as (name, sku, price or None)
REFERENCE_PRODUCTS = [
    ("PROD001", "29.99", "CATGORY001", [
        ("Small", "PROD001-S", "29.99"),
        ("Medium", "PROD001-M", None),
        ("Large", "PROD001-L", "0"),
    ]),
    ("PROD002", "49.99", "CATGORY002", [
        ("Size 40", "PROD002-40", None),
        ("Size 42", "PROD002-42", "52.99"),
    ]),
    ("PROD003", "8.75", "CATGORY003", []),
    ("PROD004", "15.00", "CATGORY001", [
        ("Red", "PROD004-R", None),
        ("Blue", "PROD004-B", None),
    ]),
    ("PROD005", "9.99", "CATGORY003", []),
    ("PROD006", "55.99", "CATGORY002", [
        ("Size 38", "PROD006-38", "54.99"),
    ]),
    ("PROD007", "29.99", "CATGORY001", []),
    ("PROD008", "35.50", "CATGORY003", [
        ("Gold", "PROD008-G", "45.50"),
        ("Silver", "PROD008-S", None),
    ]),
]


async def seed_reference_catalog(session: AsyncSession) -> dict[str, int]:
    """Insert reference categories and products that are not present yet.

    Args:
        session: Database session.

    Returns:
        Counts of inserted rows.
    """
    result = await session.execute(select(Category))
    categories = {c.code: c for c in result.scalars().all()}

    created_categories = 0
    for code, name in REFERENCE_CATEGORIES:
        if code not in categories:
            categories[code] = Category(code=code, name=name)
            session.add(categories[code])
            created_categories += 1

    result = await session.execute(select(Product.code))
    existing = set(result.scalars().all())

    created_products = 0
    created_variants = 0
    for code, price, category_code, variants in REFERENCE_PRODUCTS:
        if code in existing:
            continue
        product = Product(
            code=code,
            price=Decimal(price),
            category=categories[category_code],
            variants=[
                ProductVariant(
                    name=name,
                    sku=sku,
                    price=Decimal(variant_price) if variant_price is not None else None,
                )
                for name, sku, variant_price in variants
            ],
        )
        session.add(product)
        created_products += 1
        created_variants += len(variants)

    await session.commit()

    return {
        "categories": created_categories,
        "products": created_products,
        "variants": created_variants,
    }
