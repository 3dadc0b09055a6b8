#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and loads the reference catalog: three
categories and eight products, some with variants.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --reset
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.catalog.seed import seed_reference_catalog
from storefront.infrastructure.database import Base, async_session_factory, engine


async def create_tables(reset: bool) -> None:
    """Create database tables, dropping them first if requested."""
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate tables before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables(reset=args.reset)
    print("Tables ready.")

    async with async_session_factory() as session:
        counts = await seed_reference_catalog(session)

    print(f"  Categories created: {counts['categories']}")
    print(f"  Products created: {counts['products']}")
    print(f"  Variants created: {counts['variants']}")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
