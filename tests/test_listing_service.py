"""Tests for ListingService upserts against an in-memory SQLite database."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wardrobe_scraper.core.exceptions import StorageError
from wardrobe_scraper.models import Product
from wardrobe_scraper.services.listing_service import ListingService


async def _all_products(session_factory):
    async with session_factory() as session:
        result = await session.execute(select(Product).order_by(Product.product_url))
        return list(result.scalars().all())


class TestListingService:
    """Tests for ListingService.upsert_listings."""

    async def test_empty_batch(self, session_factory):
        """Test that an empty batch touches nothing."""
        service = ListingService(session_factory)

        assert await service.upsert_listings([]) == 0
        assert await _all_products(session_factory) == []

    async def test_insert_new_listings(self, session_factory, make_listing):
        """Test inserting a fresh batch."""
        service = ListingService(session_factory)
        listings = [
            make_listing(product_url="https://www.zara.com/p/1", original_price=Decimal("129.90")),
            make_listing(product_url="https://www.zara.com/p/2", name="Calça Jeans", category="pants"),
        ]

        persisted = await service.upsert_listings(listings)

        assert persisted == 2
        products = await _all_products(session_factory)
        assert [p.product_url for p in products] == ["https://www.zara.com/p/1", "https://www.zara.com/p/2"]
        first = products[0]
        assert first.price == Decimal("99.90")
        assert first.original_price == Decimal("129.90")
        assert first.currency == "BRL"
        assert first.is_available is True
        assert first.sizes == ["P", "M", "G"]
        assert first.weather == ["sunny", "cloudy"]
        assert first.source == "zara"

    async def test_same_url_updates_volatile_fields_only(self, session_factory, make_listing):
        """Test idempotence: re-scraping a URL updates the existing row."""
        service = ListingService(session_factory)
        url = "https://www.renner.com/p/blusa-1"
        first_seen = datetime.now(timezone.utc) - timedelta(days=1)

        await service.upsert_listings([
            make_listing(
                product_url=url,
                name="Blusa Original",
                price=Decimal("89.90"),
                original_price=Decimal("119.90"),
                scraped_at=first_seen,
            )
        ])
        persisted = await service.upsert_listings([
            make_listing(product_url=url, name="Blusa Renomeada", price=Decimal("69.90"))
        ])

        assert persisted == 1
        products = await _all_products(session_factory)
        assert len(products) == 1
        product = products[0]
        assert product.price == Decimal("69.90")
        assert product.original_price is None
        assert product.name == "Blusa Original"
        assert product.scraped_at.replace(tzinfo=None) > first_seen.replace(tzinfo=None)

    async def test_repeated_batches_do_not_grow_table(self, session_factory, make_listing):
        """Test that running the same batch twice leaves the row count unchanged."""
        service = ListingService(session_factory)
        batch = [make_listing(product_url=f"https://www.cea.com.br/p/{i}") for i in range(3)]

        await service.upsert_listings(batch)
        await service.upsert_listings(batch)

        async with session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(Product))
        assert count == 3

    async def test_duplicate_urls_in_batch_keep_last(self, session_factory, make_listing):
        """Test that in-batch duplicates collapse to the last listing."""
        service = ListingService(session_factory)
        url = "https://www.americanas.com.br/produto/1"

        persisted = await service.upsert_listings([
            make_listing(product_url=url, price=Decimal("100.00")),
            make_listing(product_url=url, price=Decimal("90.00")),
        ])

        assert persisted == 1
        products = await _all_products(session_factory)
        assert len(products) == 1
        assert products[0].price == Decimal("90.00")

    async def test_storage_failure_raises_storage_error(self, make_listing):
        """Test that database errors surface as StorageError."""
        # No tables created
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        service = ListingService(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

        with pytest.raises(StorageError):
            await service.upsert_listings([make_listing()])

        await engine.dispose()

    async def test_unreachable_store_raises_storage_error(self, make_listing):
        """Test that a refused connection surfaces as StorageError, not a raw OSError."""
        # Nothing listens on port 1
        engine = create_async_engine("postgresql+asyncpg://u:p@127.0.0.1:1/wardrobe")
        service = ListingService(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

        try:
            with pytest.raises(StorageError):
                await service.upsert_listings([make_listing()])
        finally:
            await engine.dispose()
