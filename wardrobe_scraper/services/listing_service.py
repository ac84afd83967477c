"""Listing persistence: idempotent batch upsert keyed by product URL.

Repeated scrapes of the same URL converge on one row; only the volatile
fields (price, original price, availability, timestamps) are refreshed.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Sequence

import structlog
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wardrobe_scraper.core.exceptions import StorageError
from wardrobe_scraper.models.product import Product
from wardrobe_scraper.scrapers.base import Listing

logger = structlog.get_logger(__name__)

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class ListingService:
    """Writes scraped listings into the products table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], logger=None):
        """Initialize listing service.

        Args:
            session_factory: Async session factory; one session per batch
        """
        self.session_factory = session_factory
        self.logger = (logger or structlog.get_logger(__name__)).bind(service="listing_service")

    async def upsert_listings(self, listings: Sequence[Listing]) -> int:
        """Insert or update a batch of listings in one statement.

        Uses the unique constraint on product_url to decide between insert
        and update. On conflict only price, original_price, is_available,
        scraped_at and updated_at are overwritten.

        Args:
            listings: Validated listings from one adapter run

        Returns:
            Number of rows inserted or updated

        Raises:
            StorageError: If the statement fails
        """
        if not listings:
            return 0

        rows = self._to_rows(listings)

        try:
            async with self.session_factory() as session:
                insert = _DIALECT_INSERTS.get(session.bind.dialect.name)
                if insert is None:
                    raise StorageError(f"Unsupported database dialect: {session.bind.dialect.name}")

                stmt = insert(Product).values(rows)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["product_url"],
                    set_={
                        "price": stmt.excluded.price,
                        "original_price": stmt.excluded.original_price,
                        "is_available": True,
                        "scraped_at": stmt.excluded.scraped_at,
                        "updated_at": stmt.excluded.updated_at,
                    },
                )
                result = await session.execute(stmt)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            # asyncpg surfaces refused connections as raw OSError
            raise StorageError(f"Failed to upsert {len(rows)} listings: {e}") from e

        # Some drivers report -1 for multi-row statements
        persisted = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else len(rows)

        self.logger.info(
            "listings_upserted",
            submitted=len(listings),
            unique_urls=len(rows),
            persisted=persisted,
        )
        return persisted

    @staticmethod
    def _to_rows(listings: Sequence[Listing]) -> List[dict]:
        """Map listings to insert rows, keeping the last listing per URL.

        A single INSERT ... ON CONFLICT cannot touch the same key twice,
        so duplicates inside the batch are collapsed first.
        """
        now = datetime.now(timezone.utc)
        rows: Dict[str, dict] = {}
        for listing in listings:
            rows[listing.product_url] = {
                "id": uuid.uuid4(),
                "name": listing.name,
                "brand": listing.brand,
                "category": listing.category,
                "subcategory": listing.subcategory,
                "price": listing.price,
                "original_price": listing.original_price,
                "currency": "BRL",
                "image_url": listing.image_url,
                "product_url": listing.product_url,
                "description": listing.description,
                "sizes": list(listing.sizes),
                "colors": list(listing.colors),
                "weather": list(listing.weather),
                "season": listing.season,
                "is_luxury": listing.is_luxury,
                "is_economic": listing.is_economic,
                "is_available": True,
                "source": listing.source,
                "gender": listing.gender,
                "scraped_at": listing.scraped_at,
                "created_at": now,
                "updated_at": now,
            }
        return list(rows.values())
