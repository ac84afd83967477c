"""Product model holding the unified, deduplicated catalog."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Index, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from wardrobe_scraper.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")


class Product(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Listing scraped from one retailer.

    Each row is uniquely identified by product_url regardless of source,
    which is what the scraper upserts against.
    """

    __tablename__ = "products"

    # Descriptive
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    brand: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, comment="'shirt', 'pants', 'dress', ...")
    subcategory: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, comment="'t-shirt', 'jeans', ...")
    source: Mapped[str] = mapped_column(String(100), nullable=False, index=True, comment="Retailer identifier")
    gender: Mapped[str] = mapped_column(String(20), nullable=False, comment="'male', 'female', 'unisex'")

    # Pricing
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    original_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Price before discount, only set when above price"
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="BRL")

    # Media and links
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    product_url: Mapped[str] = mapped_column(Text, nullable=False, unique=True, comment="Natural key")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Variant attributes and derived tags
    sizes: Mapped[Optional[list]] = mapped_column(JSONList, nullable=True)
    colors: Mapped[Optional[list]] = mapped_column(JSONList, nullable=True)
    weather: Mapped[Optional[list]] = mapped_column(JSONList, nullable=True, comment="['hot', 'cold', 'rain', 'sunny', ...]")
    season: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Flags
    is_luxury: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_economic: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    scraped_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Last time this listing was scraped"
    )

    __table_args__ = (
        Index("idx_products_category_gender", "category", "gender"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name[:50]}', source='{self.source}')>"
