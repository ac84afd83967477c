"""SQLAlchemy models for the wardrobe catalog.

All models are imported here so metadata.create_all can discover them.
"""

from wardrobe_scraper.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from wardrobe_scraper.models.product import Product

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "Product",
]
