"""Storage-facing services."""

from wardrobe_scraper.services.listing_service import ListingService

__all__ = ["ListingService"]
