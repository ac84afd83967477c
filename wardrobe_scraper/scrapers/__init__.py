"""Scraper system for building the unified wardrobe catalog.

This package provides:
- The Listing data structure and base adapter classes
- Retailer adapters driven by per-site locator tables
- Factory for registering and creating adapters
- Orchestrator and cron scheduler for recurring runs
"""

from .base import (
    BaseSourceAdapter,
    CatalogScraperAdapter,
    FetchClient,
    Listing,
)
from .factory import AdapterFactory, adapter_factory, get_adapter_factory

__all__ = [
    # Base classes
    "BaseSourceAdapter",
    "CatalogScraperAdapter",
    "FetchClient",
    # Data structures
    "Listing",
    # Factory
    "AdapterFactory",
    "adapter_factory",
    "get_adapter_factory",
]
