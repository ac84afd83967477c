"""Retailer-specific adapter implementations.

Each adapter module implements a class that inherits from
CatalogScraperAdapter and declares its URL map and locator tables.
"""

from .zara import ZaraAdapter
from .renner import RennerAdapter
from .cea import CeaAdapter
from .americanas import AmericanasAdapter

__all__ = [
    "ZaraAdapter",
    "RennerAdapter",
    "CeaAdapter",
    "AmericanasAdapter",
]
