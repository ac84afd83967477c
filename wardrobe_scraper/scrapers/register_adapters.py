"""Register all retailer adapters with the factory.

Called once during process startup, before the orchestrator is built.
"""

from typing import Optional

import structlog

from wardrobe_scraper.scrapers.factory import AdapterFactory, get_adapter_factory
from wardrobe_scraper.scrapers.adapters import (
    ZaraAdapter,
    RennerAdapter,
    CeaAdapter,
    AmericanasAdapter,
)

logger = structlog.get_logger(__name__)


def register_all_adapters(factory: Optional[AdapterFactory] = None) -> None:
    """Register every available adapter, in run order.

    Args:
        factory: Target factory; defaults to the global one
    """
    factory = factory or get_adapter_factory()

    adapters = [
        ("zara", ZaraAdapter),
        ("renner", RennerAdapter),
        ("ca", CeaAdapter),
        ("americanas", AmericanasAdapter),
    ]

    for source, adapter_class in adapters:
        factory.register_adapter(source, adapter_class)

    logger.info(
        "all_adapters_registered",
        count=len(factory.get_registered_sources()),
        sources=factory.get_registered_sources(),
    )
