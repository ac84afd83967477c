"""Factory for creating and managing source adapter instances."""

from typing import Dict, Iterable, List, Optional, Type

import structlog

from wardrobe_scraper.scrapers.base import BaseSourceAdapter

logger = structlog.get_logger(__name__)


class AdapterFactory:
    """Registry of adapter classes keyed by source slug.

    Registration order is preserved and is the order the orchestrator
    runs the adapters in.
    """

    def __init__(self):
        self._adapter_registry: Dict[str, Type[BaseSourceAdapter]] = {}

    def register_adapter(self, source: str, adapter_class: Type[BaseSourceAdapter]) -> None:
        """Register an adapter class for a source.

        Args:
            source: Source slug (e.g., "zara")
            adapter_class: Adapter class (must inherit from BaseSourceAdapter)
        """
        if not issubclass(adapter_class, BaseSourceAdapter):
            raise ValueError(f"Adapter class must inherit from BaseSourceAdapter: {adapter_class}")

        self._adapter_registry[source] = adapter_class
        logger.debug("adapter_registered", source=source, adapter_class=adapter_class.__name__)

    def create_adapter(self, source: str) -> Optional[BaseSourceAdapter]:
        """Create an adapter instance, or None if the source is unknown."""
        adapter_class = self._adapter_registry.get(source)
        if not adapter_class:
            logger.warning("adapter_not_found", source=source)
            return None
        return adapter_class()

    def create_adapters(self, sources: Optional[Iterable[str]] = None) -> List[BaseSourceAdapter]:
        """Create adapters in registration order.

        Args:
            sources: Optional subset of source slugs; unknown slugs are skipped

        Returns:
            Adapter instances
        """
        if sources is None:
            selected = self.get_registered_sources()
        else:
            wanted = set(sources)
            for source in wanted - set(self._adapter_registry):
                logger.warning("adapter_not_found", source=source)
            selected = [s for s in self._adapter_registry if s in wanted]

        return [self._adapter_registry[source]() for source in selected]

    def get_registered_sources(self) -> List[str]:
        return list(self._adapter_registry.keys())

    def has_adapter(self, source: str) -> bool:
        return source in self._adapter_registry


# Global factory instance
adapter_factory = AdapterFactory()


def get_adapter_factory() -> AdapterFactory:
    """Get the global adapter factory instance."""
    return adapter_factory
