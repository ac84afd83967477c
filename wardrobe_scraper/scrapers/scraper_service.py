"""Scraper orchestration service.

Runs every registered adapter in order, each inside its own browser session
and time box, and hands successful results to the listing service. A broken
adapter or a failed write only costs that one source its listings.
"""

import asyncio
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

import structlog

from wardrobe_scraper.core.exceptions import StorageError
from wardrobe_scraper.scrapers.base import BaseSourceAdapter, FetchClient
from wardrobe_scraper.services.listing_service import ListingService

logger = structlog.get_logger(__name__)

SessionFactory = Callable[[str], AbstractAsyncContextManager[FetchClient]]


@dataclass
class SourceResult:
    """Outcome of one adapter within a run."""

    source: str
    extracted: int = 0
    persisted: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    """Aggregate outcome of one run over all adapters."""

    results: List[SourceResult] = field(default_factory=list)

    @property
    def total_extracted(self) -> int:
        return sum(r.extracted for r in self.results)

    @property
    def total_persisted(self) -> int:
        return sum(r.persisted for r in self.results)

    @property
    def failed_sources(self) -> List[str]:
        return [r.source for r in self.results if not r.succeeded]


class ScraperService:
    """Orchestrates adapters and persists their listings.

    Adapters run sequentially in declaration order. Extraction failures,
    adapter timeouts and storage failures are logged and the run moves on
    to the next adapter. Cancellation is not swallowed.
    """

    def __init__(
        self,
        adapters: Sequence[BaseSourceAdapter],
        listing_service: ListingService,
        session_factory: SessionFactory,
        adapter_timeout: float = 300.0,
        dry_run: bool = False,
        logger=None,
    ):
        """Initialize scraper service.

        Args:
            adapters: Adapters in run order
            listing_service: Persistence layer for extracted listings
            session_factory: Opens a FetchClient session for a source slug
            adapter_timeout: Seconds one adapter may take before it is abandoned
            dry_run: Extract and log, but skip persistence
        """
        self.adapters = list(adapters)
        self.listing_service = listing_service
        self.session_factory = session_factory
        self.adapter_timeout = adapter_timeout
        self.dry_run = dry_run
        self.logger = (logger or structlog.get_logger(__name__)).bind(service="scraper_service")

    async def run_all(self) -> RunReport:
        """Run every adapter once and persist what they extract.

        Returns:
            RunReport with per-source counts; total_persisted may be lower
            than expected without the run being considered failed
        """
        self.logger.info(
            "scraping_started",
            sources=[adapter.source for adapter in self.adapters],
            dry_run=self.dry_run,
        )

        report = RunReport()
        for adapter in self.adapters:
            result = await self.run_adapter(adapter)
            report.results.append(result)

        self.logger.info(
            "scraping_completed",
            total_listings=report.total_persisted,
            total_extracted=report.total_extracted,
            failed_sources=report.failed_sources,
        )
        return report

    async def run_adapter(self, adapter: BaseSourceAdapter) -> SourceResult:
        """Extract and persist one source, isolating its failures.

        Args:
            adapter: Adapter to run

        Returns:
            SourceResult; `error` is set when extraction or storage failed
        """
        result = SourceResult(source=adapter.source)
        self.logger.info("scraping_source", source=adapter.source)

        try:
            listings = await asyncio.wait_for(self._extract(adapter), timeout=self.adapter_timeout)
        except asyncio.TimeoutError:
            result.error = f"timed out after {self.adapter_timeout}s"
            self.logger.error(
                "source_scrape_timeout",
                source=adapter.source,
                timeout_seconds=self.adapter_timeout,
            )
            return result
        except Exception as e:
            result.error = str(e)
            self.logger.error(
                "source_scrape_failed",
                source=adapter.source,
                error=str(e),
                exc_info=True,
            )
            return result

        result.extracted = len(listings)

        if self.dry_run:
            self.logger.info("dry_run_skip_persist", source=adapter.source, listings=len(listings))
            return result

        try:
            result.persisted = await self.listing_service.upsert_listings(listings)
        except StorageError as e:
            result.error = str(e)
            self.logger.error(
                "source_persist_failed",
                source=adapter.source,
                listings=len(listings),
                error=str(e),
            )
            return result

        self.logger.info(
            "source_scraped_and_saved",
            source=adapter.source,
            extracted=result.extracted,
            persisted=result.persisted,
        )
        return result

    async def _extract(self, adapter: BaseSourceAdapter):
        async with self.session_factory(adapter.source) as client:
            return await adapter.extract_listings(client)
