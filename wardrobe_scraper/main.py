"""Process entry point for the wardrobe scraper.

Usage:
    # Connect, run once immediately, then follow SCRAPER_SCHEDULE until SIGINT/SIGTERM
    wardrobe-scraper

    # Single pass over every source, then exit
    wardrobe-scraper --once

    # Single pass over a subset, without writing to the database
    wardrobe-scraper --once --source zara --source renner --dry-run
"""

import argparse
import asyncio
import signal
import sys
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from wardrobe_scraper.config import settings
from wardrobe_scraper.core.exceptions import ScheduleSetupError
from wardrobe_scraper.core.logging import configure_logging
from wardrobe_scraper.db.session import async_session_factory, engine
from wardrobe_scraper.db.utils import create_tables, wait_for_database
from wardrobe_scraper.scrapers.factory import get_adapter_factory
from wardrobe_scraper.scrapers.register_adapters import register_all_adapters
from wardrobe_scraper.scrapers.scheduler import ScraperScheduler
from wardrobe_scraper.scrapers.scraper_service import ScraperService
from wardrobe_scraper.scrapers.utils.browser_manager import BrowserManager
from wardrobe_scraper.services.listing_service import ListingService

logger = structlog.get_logger("wardrobe_scraper")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="wardrobe-scraper",
        description="Scrape retailer catalogs into the unified products table.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scrape over all sources and exit",
    )
    parser.add_argument(
        "--source",
        action="append",
        dest="sources",
        metavar="NAME",
        help="Only scrape this source (repeatable): zara, renner, ca, americanas",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scrape and log results but do not write to the database",
    )
    return parser.parse_args(argv)


async def main(args: argparse.Namespace) -> int:
    """Wire the pipeline together and run it.

    Returns:
        Process exit code
    """
    logger.info("starting_wardrobe_scraper", environment=settings.ENVIRONMENT)

    if not args.dry_run:
        # Store connection failure at startup is fatal
        try:
            await wait_for_database(engine, attempts=settings.DB_CONNECT_ATTEMPTS)
            await create_tables(engine)
        except (SQLAlchemyError, OSError) as e:
            logger.error("database_unavailable", error=str(e))
            await engine.dispose()
            return 1

    register_all_adapters()
    adapters = get_adapter_factory().create_adapters(args.sources)
    if not adapters:
        logger.error("no_adapters_selected", sources=args.sources)
        return 1

    browser_manager = BrowserManager(
        headless=settings.CHROME_HEADLESS,
        user_agent=settings.USER_AGENT,
        page_load_timeout=settings.PAGE_LOAD_TIMEOUT_SECONDS,
    )
    service = ScraperService(
        adapters=adapters,
        listing_service=ListingService(async_session_factory),
        session_factory=browser_manager.session,
        adapter_timeout=settings.ADAPTER_TIMEOUT_SECONDS,
        dry_run=args.dry_run,
    )

    scheduler = ScraperScheduler(
        service,
        settings.SCRAPER_SCHEDULE,
        run_timeout=settings.RUN_TIMEOUT_SECONDS,
    )

    try:
        if args.once:
            report = await scheduler.run_once()
            if report is None:
                return 1
            logger.info("single_run_finished", total_listings=report.total_persisted)
            return 0

        try:
            scheduler.start()
        except ScheduleSetupError as e:
            logger.error("scheduler_setup_failed", error=str(e))
            return 1

        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_event.set)

        logger.info("running_initial_scrape")
        initial_run = asyncio.create_task(scheduler.run_once())

        logger.info("waiting_for_scheduled_runs")
        await stop_event.wait()

        logger.info("shutdown_signal_received")
        await scheduler.stop()
        if not initial_run.done():
            initial_run.cancel()
        await asyncio.gather(initial_run, return_exceptions=True)
        return 0
    finally:
        await browser_manager.stop()
        await engine.dispose()
        logger.info("wardrobe_scraper_stopped")


def run(argv: Optional[List[str]] = None) -> None:
    """Console-script entry point."""
    args = parse_args(argv)
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    sys.exit(asyncio.run(main(args)))


if __name__ == "__main__":
    run()
