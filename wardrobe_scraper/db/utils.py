"""Database startup helpers: connectivity check and schema creation."""

import logging

import structlog
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from wardrobe_scraper.models.base import Base

logger = structlog.get_logger(__name__)


async def wait_for_database(engine: AsyncEngine, attempts: int = 5) -> None:
    """Block until the database answers SELECT 1.

    Retries connection failures with exponential backoff and re-raises
    the last error once attempts are exhausted, so a store that never
    comes up stops the process at startup.

    Args:
        engine: Async engine to probe
        attempts: Maximum connection attempts
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type((OperationalError, DBAPIError, OSError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

    logger.info("database_connected")


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing tables; existing tables are left untouched."""
    # Import models so they register with Base.metadata
    from wardrobe_scraper.models import product  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("database_tables_verified")
