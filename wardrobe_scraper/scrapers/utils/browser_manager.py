"""Playwright browser lifecycle manager.

Launches one headless Chromium per process and hands every adapter run an
isolated browser context wrapped in a FetchClient.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from wardrobe_scraper.core.exceptions import FetchError
from wardrobe_scraper.scrapers.base import FetchClient

logger = structlog.get_logger(__name__)


class PageFetchClient(FetchClient):
    """FetchClient backed by a single Playwright page."""

    def __init__(
        self,
        page: Page,
        source: str,
        page_load_timeout: float = 30.0,
        logger=None,
    ):
        self._page = page
        self._source = source
        self._page_load_timeout = page_load_timeout
        self._url = ""
        self.logger = (logger or structlog.get_logger(__name__)).bind(adapter=source)

    async def navigate(self, url: str) -> None:
        self._url = url
        self.logger.info("navigating", url=url)
        try:
            await self._page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self._page_load_timeout * 1000,
            )
        except PlaywrightError as e:
            raise FetchError(self._source, url, str(e)) from e

    async def wait_visible(self, selector: str, timeout: float) -> None:
        try:
            await self._page.wait_for_selector(selector, state="visible", timeout=timeout * 1000)
        except PlaywrightError as e:
            raise FetchError(self._source, self._url, f"'{selector}' never became visible: {e}") from e

    async def get_document_markup(self) -> str:
        try:
            return await self._page.content()
        except PlaywrightError as e:
            raise FetchError(self._source, self._url, str(e)) from e


class BrowserManager:
    """Manages the Playwright browser lifecycle.

    Each adapter run gets its own context (cookies, cache) which is closed
    when the run ends, so one retailer's session never leaks into another's.
    """

    def __init__(
        self,
        headless: bool = True,
        user_agent: Optional[str] = None,
        page_load_timeout: float = 30.0,
        block_resources: bool = True,
    ):
        self._headless = headless
        self._user_agent = user_agent
        self._page_load_timeout = page_load_timeout
        self._block_resources = block_resources
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        """Launch the browser. Safe to call more than once."""
        async with self._lock:
            if self._browser:
                return
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self._headless,
                args=[
                    "--no-sandbox",
                    "--disable-gpu",
                    "--disable-dev-shm-usage",
                ],
            )
            logger.info("browser_started", headless=self._headless)

    async def stop(self) -> None:
        """Close the browser and Playwright driver."""
        async with self._lock:
            if self._browser:
                await self._browser.close()
                self._browser = None
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
            logger.info("browser_stopped")

    @asynccontextmanager
    async def session(self, name: str) -> AsyncIterator[FetchClient]:
        """Open an isolated context + page for one adapter run.

        Usage:
            async with browser_manager.session("zara") as client:
                await adapter.extract_listings(client)
        """
        if not self._browser:
            await self.start()

        try:
            context = await self._browser.new_context(
                user_agent=self._user_agent,
                viewport={"width": 1920, "height": 1080},
                locale="pt-BR",
                timezone_id="America/Sao_Paulo",
            )
        except PlaywrightError as e:
            raise FetchError(name, "", f"could not open browser context: {e}") from e

        try:
            # Images and fonts are never rendered; only their URLs are read
            if self._block_resources:
                await context.route(
                    "**/*.{png,jpg,jpeg,gif,webp,svg,woff,woff2,ttf,eot}",
                    lambda route: route.abort(),
                )
            page = await context.new_page()
            logger.debug("browser_context_created", name=name)
            yield PageFetchClient(page, name, page_load_timeout=self._page_load_timeout)
        finally:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.warning("browser_context_close_failed", name=name, error=str(e))
