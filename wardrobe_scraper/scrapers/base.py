"""Base source adapter interface and the shared listing data structure.

Every retailer adapter inherits from BaseSourceAdapter. Retailers whose
category pages are plain product grids inherit CatalogScraperAdapter and
only declare their URL map, locator tables and pacing as class data.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

import structlog
from bs4 import BeautifulSoup, Tag

from wardrobe_scraper.core.exceptions import ExtractionError, FetchError, ParseError
from wardrobe_scraper.scrapers.utils.classifier import DEFAULT_WEATHER, CategoryRule, classify
from wardrobe_scraper.scrapers.utils.field_extractor import (
    absolutize_url,
    resolve,
    resolve_all,
    resolve_attribute,
)
from wardrobe_scraper.scrapers.utils.normalizer import BRL_LOCALE, PriceLocale, PriceParser

GENDERS = ("male", "female", "unisex")


@dataclass
class Listing:
    """Normalized product listing produced by every adapter."""

    name: str
    price: Decimal
    product_url: str  # Natural key across the whole catalog
    source: str
    brand: Optional[str] = None
    category: str = "shirt"
    subcategory: Optional[str] = None
    gender: str = "unisex"
    original_price: Optional[Decimal] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    sizes: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    is_economic: bool = False
    is_luxury: bool = False
    season: str = "all"
    weather: List[str] = field(default_factory=lambda: list(DEFAULT_WEATHER))
    scraped_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    category_hint: str = ""  # Retailer category tag, not persisted

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("name is required")
        if not self.product_url:
            raise ValueError("product_url is required")
        if self.price is None or self.price <= 0:
            raise ValueError("price must be a positive Decimal")
        if self.original_price is not None and self.original_price <= self.price:
            raise ValueError("original_price must be greater than price")
        if not self.weather:
            raise ValueError("weather must not be empty")
        if self.gender not in GENDERS:
            raise ValueError(f"Invalid gender: {self.gender}")


class FetchClient(ABC):
    """Minimal browser surface the adapters drive."""

    @abstractmethod
    async def navigate(self, url: str) -> None:
        """Load a URL. Raises FetchError on navigation failure."""

    @abstractmethod
    async def wait_visible(self, selector: str, timeout: float) -> None:
        """Wait until selector is visible. Raises FetchError on timeout."""

    @abstractmethod
    async def get_document_markup(self) -> str:
        """Return the rendered document HTML."""


class BaseSourceAdapter(ABC):
    """Abstract base class for all retailer adapters."""

    source: str = ""  # Must be overridden in subclass (e.g., "zara")
    name: str = ""  # Display name (e.g., "Zara")

    def __init__(self, logger=None):
        self.logger = (logger or structlog.get_logger(__name__)).bind(adapter=self.source)

    @abstractmethod
    async def extract_listings(self, client: FetchClient) -> List[Listing]:
        """Scrape every category of this retailer.

        Args:
            client: Fetch client bound to this adapter's browser session

        Returns:
            Valid listings from all categories that could be scraped
        """


class CatalogScraperAdapter(BaseSourceAdapter):
    """Category-grid scraper driven entirely by per-retailer data tables.

    For each category URL: load the page, wait for the listing container,
    parse the markup, take the first container selector that matches
    anything and turn up to ITEM_CAP items into classified listings.
    """

    # Ordered category tag -> listing page URL
    CATEGORY_URLS: Dict[str, str] = {}

    # Page readiness
    WAIT_SELECTOR: str = ""
    RENDER_DELAY_SECONDS: float = 0.0
    WAIT_TIMEOUT_SECONDS: float = 15.0

    # Locator tables, tried in order
    CONTAINER_SELECTORS: Tuple[str, ...] = ()
    NAME_LOCATORS: Tuple[str, ...] = ()
    PRICE_LOCATORS: Tuple[str, ...] = ()
    ORIGINAL_PRICE_LOCATORS: Tuple[str, ...] = ()
    SIZE_LOCATORS: Tuple[str, ...] = ("[data-size]", ".size-option", ".size-selector option")
    COLOR_LOCATORS: Tuple[str, ...] = ("[data-color]", ".color-option", ".color-name")
    IMAGE_ATTRIBUTES: Tuple[str, ...] = ("src", "data-src", "data-original")
    LINK_ATTRIBUTES: Tuple[str, ...] = ("href",)

    # URL origins for relative links and images
    ORIGIN: str = ""
    IMAGE_ORIGIN: str = ""

    # Pacing and limits
    ITEM_CAP: int = 10
    CATEGORY_DELAY_SECONDS: float = 2.0

    # Normalization
    BRAND: str = ""
    DEFAULT_SIZES: Tuple[str, ...] = ("P", "M", "G", "GG")
    DEFAULT_COLORS: Tuple[str, ...] = ("Variadas",)
    CATEGORY_RULES: Tuple[CategoryRule, ...] = ()
    PRICE_LOCALE: PriceLocale = BRL_LOCALE

    async def extract_listings(self, client: FetchClient) -> List[Listing]:
        self.logger.info("starting_source_scrape", categories=len(self.CATEGORY_URLS))

        listings: List[Listing] = []
        failed = 0
        for index, (category_tag, url) in enumerate(self.CATEGORY_URLS.items()):
            if index > 0:
                await asyncio.sleep(self.CATEGORY_DELAY_SECONDS)

            self.logger.info("scraping_category", category=category_tag, url=url)
            try:
                category_listings = await self.scrape_category(client, category_tag, url)
            except ExtractionError as e:
                failed += 1
                self.logger.error(
                    "category_scrape_failed",
                    category=category_tag,
                    url=url,
                    error=str(e.cause),
                )
                continue

            listings.extend(category_listings)
            self.logger.info("category_scraped", category=category_tag, count=len(category_listings))

        if failed and failed == len(self.CATEGORY_URLS):
            self.logger.warning("all_categories_failed", categories=failed)

        self.logger.info("source_scrape_completed", total_listings=len(listings), failed_categories=failed)
        return listings

    async def scrape_category(self, client: FetchClient, category_tag: str, url: str) -> List[Listing]:
        """Fetch one category page and extract its listings.

        Raises:
            ExtractionError: wrapping the FetchError or ParseError that stopped it
        """
        try:
            html = await self._fetch_markup(client, url)
            soup = self._parse_markup(html)
        except (FetchError, ParseError) as e:
            raise ExtractionError(self.source, category_tag, e) from e

        return self.parse_listings(soup, category_tag)

    async def _fetch_markup(self, client: FetchClient, url: str) -> str:
        await client.navigate(url)
        if self.RENDER_DELAY_SECONDS:
            await asyncio.sleep(self.RENDER_DELAY_SECONDS)
        if self.WAIT_SELECTOR:
            await client.wait_visible(self.WAIT_SELECTOR, self.WAIT_TIMEOUT_SECONDS)
        return await client.get_document_markup()

    def _parse_markup(self, html: str) -> BeautifulSoup:
        if not html:
            raise ParseError(self.source, "empty document")
        try:
            return BeautifulSoup(html, "html.parser")
        except Exception as e:
            raise ParseError(self.source, str(e)) from e

    def parse_listings(self, soup: BeautifulSoup, category_tag: str) -> List[Listing]:
        """Extract listings from the first container selector with matches."""
        for selector in self.CONTAINER_SELECTORS:
            items = soup.select(selector)
            if not items:
                continue

            self.logger.debug("container_matched", selector=selector, items=len(items))
            listings = []
            for item in items[: self.ITEM_CAP]:
                listing = self.extract_listing(item, category_tag)
                if listing is not None:
                    listings.append(listing)
            return listings

        self.logger.warning("no_container_matched", category=category_tag)
        return []

    def extract_listing(self, item: Tag, category_tag: str) -> Optional[Listing]:
        """Build a classified Listing from one product card.

        Returns None for cards without a name, a positive price or a link.
        """
        name = resolve(item, self.NAME_LOCATORS)
        price = PriceParser.parse(resolve(item, self.PRICE_LOCATORS), self.PRICE_LOCALE)
        product_url = absolutize_url(resolve_attribute(item, "a", self.LINK_ATTRIBUTES), self.ORIGIN)

        if not name or price <= 0 or not product_url:
            self.logger.debug(
                "listing_discarded",
                category=category_tag,
                name=name[:50],
                price=str(price),
                has_url=bool(product_url),
            )
            return None

        original_price = None
        original_text = resolve(item, self.ORIGINAL_PRICE_LOCATORS)
        if original_text:
            candidate = PriceParser.parse(original_text, self.PRICE_LOCALE)
            if candidate > price:
                original_price = candidate

        image_url = absolutize_url(
            resolve_attribute(item, "img", self.IMAGE_ATTRIBUTES),
            self.IMAGE_ORIGIN or self.ORIGIN,
        )

        listing = Listing(
            name=name,
            price=price,
            product_url=product_url,
            source=self.source,
            brand=self.extract_brand(name),
            original_price=original_price,
            image_url=image_url or None,
            sizes=resolve_all(item, self.SIZE_LOCATORS, ignore=("Selecione",)) or list(self.DEFAULT_SIZES),
            colors=resolve_all(item, self.COLOR_LOCATORS) or list(self.DEFAULT_COLORS),
            category_hint=category_tag,
        )
        return classify(listing, self.CATEGORY_RULES)

    def extract_brand(self, name: str) -> str:
        """Brand for a listing; single-brand retailers return their own name."""
        return self.BRAND
