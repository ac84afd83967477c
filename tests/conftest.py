"""Pytest configuration and shared fixtures."""

from decimal import Decimal
from typing import Dict, List, Optional, Union

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wardrobe_scraper.core.exceptions import FetchError
from wardrobe_scraper.models import Base
from wardrobe_scraper.scrapers.base import FetchClient, Listing


class FakeFetchClient(FetchClient):
    """FetchClient serving canned markup per URL.

    A page mapped to an exception raises it from navigate(), which is where
    a real browser surfaces navigation errors.
    """

    def __init__(self, pages: Dict[str, Union[str, Exception]]):
        self.pages = pages
        self.visited: List[str] = []
        self.waited: List[str] = []
        self._current = ""

    async def navigate(self, url: str) -> None:
        self.visited.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise FetchError("fake", url, "no such page")
        self._current = page

    async def wait_visible(self, selector: str, timeout: float) -> None:
        self.waited.append(selector)

    async def get_document_markup(self) -> str:
        return self._current


@pytest.fixture
def fake_client():
    """Build a FakeFetchClient from a URL -> markup mapping."""
    return FakeFetchClient


@pytest.fixture
def make_listing():
    """Factory for valid listings; keyword arguments override defaults."""

    def _make(
        product_url: str = "https://www.zara.com/br/pt/camiseta-p1.html",
        price: Decimal = Decimal("99.90"),
        original_price: Optional[Decimal] = None,
        **overrides,
    ) -> Listing:
        fields = {
            "name": "Camiseta Básica",
            "source": "zara",
            "brand": "Zara",
            "category": "shirt",
            "subcategory": "t-shirt",
            "sizes": ["P", "M", "G"],
            "colors": ["Preto"],
        }
        fields.update(overrides)
        return Listing(
            product_url=product_url,
            price=price,
            original_price=original_price,
            **fields,
        )

    return _make


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database with the products table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
