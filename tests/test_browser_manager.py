"""Tests for the Playwright-backed fetch client and browser sessions.

Tests cover:
- Playwright errors and timeouts surfacing as FetchError
- One isolated context per session, always closed
- Resource blocking on new contexts
"""

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from wardrobe_scraper.core.exceptions import FetchError
from wardrobe_scraper.scrapers.utils.browser_manager import BrowserManager, PageFetchClient


class FakePage:
    """Page stand-in; each method raises its configured error, if any."""

    def __init__(self, goto_error=None, wait_error=None, content_error=None, html="<html></html>"):
        self.goto_error = goto_error
        self.wait_error = wait_error
        self.content_error = content_error
        self.html = html
        self.goto_calls = []

    async def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append((url, wait_until, timeout))
        if self.goto_error:
            raise self.goto_error

    async def wait_for_selector(self, selector, state=None, timeout=None):
        if self.wait_error:
            raise self.wait_error

    async def content(self):
        if self.content_error:
            raise self.content_error
        return self.html


class FakeContext:
    def __init__(self, page: FakePage):
        self.page = page
        self.routes = []
        self.closed = False

    async def route(self, pattern, handler):
        self.routes.append(pattern)

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page: FakePage = None):
        self.page = page or FakePage()
        self.contexts = []
        self.context_options = []

    async def new_context(self, **options):
        self.context_options.append(options)
        context = FakeContext(self.page)
        self.contexts.append(context)
        return context


def _manager(browser: FakeBrowser, **kwargs) -> BrowserManager:
    manager = BrowserManager(**kwargs)
    manager._browser = browser
    return manager


# ============================================================================
# TESTS: PAGE FETCH CLIENT
# ============================================================================

class TestPageFetchClient:
    """Tests for PageFetchClient."""

    async def test_navigate_uses_page_load_timeout(self):
        """Test that navigation waits for DOM content with a millisecond timeout."""
        page = FakePage()
        client = PageFetchClient(page, "zara", page_load_timeout=30)

        await client.navigate("https://www.zara.com/br/pt/homem.html")

        assert page.goto_calls == [("https://www.zara.com/br/pt/homem.html", "domcontentloaded", 30000)]

    async def test_navigation_error_becomes_fetch_error(self):
        """Test that a Playwright navigation error carries source and URL."""
        page = FakePage(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
        client = PageFetchClient(page, "renner")

        with pytest.raises(FetchError) as exc_info:
            await client.navigate("https://www.lojasrenner.com.br/c/calcas")

        assert exc_info.value.source == "renner"
        assert exc_info.value.url == "https://www.lojasrenner.com.br/c/calcas"
        assert "ERR_NAME_NOT_RESOLVED" in str(exc_info.value)

    async def test_wait_timeout_becomes_fetch_error(self):
        """Test that a selector that never appears is a fetch failure for the current URL."""
        page = FakePage(wait_error=PlaywrightTimeoutError("Timeout 15000ms exceeded"))
        client = PageFetchClient(page, "ca")
        await client.navigate("https://www.cea.com.br/feminino/vestidos")

        with pytest.raises(FetchError) as exc_info:
            await client.wait_visible(".product-tile", 15)

        assert exc_info.value.source == "ca"
        assert exc_info.value.url == "https://www.cea.com.br/feminino/vestidos"
        assert ".product-tile" in str(exc_info.value)

    async def test_content_error_becomes_fetch_error(self):
        """Test that failing to read the document is a fetch failure."""
        page = FakePage(content_error=PlaywrightError("Target page, context or browser has been closed"))
        client = PageFetchClient(page, "americanas")
        await client.navigate("https://www.americanas.com.br/busca/vestido")

        with pytest.raises(FetchError) as exc_info:
            await client.get_document_markup()

        assert exc_info.value.url == "https://www.americanas.com.br/busca/vestido"

    async def test_returns_markup(self):
        """Test the happy path."""
        client = PageFetchClient(FakePage(html="<div class='product-item'></div>"), "zara")

        assert await client.get_document_markup() == "<div class='product-item'></div>"


# ============================================================================
# TESTS: BROWSER SESSIONS
# ============================================================================

class TestBrowserManagerSession:
    """Tests for BrowserManager.session."""

    async def test_session_yields_client_and_closes_context(self):
        """Test one context per session, closed on normal exit."""
        browser = FakeBrowser()
        manager = _manager(browser, user_agent="test-agent")

        async with manager.session("zara") as client:
            assert isinstance(client, PageFetchClient)

        assert len(browser.contexts) == 1
        assert browser.contexts[0].closed is True
        options = browser.context_options[0]
        assert options["user_agent"] == "test-agent"
        assert options["locale"] == "pt-BR"

    async def test_context_closed_when_body_raises(self):
        """Test that an adapter failure inside the session still closes the context."""
        browser = FakeBrowser()
        manager = _manager(browser)

        with pytest.raises(RuntimeError):
            async with manager.session("renner"):
                raise RuntimeError("adapter crashed")

        assert browser.contexts[0].closed is True

    async def test_sessions_are_isolated(self):
        """Test that consecutive sessions get fresh contexts."""
        browser = FakeBrowser()
        manager = _manager(browser)

        async with manager.session("zara"):
            pass
        async with manager.session("ca"):
            pass

        assert len(browser.contexts) == 2
        assert all(context.closed for context in browser.contexts)

    async def test_resource_blocking(self):
        """Test that heavy resources are routed away only when enabled."""
        blocking = FakeBrowser()
        async with _manager(blocking).session("zara"):
            pass
        assert len(blocking.contexts[0].routes) == 1

        open_browser = FakeBrowser()
        async with _manager(open_browser, block_resources=False).session("zara"):
            pass
        assert open_browser.contexts[0].routes == []
