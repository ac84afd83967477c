"""Zara Brasil scraper adapter.

Category grids render client-side; every product card is a `.product-item`.
Images are served from the static.zara.net CDN, usually protocol-relative.
"""

from wardrobe_scraper.scrapers.base import CatalogScraperAdapter
from wardrobe_scraper.scrapers.utils.classifier import CategoryRule


class ZaraAdapter(CatalogScraperAdapter):
    """Zara men's and women's category scraper."""

    source = "zara"
    name = "Zara"

    CATEGORY_URLS = {
        "camisetas-masculino": "https://www.zara.com/br/pt/homem/camisetas-c269234.html",
        "camisetas-feminino": "https://www.zara.com/br/pt/mulher/camisetas-c269186.html",
        "calcas-masculino": "https://www.zara.com/br/pt/homem/calcas-c358041.html",
        "calcas-feminino": "https://www.zara.com/br/pt/mulher/calcas-c358040.html",
    }

    WAIT_SELECTOR = ".product-item"
    RENDER_DELAY_SECONDS = 3.0

    CONTAINER_SELECTORS = (".product-item",)
    NAME_LOCATORS = (".product-name", ".product-title", "h3")
    PRICE_LOCATORS = (".price", ".product-price")
    ORIGINAL_PRICE_LOCATORS = (".price-old", ".original-price")
    IMAGE_ATTRIBUTES = ("src", "data-src")

    ORIGIN = "https://www.zara.com"
    IMAGE_ORIGIN = "https://static.zara.net"

    ITEM_CAP = 20
    CATEGORY_DELAY_SECONDS = 2.0

    BRAND = "Zara"
    DEFAULT_SIZES = ("P", "M", "G", "GG")

    CATEGORY_RULES = (
        CategoryRule("shirt", "t-shirt", tag_keywords=("camiseta",), name_keywords=("camiseta",)),
        CategoryRule(
            "pants", "trousers",
            tag_keywords=("calca",),
            name_keywords=("calça",),
            subcategories=((("jeans",), "jeans"),),
        ),
        CategoryRule("dress", "casual", name_keywords=("vestido",)),
        CategoryRule("jacket", "casual", name_keywords=("casaco", "jaqueta")),
        CategoryRule("shoes", "casual", name_keywords=("sapato", "tênis")),
    )
