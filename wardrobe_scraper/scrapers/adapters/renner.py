"""Lojas Renner scraper adapter.

Renner has moved its grid between `.showcase-item` (legacy VTEX theme) and
`.product-item` cards, so both are tried along with generic fallbacks.
"""

from wardrobe_scraper.scrapers.base import CatalogScraperAdapter
from wardrobe_scraper.scrapers.utils.classifier import CategoryRule


class RennerAdapter(CatalogScraperAdapter):
    """Renner category scraper."""

    source = "renner"
    name = "Renner"

    CATEGORY_URLS = {
        "camisetas-masculino": "https://www.lojasrenner.com.br/c/moda-masculina/camisetas",
        "camisetas-feminino": "https://www.lojasrenner.com.br/c/moda-feminina/blusas-e-camisetas",
        "calcas-masculino": "https://www.lojasrenner.com.br/c/moda-masculina/calcas",
        "calcas-feminino": "https://www.lojasrenner.com.br/c/moda-feminina/calcas",
    }

    WAIT_SELECTOR = ".showcase-item, .product-item, .item"
    RENDER_DELAY_SECONDS = 4.0

    CONTAINER_SELECTORS = (
        ".showcase-item",
        ".product-item",
        ".item",
        "[data-testid='product-card']",
    )
    NAME_LOCATORS = (
        ".product-name",
        ".item-name",
        ".showcase-item-name",
        "h3",
        ".title",
        "[data-testid='product-name']",
    )
    PRICE_LOCATORS = (
        ".price-value",
        ".price",
        ".showcase-item-price",
        ".preco-promocional",
        ".preco",
        "[data-testid='price']",
    )
    ORIGINAL_PRICE_LOCATORS = (
        ".price-old",
        ".preco-original",
        ".price-from",
        ".old-price",
    )
    IMAGE_ATTRIBUTES = ("src", "data-src")

    ORIGIN = "https://www.lojasrenner.com.br"

    ITEM_CAP = 15
    CATEGORY_DELAY_SECONDS = 3.0

    BRAND = "Renner"
    DEFAULT_SIZES = ("P", "M", "G", "GG", "XG")

    CATEGORY_RULES = (
        CategoryRule(
            "shirt", "t-shirt",
            tag_keywords=("camiseta",),
            name_keywords=("camiseta",),
            subcategories=(
                (("polo",), "polo"),
                (("regata",), "tank-top"),
            ),
        ),
        CategoryRule(
            "pants", "casual",
            tag_keywords=("calca",),
            name_keywords=("calça",),
            subcategories=(
                (("jeans",), "jeans"),
                (("social",), "dress-pants"),
                (("short", "bermuda"), "shorts"),
            ),
        ),
        CategoryRule("dress", "casual", name_keywords=("vestido",)),
        CategoryRule("shirt", "blouse", name_keywords=("blusa",)),
        CategoryRule("jacket", "casual", name_keywords=("jaqueta", "casaco")),
    )
