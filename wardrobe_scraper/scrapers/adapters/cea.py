"""C&A Brasil scraper adapter."""

from wardrobe_scraper.scrapers.base import CatalogScraperAdapter
from wardrobe_scraper.scrapers.utils.classifier import CategoryRule


class CeaAdapter(CatalogScraperAdapter):
    """C&A category scraper (product tiles)."""

    source = "ca"
    name = "C&A"

    CATEGORY_URLS = {
        "camisetas-masculino": "https://www.cea.com.br/masculino/camisetas",
        "camisetas-feminino": "https://www.cea.com.br/feminino/blusas-e-camisetas",
        "calcas-masculino": "https://www.cea.com.br/masculino/calcas",
        "calcas-feminino": "https://www.cea.com.br/feminino/calcas",
        "vestidos": "https://www.cea.com.br/feminino/vestidos",
    }

    WAIT_SELECTOR = ".product-tile, .product-item, .item"
    RENDER_DELAY_SECONDS = 5.0

    CONTAINER_SELECTORS = (
        ".product-tile",
        ".product-item",
        ".item",
        "[data-testid='product-tile']",
        ".product-card",
    )
    NAME_LOCATORS = (
        ".product-title",
        ".product-name",
        ".title",
        "h3",
        ".name",
        "[data-testid='product-title']",
    )
    PRICE_LOCATORS = (
        ".price-current",
        ".price",
        ".current-price",
        ".price-value",
        "[data-testid='price']",
    )
    ORIGINAL_PRICE_LOCATORS = (
        ".price-original",
        ".old-price",
        ".price-from",
        ".was-price",
    )
    IMAGE_ATTRIBUTES = ("src", "data-src")

    ORIGIN = "https://www.cea.com.br"

    ITEM_CAP = 12
    CATEGORY_DELAY_SECONDS = 2.0

    BRAND = "C&A"
    DEFAULT_SIZES = ("PP", "P", "M", "G", "GG")

    CATEGORY_RULES = (
        CategoryRule(
            "shirt", "t-shirt",
            tag_keywords=("camiseta",),
            name_keywords=("camiseta",),
            subcategories=((("polo",), "polo"),),
        ),
        CategoryRule(
            "pants", "casual",
            tag_keywords=("calca",),
            name_keywords=("calça",),
            subcategories=(
                (("jeans",), "jeans"),
                (("legging",), "leggings"),
            ),
        ),
        CategoryRule("dress", "casual", tag_keywords=("vestido",), name_keywords=("vestido",)),
        CategoryRule("shirt", "blouse", name_keywords=("blusa",)),
    )
