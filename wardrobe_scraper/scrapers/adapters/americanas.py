"""Americanas scraper adapter.

Americanas is a marketplace, so listings come from search result pages and
carry third-party brands. The brand is detected from the product name and
falls back to the marketplace itself.
"""

from wardrobe_scraper.scrapers.base import CatalogScraperAdapter
from wardrobe_scraper.scrapers.utils.classifier import CategoryRule

KNOWN_BRANDS = (
    "Nike", "Adidas", "Puma", "Hering", "Malwee",
    "Lacoste", "Calvin Klein", "Tommy Hilfiger", "Polo Ralph Lauren",
    "Levi's", "Wrangler", "Osklen", "Colcci", "Ellus",
)


class AmericanasAdapter(CatalogScraperAdapter):
    """Americanas search-page scraper."""

    source = "americanas"
    name = "Americanas"

    CATEGORY_URLS = {
        "camisetas-masculino": "https://www.americanas.com.br/busca/camiseta-masculina",
        "camisetas-feminino": "https://www.americanas.com.br/busca/camiseta-feminina",
        "calcas-masculino": "https://www.americanas.com.br/busca/calca-masculina",
        "calcas-feminino": "https://www.americanas.com.br/busca/calca-feminina",
        "vestidos": "https://www.americanas.com.br/busca/vestido",
    }

    WAIT_SELECTOR = ".product-grid-item, .product-item, .col-product"
    RENDER_DELAY_SECONDS = 6.0

    CONTAINER_SELECTORS = (
        ".product-grid-item",
        ".product-item",
        ".col-product",
        "[data-testid='product-card']",
        ".product",
    )
    NAME_LOCATORS = (
        ".product-title",
        ".product-name",
        ".title",
        "h2",
        "h3",
        ".name",
        "[data-testid='product-name']",
    )
    PRICE_LOCATORS = (
        ".price-value",
        ".price",
        ".current-price",
        ".sales-price",
        "[data-testid='price-value']",
    )
    ORIGINAL_PRICE_LOCATORS = (
        ".list-price",
        ".old-price",
        ".price-from",
        ".was-price",
        "[data-testid='list-price']",
    )
    IMAGE_ATTRIBUTES = ("src", "data-src", "data-original")

    ORIGIN = "https://www.americanas.com.br"

    ITEM_CAP = 10
    CATEGORY_DELAY_SECONDS = 4.0

    BRAND = "Americanas"
    DEFAULT_SIZES = ("P", "M", "G", "GG")

    CATEGORY_RULES = (
        CategoryRule(
            "shirt", "t-shirt",
            tag_keywords=("camiseta",),
            name_keywords=("camiseta",),
            subcategories=(
                (("polo",), "polo"),
                (("regata",), "tank-top"),
                (("manga longa",), "long-sleeve"),
            ),
        ),
        CategoryRule(
            "pants", "casual",
            tag_keywords=("calca",),
            name_keywords=("calça",),
            subcategories=(
                (("jeans",), "jeans"),
                (("legging",), "leggings"),
                (("social",), "dress-pants"),
                (("moletom",), "sweatpants"),
            ),
        ),
        CategoryRule(
            "dress", "casual",
            tag_keywords=("vestido",),
            name_keywords=("vestido",),
            subcategories=(
                (("longo",), "long"),
                (("midi",), "midi"),
            ),
        ),
        CategoryRule("shirt", "blouse", name_keywords=("blusa",)),
        CategoryRule("jacket", "hoodie", name_keywords=("moletom", "casaco")),
        CategoryRule("shoes", "casual", name_keywords=("tênis", "sapato")),
    )

    def extract_brand(self, name: str) -> str:
        lower_name = name.lower()
        for brand in KNOWN_BRANDS:
            if brand.lower() in lower_name:
                return brand
        return self.BRAND
