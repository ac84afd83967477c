"""Rule-based listing classification.

Derives category/subcategory, gender, weather suitability and the
economic/luxury price tier from a listing's name, category tag and price.
Everything here is pure keyword and threshold matching over lowercased
Portuguese product text.
"""

import dataclasses
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

if TYPE_CHECKING:
    from wardrobe_scraper.scrapers.base import Listing


FEMALE_KEYWORDS = ("feminino", "feminina", "mulher", "blusa", "saia", "vestido", "salto")
MALE_KEYWORDS = ("masculino", "masculina", "homem", "camisa", "gravata", "terno")

# Signal group -> tags it contributes, in output order
WEATHER_SIGNALS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("verão", "algodão", "leve", "respirável", "regata", "bermuda", "short"), ("hot", "sunny")),
    (("inverno", "lã", "casaco", "jaqueta", "moletom", "jacket"), ("cold",)),
    (("impermeável", "chuva"), ("rain",)),
)
DEFAULT_WEATHER = ("sunny", "cloudy")

# Category-specific price tiers in BRL
ECONOMIC_THRESHOLDS: Dict[str, Decimal] = {
    "shirt": Decimal("80"),
    "pants": Decimal("150"),
    "dress": Decimal("120"),
    "shoes": Decimal("200"),
    "jacket": Decimal("250"),
    "accessory": Decimal("50"),
}
LUXURY_THRESHOLDS: Dict[str, Decimal] = {
    "shirt": Decimal("300"),
    "pants": Decimal("500"),
    "dress": Decimal("600"),
    "shoes": Decimal("800"),
    "jacket": Decimal("800"),
    "accessory": Decimal("200"),
}
FALLBACK_ECONOMIC = Decimal("100")
FALLBACK_LUXURY = Decimal("400")

DEFAULT_CATEGORY = ("shirt", "casual")


@dataclass(frozen=True)
class CategoryRule:
    """One entry of a retailer's ordered category decision list.

    The rule fires when any tag keyword occurs in the retailer category tag
    or any name keyword occurs in the product name. The subcategory is the
    first entry of `subcategories` whose keywords occur in the name.
    """

    category: str
    default_subcategory: str
    tag_keywords: Tuple[str, ...] = ()
    name_keywords: Tuple[str, ...] = ()
    subcategories: Tuple[Tuple[Tuple[str, ...], str], ...] = ()

    def matches(self, tag: str, name: str) -> bool:
        return _contains_any(tag, self.tag_keywords) or _contains_any(name, self.name_keywords)

    def subcategory_for(self, name: str) -> str:
        for keywords, subcategory in self.subcategories:
            if _contains_any(name, keywords):
                return subcategory
        return self.default_subcategory


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_category(rules: Sequence[CategoryRule], tag: str, name: str) -> Tuple[str, str]:
    """Evaluate a decision list; the first matching rule wins."""
    tag = (tag or "").lower()
    name = (name or "").lower()
    for rule in rules:
        if rule.matches(tag, name):
            return rule.category, rule.subcategory_for(name)
    return DEFAULT_CATEGORY


def determine_gender(name: str, category: str = "", hint: str = "") -> str:
    """Return 'female', 'male' or 'unisex'; female signals win ties."""
    text = " ".join(part for part in (name, category, hint) if part).lower()
    if _contains_any(text, FEMALE_KEYWORDS):
        return "female"
    if _contains_any(text, MALE_KEYWORDS):
        return "male"
    return "unisex"


def determine_weather(category: str, name: str) -> List[str]:
    """Return weather tags for a listing, never empty."""
    text = f"{category} {name}".lower()
    tags: List[str] = []
    for keywords, signal_tags in WEATHER_SIGNALS:
        if _contains_any(text, keywords):
            tags.extend(tag for tag in signal_tags if tag not in tags)
    return tags or list(DEFAULT_WEATHER)


def classify_tier(category: str, price: Decimal) -> Tuple[bool, bool]:
    """Return (is_economic, is_luxury) for a category and price.

    Category thresholds are applied first; the global fallback only kicks
    in when neither of them fired.
    """
    category = (category or "").lower()
    is_economic = category in ECONOMIC_THRESHOLDS and price <= ECONOMIC_THRESHOLDS[category]
    is_luxury = category in LUXURY_THRESHOLDS and price >= LUXURY_THRESHOLDS[category]

    if not is_economic and not is_luxury:
        if price <= FALLBACK_ECONOMIC:
            is_economic = True
        elif price >= FALLBACK_LUXURY:
            is_luxury = True

    return is_economic, is_luxury


def classify(listing: "Listing", rules: Sequence[CategoryRule]) -> "Listing":
    """Return a copy of the listing with every derived attribute filled in."""
    category, subcategory = classify_category(rules, listing.category_hint, listing.name)
    is_economic, is_luxury = classify_tier(category, listing.price)
    return dataclasses.replace(
        listing,
        category=category,
        subcategory=subcategory,
        gender=determine_gender(listing.name, category, listing.category_hint),
        weather=determine_weather(category, listing.name),
        is_economic=is_economic,
        is_luxury=is_luxury,
    )
