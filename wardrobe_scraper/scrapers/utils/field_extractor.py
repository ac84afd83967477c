"""Ordered-fallback field resolution over listing markup fragments.

Retailer markup differs between sites and drifts over time, so every field
is looked up through a list of candidate CSS selectors tried in order.
A field that cannot be found resolves to an empty string; callers decide
whether that invalidates the listing.
"""

from typing import Iterable, List, Sequence
from urllib.parse import urljoin

from bs4 import Tag


def _text(element: Tag) -> str:
    return element.get_text(" ", strip=True)


def resolve(fragment: Tag, locators: Sequence[str]) -> str:
    """Return the trimmed text of the first locator that matches.

    Args:
        fragment: Listing fragment (one product card)
        locators: CSS selectors in priority order

    Returns:
        First non-empty text, or "" if every locator fails
    """
    for locator in locators:
        element = fragment.select_one(locator)
        if element is None:
            continue
        text = _text(element)
        if text:
            return text
    return ""


def resolve_all(
    fragment: Tag,
    locators: Sequence[str],
    ignore: Iterable[str] = (),
) -> List[str]:
    """Return every non-empty text matched by the first productive locator.

    Used for repeated values such as size or color swatches. Duplicates are
    dropped, document order is kept.
    """
    ignored = {value.lower() for value in ignore}
    for locator in locators:
        values: List[str] = []
        for element in fragment.select(locator):
            text = _text(element)
            if text and text.lower() not in ignored and text not in values:
                values.append(text)
        if values:
            return values
    return []


def resolve_attribute(fragment: Tag, selector: str, attributes: Sequence[str]) -> str:
    """Return the first usable attribute value of the first matching element.

    The fragment itself is used when it is the requested tag (e.g. a card
    that is itself an <a>). Inline "data:" placeholders used by lazy loaders
    are skipped so the next attribute gets a chance.

    Args:
        fragment: Listing fragment
        selector: Element selector, e.g. "img" or "a"
        attributes: Attribute names in priority order

    Returns:
        Attribute value, or "" if nothing usable is found
    """
    element = fragment if fragment.name == selector else fragment.select_one(selector)
    if element is None:
        return ""

    for attribute in attributes:
        value = element.get(attribute)
        if isinstance(value, list):
            value = " ".join(value)
        value = (value or "").strip()
        if value and not value.startswith("data:"):
            return value
    return ""


def absolutize_url(url: str, origin: str) -> str:
    """Turn protocol-relative and path-relative URLs into absolute ones.

    - "//static.site.net/a.jpg" -> "https://static.site.net/a.jpg"
    - "/p/123" -> origin + "/p/123"
    - absolute URLs are returned unchanged, "" stays ""
    """
    if not url:
        return ""
    if url.startswith(("http://", "https://")):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    return urljoin(origin.rstrip("/") + "/", url)
