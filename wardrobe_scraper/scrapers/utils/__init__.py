"""Scraper utilities for field extraction, price parsing and classification."""

from .normalizer import PriceParser, PriceLocale, BRL_LOCALE
from .field_extractor import resolve, resolve_all, resolve_attribute, absolutize_url
from .classifier import (
    CategoryRule,
    classify,
    classify_category,
    classify_tier,
    determine_gender,
    determine_weather,
    DEFAULT_WEATHER,
)


__all__ = [
    # Price parsing
    "PriceParser",
    "PriceLocale",
    "BRL_LOCALE",
    # Field extraction
    "resolve",
    "resolve_all",
    "resolve_attribute",
    "absolutize_url",
    # Classification
    "CategoryRule",
    "classify",
    "classify_category",
    "classify_tier",
    "determine_gender",
    "determine_weather",
    "DEFAULT_WEATHER",
]
