"""Scheduled multi-retailer fashion catalog scraper."""

__version__ = "0.1.0"
