"""Custom exception classes for the scraper."""


class WardrobeScraperException(Exception):
    """Base exception for all wardrobe scraper errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class FetchError(WardrobeScraperException):
    """Raised when a page cannot be navigated to, rendered or read."""

    def __init__(self, source: str, url: str, message: str):
        self.source = source
        self.url = url
        super().__init__(f"Fetch error for {source} at {url}: {message}")


class ParseError(WardrobeScraperException):
    """Raised when fetched markup cannot be parsed into a document."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"Parse error for {source}: {message}")


class ExtractionError(WardrobeScraperException):
    """Raised when a single category of a source could not be extracted.

    Wraps the underlying FetchError or ParseError.
    """

    def __init__(self, source: str, category: str, cause: Exception):
        self.source = source
        self.category = category
        self.cause = cause
        super().__init__(f"Extraction failed for {source}/{category}: {cause}")


class StorageError(WardrobeScraperException):
    """Raised when listings cannot be written to the store."""


class ScheduleSetupError(WardrobeScraperException):
    """Raised when the recurring scrape job cannot be registered."""
